"""SQLAlchemy adapter – ORM model for publication records."""
from __future__ import annotations

import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class PublicationBase(DeclarativeBase):
    """Declarative base owning the ``event_publication`` table."""


class EventPublicationModel(PublicationBase):
    """One row per publication record.

    ``serialized_event`` is a text column: pair the store with a serializer
    producing strings (``JsonEventSerializer``).
    """

    __tablename__ = "event_publication"
    __table_args__ = (
        Index("ix_event_publication_listener_completion", "listener_id", "completion_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    publication_date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True))
    listener_id: Mapped[str] = mapped_column(String(512))
    serialized_event: Mapped[str] = mapped_column(Text)
    event_type: Mapped[str] = mapped_column(String(512))
    completion_date: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None, index=True
    )


__all__ = ["EventPublicationModel", "PublicationBase"]
