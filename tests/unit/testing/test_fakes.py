"""Unit tests for mp_events.testing.fakes."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

from mp_events.kernel.publication import PublicationRecord
from mp_events.testing.fakes import FakeClock, InMemoryPublicationStore, InMemoryUnitOfWork


def _record(listener_id: str = "l") -> PublicationRecord:
    return PublicationRecord(
        listener_id=listener_id,
        serialized_event="e",
        event_type="t",
        publication_date=datetime(2026, 1, 1, tzinfo=UTC),
    )


class TestFakeClock:
    def test_pinned(self) -> None:
        assert FakeClock().now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_advance(self) -> None:
        clock = FakeClock()
        start = clock.now()
        clock.advance(minutes=5)
        assert clock.now() - start == timedelta(minutes=5)


class TestInMemoryPublicationStore:
    def test_reads_return_copies(self) -> None:
        store = InMemoryPublicationStore()
        record = _record()

        async def _run() -> None:
            await store.save(record)
            [loaded] = await store.find_incomplete()
            loaded.completion_date = datetime(2026, 1, 2, tzinfo=UTC)
            assert (await store.find_incomplete())[0].completion_date is None

        asyncio.run(_run())
        record.completion_date = datetime(2026, 1, 2, tzinfo=UTC)
        assert store.all_records()[0].completion_date is None

    def test_writes_wait_for_unit_of_work_commit(self) -> None:
        store = InMemoryPublicationStore()

        async def _run() -> None:
            async with InMemoryUnitOfWork():
                await store.save(_record())
                assert store.all_records() == []
            assert len(store.all_records()) == 1

        asyncio.run(_run())

    def test_mark_completed_once(self) -> None:
        store = InMemoryPublicationStore()
        record = _record()
        done = datetime(2026, 1, 1, 1, tzinfo=UTC)

        async def _run() -> tuple[bool, bool, bool]:
            await store.save(record)
            return (
                await store.mark_completed(record.id, done),
                await store.mark_completed(record.id, done),
                await store.mark_completed("missing", done),
            )

        assert asyncio.run(_run()) == (True, False, False)
        assert store.all_records()[0].completion_date == done

    def test_natural_key_ignores_completed(self) -> None:
        store = InMemoryPublicationStore()
        record = _record()

        async def _run() -> object:
            await store.save(record)
            await store.mark_completed(record.id, datetime(2026, 1, 2, tzinfo=UTC))
            return await store.find_by_serialized_event_and_listener_id("e", "l")

        assert asyncio.run(_run()) is None
