"""Application – use-case level orchestration of event publication."""
