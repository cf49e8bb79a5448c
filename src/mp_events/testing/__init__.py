"""Testing – in-memory fakes for exercising publication flows without a database."""
