"""Adapters – storage backends for publication records."""
