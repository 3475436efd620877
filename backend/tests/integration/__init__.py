"""Integration tests: repositories and HTTP routes against in-memory SQLite."""
