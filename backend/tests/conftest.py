"""Root conftest — shared test configuration."""

import os

# Ensure tests never sign or verify with a real secret
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
