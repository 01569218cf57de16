"""Root conftest: shared test configuration."""

import os

# Never point tests at a developer database
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
