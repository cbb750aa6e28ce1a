#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from ask.config import Settings
from ask.util.observability import configure_logfire


def main() -> int:
    """Upgrade the schema to head, logging failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    if settings.storage.backend != "postgres":
        logfire.info("Skipping migrations", storage_backend=settings.storage.backend)
        return 0

    try:
        logfire.info("Starting database migrations")
        command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so deployment stops instead of running on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())
