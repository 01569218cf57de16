"""Database Session Manager: the store handle passed to every repository.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Uniqueness violations map to ConflictError; every other SQLAlchemy failure
      and an unreachable store (OSError at connect) map to StoreFailureError
      (core/errors.py). Nothing is retried here
    - CmsError subclasses raised inside a session pass through unchanged
    - SQLite connections enforce foreign keys (PRAGMA foreign_keys=ON)

Design Decisions:
    - Constructed by the composition root (bootstrap.py) and injected, never a module global
    - expire_on_commit=False: records are built from rows after the transaction closes
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from cms_core.core.errors import ConflictError, ErrorContext, StoreFailureError

logger = logging.getLogger(__name__)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique/primary-key constraint failure.

    PostgreSQL reports SQLSTATE 23505; SQLite only exposes the message text
    ("UNIQUE constraint failed: ...").
    """
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(orig).lower()


def _failure_extra(resource_type: str, operation: str) -> dict:
    return {
        "resource_type": resource_type,
        "operation": operation,
        "error_code": "STORE_FAILURE",
    }


def _store_failure(resource_type: str, message: str, operation: str) -> StoreFailureError:
    return StoreFailureError(
        message, operation, ErrorContext(resource_type=resource_type),
    )


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions with error classification."""

    def __init__(self, database_url: str, **engine_kwargs: Any):
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, resource_type: str = "Record",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and store error classification."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            if is_unique_violation(e):
                logger.info(
                    f"Uniqueness violation on {resource_type}: {e.orig}",
                    extra={"resource_type": resource_type, "error_code": "CONFLICT"},
                )
                raise ConflictError(
                    resource_type, "unique value already in use",
                ) from e
            logger.error(
                f"DB integrity error: {e}",
                extra=_failure_extra(resource_type, "commit"),
            )
            raise _store_failure(
                resource_type, "Integrity constraint violated", "commit",
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(
                f"DB operational error: {e}",
                extra=_failure_extra(resource_type, "execute"),
            )
            raise _store_failure(
                resource_type, "Connection or operational error", "execute",
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(
                f"DB driver error: {e}", extra=_failure_extra(resource_type, "query"),
            )
            raise _store_failure(resource_type, "Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"SQLAlchemy error: {e}", extra=_failure_extra(resource_type, "unknown"),
            )
            raise _store_failure(
                resource_type, "Database operation failed", "unknown",
            ) from e
        except OSError as e:
            # asyncpg raises socket errors at connect time without a DBAPI wrapper
            await session.rollback()
            logger.error(
                f"DB unreachable: {e}", extra=_failure_extra(resource_type, "connect"),
            )
            raise _store_failure(resource_type, "Store unreachable", "connect") from e
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(
        self, resource_type: str = "Record",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Session with one transaction: commit on success, rollback on any error."""
        async with self.session(resource_type) as session:
            async with session.begin():
                yield session

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreFailureError as e:
            logger.warning("DB health check failed", exc_info=e)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
