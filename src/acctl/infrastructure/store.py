"""Store: connection owner for the SQLite account database.

The engine is created lazily on first use so ``--help`` never touches the
disk.  :meth:`Store.close` is the disconnect half of the lifecycle and is
registered as a shutdown hook by the CLI before any command runs.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from acctl.errors import AcctlError, DomainServiceError
from acctl.infrastructure.database.engine import init_database

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class Store:
    """Lazily connected SQLite store.

    Usage::

        store = Store(settings.store_path)
        with store.transaction() as conn:
            conn.execute(...)
        store.close()
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._engine: Engine | None = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine (created on first access)."""
        with self._lock:
            if self._engine is None:
                logger.debug("Connecting to store at %s", self.db_path)
                try:
                    self._engine = init_database(self.db_path)
                except (OSError, SQLAlchemyError) as exc:
                    raise DomainServiceError(
                        f"Cannot open account store at {self.db_path}: {exc}",
                        code="STORE_ERROR",
                    ) from exc
            return self._engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside ``engine.begin()``.

        Commits on success, rolls back on any exception.  SQLAlchemy errors
        are re-raised as :class:`DomainServiceError`; acctl errors raised by
        the caller pass through unchanged.
        """
        try:
            with self.engine.begin() as conn:
                yield conn
        except AcctlError:
            raise
        except SQLAlchemyError as exc:
            logger.debug("Store transaction failed", exc_info=True)
            raise DomainServiceError(f"Store error: {exc}", code="STORE_ERROR") from exc

    def close(self) -> None:
        """Dispose the engine if it was ever created. Safe to call twice."""
        with self._lock:
            if self._engine is not None:
                logger.debug("Disconnecting from store at %s", self.db_path)
                self._engine.dispose()
                self._engine = None
