from __future__ import annotations

from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol

from .connection import DatabaseConnection


class UnitOfWork(Protocol):
    def atomic(self) -> ContextManager[None]:
        """Run the enclosed repository calls in one transaction."""

        raise NotImplementedError


class MySQLUnitOfWork(UnitOfWork):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._conn_factory.active() is not None:
            # Nested block joins the outer transaction.
            yield
            return

        conn = self._conn_factory.connect()
        self._conn_factory.bind(conn)
        try:
            conn.start_transaction()
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._conn_factory.bind(None)
            conn.close()
