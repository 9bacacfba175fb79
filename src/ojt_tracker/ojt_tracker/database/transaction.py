from __future__ import annotations

from contextlib import contextmanager
from typing import ContextManager, Iterator, Optional, Protocol

from .connection import DatabaseConnection
from .mysql_base import transaction


class TransactionManager(Protocol):
    """Unit-of-work boundary used by services.

    Services wrap read-then-write sequences in ``begin(key)`` so that all
    repository calls share one transaction serialized per ``key``.
    """

    def begin(self, key: Optional[str] = None) -> ContextManager[None]:
        raise NotImplementedError


class NullTransactionManager:
    """No-op manager for in-memory repositories."""

    @contextmanager
    def begin(self, key: Optional[str] = None) -> Iterator[None]:
        yield


class MySQLTransactionManager:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def begin(self, key: Optional[str] = None) -> ContextManager[None]:
        lock_name = f"ojt_tracker:{key}" if key else None
        return transaction(self._conn_factory, lock_name=lock_name)
