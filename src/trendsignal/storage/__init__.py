"""Persistence sink interfaces and implementations."""

from .sink import PersistenceSink
from .sqlite_store import SqlitePersistenceSink

__all__ = ["PersistenceSink", "SqlitePersistenceSink"]
