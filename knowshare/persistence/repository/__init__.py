"""PostgreSQL repository implementations.

Re-exports the domain interface so callers and tests can resolve the
repository type from either layer.
"""

from knowshare.domain.repository import ConnectionRepository

from .connection import PostgresConnectionRepository

__all__ = [
    "ConnectionRepository",
    "PostgresConnectionRepository",
]
