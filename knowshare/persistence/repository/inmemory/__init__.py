"""In-memory repository implementations for testing."""

from .connection import InMemoryConnectionRepository

__all__ = [
    "InMemoryConnectionRepository",
]
