"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from knowshare.domain.repository.connection import ConnectionRepository

__all__ = [
    "ConnectionRepository",
]
