"""Strongly typed identifiers for domain entities."""

from typing import NewType
from uuid import UUID

ConnectionRequestId = NewType("ConnectionRequestId", UUID)
