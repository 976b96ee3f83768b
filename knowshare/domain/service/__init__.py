"""Domain services."""

from .base import Service
from .connection_directory import ConnectionDirectory, parse_username
from .connection_feed import ConnectionFeed, Subscription, SubscriptionCallback

__all__ = [
    "ConnectionDirectory",
    "ConnectionFeed",
    "Service",
    "Subscription",
    "SubscriptionCallback",
    "parse_username",
]
