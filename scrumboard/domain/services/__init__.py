"""Domain services: authorization rules and notification building."""

from scrumboard.domain.services.authorization import AuthorizationPolicy
from scrumboard.domain.services.notification_factory import NotificationFactory

__all__ = [
    "AuthorizationPolicy",
    "NotificationFactory",
]
