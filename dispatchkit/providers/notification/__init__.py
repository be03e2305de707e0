"""Notification strategies."""

from .strategy import (
    EmailNotifier,
    NotificationChannel,
    NotificationRequest,
    NotificationResult,
    SmsNotifier,
    WhatsAppNotifier,
    register_notification_strategies,
)

__all__ = [
    "EmailNotifier",
    "NotificationChannel",
    "NotificationRequest",
    "NotificationResult",
    "SmsNotifier",
    "WhatsAppNotifier",
    "register_notification_strategies",
]
