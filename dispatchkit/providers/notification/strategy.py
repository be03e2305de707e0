"""Notification strategies, one per delivery channel.

Delivery is simulated: each notifier renders the outgoing message and logs
it. No network I/O takes place.
"""
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.domain.base.exceptions import ValidationError
from dispatchkit.infrastructure.logging.logger import get_logger


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"


class NotificationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    message: str = Field(..., min_length=1, description="Text to deliver")
    recipient: Optional[str] = Field(None, description="Destination address or number")


class NotificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: NotificationChannel
    recipient: Optional[str] = None
    rendered: str


def parse_notification_request(payload: Any) -> NotificationRequest:
    """Coerce a payload (request, mapping or bare message) into a NotificationRequest."""
    if isinstance(payload, NotificationRequest):
        return payload
    if isinstance(payload, str):
        payload = {"message": payload}
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"Notification payload must be a mapping, got {type(payload).__name__}"
        )
    try:
        return NotificationRequest.model_validate(dict(payload))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid notification payload: {e}", details=e.errors()) from e


class _Notifier(Strategy):
    channel: NotificationChannel
    label: str

    def __init__(self):
        self._logger = get_logger(__name__)

    def execute(self, payload: Any) -> NotificationResult:
        request = parse_notification_request(payload)
        rendered = f"[{self.label}] Sending: {request.message}"
        self._logger.info(rendered, channel=self.channel.value, recipient=request.recipient)
        return NotificationResult(
            channel=self.channel, recipient=request.recipient, rendered=rendered
        )


class EmailNotifier(_Notifier):
    channel = NotificationChannel.EMAIL
    label = "Email"


class SmsNotifier(_Notifier):
    channel = NotificationChannel.SMS
    label = "SMS"


class WhatsAppNotifier(_Notifier):
    channel = NotificationChannel.WHATSAPP
    label = "WhatsApp"


def register_notification_strategies(registry) -> None:
    """Register every notification channel with the registry."""
    for notifier in (EmailNotifier, SmsNotifier, WhatsAppNotifier):
        registry.register(notifier.channel, notifier)
