"""Delivery outcome types and attachments."""

from __future__ import annotations

import base64
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any


class NotificationStatus(str, Enum):
    """Externally observable outcome of a dispatch."""

    SENT = "sent"
    FAILED = "failed"
    NO_TEMPLATE_FOUND = "noTemplateFound"
    NO_DATA_FOUND = "noDataFound"


class DeliveryStatus(Enum):
    """Outcome of a single render-and-send attempt."""

    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryRecord:
    """Immutable record of an email delivery attempt."""

    recipient: str
    status: DeliveryStatus
    provider_id: str | None = None
    sent_at: datetime | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.sent_at is None:
            object.__setattr__(self, "sent_at", datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SENT

    @classmethod
    def sent(cls, recipient: str, provider_id: str | None = None) -> DeliveryRecord:
        """Create a successful delivery record."""
        return cls(recipient=recipient, status=DeliveryStatus.SENT, provider_id=provider_id)

    @classmethod
    def failed(cls, recipient: str, error: str | None = None) -> DeliveryRecord:
        """Create a failed delivery record."""
        return cls(recipient=recipient, status=DeliveryStatus.FAILED, error=error)


@dataclass(frozen=True)
class NotificationResult:
    """Immutable result of a dispatch, returned to the event bus or resend caller."""

    to: str
    status: NotificationStatus
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Detached from the render context the result was built from.
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def from_delivery(cls, record: DeliveryRecord, data: Mapping[str, Any]) -> NotificationResult:
        status = NotificationStatus.SENT if record.ok else NotificationStatus.FAILED
        return cls(to=record.recipient, status=status, data=data)

    @classmethod
    def from_deliveries(
        cls, records: Sequence[DeliveryRecord], data: Mapping[str, Any]
    ) -> NotificationResult:
        """One result for a fan-out; sent only when every delivery was."""
        ok = bool(records) and all(record.ok for record in records)
        status = NotificationStatus.SENT if ok else NotificationStatus.FAILED
        return cls(to=", ".join(r.recipient for r in records), status=status, data=data)

    def as_dict(self) -> dict[str, Any]:
        return {"to": self.to, "status": self.status.value, "data": dict(self.data)}


@dataclass(frozen=True)
class Attachment:
    """Binary document attached to an email; content is base64 encoded."""

    name: str
    content: str
    mime_type: str

    @classmethod
    def from_bytes(cls, name: str, payload: bytes, mime_type: str) -> Attachment:
        content = base64.b64encode(payload).decode("ascii")
        return cls(name=name, content=content, mime_type=mime_type)

    def decoded(self) -> bytes:
        return base64.b64decode(self.content)


@dataclass(frozen=True)
class RenderedNotification:
    """Immutable rendered email ready for delivery."""

    body_text: str
    subject: str | None = None
    body_html: str | None = None
    attachments: list[Attachment] | None = None

    def __post_init__(self) -> None:
        if self.attachments is None:
            object.__setattr__(self, "attachments", [])
