"""Tests for delivery types."""

import base64

import pytest

from commerce_mailer.delivery import (
    Attachment,
    DeliveryRecord,
    DeliveryStatus,
    NotificationResult,
    NotificationStatus,
    RenderedNotification,
)


def test_delivery_record_sent():
    """Test creating a successful delivery record."""
    record = DeliveryRecord.sent(recipient="user@example.com", provider_id="msg-123")

    assert record.recipient == "user@example.com"
    assert record.status == DeliveryStatus.SENT
    assert record.provider_id == "msg-123"
    assert record.error is None
    assert record.sent_at is not None
    assert record.ok


def test_delivery_record_failed():
    """Test creating a failed delivery record."""
    record = DeliveryRecord.failed(recipient="user@example.com", error="SMTP connection timeout")

    assert record.status == DeliveryStatus.FAILED
    assert record.provider_id is None
    assert record.error == "SMTP connection timeout"
    assert not record.ok


def test_notification_status_values():
    """Status values are the strings reported to callers."""
    assert NotificationStatus.SENT.value == "sent"
    assert NotificationStatus.FAILED.value == "failed"
    assert NotificationStatus.NO_TEMPLATE_FOUND.value == "noTemplateFound"
    assert NotificationStatus.NO_DATA_FOUND.value == "noDataFound"


def test_result_from_delivery_maps_status():
    data = {"email": "user@example.com"}

    sent = NotificationResult.from_delivery(DeliveryRecord.sent("user@example.com"), data)
    failed = NotificationResult.from_delivery(DeliveryRecord.failed("user@example.com"), data)

    assert sent.status is NotificationStatus.SENT
    assert failed.status is NotificationStatus.FAILED
    assert sent.to == "user@example.com"
    assert sent.data == data


def test_result_as_dict():
    result = NotificationResult(to="", status=NotificationStatus.NO_TEMPLATE_FOUND)

    assert result.as_dict() == {"to": "", "status": "noTemplateFound", "data": {}}


def test_attachment_from_bytes_round_trips():
    attachment = Attachment.from_bytes("invoice", b"%PDF-1.4", "application/pdf")

    assert attachment.content == base64.b64encode(b"%PDF-1.4").decode("ascii")
    assert attachment.decoded() == b"%PDF-1.4"


def test_rendered_notification_defaults_to_no_attachments():
    content = RenderedNotification(body_text="Hello")

    assert content.attachments == []
    assert content.subject is None
    assert content.body_html is None


def test_result_data_is_a_read_only_copy():
    context = {"email": "user@example.com"}

    result = NotificationResult.from_delivery(DeliveryRecord.sent("user@example.com"), context)
    context["email"] = "other@example.com"

    assert result.data["email"] == "user@example.com"
    with pytest.raises(TypeError):
        result.data["email"] = "other@example.com"  # type: ignore[index]


def test_result_from_deliveries_needs_every_delivery_to_succeed():
    records = [DeliveryRecord.sent("a@example.com"), DeliveryRecord.failed("b@example.com")]

    partial = NotificationResult.from_deliveries(records, {})
    complete = NotificationResult.from_deliveries(records[:1], {})

    assert partial.status is NotificationStatus.FAILED
    assert partial.to == "a@example.com, b@example.com"
    assert complete.status is NotificationStatus.SENT
