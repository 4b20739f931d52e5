"""Attachment resolution for return-style emails."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import Any

from .delivery import Attachment
from .events import NotificationEventName
from .ports.attachments import IAttachmentGenerator, IFulfillmentProviderService

logger = logging.getLogger(__name__)

RETURN_LABEL = "return-label"
INVOICE = "invoice"
PDF_MIME_TYPE = "application/pdf"

_EVENTS_WITH_ATTACHMENTS = frozenset(
    {NotificationEventName.SWAP_CREATED, NotificationEventName.ORDER_RETURN_REQUESTED}
)


def _base64_content(value: Any) -> str | None:
    """Base64 text for raw bytes or already encoded text; None when neither."""
    if isinstance(value, bytes | bytearray):
        return base64.b64encode(value).decode("ascii") if value else None
    if not isinstance(value, str) or not value:
        return None
    try:
        base64.b64decode(value, validate=True)
    except ValueError:
        return None
    return value


class AttachmentResolver:
    """
    Collects return labels and generated invoices for an assembled context.

    Never fails a dispatch: a source that raises contributes no attachments.
    """

    def __init__(self, fulfillment_providers: IFulfillmentProviderService):
        self.fulfillment_providers = fulfillment_providers

    async def resolve(
        self,
        event_name: str,
        data: Mapping[str, Any] | None,
        attachment_generator: IAttachmentGenerator | None = None,
    ) -> list[Attachment]:
        if NotificationEventName.parse(event_name) not in _EVENTS_WITH_ATTACHMENTS or not data:
            return []

        return_request = data.get("return_request") or {}
        attachments = await self._return_labels(event_name, return_request)

        invoice = await self._return_invoice(
            event_name, data.get("order") or {}, return_request, attachment_generator
        )
        if invoice is not None:
            attachments.append(invoice)
        return attachments

    async def _return_labels(
        self, event_name: str, return_request: Mapping[str, Any]
    ) -> list[Attachment]:
        shipping_method = return_request.get("shipping_method")
        if not shipping_method:
            return []

        provider_id = (shipping_method.get("shipping_option") or {}).get("provider_id")
        try:
            documents = await self.fulfillment_providers.retrieve_documents(
                provider_id, return_request.get("shipping_data"), "label"
            )
        except Exception as e:
            logger.warning(
                f"Could not fetch return labels from {provider_id} for {event_name}: {e}"
            )
            return []

        labels = []
        for doc in documents or []:
            if not isinstance(doc, Mapping):
                doc = {}
            content = _base64_content(doc.get("content") or doc.get("base_64"))
            mime_type = doc.get("type")
            if content is None or not mime_type:
                logger.warning(f"Skipping malformed label document from {provider_id}")
                continue
            labels.append(Attachment(name=RETURN_LABEL, content=content, mime_type=mime_type))
        return labels

    async def _return_invoice(
        self,
        event_name: str,
        order: Mapping[str, Any],
        return_request: Mapping[str, Any],
        attachment_generator: IAttachmentGenerator | None,
    ) -> Attachment | None:
        create_invoice = getattr(attachment_generator, "create_return_invoice", None)
        if create_invoice is None:
            return None

        try:
            invoice = await create_invoice(order, return_request.get("items") or [])
        except Exception as e:
            logger.warning(f"Could not generate return invoice for {event_name}: {e}")
            return None

        content = _base64_content(invoice)
        if content is None:
            logger.warning(f"Discarding unusable return invoice for {event_name}")
            return None
        return Attachment(name=INVOICE, content=content, mime_type=PDF_MIME_TYPE)
