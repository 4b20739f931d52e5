"""Ports for the collaborators that produce attachment documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IFulfillmentProviderService(Protocol):
    async def retrieve_documents(
        self,
        provider_id: str,
        shipping_data: Mapping[str, Any] | None,
        document_type: str,
    ) -> Sequence[Mapping[str, Any]]:
        """
        Fetch documents (e.g. ``"label"``) from a fulfillment provider.

        Each document carries base64 ``content`` (or ``base_64``) and its MIME
        ``type``.
        """
        ...


@runtime_checkable
class IAttachmentGenerator(Protocol):
    """Optional capability passed alongside an event to generate documents."""

    async def create_return_invoice(
        self,
        order: Mapping[str, Any],
        items: Sequence[Mapping[str, Any]],
    ) -> bytes | str:
        """Return a PDF invoice, raw or already base64 encoded."""
        ...
