"""Port definitions for the commerce mailer."""

from __future__ import annotations

from .attachments import IAttachmentGenerator, IFulfillmentProviderService
from .bus import IEventBus
from .renderer import ITemplateRenderer
from .sender import IEmailSender
from .services import (
    IAggregateService,
    ICartService,
    IClaimService,
    IFulfillmentService,
    IGiftCardService,
    ILineItemService,
    IOrderService,
    IProductVariantService,
    IReturnService,
    IStoreService,
    ISwapService,
    ITotalsService,
)

__all__ = [
    "IAggregateService",
    "IAttachmentGenerator",
    "ICartService",
    "IClaimService",
    "IEmailSender",
    "IEventBus",
    "IFulfillmentProviderService",
    "IFulfillmentService",
    "IGiftCardService",
    "ILineItemService",
    "IOrderService",
    "IProductVariantService",
    "IReturnService",
    "IStoreService",
    "ISwapService",
    "ITemplateRenderer",
    "ITotalsService",
]
