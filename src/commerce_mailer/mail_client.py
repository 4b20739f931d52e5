"""Mail client adapter: render a template and hand it to the transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from .delivery import Attachment, DeliveryRecord
from .environment import environment_snapshot
from .ports.renderer import ITemplateRenderer
from .ports.sender import IEmailSender

logger = logging.getLogger(__name__)


class MailClient:
    """
    Wraps the template renderer and email sender behind one operation.

    Templates see two locals: ``data`` (the render context) and ``env``
    (a read-only environment snapshot chosen by the caller).
    """

    def __init__(
        self,
        renderer: ITemplateRenderer,
        sender: IEmailSender,
        from_email: str,
        environment: Mapping[str, str] | None = None,
    ):
        self.renderer = renderer
        self.sender = sender
        self.from_email = from_email
        self.environment = environment_snapshot(environment)

    async def render_and_send(
        self,
        template_id: str,
        recipient: str,
        context: Mapping[str, Any],
        attachments: Sequence[Attachment] = (),
    ) -> DeliveryRecord:
        """Render and send; any failure comes back as a failed record, never raised."""
        try:
            content = await self.renderer.render(
                template_id, {"data": context, "env": self.environment}
            )
            if attachments:
                content = replace(content, attachments=list(attachments))
            return await self.sender.send(recipient, content, from_email=self.from_email)
        except Exception as e:
            logger.error(
                f"Failed to render or send {template_id} to {recipient}: {str(e)}",
                exc_info=True,
            )
            return DeliveryRecord.failed(recipient, error=str(e))
