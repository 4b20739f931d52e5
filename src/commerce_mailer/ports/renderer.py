"""Template renderer port."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ..delivery import RenderedNotification


@runtime_checkable
class ITemplateRenderer(Protocol):
    """Turns a template id and its locals into a rendered email."""

    async def render(
        self,
        template_id: str,
        template_locals: Mapping[str, Any],
    ) -> RenderedNotification:
        """Render subject and bodies; raise TemplateNotFoundError when missing."""
        ...
