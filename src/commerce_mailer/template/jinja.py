"""Filesystem Jinja2 renderer for email templates."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, Undefined

from ..delivery import RenderedNotification
from ..exceptions import TemplateNotFoundError
from ..ports.renderer import ITemplateRenderer

logger = logging.getLogger(__name__)


class JinjaTemplateRenderer(ITemplateRenderer):
    """
    Renders emails from a directory per template.

    Directory structure: {templates_dir}/{template_id}/subject.{ext},
    html.{ext} and text.{ext}. Subject and either body may be missing, but
    not both bodies. HTML bodies are autoescaped.
    """

    def __init__(
        self,
        templates_dir: str | Path,
        extension: str = "njk",
        strict: bool = False,
    ):
        self.templates_dir = Path(templates_dir)
        self.extension = extension
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=self._autoescape,
            undefined=StrictUndefined if strict else Undefined,
        )

    def _autoescape(self, template_name: str | None) -> bool:
        if template_name is None:
            return False
        return template_name.rsplit("/", 1)[-1] == f"html.{self.extension}"

    def _render_part(
        self, template_id: str, part: str, template_locals: Mapping[str, Any]
    ) -> str | None:
        name = f"{template_id}/{part}.{self.extension}"
        try:
            template = self._env.get_template(name)
        except TemplateNotFound:
            logger.debug(f"Template part not found: {name}")
            return None
        return template.render(**template_locals)

    async def render(
        self,
        template_id: str,
        template_locals: Mapping[str, Any],
    ) -> RenderedNotification:
        """Render subject, html and text parts of *template_id*."""
        html = self._render_part(template_id, "html", template_locals)
        text = self._render_part(template_id, "text", template_locals)
        if html is None and text is None:
            raise TemplateNotFoundError(template_id, f"no body under {self.templates_dir}")

        subject = self._render_part(template_id, "subject", template_locals)
        return RenderedNotification(
            subject=subject.strip() if subject else None,
            body_text=text or "",
            body_html=html,
        )
