"""Event name to template id lookup."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class TemplateResolver:
    """Pure lookup over an immutable template map. Absence is not an error."""

    def __init__(self, template_map: Mapping[str, str]):
        self._template_map: Mapping[str, str] = MappingProxyType(dict(template_map))

    def resolve(self, event_name: str) -> str | None:
        return self._template_map.get(event_name) or None

    @property
    def events(self) -> tuple[str, ...]:
        """Event names that have a template configured."""
        return tuple(self._template_map)
