"""Event data assemblers: one render-context builder per event kind."""

from __future__ import annotations

from .assembler import EventDataAssembler
from .base import DomainServices, RenderContext

__all__ = ["DomainServices", "EventDataAssembler", "RenderContext"]
