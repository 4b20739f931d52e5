"""Account emails; their payloads already are the render context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import RenderContext


def password_reset(payload: Mapping[str, Any]) -> RenderContext:
    return dict(payload)


def invite_created(payload: Mapping[str, Any]) -> RenderContext:
    return {"email": payload.get("user_email"), **payload}
