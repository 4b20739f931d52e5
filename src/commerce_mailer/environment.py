"""Read-only environment snapshot exposed to templates as ``env``."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

# Variable names that look like credentials never reach a template.
_SECRET_NAME = re.compile(r"(PASS|SECRET|TOKEN|PRIVATE|CREDENTIAL|API_?KEY|AUTH)", re.IGNORECASE)


def environment_snapshot(
    source: Mapping[str, str] | None = None,
    *,
    allow: set[str] | None = None,
) -> Mapping[str, str]:
    """
    Copy *source* into an immutable mapping, dropping secret-looking names.

    Names in *allow* are kept even when they look secret.
    """
    allowed = allow or set()
    snapshot = {
        name: value
        for name, value in (source or {}).items()
        if name in allowed or not _SECRET_NAME.search(name)
    }
    return MappingProxyType(snapshot)
