"""Human-readable document references, e.g. ``RCP-20240131-4F2A9C``."""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Callable

ReferenceGenerator = Callable[[str], str]


def generate_reference(prefix: str) -> str:
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"{prefix}-{today}-{secrets.token_hex(3).upper()}"
