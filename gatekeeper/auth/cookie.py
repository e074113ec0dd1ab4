from __future__ import annotations

import json
import re
from typing import Any, Optional
from urllib.parse import unquote_to_bytes

from gatekeeper.auth.models import Credential

# A '%' must always start a full two-digit escape (decodeURIComponent semantics).
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _percent_decode(value: str) -> Optional[str]:
    if _BAD_ESCAPE_RE.search(value):
        return None
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError:
        return None


def _str_field(data: dict, key: str) -> Optional[str]:
    v: Any = data.get(key)
    return v if isinstance(v, str) else None


def extract_credential(raw: str | None) -> Optional[Credential]:
    """
    Decode the `auth` cookie value into a Credential.

    The value is a percent-encoded JSON object. Anything malformed (bad escapes, invalid
    UTF-8, invalid JSON, a non-object payload) is treated exactly like a missing cookie.
    Fields with the wrong type are dropped rather than rejected.
    """
    if not raw:
        return None
    decoded = _percent_decode(raw)
    if decoded is None:
        return None
    try:
        data = json.loads(decoded)
    except (ValueError, RecursionError):
        # Deeply nested payloads exhaust the decoder; treat them as malformed too.
        return None
    if not isinstance(data, dict):
        return None
    return Credential(
        password=_str_field(data, "password"),
        username=_str_field(data, "username"),
        signature=_str_field(data, "signature"),
    )
