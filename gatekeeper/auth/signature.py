from __future__ import annotations

import binascii
import hashlib
import hmac
import logging
import re

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


def _decode_hex(signature_hex: str) -> bytes | None:
    if not signature_hex or len(signature_hex) % 2 != 0:
        return None
    if _HEX_RE.fullmatch(signature_hex) is None:
        return None
    return binascii.unhexlify(signature_hex)


def verify_signature(message: str, signature_hex: str, secret: str) -> bool:
    """
    Verify a hex-encoded HMAC-SHA256 of `message` keyed with `secret`.

    Constant-time comparison. Never raises: malformed hex or any failure of the
    primitive is reported as a failed verification.
    """
    try:
        provided = _decode_hex(signature_hex)
        if not provided:
            return False
        expected = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
        return hmac.compare_digest(expected, provided)
    except Exception as e:
        logger.warning("Signature verification failed: %s", type(e).__name__)
        return False
