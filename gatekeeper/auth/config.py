from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional

AuthMode = Literal["password", "signature"]

# Storage type under which the browser keeps the raw password (password mode).
PASSWORD_STORAGE_TYPE = "localstorage"
DEFAULT_COOKIE_NAME = "auth"


@dataclass(frozen=True)
class GateConfig:
    # Deployment mode selector: "localstorage" -> password mode, anything else -> signature mode
    storage_type: str

    # Shared secret (password in password mode, HMAC key in signature mode)
    server_secret: Optional[str]

    cookie_name: str = DEFAULT_COOKIE_NAME

    @property
    def auth_mode(self) -> AuthMode:
        return "password" if self.storage_type == PASSWORD_STORAGE_TYPE else "signature"

    @property
    def is_provisioned(self) -> bool:
        """Without a secret nothing can be authenticated; the gate fails closed."""
        return bool(self.server_secret)


@lru_cache(maxsize=1)
def load_gate_config() -> GateConfig:
    """
    Load gate configuration from environment variables.

    Read once per process; call `load_gate_config.cache_clear()` to pick up changes (tests).
    AUTH_PASSWORD is deliberately not stripped: the secret is compared byte for byte.
    """
    storage_type = (os.getenv("STORAGE_TYPE", "") or "").strip() or PASSWORD_STORAGE_TYPE
    cookie_name = (os.getenv("AUTH_COOKIE_NAME", "") or "").strip() or DEFAULT_COOKIE_NAME

    return GateConfig(
        storage_type=storage_type,
        server_secret=os.getenv("AUTH_PASSWORD") or None,
        cookie_name=cookie_name,
    )
