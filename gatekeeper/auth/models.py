from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

GateOutcome = Literal["allow", "misconfigured", "unauthenticated"]


@dataclass(frozen=True)
class Credential:
    """Decoded payload of the `auth` cookie. Which fields matter depends on the auth mode."""

    password: Optional[str] = None  # password mode
    username: Optional[str] = None  # signature mode
    signature: Optional[str] = None  # signature mode, hex HMAC-SHA256 of username


@dataclass(frozen=True)
class GateDecision:
    """Result of evaluating the gate for one request."""

    outcome: GateOutcome
    return_path: Optional[str] = None  # path + query to restore after login
    reason: Optional[str] = None
    username: Optional[str] = None  # set when a signed credential was accepted

    @property
    def allowed(self) -> bool:
        return self.outcome == "allow"

    @property
    def misconfigured(self) -> bool:
        return self.outcome == "misconfigured"

    @classmethod
    def allow(cls, reason: str, *, username: Optional[str] = None) -> "GateDecision":
        return cls(outcome="allow", reason=reason, username=username)

    @classmethod
    def misconfigured_secret(cls) -> "GateDecision":
        return cls(outcome="misconfigured", reason="missing_secret")

    @classmethod
    def unauthenticated(cls, return_path: str, reason: str) -> "GateDecision":
        return cls(outcome="unauthenticated", return_path=return_path, reason=reason)
