from __future__ import annotations

import hmac
import logging
from typing import Optional

from gatekeeper.auth.config import GateConfig
from gatekeeper.auth.cookie import extract_credential
from gatekeeper.auth.models import GateDecision
from gatekeeper.auth.paths import is_exempt_path
from gatekeeper.auth.signature import verify_signature

logger = logging.getLogger(__name__)


def _full_path(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def _password_matches(candidate: str, secret: str) -> bool:
    try:
        return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))
    except UnicodeEncodeError:
        return False


def evaluate_gate(cfg: GateConfig, *, path: str, query: str = "", cookie: Optional[str] = None) -> GateDecision:
    """
    Decide whether a request may proceed.

    Checks run in a fixed order and the first one that applies wins:
    exempt path, missing server secret, missing/malformed cookie, then the
    mode-specific credential check. Pure function of its inputs.
    """
    if is_exempt_path(path):
        logger.debug("Exempt path %s", path)
        return GateDecision.allow("exempt")

    if not cfg.is_provisioned:
        logger.warning("AUTH_PASSWORD is not configured; refusing to authenticate %s", path)
        return GateDecision.misconfigured_secret()

    secret = cfg.server_secret or ""
    return_path = _full_path(path, query)

    credential = extract_credential(cookie)
    if credential is None:
        logger.debug("No usable auth cookie for %s", path)
        return GateDecision.unauthenticated(return_path, "missing_credential")

    if cfg.auth_mode == "password":
        if credential.password and _password_matches(credential.password, secret):
            logger.debug("Password credential accepted for %s", path)
            return GateDecision.allow("password")
        logger.info("Rejected password credential for %s", path)
        return GateDecision.unauthenticated(return_path, "bad_password")

    # Signature mode: both fields are required before we spend an HMAC on it.
    if not credential.username or not credential.signature:
        logger.info("Signed credential missing username or signature for %s", path)
        return GateDecision.unauthenticated(return_path, "missing_fields")

    if verify_signature(credential.username, credential.signature, secret):
        logger.debug("Signed credential accepted for user=%s path=%s", credential.username, path)
        return GateDecision.allow("signature", username=credential.username)

    logger.info("Rejected signature for user=%s path=%s", credential.username, path)
    return GateDecision.unauthenticated(return_path, "bad_signature")
