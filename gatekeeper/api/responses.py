"""
Map gate decisions to HTTP responses.

- allow: no response, the request continues to the application
- misconfigured: 302 to the warning page
- unauthenticated API call: 401 plain text (machine-checkable, no redirect)
- unauthenticated page: 302 to the login page with `redirect=<path+query>`
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from gatekeeper.auth.models import GateDecision
from gatekeeper.auth.paths import is_api_path

LOGIN_PATH = "/login"
WARNING_PATH = "/warning"
REDIRECT_PARAM = "redirect"


def _join(base_url: str, path: str) -> str:
    return f"{(base_url or '').rstrip('/')}{path}"


def warning_url(base_url: str) -> str:
    return _join(base_url, WARNING_PATH)


def login_redirect_url(base_url: str, return_path: str) -> str:
    return f"{_join(base_url, LOGIN_PATH)}?{urlencode({REDIRECT_PARAM: return_path})}"


def build_gate_response(decision: GateDecision, *, base_url: str = "") -> Optional[Response]:
    if decision.allowed:
        return None

    if decision.misconfigured:
        return RedirectResponse(url=warning_url(base_url), status_code=302)

    return_path = decision.return_path or "/"
    if is_api_path(return_path.split("?", 1)[0]):
        # No `WWW-Authenticate`: browsers would pop a basic-auth dialog over the login UI.
        return PlainTextResponse("Unauthorized", status_code=401)

    return RedirectResponse(url=login_redirect_url(base_url, return_path), status_code=302)
