"""
HTTP server with the auth gate installed as middleware.

Every request whose route is gated is evaluated against the `auth` cookie before
it reaches a handler. The warning page, health check and server-config endpoint
stay reachable without a cookie.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from gatekeeper.api.responses import build_gate_response
from gatekeeper.auth.config import load_gate_config
from gatekeeper.auth.gate import evaluate_gate
from gatekeeper.auth.paths import is_gated_route

logger = logging.getLogger(__name__)

app = FastAPI(title="Cookie gate")


class ServerConfigResponse(BaseModel):
    storageType: str
    authMode: str
    provisioned: bool


_WARNING_HTML = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>Configuration required</title></head>
<body>
<h1>Authentication is not configured</h1>
<p>The server has no <code>AUTH_PASSWORD</code> set, so no request can be authenticated.
Set it in the deployment environment and restart the server.</p>
</body>
</html>
"""


@app.middleware("http")
async def gate_requests(request: Request, call_next):
    """Enforce the auth gate and log request timing."""
    start_time = time.time()
    logger.debug("%s %s", request.method, request.url.path)
    try:
        path = request.url.path or ""

        # Routes outside the gate (login, warning, health, trusted APIs) skip it entirely.
        if not is_gated_route(path):
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.debug("%s %s - %d (%.3fs)", request.method, path, response.status_code, process_time)
            return response

        cfg = load_gate_config()
        decision = evaluate_gate(
            cfg,
            path=path,
            query=request.url.query,
            cookie=request.cookies.get(cfg.cookie_name),
        )
        denied = build_gate_response(decision, base_url=str(request.base_url))
        if denied is not None:
            logger.debug("%s %s - gate %s (%s)", request.method, path, decision.outcome, decision.reason)
            return denied

        if decision.username:
            request.state.auth_username = decision.username

        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, path, response.status_code, process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
        raise


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True}


@app.get("/warning", response_class=HTMLResponse)
def warning_page() -> str:
    return _WARNING_HTML


@app.get("/api/server-config", response_model=ServerConfigResponse)
def server_config() -> ServerConfigResponse:
    """Expose the auth mode so the login UI knows which form to render. Never the secret."""
    cfg = load_gate_config()
    return ServerConfigResponse(
        storageType=cfg.storage_type,
        authMode=cfg.auth_mode,
        provisioned=cfg.is_provisioned,
    )


@app.get("/api/auth/me")
def auth_me(request: Request) -> Dict[str, Any]:
    cfg = load_gate_config()
    username: Optional[str] = getattr(request.state, "auth_username", None)
    return {"ok": True, "mode": cfg.auth_mode, "username": username}


@app.get("/")
def index() -> Dict[str, Any]:
    return {"ok": True}


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    import uvicorn

    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Map Python logging levels to uvicorn log levels
    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    cfg = load_gate_config()
    if not cfg.is_provisioned:
        logger.warning("AUTH_PASSWORD is not set: every gated request will be sent to /warning")

    logger.info("Starting gate server on %s:%d (mode=%s, log_level=%s)", host, port, cfg.auth_mode, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
