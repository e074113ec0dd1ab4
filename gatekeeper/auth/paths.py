from __future__ import annotations

import re

# Static assets and well-known files that never require auth.
EXEMPT_PREFIXES: tuple[str, ...] = (
    "/_next",
    "/favicon.ico",
    "/robots.txt",
    "/manifest.json",
    "/icons/",
    "/logo.png",
    "/screenshot.png",
)

API_PREFIX = "/api"

# Routes the gate itself depends on (login/registration, the warning page) plus
# trusted utility APIs. Requests to these never reach the gate at all.
UNGATED_ROUTE_PREFIXES: tuple[str, ...] = (
    "_next/static",
    "_next/image",
    "favicon.ico",
    "login",
    "warning",
    "healthz",
    "api/login",
    "api/register",
    "api/logout",
    "api/cron",
    "api/server-config",
    "api/search",
    "api/detail",
    "api/image-proxy",
    "api/tvbox",
)

_GATED_ROUTE_RE = re.compile(r"/(?!(?:%s)).*" % "|".join(re.escape(p) for p in UNGATED_ROUTE_PREFIXES), re.DOTALL)


def is_exempt_path(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in EXEMPT_PREFIXES)


def is_api_path(path: str) -> bool:
    # Plain prefix match: "/apix" counts as an API path too.
    return path.startswith(API_PREFIX)


def is_gated_route(path: str) -> bool:
    """
    Route boundary matcher: should this request be handed to the gate at all?

    Prefix based on the segment after the leading `/`, so `/login` and `/login/reset`
    are both ungated. Paths not starting with `/` are never gated.
    """
    return _GATED_ROUTE_RE.fullmatch(path or "") is not None
