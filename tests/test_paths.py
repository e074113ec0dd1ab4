from __future__ import annotations

import pytest

from gatekeeper.auth.paths import EXEMPT_PREFIXES, is_api_path, is_exempt_path, is_gated_route


@pytest.mark.parametrize("path", list(EXEMPT_PREFIXES))
def test_every_exempt_prefix_is_exempt(path: str) -> None:
    assert is_exempt_path(path) is True


def test_exempt_is_prefix_based() -> None:
    assert is_exempt_path("/_next/static/chunks/main.js") is True
    assert is_exempt_path("/icons/icon-192.png") is True
    assert is_exempt_path("/favicon.ico?v=2") is True
    # Prefix, not segment: "/logo.png.bak" still starts with "/logo.png".
    assert is_exempt_path("/logo.png.bak") is True


def test_exempt_is_case_sensitive_and_anchored() -> None:
    assert is_exempt_path("/Favicon.ico") is False
    assert is_exempt_path("/ICONS/a.png") is False
    # "/icons" without the trailing slash is not in the list.
    assert is_exempt_path("/icons") is False
    assert is_exempt_path("/static/_next") is False
    assert is_exempt_path("/") is False
    assert is_exempt_path("") is False


def test_api_path_is_plain_prefix() -> None:
    assert is_api_path("/api") is True
    assert is_api_path("/api/items") is True
    assert is_api_path("/apix") is True
    assert is_api_path("/dashboard") is False
    assert is_api_path("/v1/api") is False


def test_gated_route_excludes_dependent_endpoints() -> None:
    for path in (
        "/login",
        "/login/reset",
        "/warning",
        "/healthz",
        "/favicon.ico",
        "/_next/static/x.js",
        "/_next/image?url=a",
        "/api/login",
        "/api/register",
        "/api/logout",
        "/api/cron",
        "/api/cron/refresh",
        "/api/server-config",
        "/api/search?q=x",
        "/api/detail",
        "/api/image-proxy",
        "/api/tvbox",
    ):
        assert is_gated_route(path) is False, path


def test_gated_route_includes_everything_else() -> None:
    for path in ("/", "/dashboard", "/api/items", "/api/auth/me", "/_next/data/build.json", "/play/1"):
        assert is_gated_route(path) is True, path


def test_gated_route_requires_leading_slash() -> None:
    assert is_gated_route("") is False
    assert is_gated_route("dashboard") is False
