from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from gatekeeper.api.responses import build_gate_response, login_redirect_url, warning_url
from gatekeeper.auth.models import GateDecision

BASE = "http://testserver/"


def test_allow_passes_through() -> None:
    assert build_gate_response(GateDecision.allow("password"), base_url=BASE) is None


def test_misconfigured_redirects_to_warning_without_return_path() -> None:
    r = build_gate_response(GateDecision.misconfigured_secret(), base_url=BASE)
    assert r is not None
    assert r.status_code == 302
    assert r.headers["location"] == "http://testserver/warning"


def test_api_path_gets_401_plain_text() -> None:
    r = build_gate_response(GateDecision.unauthenticated("/api/items?x=1", "missing_credential"), base_url=BASE)
    assert r is not None
    assert r.status_code == 401
    assert r.body == b"Unauthorized"
    assert r.headers["content-type"].startswith("text/plain")
    assert "www-authenticate" not in {k.lower() for k in r.headers.keys()}


def test_page_path_redirects_to_login_with_original_path() -> None:
    r = build_gate_response(GateDecision.unauthenticated("/dashboard?x=1", "bad_password"), base_url=BASE)
    assert r is not None
    assert r.status_code == 302
    loc = urlsplit(r.headers["location"])
    assert loc.path == "/login"
    assert parse_qs(loc.query) == {"redirect": ["/dashboard?x=1"]}


def test_api_detection_ignores_query_string() -> None:
    r = build_gate_response(GateDecision.unauthenticated("/page?next=/api/x", "missing_credential"), base_url=BASE)
    assert r is not None
    assert r.status_code == 302


def test_url_helpers_join_base_without_double_slash() -> None:
    assert warning_url("https://ui.example.com/") == "https://ui.example.com/warning"
    assert warning_url("") == "/warning"
    assert login_redirect_url("https://ui.example.com", "/a b?c=d&e") == (
        "https://ui.example.com/login?redirect=%2Fa+b%3Fc%3Dd%26e"
    )
