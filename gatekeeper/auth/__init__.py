"""
Authentication gate for the web UI.

Design goals:
- Two deployment-wide modes: shared password or per-user HMAC signature.
- Fail closed: a missing server secret never lets a request through.
- Cookie-only: the credential lives in the `auth` cookie set by the login page.
"""
