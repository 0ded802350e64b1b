# backend/booking_api/services/auth.py
"""
Admin session tokens.

Token format: "{issued_at}.{signature}"
signature = HMAC-SHA256(session_secret, "admin:{issued_at}")

Stateless: logout clears the cookie, a copied token stays valid until TTL.
"""

import hashlib
import hmac
import time
from dataclasses import dataclass


class AuthNotConfiguredError(RuntimeError):
    pass


@dataclass(frozen=True)
class AdminPrincipal:
    """Authenticated admin passed explicitly into privileged operations."""
    name: str
    issued_at: int


def _sign(secret: str, issued_at: int) -> str:
    return hmac.new(
        secret.encode(),
        f"admin:{issued_at}".encode(),
        hashlib.sha256,
    ).hexdigest()


def check_admin_password(password: str, admin_password: str | None) -> bool:
    if not admin_password:
        raise AuthNotConfiguredError("Admin password not configured. Please set ADMIN_PASSWORD.")
    return hmac.compare_digest(password.encode(), admin_password.encode())


def issue_admin_token(secret: str | None, now: float | None = None) -> str:
    if not secret:
        raise AuthNotConfiguredError("Session secret not configured. Please set SESSION_SECRET.")
    issued_at = int(now if now is not None else time.time())
    return f"{issued_at}.{_sign(secret, issued_at)}"


def verify_admin_token(
    token: str | None,
    secret: str | None,
    ttl_seconds: int,
    now: float | None = None,
) -> AdminPrincipal | None:
    """Return the principal for a valid, unexpired token, else None."""
    if not token or not secret:
        return None

    issued_raw, _, signature = token.partition(".")
    if not issued_raw.isdigit() or not signature:
        return None

    issued_at = int(issued_raw)
    if not hmac.compare_digest(_sign(secret, issued_at), signature):
        return None

    now = now if now is not None else time.time()
    if issued_at > now or now - issued_at > ttl_seconds:
        return None

    return AdminPrincipal(name="admin", issued_at=issued_at)
