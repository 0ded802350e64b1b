# backend/booking_api/deps.py

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .services.auth import AdminPrincipal, verify_admin_token
from .services.booking_store import BookingStore

ADMIN_COOKIE = "admin_session"


def get_store(db: Session = Depends(get_db)) -> BookingStore:
    return BookingStore(db)


def _extract_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return request.cookies.get(ADMIN_COOKIE)


def get_optional_admin(request: Request) -> AdminPrincipal | None:
    return verify_admin_token(
        _extract_token(request),
        settings.session_secret,
        settings.admin_session_ttl_seconds,
    )


def require_admin(
    admin: AdminPrincipal | None = Depends(get_optional_admin),
) -> AdminPrincipal:
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return admin
