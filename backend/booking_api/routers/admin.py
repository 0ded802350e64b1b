# backend/booking_api/routers/admin.py

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..config import settings
from ..deps import ADMIN_COOKIE, get_optional_admin
from ..schemas.admin import AdminLogin, AdminLoginResponse, AdminSessionRead
from ..services.auth import (
    AdminPrincipal,
    AuthNotConfiguredError,
    check_admin_password,
    issue_admin_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=AdminLoginResponse)
def login(data: AdminLogin, response: Response):
    try:
        if not check_admin_password(data.password, settings.admin_password):
            logger.warning("Admin login failed: invalid password")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")
        token = issue_admin_token(settings.session_secret)
    except AuthNotConfiguredError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e)) from None

    response.set_cookie(
        ADMIN_COOKIE,
        token,
        max_age=settings.admin_session_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    logger.info("Admin logged in")
    return AdminLoginResponse(success=True, token=token)


@router.get("/session", response_model=AdminSessionRead)
def session(admin: AdminPrincipal | None = Depends(get_optional_admin)):
    return AdminSessionRead(is_admin=admin is not None)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(ADMIN_COOKIE)
    return {"success": True}
