# backend/booking_api/schemas/admin.py

from pydantic import BaseModel


class AdminLogin(BaseModel):
    password: str


class AdminLoginResponse(BaseModel):
    success: bool
    token: str


class AdminSessionRead(BaseModel):
    is_admin: bool
