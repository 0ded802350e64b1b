# backend/booking_api/schemas/services.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str
    duration: int = Field(gt=0, description="Duration in minutes")
    price: int = Field(ge=0, description="Price in cents")
    image_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0

    model_config = {"from_attributes": True}


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

    # Only image_url may be cleared
    @field_validator("name", "description", "duration", "price", "is_active", "sort_order")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    model_config = {"from_attributes": True}


class ServiceRead(BaseModel):
    id: int
    name: str
    description: str
    duration: int
    price: int
    image_url: Optional[str] = None
    is_active: bool
    sort_order: int

    model_config = {"from_attributes": True}
