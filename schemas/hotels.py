from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

from models.core import HotelPlan, HotelStatus
from schemas.common import PatchModel


class HotelRead(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: str
    plan: HotelPlan
    currency: str
    status: HotelStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HotelUpdate(PatchModel):
    """Campos que el dueño puede editar"""
    name: Optional[str] = Field(None, min_length=2, max_length=150)
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    currency: Optional[str] = Field(None, pattern="^[A-Z]{3}$")

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v):
        return v.lower() if v else v


class HotelAdminUpdate(HotelUpdate):
    """El super_admin además gestiona plan y estado del tenant"""
    plan: Optional[HotelPlan] = None
    status: Optional[HotelStatus] = None
