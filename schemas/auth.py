"""
Schemas Pydantic para autenticación, registro de hoteles y usuarios
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

from config import DEFAULT_CURRENCY

from models.core import UserRole, HotelPlan
from schemas.common import PatchModel


STAFF_ROLES = [role for role in UserRole if role != UserRole.SUPER_ADMIN]


# ========== REGISTRO / LOGIN ==========

class RegisterRequest(BaseModel):
    hotel_name: str = Field(..., min_length=2, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    currency: str = Field(DEFAULT_CURRENCY, pattern="^[A-Z]{3}$")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class HotelSummary(BaseModel):
    id: int
    name: str
    currency: Optional[str] = None
    plan: Optional[HotelPlan] = None

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: int
    hotel_id: Optional[int] = None
    name: str
    email: str
    role: UserRole
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    message: str
    hotel: HotelSummary
    user: UserRead


class LoginResponse(BaseModel):
    user: UserRead
    hotel: Optional[HotelSummary] = None
    token: str
    token_type: str = "bearer"


# ========== USUARIOS DEL HOTEL ==========

class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    role: UserRole = UserRole.RECEPTIONIST
    active: bool = True

    @field_validator("role")
    @classmethod
    def validar_rol(cls, v):
        if v == UserRole.SUPER_ADMIN:
            raise ValueError("No se puede asignar el rol super_admin desde un hotel")
        return v


class UserUpdate(PatchModel):
    name: Optional[str] = Field(None, min_length=2, max_length=120)
    role: Optional[UserRole] = None
    active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def validar_rol(cls, v):
        if v == UserRole.SUPER_ADMIN:
            raise ValueError("No se puede asignar el rol super_admin desde un hotel")
        return v
