from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict

from models.core import RoomStatus
from schemas.common import Money, PatchModel


# ========== HABITACIONES ==========

class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20, description="Número de habitación, único por hotel")
    type: str = Field(..., min_length=1, max_length=50, description="Single, Double, Suite...")
    price_per_night: Money
    capacity: int = Field(..., gt=0)
    status: RoomStatus = RoomStatus.AVAILABLE
    notes: Optional[str] = None


class RoomUpdate(PatchModel):
    room_number: Optional[str] = Field(None, min_length=1, max_length=20)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    price_per_night: Optional[Money] = None
    capacity: Optional[int] = Field(None, gt=0)
    status: Optional[RoomStatus] = None
    notes: Optional[str] = None


class RoomRead(BaseModel):
    id: int
    hotel_id: int
    room_number: str
    type: str
    price_per_night: Money
    capacity: int
    status: RoomStatus
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomAvailability(BaseModel):
    room_id: int
    check_in: datetime
    check_out: datetime
    available: bool
    conflicting_reservation_id: Optional[int] = None


# ========== HUÉSPEDES ==========

class GuestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    id_card: Optional[str] = Field(None, max_length=60)


class GuestUpdate(PatchModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    id_card: Optional[str] = Field(None, max_length=60)


class GuestRead(BaseModel):
    id: int
    hotel_id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    id_card: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
