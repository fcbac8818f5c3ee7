from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.core import ReservationStatus, PaymentStatus
from schemas.common import Money, PatchModel
from utils.timezone import to_utc_naive


# Estados válidos al crear; el resto se alcanza con transiciones
INITIAL_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class ReservationCreate(BaseModel):
    room_id: int = Field(..., gt=0)
    guest_id: int = Field(..., gt=0)
    check_in: datetime
    check_out: datetime
    total_amount: Money
    status: ReservationStatus = ReservationStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    # El rango (check_in < check_out) lo valida el servicio de reservas

    @field_validator("check_in", "check_out")
    @classmethod
    def normalizar_fecha(cls, v):
        return to_utc_naive(v)

    @field_validator("status")
    @classmethod
    def validar_estado_inicial(cls, v):
        if v not in INITIAL_STATUSES:
            raise ValueError("Una reserva nueva solo puede estar 'pending' o 'confirmed'")
        return v


class ReservationUpdate(PatchModel):
    room_id: Optional[int] = Field(None, gt=0)
    guest_id: Optional[int] = Field(None, gt=0)
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    status: Optional[ReservationStatus] = None
    total_amount: Optional[Money] = None
    payment_status: Optional[PaymentStatus] = None

    @field_validator("check_in", "check_out")
    @classmethod
    def normalizar_fecha(cls, v):
        return to_utc_naive(v)


class ReservationRead(BaseModel):
    id: int
    hotel_id: int
    room_id: int
    guest_id: int
    check_in: datetime
    check_out: datetime
    status: ReservationStatus
    total_amount: Money
    payment_status: PaymentStatus
    created_by: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
