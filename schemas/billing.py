from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict

from models.core import PaymentMethod, PaymentStatus
from schemas.common import Money, PatchModel


# ========== PAGOS ==========

class PaymentCreate(BaseModel):
    reservation_id: Optional[int] = Field(None, gt=0)
    amount: Money
    currency: Optional[str] = Field(None, pattern="^[A-Z]{3}$", description="Por defecto, la moneda del hotel")
    method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PENDING
    notes: Optional[str] = None


class PaymentUpdate(PatchModel):
    status: Optional[PaymentStatus] = None
    method: Optional[PaymentMethod] = None
    notes: Optional[str] = None


class PaymentRead(BaseModel):
    id: int
    hotel_id: int
    reservation_id: Optional[int] = None
    amount: Money
    currency: str
    method: PaymentMethod
    status: PaymentStatus
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ========== FACTURAS ==========

class InvoiceCreate(BaseModel):
    payment_id: Optional[int] = Field(None, gt=0)
    pdf_url: Optional[str] = None


class InvoiceRead(BaseModel):
    id: int
    hotel_id: int
    payment_id: Optional[int] = None
    invoice_number: str
    pdf_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
