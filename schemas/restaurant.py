from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.core import PaymentMethod
from schemas.common import Money, Quantity, Stock, PatchModel
from utils.timezone import to_utc_naive


# ========== PRODUCTOS ==========

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    category: str = Field(..., min_length=1, max_length=60)
    unit_price: Money
    current_stock: Money = 0
    alert_threshold: Money = 10
    unit: str = Field(..., min_length=1, max_length=30)


class ProductUpdate(PatchModel):
    """El stock no se edita acá: solo cambia con ventas y compras"""
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    category: Optional[str] = Field(None, min_length=1, max_length=60)
    unit_price: Optional[Money] = None
    alert_threshold: Optional[Money] = None
    unit: Optional[str] = Field(None, min_length=1, max_length=30)


class ProductRead(BaseModel):
    id: int
    hotel_id: int
    name: str
    category: str
    unit_price: Money
    current_stock: Stock
    alert_threshold: Money
    unit: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ========== VENTAS ==========

class SaleCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: Quantity
    total: Optional[Money] = Field(None, description="Por defecto precio unitario x cantidad")
    payment_method: PaymentMethod
    employee_id: Optional[int] = Field(None, gt=0, description="Por defecto, el usuario que registra la venta")
    room_id: Optional[int] = Field(None, gt=0, description="Cargo a habitación")


class SaleRead(BaseModel):
    id: int
    hotel_id: int
    product_id: int
    employee_id: Optional[int] = None
    room_id: Optional[int] = None
    quantity: Quantity
    total: Money
    payment_method: PaymentMethod
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ========== COMPRAS ==========

class PurchaseCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    supplier_id: Optional[int] = Field(None, gt=0)
    quantity: Quantity
    unit_cost: Money
    total: Optional[Money] = Field(None, description="Por defecto costo unitario x cantidad")
    purchase_date: Optional[datetime] = None

    @field_validator("purchase_date")
    @classmethod
    def normalizar_fecha(cls, v):
        return to_utc_naive(v)


class PurchaseRead(BaseModel):
    id: int
    hotel_id: int
    supplier_id: Optional[int] = None
    product_id: int
    quantity: Quantity
    unit_cost: Money
    total: Money
    purchase_date: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ========== PROVEEDORES ==========

class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    contact: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class SupplierUpdate(PatchModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    contact: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class SupplierRead(BaseModel):
    id: int
    hotel_id: int
    name: str
    contact: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
