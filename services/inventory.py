"""
Libro de inventario del restaurante: cada venta descuenta stock y cada compra lo repone.
El movimiento de stock y el registro de la venta/compra se confirman juntos.
"""
from decimal import Decimal
from typing import List

from config import ALLOW_NEGATIVE_STOCK
from models import Product, Purchase, Room, Sale, Supplier, User
from schemas.common import CENTS
from schemas.restaurant import PurchaseCreate, SaleCreate
from services.store import Store
from utils.exceptions import InsufficientStock
from utils.logging_utils import log_event
from utils.timezone import utcnow


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def apply_stock_delta(current, delta, allow_negative: bool = False) -> Decimal:
    """
    Nuevo stock = actual + delta (delta negativo para ventas).

    Raises:
        InsufficientStock: si el resultado queda negativo y no se permite
    """
    new_stock = _to_decimal(current) + _to_decimal(delta)
    if new_stock < 0 and not allow_negative:
        raise InsufficientStock(
            f"Stock insuficiente: disponible {_to_decimal(current)}, solicitado {-_to_decimal(delta)}"
        )
    return new_stock


def is_low_stock(product) -> bool:
    return _to_decimal(product.current_stock) < _to_decimal(product.alert_threshold)


def line_total(unit_amount, quantity) -> Decimal:
    return (_to_decimal(unit_amount) * _to_decimal(quantity)).quantize(CENTS)


class InventoryLedger:

    def __init__(self, store: Store, allow_negative_stock: bool = ALLOW_NEGATIVE_STOCK):
        self.store = store
        self.allow_negative_stock = allow_negative_stock

    def record_sale(self, hotel_id: int, data: SaleCreate) -> Sale:
        self.store.check_hotel(hotel_id)

        with self.store.atomic():
            # Lectura-modificación-escritura con la fila del producto bloqueada
            product = self.store.get_in_hotel(Product, data.product_id, hotel_id, lock=True)
            if data.room_id is not None:
                self.store.get_in_hotel(Room, data.room_id, hotel_id)
            employee_id = data.employee_id or self.store.ctx.user_id
            if data.employee_id is not None:
                self.store.get_in_hotel(User, data.employee_id, hotel_id)

            stock_anterior = _to_decimal(product.current_stock)
            product.current_stock = apply_stock_delta(
                stock_anterior, -data.quantity, allow_negative=self.allow_negative_stock
            )
            total = data.total if data.total is not None else line_total(product.unit_price, data.quantity)

            sale = self.store.create(
                Sale,
                hotel_id=hotel_id,
                product_id=product.id,
                employee_id=employee_id,
                room_id=data.room_id,
                quantity=data.quantity,
                total=total,
                payment_method=data.payment_method,
            )

        self.store.refresh(sale)
        self.store.refresh(product)
        log_event(
            "inventario", self.store.ctx.email, "Registrar venta",
            f"sale_id={sale.id} product_id={product.id} cantidad={data.quantity} "
            f"stock={stock_anterior}->{product.current_stock}",
        )
        if is_low_stock(product):
            log_event("inventario", self.store.ctx.email, "Stock bajo", f"product_id={product.id} stock={product.current_stock}")
        return sale

    def record_purchase(self, hotel_id: int, data: PurchaseCreate) -> Purchase:
        self.store.check_hotel(hotel_id)

        with self.store.atomic():
            product = self.store.get_in_hotel(Product, data.product_id, hotel_id, lock=True)
            if data.supplier_id is not None:
                self.store.get_in_hotel(Supplier, data.supplier_id, hotel_id)

            stock_anterior = _to_decimal(product.current_stock)
            product.current_stock = apply_stock_delta(stock_anterior, data.quantity, allow_negative=True)
            total = data.total if data.total is not None else line_total(data.unit_cost, data.quantity)

            purchase = self.store.create(
                Purchase,
                hotel_id=hotel_id,
                supplier_id=data.supplier_id,
                product_id=product.id,
                quantity=data.quantity,
                unit_cost=data.unit_cost,
                total=total,
                purchase_date=data.purchase_date or utcnow(),
            )

        self.store.refresh(purchase)
        self.store.refresh(product)
        log_event(
            "inventario", self.store.ctx.email, "Registrar compra",
            f"purchase_id={purchase.id} product_id={product.id} cantidad={data.quantity} "
            f"stock={stock_anterior}->{product.current_stock}",
        )
        return purchase

    def list_low_stock(self, hotel_id: int) -> List[Product]:
        return [p for p in self.store.list_by_hotel(Product, hotel_id) if is_low_stock(p)]
