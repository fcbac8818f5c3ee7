"""
Reportes: agregaciones simples sobre colecciones ya obtenidas del Store
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, Optional

from config import GROWTH_WINDOW_DAYS, PLAN_PRICES
from models import HotelStatus, PaymentStatus, RoomStatus
from schemas.common import CENTS
from schemas.reports import (
    InventoryProductRow, InventoryReport, OccupancyReport, PlatformAnalytics, RevenueReport,
)
from services.inventory import is_low_stock
from utils.timezone import utcnow

HUNDRED = Decimal("100")


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value or 0))


def _percent(part, whole) -> Decimal:
    if not whole:
        return Decimal("0.00")
    return (Decimal(part) / Decimal(whole) * HUNDRED).quantize(CENTS)


def occupancy_report(rooms: Iterable, reservations: Iterable) -> OccupancyReport:
    rooms = list(rooms)
    total_rooms = len(rooms)
    occupied = sum(1 for r in rooms if r.status == RoomStatus.OCCUPIED)
    available = sum(1 for r in rooms if r.status == RoomStatus.AVAILABLE)
    return OccupancyReport(
        total_rooms=total_rooms,
        occupied_rooms=occupied,
        available_rooms=available,
        occupancy_rate=_percent(occupied, total_rooms),
        total_reservations=len(list(reservations)),
    )


def revenue_report(payments: Iterable, sales: Iterable) -> RevenueReport:
    payments = list(payments)
    sales = list(sales)
    # Solo cuentan los pagos completados; las ventas del restaurante se suman todas
    room_revenue = sum(
        (_decimal(p.amount) for p in payments if p.status == PaymentStatus.COMPLETED), Decimal("0")
    )
    restaurant_revenue = sum((_decimal(s.total) for s in sales), Decimal("0"))
    return RevenueReport(
        room_revenue=room_revenue.quantize(CENTS),
        restaurant_revenue=restaurant_revenue.quantize(CENTS),
        total_revenue=(room_revenue + restaurant_revenue).quantize(CENTS),
        total_payments=len(payments),
        total_sales=len(sales),
    )


def inventory_report(products: Iterable) -> InventoryReport:
    products = list(products)
    rows = [
        InventoryProductRow(
            id=p.id,
            name=p.name,
            current_stock=_decimal(p.current_stock),
            alert_threshold=_decimal(p.alert_threshold),
            is_low_stock=is_low_stock(p),
        )
        for p in products
    ]
    total_value = sum(
        (_decimal(p.current_stock) * _decimal(p.unit_price) for p in products), Decimal("0")
    )
    return InventoryReport(
        total_products=len(products),
        low_stock_items=sum(1 for row in rows if row.is_low_stock),
        total_inventory_value=total_value.quantize(CENTS),
        products=rows,
    )


def platform_analytics(
    hotels: Iterable,
    now: Optional[datetime] = None,
    plan_prices: Dict[str, Decimal] = PLAN_PRICES,
    window_days: int = GROWTH_WINDOW_DAYS,
) -> PlatformAnalytics:
    """
    MRR = suma del precio del plan de los hoteles activos.
    growth_rate = hoteles creados en la ventana / hoteles que existían antes de la ventana (%).
    """
    hotels = list(hotels)
    now = now or utcnow()
    window_start = now - timedelta(days=window_days)

    def _value(v):
        return v.value if hasattr(v, "value") else v

    active = [h for h in hotels if h.status == HotelStatus.ACTIVE]
    mrr = sum((_decimal(plan_prices.get(_value(h.plan), 0)) for h in active), Decimal("0"))

    new_hotels = sum(1 for h in hotels if h.created_at and h.created_at >= window_start)
    previous = len(hotels) - new_hotels

    return PlatformAnalytics(
        total_hotels=len(hotels),
        active_hotels=len(active),
        trial_hotels=sum(1 for h in hotels if h.status == HotelStatus.TRIAL),
        suspended_hotels=sum(1 for h in hotels if h.status == HotelStatus.SUSPENDED),
        mrr=mrr.quantize(CENTS),
        growth_rate=_percent(new_hotels, previous),
    )
