from decimal import Decimal
from typing import List
from pydantic import BaseModel


class OccupancyReport(BaseModel):
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    occupancy_rate: Decimal  # porcentaje con 2 decimales
    total_reservations: int


class RevenueReport(BaseModel):
    room_revenue: Decimal
    restaurant_revenue: Decimal
    total_revenue: Decimal
    total_payments: int
    total_sales: int


class InventoryProductRow(BaseModel):
    id: int
    name: str
    current_stock: Decimal
    alert_threshold: Decimal
    is_low_stock: bool


class InventoryReport(BaseModel):
    total_products: int
    low_stock_items: int
    total_inventory_value: Decimal
    products: List[InventoryProductRow]


class PlatformAnalytics(BaseModel):
    total_hotels: int
    active_hotels: int
    trial_hotels: int
    suspended_hotels: int
    mrr: Decimal
    growth_rate: Decimal  # % de hoteles nuevos en la ventana vs. los existentes antes
