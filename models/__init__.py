"""
Archivo de inicialización del paquete models.
Expone todas las clases de los diferentes archivos para que
SQLAlchemy (Base.metadata) las detecte al importar 'models'.
"""

# 1. Tenant, habitaciones, reservas, pagos (desde core.py)
from .core import (
    HotelPlan,
    HotelStatus,
    UserRole,
    RoomStatus,
    ReservationStatus,
    PaymentStatus,
    PaymentMethod,
    Hotel,
    Room,
    Guest,
    Reservation,
    Payment,
    Invoice,
)

# 2. Usuarios (desde user.py)
from .user import User

# 3. Restaurante (desde restaurant.py)
from .restaurant import Product, Sale, Purchase, Supplier

__all__ = [
    "HotelPlan", "HotelStatus", "UserRole", "RoomStatus",
    "ReservationStatus", "PaymentStatus", "PaymentMethod",
    "Hotel", "User",
    "Room", "Guest", "Reservation", "Payment", "Invoice",
    "Product", "Sale", "Purchase", "Supplier",
]
