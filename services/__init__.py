"""
Servicios de negocio: acceso a datos por tenant, reservas, inventario y reportes
"""

from .store import Store, TenantContext
from .booking import ReservationService
from .inventory import InventoryLedger

__all__ = [
    "Store",
    "TenantContext",
    "ReservationService",
    "InventoryLedger",
]
