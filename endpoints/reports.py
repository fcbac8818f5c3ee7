"""
Reportes del hotel: ocupación, ingresos e inventario
"""
from fastapi import APIRouter, Depends, Path

from models import Payment, Product, Reservation, Room, Sale
from schemas.reports import InventoryReport, OccupancyReport, RevenueReport
from services.reports import inventory_report, occupancy_report, revenue_report
from services.store import Store
from utils.dependencies import REPORTS, require_roles


router = APIRouter(prefix="/api/hotels/{hotel_id}/reports", tags=["Reportes"])


@router.get("/occupancy", response_model=OccupancyReport)
def reporte_ocupacion(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(REPORTS))):
    return occupancy_report(
        store.list_by_hotel(Room, hotel_id),
        store.list_by_hotel(Reservation, hotel_id),
    )


@router.get("/revenue", response_model=RevenueReport)
def reporte_ingresos(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(REPORTS))):
    return revenue_report(
        store.list_by_hotel(Payment, hotel_id),
        store.list_by_hotel(Sale, hotel_id),
    )


@router.get("/inventory", response_model=InventoryReport)
def reporte_inventario(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(REPORTS))):
    return inventory_report(store.list_by_hotel(Product, hotel_id))
