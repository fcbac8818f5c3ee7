"""
Endpoints de plataforma, solo para super_admin
"""
from typing import List

from fastapi import APIRouter, Depends, Path

from endpoints.hotels import verificar_email_hotel
from models import Hotel
from schemas.hotels import HotelAdminUpdate, HotelRead
from schemas.reports import PlatformAnalytics
from services.reports import platform_analytics
from services.store import Store
from utils.dependencies import require_super_admin
from utils.logging_utils import log_event


router = APIRouter(prefix="/api/superadmin", tags=["Super Admin"])


@router.get("/hotels", response_model=List[HotelRead])
def listar_hoteles(store: Store = Depends(require_super_admin)):
    return store.list_all(Hotel)


@router.get("/hotels/{hotel_id}", response_model=HotelRead)
def obtener_hotel(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_super_admin)):
    return store.get(Hotel, hotel_id)


@router.patch("/hotels/{hotel_id}", response_model=HotelRead)
def actualizar_hotel(
    datos: HotelAdminUpdate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_super_admin),
):
    """Permite además cambiar plan y estado (suspender / reactivar)"""
    store.get(Hotel, hotel_id)
    verificar_email_hotel(store, hotel_id, datos)
    hotel = store.update(Hotel, hotel_id, datos)
    log_event(
        "superadmin", store.ctx.email, "Actualizar hotel",
        f"id={hotel_id} plan={hotel.plan.value} estado={hotel.status.value}",
    )
    return hotel


@router.get("/analytics", response_model=PlatformAnalytics)
def analiticas_plataforma(store: Store = Depends(require_super_admin)):
    return platform_analytics(store.list_all(Hotel))
