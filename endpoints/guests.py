"""
Endpoints de huéspedes
"""
from typing import List

from fastapi import APIRouter, Depends, Path, status

from models import Guest
from schemas.rooms import GuestCreate, GuestRead, GuestUpdate
from services.store import Store
from utils.dependencies import FRONT_DESK, get_store, require_roles
from utils.logging_utils import log_event


router = APIRouter(prefix="/api", tags=["Huéspedes"])


@router.get("/hotels/{hotel_id}/guests", response_model=List[GuestRead])
def listar_huespedes(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.list_by_hotel(Guest, hotel_id)


@router.post("/hotels/{hotel_id}/guests", response_model=GuestRead, status_code=status.HTTP_201_CREATED)
def crear_huesped(
    datos: GuestCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FRONT_DESK)),
):
    huesped = store.create(Guest, hotel_id=hotel_id, **datos.model_dump())
    log_event("huespedes", store.ctx.email, "Crear huésped", f"id={huesped.id}")
    return huesped


@router.get("/guests/{guest_id}", response_model=GuestRead)
def obtener_huesped(guest_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Guest, guest_id)


@router.patch("/guests/{guest_id}", response_model=GuestRead)
def actualizar_huesped(
    datos: GuestUpdate,
    guest_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FRONT_DESK)),
):
    huesped = store.update(Guest, guest_id, datos)
    log_event("huespedes", store.ctx.email, "Actualizar huésped", f"id={guest_id} campos={sorted(datos.changes())}")
    return huesped
