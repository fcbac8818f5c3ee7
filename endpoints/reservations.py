"""
Endpoints de reservas.

Las altas y cambios pasan por ReservationService: rango válido, habitación
libre en [check_in, check_out) y transiciones de estado permitidas.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from models import Reservation, ReservationStatus
from schemas.reservations import ReservationCreate, ReservationRead, ReservationUpdate
from services.booking import ReservationService
from services.store import Store
from utils.dependencies import FRONT_DESK, get_store, require_roles


router = APIRouter(prefix="/api", tags=["Reservas"])


@router.get("/hotels/{hotel_id}/reservations", response_model=List[ReservationRead])
def listar_reservas(
    hotel_id: int = Path(..., gt=0),
    estado: Optional[ReservationStatus] = Query(None, alias="status"),
    room_id: Optional[int] = Query(None, gt=0),
    store: Store = Depends(get_store),
):
    filtros = []
    if estado is not None:
        filtros.append(Reservation.status == estado)
    if room_id is not None:
        filtros.append(Reservation.room_id == room_id)
    return store.list_by_hotel(Reservation, hotel_id, *filtros)


@router.post("/hotels/{hotel_id}/reservations", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def crear_reserva(
    datos: ReservationCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FRONT_DESK)),
):
    return ReservationService(store).create(hotel_id, datos)


@router.get("/reservations/{reservation_id}", response_model=ReservationRead)
def obtener_reserva(reservation_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Reservation, reservation_id)


@router.patch("/reservations/{reservation_id}", response_model=ReservationRead)
def actualizar_reserva(
    datos: ReservationUpdate,
    reservation_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FRONT_DESK)),
):
    return ReservationService(store).update(reservation_id, datos)


@router.delete("/reservations/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def eliminar_reserva(reservation_id: int = Path(..., gt=0), store: Store = Depends(require_roles(FRONT_DESK))):
    ReservationService(store).delete(reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
