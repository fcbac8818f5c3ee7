"""
Endpoints de habitaciones y disponibilidad
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status

from models import Room
from schemas.rooms import RoomAvailability, RoomCreate, RoomRead, RoomUpdate
from services.booking import ReservationService
from services.store import Store
from utils.dependencies import FRONT_DESK, ROOM_STAFF, get_store, require_roles
from utils.exceptions import InvalidRange
from utils.logging_utils import log_event
from utils.timezone import parse_datetime


router = APIRouter(prefix="/api", tags=["Habitaciones"])


def _parse_fecha(valor: str, campo: str):
    try:
        return parse_datetime(valor)
    except (ValueError, OverflowError):
        raise InvalidRange(f"Fecha inválida en '{campo}': {valor}")


@router.get("/hotels/{hotel_id}/rooms", response_model=List[RoomRead])
def listar_habitaciones(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.list_by_hotel(Room, hotel_id)


@router.post("/hotels/{hotel_id}/rooms", response_model=RoomRead, status_code=status.HTTP_201_CREATED)
def crear_habitacion(
    datos: RoomCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FRONT_DESK)),
):
    habitacion = store.create(Room, hotel_id=hotel_id, **datos.model_dump())
    log_event("habitaciones", store.ctx.email, "Crear habitación", f"id={habitacion.id} numero={habitacion.room_number}")
    return habitacion


@router.get("/hotels/{hotel_id}/rooms/{room_id}/availability", response_model=RoomAvailability)
def disponibilidad_habitacion(
    hotel_id: int = Path(..., gt=0),
    room_id: int = Path(..., gt=0),
    check_in: str = Query(..., description="Fecha ISO 8601"),
    check_out: str = Query(..., description="Fecha ISO 8601"),
    store: Store = Depends(get_store),
):
    """
    Indica si la habitación está libre en [check_in, check_out).
    No modifica nada.
    """
    store.check_hotel(hotel_id)
    desde = _parse_fecha(check_in, "check_in")
    hasta = _parse_fecha(check_out, "check_out")
    conflicto = ReservationService(store).check_availability(hotel_id, room_id, desde, hasta)
    return RoomAvailability(
        room_id=room_id,
        check_in=desde,
        check_out=hasta,
        available=conflicto is None,
        conflicting_reservation_id=conflicto.id if conflicto is not None else None,
    )


@router.get("/rooms/{room_id}", response_model=RoomRead)
def obtener_habitacion(room_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Room, room_id)


@router.patch("/rooms/{room_id}", response_model=RoomRead)
def actualizar_habitacion(
    datos: RoomUpdate,
    room_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(ROOM_STAFF)),
):
    habitacion = store.update(Room, room_id, datos)
    log_event("habitaciones", store.ctx.email, "Actualizar habitación", f"id={room_id} campos={sorted(datos.changes())}")
    return habitacion


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def eliminar_habitacion(room_id: int = Path(..., gt=0), store: Store = Depends(require_roles(FRONT_DESK))):
    store.delete(Room, room_id)
    log_event("habitaciones", store.ctx.email, "Eliminar habitación", f"id={room_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
