"""
Reglas de reservas:
- Validación de rango de fechas y doble reserva (intervalos semiabiertos [check_in, check_out))
- Máquina de estados de la reserva
"""
from datetime import datetime
from typing import Iterable, Optional

from models import Guest, Reservation, ReservationStatus, Room
from schemas.reservations import ReservationCreate, ReservationUpdate
from services.store import Store
from utils.exceptions import Conflict, InvalidRange, InvalidTransition
from utils.logging_utils import log_event


# Estados que liberan la habitación
RELEASED_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.CHECKED_OUT})

RESERVATION_TRANSITIONS = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED}),
    ReservationStatus.CHECKED_IN: frozenset({ReservationStatus.CHECKED_OUT}),
    ReservationStatus.CHECKED_OUT: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


# ========== FUNCIONES PURAS ==========

def validate_range(check_in: datetime, check_out: datetime) -> None:
    if check_in is None or check_out is None:
        raise InvalidRange("check_in y check_out son obligatorios")
    if check_in >= check_out:
        raise InvalidRange("check_out debe ser posterior a check_in")


def overlaps(a_in: datetime, a_out: datetime, b_in: datetime, b_out: datetime) -> bool:
    # Semiabierto: si uno termina justo cuando empieza el otro, no hay choque
    return a_in < b_out and b_in < a_out


def is_blocking(reservation) -> bool:
    return ReservationStatus(reservation.status) not in RELEASED_STATUSES


def find_conflict(check_in: datetime, check_out: datetime, existing: Iterable) -> Optional[Reservation]:
    for reservation in existing:
        if is_blocking(reservation) and overlaps(check_in, check_out, reservation.check_in, reservation.check_out):
            return reservation
    return None


def validate_booking(room_id: int, check_in: datetime, check_out: datetime, existing: Iterable) -> None:
    """
    Decide si se puede reservar la habitación en el rango pedido.

    Raises:
        InvalidRange: si check_in >= check_out
        Conflict: si alguna reserva activa de la habitación se superpone
    """
    validate_range(check_in, check_out)
    conflicto = find_conflict(check_in, check_out, existing)
    if conflicto is not None:
        raise Conflict(
            f"La habitación {room_id} no está disponible. Choca con reserva #{conflicto.id}"
        )


def check_transition(current, new) -> None:
    current = ReservationStatus(current)
    new = ReservationStatus(new)
    if current == new:
        return
    if new not in RESERVATION_TRANSITIONS[current]:
        raise InvalidTransition(
            f"Transición de estado inválida: {current.value} -> {new.value}"
        )


# ========== SERVICIO ==========

class ReservationService:
    """Crea y modifica reservas aplicando las reglas de disponibilidad y estados"""

    def __init__(self, store: Store):
        self.store = store

    def check_availability(self, hotel_id: int, room_id: int, check_in: datetime, check_out: datetime,
                           exclude_id: Optional[int] = None) -> Optional[Reservation]:
        """Devuelve la reserva que impide el rango, o None si está libre"""
        validate_range(check_in, check_out)
        self.store.get_in_hotel(Room, room_id, hotel_id)
        existing = self.store.list_reservations_for_room(room_id, check_in, check_out, exclude_id=exclude_id)
        return find_conflict(check_in, check_out, existing)

    def create(self, hotel_id: int, data: ReservationCreate) -> Reservation:
        # El rango se valida antes de tocar la base
        validate_range(data.check_in, data.check_out)
        self.store.check_hotel(hotel_id)

        with self.store.atomic():
            # Bloquea la habitación: dos reservas concurrentes sobre la misma se serializan
            self.store.get_in_hotel(Room, data.room_id, hotel_id, lock=True)
            self.store.get_in_hotel(Guest, data.guest_id, hotel_id)
            existing = self.store.list_reservations_for_room(data.room_id, data.check_in, data.check_out)
            validate_booking(data.room_id, data.check_in, data.check_out, existing)
            reservation = self.store.create(
                Reservation,
                hotel_id=hotel_id,
                created_by=self.store.ctx.user_id,
                **data.model_dump(),
            )

        self.store.refresh(reservation)
        log_event(
            "reservas", self.store.ctx.email, "Crear reserva",
            f"id={reservation.id} room_id={reservation.room_id} "
            f"{reservation.check_in.isoformat()} -> {reservation.check_out.isoformat()}",
        )
        return reservation

    def update(self, reservation_id: int, patch: ReservationUpdate) -> Reservation:
        changes = patch.changes()

        with self.store.atomic():
            # Bloquea la reserva: dos cambios de estado concurrentes se serializan
            reservation = self.store.get(Reservation, reservation_id, lock=True)
            estado_anterior = ReservationStatus(reservation.status)

            if "status" in changes:
                check_transition(estado_anterior, changes["status"])

            room_id = changes.get("room_id", reservation.room_id)
            check_in = changes.get("check_in", reservation.check_in)
            check_out = changes.get("check_out", reservation.check_out)
            validate_range(check_in, check_out)

            if "guest_id" in changes:
                self.store.get_in_hotel(Guest, changes["guest_id"], reservation.hotel_id)

            moved = (
                room_id != reservation.room_id
                or check_in != reservation.check_in
                or check_out != reservation.check_out
            )
            nuevo_estado = ReservationStatus(changes.get("status", estado_anterior))
            cambia_estado = nuevo_estado != estado_anterior
            if moved or (cambia_estado and nuevo_estado not in RELEASED_STATUSES):
                self.store.get_in_hotel(Room, room_id, reservation.hotel_id, lock=True)
                if nuevo_estado not in RELEASED_STATUSES:
                    existing = self.store.list_reservations_for_room(
                        room_id, check_in, check_out, exclude_id=reservation.id
                    )
                    validate_booking(room_id, check_in, check_out, existing)

            self.store.apply(reservation, changes)

        self.store.refresh(reservation)
        detalle = f"id={reservation.id} campos={sorted(changes)}"
        if "status" in changes:
            detalle += f" estado={estado_anterior.value}->{ReservationStatus(reservation.status).value}"
        log_event("reservas", self.store.ctx.email, "Actualizar reserva", detalle)
        return reservation

    def delete(self, reservation_id: int) -> None:
        self.store.delete(Reservation, reservation_id)
        log_event("reservas", self.store.ctx.email, "Eliminar reserva", f"id={reservation_id}")
