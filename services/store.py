"""
Store: acceso a datos acotado por tenant.

Cada instancia se construye por request con la sesión de base de datos y el
contexto del usuario autenticado (TenantContext). Toda lectura o escritura
filtra por hotel: una fila de otro hotel se informa como NotFound y un
listado de otro hotel como Forbidden. El super_admin ve todos los hoteles.

Fuera de ``atomic()`` cada escritura hace commit; dentro, solo flush y un
único commit al final del bloque.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import (
    Hotel, User, Room, Guest, Reservation, Payment, Invoice,
    Product, Sale, Purchase, Supplier, UserRole,
)
from schemas.common import PatchModel
from utils.exceptions import Conflict, Forbidden, NotFound
from utils.logging_utils import log_error, log_event


NOT_FOUND_MESSAGES = {
    Hotel: "Hotel no encontrado",
    User: "Usuario no encontrado",
    Room: "Habitación no encontrada",
    Guest: "Huésped no encontrado",
    Reservation: "Reserva no encontrada",
    Payment: "Pago no encontrado",
    Invoice: "Factura no encontrada",
    Product: "Producto no encontrado",
    Sale: "Venta no encontrada",
    Purchase: "Compra no encontrada",
    Supplier: "Proveedor no encontrado",
}

INTEGRITY_MESSAGE = "Violación de restricción de integridad"


@dataclass(frozen=True)
class TenantContext:
    """Quién hace la request y a qué hotel pertenece"""
    user_id: int
    email: str
    role: UserRole
    hotel_id: Optional[int]

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def can_access(self, hotel_id: Optional[int]) -> bool:
        if self.is_super_admin:
            return True
        return self.hotel_id is not None and self.hotel_id == hotel_id


def _tenant_column(model):
    # El hotel es su propio tenant
    return model.id if model is Hotel else model.hotel_id


def _tenant_of(entity) -> Optional[int]:
    return entity.id if isinstance(entity, Hotel) else entity.hotel_id


class Store:

    def __init__(self, db: Session, ctx: TenantContext):
        self.db = db
        self.ctx = ctx
        self._atomic = False

    # ========== CONTROL DE TENANT ==========

    def check_hotel(self, hotel_id: Optional[int]) -> None:
        if not self.ctx.can_access(hotel_id):
            log_event("tenant", self.ctx.email, "Acceso a otro hotel denegado", f"hotel_id={hotel_id}")
            raise Forbidden("No tiene acceso a este hotel")

    def require_super_admin(self) -> None:
        if not self.ctx.is_super_admin:
            log_event("tenant", self.ctx.email, "Operación de plataforma denegada", f"rol={self.ctx.role}")
            raise Forbidden("Se requieren privilegios de super administrador")

    def _scoped(self, model):
        query = self.db.query(model)
        if not self.ctx.is_super_admin:
            query = query.filter(_tenant_column(model) == self.ctx.hotel_id)
        return query

    # ========== LECTURAS ==========

    def get(self, model, entity_id: int, lock: bool = False):
        query = self._scoped(model).filter(model.id == entity_id)
        if lock:
            query = query.with_for_update()
        entity = query.first()
        if entity is None:
            raise NotFound(NOT_FOUND_MESSAGES.get(model, "Registro no encontrado"))
        return entity

    def get_in_hotel(self, model, entity_id: int, hotel_id: int, lock: bool = False):
        """Como get, pero además exige que la fila sea del hotel indicado (referencias del payload)"""
        entity = self.get(model, entity_id, lock=lock)
        if _tenant_of(entity) != hotel_id:
            raise NotFound(NOT_FOUND_MESSAGES.get(model, "Registro no encontrado"))
        return entity

    def list_by_hotel(self, model, hotel_id: int, *criteria) -> List[Any]:
        self.check_hotel(hotel_id)
        return (
            self.db.query(model)
            .filter(_tenant_column(model) == hotel_id, *criteria)
            .order_by(model.id.asc())
            .all()
        )

    def list_where(self, model, *criteria) -> List[Any]:
        return self._scoped(model).filter(*criteria).order_by(model.id.asc()).all()

    def list_all(self, model) -> List[Any]:
        self.require_super_admin()
        return self.db.query(model).order_by(model.id.asc()).all()

    def get_by_email(self, model, email: str):
        """Búsqueda global (el email es único en toda la plataforma); None si no existe"""
        return self.db.query(model).filter(func.lower(model.email) == email.lower()).first()

    def list_reservations_for_room(
        self,
        room_id: int,
        check_in: datetime,
        check_out: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[Reservation]:
        """
        Reservas de la habitación cuyo intervalo [check_in, check_out) se superpone
        con el pedido. Devuelve todas, sin filtrar por estado.
        Checkout y checkin el mismo instante NO se superponen (turnover).
        """
        query = self._scoped(Reservation).filter(
            Reservation.room_id == room_id,
            Reservation.check_in < check_out,
            Reservation.check_out > check_in,
        )
        if exclude_id is not None:
            query = query.filter(Reservation.id != exclude_id)
        return query.order_by(Reservation.check_in.asc()).all()

    # ========== ESCRITURAS ==========

    def create(self, model, **fields):
        self.check_hotel(fields.get("hotel_id"))
        entity = model(**fields)
        self.db.add(entity)
        self._write(entity)
        return entity

    def update(self, model, entity_id: int, patch: Union[PatchModel, Dict[str, Any]]):
        entity = self.get(model, entity_id)
        return self.apply(entity, patch)

    def apply(self, entity, patch: Union[PatchModel, Dict[str, Any]]):
        changes = patch.changes() if isinstance(patch, PatchModel) else dict(patch)
        for field, value in changes.items():
            setattr(entity, field, value)
        self._write(entity)
        return entity

    def delete(self, model, entity_id: int) -> None:
        entity = self.get(model, entity_id)
        self.db.delete(entity)
        self._write(conflict_message="No se puede eliminar: tiene registros asociados")

    def refresh(self, entity):
        self.db.refresh(entity)
        return entity

    @contextmanager
    def atomic(self):
        """Agrupa varias escrituras en una sola transacción"""
        if self._atomic:
            yield self
            return
        self._atomic = True
        try:
            yield self
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            log_error("store", self.ctx.email, "Transacción rechazada por integridad", e)
            raise Conflict(INTEGRITY_MESSAGE) from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._atomic = False

    def _write(self, entity=None, conflict_message: str = INTEGRITY_MESSAGE) -> None:
        try:
            if self._atomic:
                self.db.flush()
                return
            self.db.commit()
            if entity is not None:
                self.db.refresh(entity)
        except IntegrityError as e:
            self.db.rollback()
            log_error("store", self.ctx.email, "Escritura rechazada por integridad", e)
            raise Conflict(conflict_message) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            log_error("store", self.ctx.email, "Error de base de datos", e)
            raise
