"""
Endpoints del hotel (tenant) y de su personal
"""
from typing import List

from fastapi import APIRouter, Depends, Path, status

from models import Hotel, User
from schemas.auth import UserCreate, UserRead, UserUpdate
from schemas.hotels import HotelRead, HotelUpdate
from services.store import Store
from utils.auth import get_password_hash
from utils.dependencies import MANAGEMENT, get_store, require_roles
from utils.exceptions import Conflict, Forbidden
from utils.logging_utils import log_event


router = APIRouter(prefix="/api", tags=["Hoteles"])


def _verificar_email_libre(store: Store, email: str) -> None:
    if store.get_by_email(User, email) or store.get_by_email(Hotel, email):
        raise Conflict("El email ya está registrado")


def verificar_email_hotel(store: Store, hotel_id: int, datos: HotelUpdate) -> None:
    """El email de un hotel es único en toda la plataforma, sin distinguir mayúsculas"""
    email = datos.changes().get("email")
    if not email:
        return
    otro = store.get_by_email(Hotel, email)
    if otro is not None and otro.id != hotel_id:
        raise Conflict("Ya existe un hotel con este email")


@router.get("/hotels/{hotel_id}", response_model=HotelRead)
def obtener_hotel(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Hotel, hotel_id)


@router.patch("/hotels/{hotel_id}", response_model=HotelRead)
def actualizar_hotel(
    datos: HotelUpdate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(MANAGEMENT)),
):
    store.get(Hotel, hotel_id)
    verificar_email_hotel(store, hotel_id, datos)
    hotel = store.update(Hotel, hotel_id, datos)
    log_event("hoteles", store.ctx.email, "Actualizar hotel", f"id={hotel_id} campos={sorted(datos.changes())}")
    return hotel


# ========== PERSONAL ==========

@router.get("/hotels/{hotel_id}/users", response_model=List[UserRead])
def listar_usuarios(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(MANAGEMENT))):
    return store.list_by_hotel(User, hotel_id)


@router.post("/hotels/{hotel_id}/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def crear_usuario(
    datos: UserCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(MANAGEMENT)),
):
    email = datos.email.lower()
    _verificar_email_libre(store, email)
    usuario = store.create(
        User,
        hotel_id=hotel_id,
        name=datos.name,
        email=email,
        hashed_password=get_password_hash(datos.password),
        role=datos.role,
        active=datos.active,
    )
    log_event("usuarios", store.ctx.email, "Crear usuario", f"id={usuario.id} rol={usuario.role.value}")
    return usuario


@router.patch("/users/{user_id}", response_model=UserRead)
def actualizar_usuario(
    datos: UserUpdate,
    user_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(MANAGEMENT)),
):
    if user_id == store.ctx.user_id and ("role" in datos.changes() or datos.active is False):
        # Un dueño no puede degradarse ni desactivarse a sí mismo
        raise Forbidden("No puede cambiar su propio rol ni desactivarse")
    usuario = store.update(User, user_id, datos)
    log_event("usuarios", store.ctx.email, "Actualizar usuario", f"id={user_id} campos={sorted(datos.changes())}")
    return usuario
