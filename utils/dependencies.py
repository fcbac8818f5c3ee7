"""
Dependencias de autenticación, autorización y acceso a datos
"""
from typing import Iterable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from database import conexion
from models import HotelStatus, User, UserRole
from services.store import Store, TenantContext
from utils.auth import verify_token
from utils.logging_utils import log_event


# Esquema OAuth2 para obtener el token del header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# Grupos de roles por área
FRONT_DESK = (UserRole.OWNER, UserRole.RECEPTIONIST)
ROOM_STAFF = (UserRole.OWNER, UserRole.RECEPTIONIST, UserRole.HOUSEKEEPING)
RESTAURANT = (UserRole.OWNER, UserRole.CHEF, UserRole.SERVER)
STOCK_MANAGERS = (UserRole.OWNER, UserRole.CHEF, UserRole.ACCOUNTANT)
FINANCE = (UserRole.OWNER, UserRole.RECEPTIONIST, UserRole.ACCOUNTANT)
REPORTS = (UserRole.OWNER, UserRole.ACCOUNTANT)
MANAGEMENT = (UserRole.OWNER,)


# ========== DEPENDENCIAS DE AUTENTICACIÓN ==========

def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(conexion.get_db)
) -> User:
    """
    Obtiene el usuario actual desde el token JWT

    Raises:
        HTTPException: Si el token es inválido, el usuario no existe o está inactivo
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = verify_token(token, token_type="access")
    user_id = payload.get("user_id")
    if user_id is None:
        raise credentials_exception

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise credentials_exception

    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario desactivado"
        )

    if user.hotel is not None and user.hotel.status == HotelStatus.SUSPENDED:
        log_event("auth", user.email, "Acceso con hotel suspendido", f"hotel_id={user.hotel_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="El hotel se encuentra suspendido"
        )

    return user


def get_tenant_context(current_user: User = Depends(get_current_user)) -> TenantContext:
    return TenantContext(
        user_id=current_user.id,
        email=current_user.email,
        role=UserRole(current_user.role),
        hotel_id=current_user.hotel_id,
    )


def get_store(
    db: Session = Depends(conexion.get_db),
    ctx: TenantContext = Depends(get_tenant_context),
) -> Store:
    """Store de la request, acotado al hotel del usuario"""
    return Store(db, ctx)


# ========== DEPENDENCIAS DE AUTORIZACIÓN ==========

def require_roles(roles_permitidos: Iterable[UserRole]):
    """
    Dependency que devuelve el Store si el rol del usuario está permitido.
    El super_admin siempre pasa.
    """
    roles_permitidos = tuple(roles_permitidos)

    def check_role(store: Store = Depends(get_store)) -> Store:
        ctx = store.ctx
        if ctx.is_super_admin or ctx.role in roles_permitidos:
            return store
        log_event(
            "auth",
            ctx.email,
            "Intento de acceso no autorizado",
            f"rol={ctx.role.value} roles_requeridos={[r.value for r in roles_permitidos]}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Acceso denegado. Roles permitidos: {', '.join(r.value for r in roles_permitidos)}"
        )

    return check_role


def require_super_admin(store: Store = Depends(get_store)) -> Store:
    """Requiere rol super_admin"""
    if not store.ctx.is_super_admin:
        log_event("auth", store.ctx.email, "Intento de acceso super_admin sin permisos", f"rol={store.ctx.role.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Se requieren privilegios de super administrador"
        )
    return store
