"""
Endpoints de autenticación: registro de hoteles y login
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from config import RATE_LIMIT_AUTH
from database import conexion
from models import Hotel, HotelPlan, HotelStatus, User, UserRole
from schemas.auth import (
    RegisterRequest, RegisterResponse, LoginRequest, LoginResponse, UserRead,
)
from utils.auth import verify_password, get_password_hash, create_access_token, build_token_claims
from utils.dependencies import get_current_user
from utils.logging_utils import log_event, log_error
from utils.rate_limiter import limiter


router = APIRouter(prefix="/api/auth", tags=["Autenticación"])


def _email_en_uso(db: Session, email: str) -> bool:
    hotel = db.query(Hotel.id).filter(func.lower(Hotel.email) == email).first()
    user = db.query(User.id).filter(func.lower(User.email) == email).first()
    return hotel is not None or user is not None


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMIT_AUTH)
def registrar_hotel(
    request: Request,
    datos: RegisterRequest,
    db: Session = Depends(conexion.get_db),
):
    """
    Registra un hotel nuevo (plan trial) junto con su usuario dueño
    """
    email = datos.email.lower()
    if _email_en_uso(db, email):
        log_event("auth", email, "Registro rechazado", "email duplicado")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ya existe un hotel o usuario con este email"
        )

    try:
        hotel = Hotel(
            name=datos.hotel_name,
            email=email,
            phone=datos.phone,
            address=datos.address,
            currency=datos.currency,
            plan=HotelPlan.TRIAL,
            status=HotelStatus.TRIAL,
        )
        db.add(hotel)
        db.flush()

        owner = User(
            hotel_id=hotel.id,
            name=datos.hotel_name,
            email=email,
            hashed_password=get_password_hash(datos.password),
            role=UserRole.OWNER,
            active=True,
        )
        db.add(owner)
        db.commit()
        db.refresh(hotel)
        db.refresh(owner)
    except IntegrityError as e:
        db.rollback()
        log_error("auth", email, "Error de integridad al registrar", e)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Violación de restricción de integridad"
        )
    except SQLAlchemyError as e:
        db.rollback()
        log_error("auth", email, "Error al registrar hotel", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar el hotel"
        )

    log_event("auth", email, "Hotel registrado", f"hotel_id={hotel.id}")
    return {"message": "Hotel registrado correctamente", "hotel": hotel, "user": owner}


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMIT_AUTH)
def login(
    request: Request,
    datos: LoginRequest,
    db: Session = Depends(conexion.get_db),
):
    """
    Inicia sesión y retorna token, usuario y hotel
    """
    email = datos.email.lower()
    usuario = db.query(User).filter(func.lower(User.email) == email).first()

    if not usuario or not verify_password(datos.password, usuario.hashed_password):
        log_event("auth", email, "Login fallido", "")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not usuario.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario desactivado"
        )

    hotel = usuario.hotel
    if hotel is not None and hotel.status == HotelStatus.SUSPENDED:
        log_event("auth", email, "Login con hotel suspendido", f"hotel_id={hotel.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="El hotel se encuentra suspendido"
        )

    token = create_access_token(build_token_claims(usuario))
    log_event("auth", email, "Login exitoso", f"rol={usuario.role.value}")

    return {"user": usuario, "hotel": hotel, "token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
def obtener_perfil(current_user: User = Depends(get_current_user)):
    """
    Obtiene el perfil del usuario actual
    """
    return current_user
