"""
Script para crear el super administrador de la plataforma
Ejecutar: python create_admin.py

También acepta SUPERADMIN_EMAIL, SUPERADMIN_PASSWORD y SUPERADMIN_NAME
como variables de entorno (sin preguntar nada).
"""
import os
import sys

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from database.conexion import SessionLocal, engine, Base
import models  # noqa: F401  registra los modelos
from models import User, UserRole
from utils.auth import get_password_hash


def _pedir_datos():
    email = os.getenv("SUPERADMIN_EMAIL")
    password = os.getenv("SUPERADMIN_PASSWORD")
    nombre = os.getenv("SUPERADMIN_NAME", "Super Admin")
    if email and password:
        return email, password, nombre

    print("\nCreación de Super Administrador")
    print("=" * 50)
    email = input("Email (default: admin@plataforma.com): ").strip() or "admin@plataforma.com"
    while True:
        password = input("Password (mínimo 8 caracteres): ").strip()
        if len(password) >= 8:
            break
        print("La contraseña debe tener al menos 8 caracteres")
    nombre = input("Nombre (opcional): ").strip() or nombre
    return email, password, nombre


def crear_super_admin():
    """Crea el usuario super_admin (sin hotel) si todavía no existe"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        existente = db.query(User).filter(User.role == UserRole.SUPER_ADMIN).first()
        if existente:
            print("Ya existe un super administrador")
            print(f"   ID: {existente.id}")
            print(f"   Email: {existente.email}")
            return existente

        email, password, nombre = _pedir_datos()
        email = email.lower()
        if db.query(User.id).filter(func.lower(User.email) == email).first():
            print(f"El email {email} ya está en uso")
            sys.exit(1)

        admin = User(
            hotel_id=None,
            name=nombre,
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole.SUPER_ADMIN,
            active=True,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)

        print("\nSuper administrador creado exitosamente")
        print(f"   ID: {admin.id}")
        print(f"   Email: {admin.email}")
        print("\nPuede iniciar sesión en /api/auth/login")
        return admin

    except SQLAlchemyError as e:
        db.rollback()
        print(f"\nError al crear super administrador: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    crear_super_admin()
