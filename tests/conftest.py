"""
Fixtures comunes: base SQLite en memoria, cliente HTTP y hoteles registrados
"""
import os
import sys
from pathlib import Path

# La configuración se lee al importar config: definir el entorno antes que nada
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ALLOW_NEGATIVE_STOCK"] = "false"
os.environ.setdefault("LOG_FILE", str(Path(__file__).parent / "test_logs.txt"))

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from database import conexion
import models
from main import app
from utils.auth import get_password_hash


@pytest.fixture(autouse=True)
def reset_db():
    conexion.Base.metadata.drop_all(bind=conexion.engine)
    conexion.Base.metadata.create_all(bind=conexion.engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def registrar_hotel(client, nombre: str, email: str, password: str = "secreto123") -> dict:
    resp = client.post("/api/auth/register", json={
        "hotel_name": nombre,
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    login = client.post("/api/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    data = login.json()
    return {
        "hotel_id": data["hotel"]["id"],
        "user_id": data["user"]["id"],
        "token": data["token"],
        "headers": auth_headers(data["token"]),
    }


def crear_usuario(client, owner: dict, email: str, role: str, password: str = "secreto123") -> dict:
    resp = client.post(
        f"/api/hotels/{owner['hotel_id']}/users",
        json={"name": f"Usuario {role}", "email": email, "password": password, "role": role},
        headers=owner["headers"],
    )
    assert resp.status_code == 201, resp.text
    login = client.post("/api/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    data = login.json()
    return {"user_id": data["user"]["id"], "headers": auth_headers(data["token"])}


@pytest.fixture
def owner(client):
    return registrar_hotel(client, "Hotel Uno", "uno@hotel.com")


@pytest.fixture
def other_owner(client):
    return registrar_hotel(client, "Hotel Dos", "dos@hotel.com")


@pytest.fixture
def super_admin(client):
    db = conexion.SessionLocal()
    try:
        admin = models.User(
            hotel_id=None,
            name="Plataforma",
            email="admin@plataforma.com",
            hashed_password=get_password_hash("admin12345"),
            role=models.UserRole.SUPER_ADMIN,
            active=True,
        )
        db.add(admin)
        db.commit()
    finally:
        db.close()
    login = client.post("/api/auth/login", json={"email": "admin@plataforma.com", "password": "admin12345"})
    assert login.status_code == 200, login.text
    return {"headers": auth_headers(login.json()["token"])}


@pytest.fixture
def room(client, owner):
    resp = client.post(
        f"/api/hotels/{owner['hotel_id']}/rooms",
        json={"room_number": "101", "type": "Double", "price_per_night": "1500.00", "capacity": 2},
        headers=owner["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def guest(client, owner):
    resp = client.post(
        f"/api/hotels/{owner['hotel_id']}/guests",
        json={"name": "Marie Joseph", "email": "marie@mail.com", "phone": "50937000000"},
        headers=owner["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
