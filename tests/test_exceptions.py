"""
Tests de los manejadores de errores de la API
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI
from fastapi.testclient import TestClient

from utils.exceptions import InsufficientStock, NotFound, setup_exception_handlers


def _app_con_errores() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/roto")
    def roto():
        raise RuntimeError("fallo inesperado")

    @app.get("/faltante")
    def faltante():
        raise NotFound("Habitación no encontrada")

    @app.get("/sin-stock")
    def sin_stock():
        raise InsufficientStock("Stock insuficiente")

    return app


class TestManejadoresDeErrores:

    def test_error_inesperado_devuelve_500_generico(self):
        client = TestClient(_app_con_errores(), raise_server_exceptions=False)
        resp = client.get("/roto")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Error interno del servidor"}
        assert "fallo inesperado" not in resp.text

    def test_errores_de_dominio_conservan_su_estado(self):
        client = TestClient(_app_con_errores(), raise_server_exceptions=False)
        assert client.get("/faltante").status_code == 404
        assert client.get("/sin-stock").status_code == 409
