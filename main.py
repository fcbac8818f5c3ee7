from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS
from database import conexion
import models  # asegura que todos los modelos estén registrados
from utils.exceptions import setup_exception_handlers
from utils.rate_limiter import setup_rate_limiting

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        conexion.Base.metadata.create_all(bind=conexion.engine)
        logger.info("[OK] Tablas creadas (o ya existian)")
    except Exception as e:
        logger.error(f"[ERROR] Error creando tablas: {e}")
        raise
    yield


app = FastAPI(title="Hotel Back-Office API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_rate_limiting(app)
setup_exception_handlers(app)

from endpoints import (  # noqa: E402
    auth, hotels, rooms, guests, reservations, billing, restaurant, reports, superadmin,
)
app.include_router(auth.router)
app.include_router(hotels.router)
app.include_router(rooms.router)
app.include_router(guests.router)
app.include_router(reservations.router)
app.include_router(billing.router)
app.include_router(restaurant.router)
app.include_router(reports.router)
app.include_router(superadmin.router)


@app.get("/health")
def health():
    return {"status": "ok"}
