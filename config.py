"""
Configuración general del backend (variables de entorno)
"""
import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Base de datos: DATABASE_URL tiene prioridad; si no, se arma desde DB_*
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME")


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        # Compatibilidad con URLs estilo Heroku/Neon
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url
    if DB_HOST and DB_NAME:
        return f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    return "sqlite:///./hotel.db"


DATABASE_URL = get_database_url()

# Seguridad / JWT
SECRET_KEY = os.getenv("SECRET_KEY", "cambiar-esta-clave-en-produccion")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Rate limiting
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", "true")
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "10/minute")
RATE_LIMIT_STORAGE = os.getenv("REDIS_URL", "memory://")

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if origin.strip()
]

# Logs
LOG_FILE = os.getenv("LOG_FILE", "hotel_logs.txt")

# Inventario: permitir stock negativo (ventas sin stock quedan como backorder)
ALLOW_NEGATIVE_STOCK = _env_bool("ALLOW_NEGATIVE_STOCK", "false")

# Moneda por defecto de hoteles y pagos (HTG o USD)
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "HTG")

# Precio mensual por plan (para MRR de la plataforma)
PLAN_PRICES = {
    "trial": Decimal("0"),
    "basic": Decimal(os.getenv("PLAN_PRICE_BASIC", "800")),
    "pro": Decimal(os.getenv("PLAN_PRICE_PRO", "2200")),
    "enterprise": Decimal(os.getenv("PLAN_PRICE_ENTERPRISE", "5000")),
}

# Ventana (días) usada para la tasa de crecimiento de hoteles
GROWTH_WINDOW_DAYS = int(os.getenv("GROWTH_WINDOW_DAYS", "30"))
