# app/db/session.py
import logging
import re

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text
from app.core.config import settings

logger = logging.getLogger(__name__)

def _mask(u: str) -> str:
    """Enmascara la contraseña en la URL para logs seguros"""
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", u)

# Obtener URL
db_url = settings.db_url
logger.info("[DB] Using: %s", _mask(db_url))

if db_url.startswith("sqlite"):
    # SQLite (tests / desarrollo local): sin pool de tamaño fijo
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        echo=False,
    )
else:
    # Configuración simple para Render PostgreSQL
    engine = create_engine(
        db_url,
        pool_size=5,              # 5 conexiones concurrentes
        max_overflow=10,          # Hasta 15 total en picos
        pool_timeout=30,          # 30s para obtener conexión
        pool_recycle=1800,        # Recicla cada 30 min
        pool_pre_ping=True,       # Verifica que la conexión esté viva
        echo=False,               # True para debugging
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency para FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> bool:
    """Verifica que la conexión funcione"""
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1")).fetchone()
            if row and row[0] == 1:
                logger.info("[DB] Connection successful")
                return True
            return False
    except Exception:
        logger.exception("[DB] Connection failed")
        return False
