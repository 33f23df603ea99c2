# app/core/config.py
from __future__ import annotations
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[2]  # raíz del repo
ENV_FILE = ROOT_DIR / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,  # se resuelve una vez; para cambiarla usa reload_settings()
    )

    # App
    APP_NAME: str = "Cuestionarios Salud Mental API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # JWT
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24

    # Cuenta que recibe los cuestionarios anónimos
    SYSTEM_USER_ROLE: str = "admin"

    # CORS (ej: CORS_ORIGINS=https://mi-front.vercel.app,https://otro.app)
    CORS_ORIGINS: str = ""

    # Estado de pago del proyecto (antes era un objeto global mutable)
    PROJECT_NAME: str = "Love on the Brain"
    PAYMENT_IS_PAID: bool = True
    PAYMENT_AMOUNT: int = 25000
    PAYMENT_DUE_DATE: str = "2024-01-31"

    # DB URLs (acepta cualquiera de las dos)
    DATABASE_URL: str | None = None
    SQLALCHEMY_DATABASE_URI: str | None = None

    @property
    def cors_list(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def db_url(self) -> str:
        """
        URL unificada para SQLAlchemy. Acepta DATABASE_URL o SQLALCHEMY_DATABASE_URI.
        Render entrega 'postgres://', que SQLAlchemy 2 ya no acepta.
        """
        url = (self.DATABASE_URL or self.SQLALCHEMY_DATABASE_URI or "").strip()
        if not url:
            raise ValueError("Define DATABASE_URL o SQLALCHEMY_DATABASE_URI en variables de entorno.")
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url

@lru_cache
def get_settings() -> Settings:
    return Settings()


def reload_settings() -> Settings:
    """Vuelve a leer entorno/.env. Es la única forma de cambiar la configuración en caliente."""
    get_settings.cache_clear()
    return get_settings()


settings = get_settings()
