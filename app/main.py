# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.v1.endpoints import (
    health, auth, questionnaires, contact, payment,
    admin_questionnaires, admin_contact, admin_analytics,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.APP_NAME,
    description="API para los cuestionarios de pareja y personalidad",
    version="1.0.0",
)

# CORS (en prod: define CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Routers versionados
app.include_router(health.router,         prefix=API_V1_PREFIX)
app.include_router(auth.router,           prefix=API_V1_PREFIX)
app.include_router(questionnaires.router, prefix=API_V1_PREFIX)
app.include_router(contact.router,        prefix=API_V1_PREFIX)
app.include_router(payment.router,        prefix=API_V1_PREFIX)

# Admin: monta AQUÍ el prefijo /api/v1/admin
app.include_router(admin_questionnaires.router, prefix=f"{API_V1_PREFIX}/admin")
app.include_router(admin_contact.router,        prefix=f"{API_V1_PREFIX}/admin")
app.include_router(admin_analytics.router,      prefix=f"{API_V1_PREFIX}/admin")

logger.info("%s iniciada (env=%s)", settings.APP_NAME, settings.ENV)


# Rutas básicas fuera de /api/v1
@app.get("/health")
def health_root():
    return {"status": "ok", "message": "API funcionando correctamente"}


@app.get("/")
def root():
    return {
        "message": "Bienvenido a la API de Cuestionarios",
        "version": "1.0.0",
        "docs": "/docs",
        "api_v1": API_V1_PREFIX,
    }
