# app/api/deps/payment.py
import logging

from fastapi import HTTPException

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def payment_info() -> dict:
    settings = get_settings()
    return {
        "isPaid": settings.PAYMENT_IS_PAID,
        "amount": settings.PAYMENT_AMOUNT,
        "dueDate": settings.PAYMENT_DUE_DATE,
        "projectName": settings.PROJECT_NAME,
    }


def require_paid() -> None:
    """
    Bloquea las rutas públicas con 402 mientras el proyecto no esté pagado.
    Se lee la configuración en cada petición para respetar reload_settings().
    """
    info = payment_info()
    if not info["isPaid"]:
        logger.warning("Petición bloqueada: pago pendiente de %s", info["projectName"])
        raise HTTPException(
            status_code=402,
            detail={
                "error": "PAYMENT_REQUIRED",
                "message": "El pago del proyecto está pendiente",
                "paymentInfo": info,
            },
        )
