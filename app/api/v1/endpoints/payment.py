# app/api/v1/endpoints/payment.py
from fastapi import APIRouter

from app.api.deps.payment import payment_info
from app.core.config import get_settings
from app.schemas.payment import PaymentStatusOut

router = APIRouter(prefix="/payment", tags=["payment"])


@router.get("/status", response_model=PaymentStatusOut)
def payment_status():
    info = payment_info()
    return PaymentStatusOut(
        **info,
        environment=get_settings().ENV,
        message="Pago verificado" if info["isPaid"] else "Pago pendiente",
    )
