# app/api/v1/endpoints/contact.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps.payment import require_paid
from app.db.session import get_db
from app.schemas.contact import ContactIn, ContactCreatedOut, ContactStatsOut
from app.services import contact as svc

router = APIRouter(prefix="/contact", tags=["contact"], dependencies=[Depends(require_paid)])
logger = logging.getLogger(__name__)


@router.post("", response_model=ContactCreatedOut, status_code=status.HTTP_201_CREATED)
def send_message(data: ContactIn, db: Session = Depends(get_db)):
    try:
        msg = svc.create_message(
            db, nombre=data.nombre, email=data.email, asunto=data.asunto, mensaje=data.mensaje,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error guardando mensaje de contacto")
        raise HTTPException(status_code=500, detail="Error enviando el mensaje")
    return ContactCreatedOut(id=msg.id)


@router.get("/stats", response_model=ContactStatsOut)
def contact_stats(db: Session = Depends(get_db)):
    return svc.message_stats(db)
