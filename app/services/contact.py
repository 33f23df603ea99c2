# app/services/contact.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ContactMessageNotFound
from app.models.contact import ContactMessage, CONTACT_STATUSES

logger = logging.getLogger(__name__)


def create_message(db: Session, *, nombre: str, email: str, asunto: Optional[str], mensaje: str) -> ContactMessage:
    msg = ContactMessage(nombre=nombre, email=email, asunto=asunto, mensaje=mensaje)
    db.add(msg)
    db.commit()
    db.refresh(msg)
    logger.info("Mensaje de contacto %s recibido de %s", msg.id, email)
    return msg


def get_message(db: Session, message_id: int) -> ContactMessage:
    msg = db.get(ContactMessage, message_id)
    if msg is None:
        raise ContactMessageNotFound(message_id)
    return msg


def list_messages(db: Session, *, status: Optional[str] = None) -> list[ContactMessage]:
    query = db.query(ContactMessage)
    if status:
        query = query.filter(ContactMessage.status == status)
    return query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()


def update_status(db: Session, message_id: int, status: str) -> ContactMessage:
    """Cambia el estado. El commit lo hace quien llama (junto con la auditoría)."""
    msg = get_message(db, message_id)
    msg.status = status
    db.flush()
    return msg


def delete_message(db: Session, message_id: int) -> None:
    msg = get_message(db, message_id)
    db.delete(msg)
    db.flush()


def message_stats(db: Session) -> dict[str, int]:
    counts = dict(
        db.query(ContactMessage.status, func.count(ContactMessage.id))
        .group_by(ContactMessage.status)
        .all()
    )
    stats = {s: int(counts.get(s, 0)) for s in CONTACT_STATUSES}
    stats["total"] = sum(stats.values())
    return stats
