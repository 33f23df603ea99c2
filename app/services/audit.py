# app/services/audit.py
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.audit import AuditLog
from app.models.user import User


def audit_log(
    db: Session,
    *,
    actor: Optional[User],
    accion: str,
    recurso: str,
    recurso_id: Optional[int] = None,
    payload: Optional[dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> AuditLog:
    """Registra una acción administrativa.

    No hace commit: la fila se guarda junto con la transacción del endpoint,
    así una acción que falla no deja rastro de auditoría huérfano.
    """
    entry = AuditLog(
        user_id=actor.id if actor is not None else None,
        accion=accion,
        recurso=recurso,
        recurso_id=recurso_id,
        payload=payload,
        ip=request.client.host if (request and request.client) else None,
        ua=request.headers.get("user-agent") if request else None,
    )
    db.add(entry)
    return entry


def list_audit_logs(
    db: Session,
    *,
    accion: Optional[str] = None,
    recurso: Optional[str] = None,
    user_id: Optional[int] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[dict[str, Any]], int]:
    """Registros de auditoría, los más recientes primero, con el correo del actor."""
    query = db.query(AuditLog, User.email, User.nombre).outerjoin(User, User.id == AuditLog.user_id)
    if accion:
        query = query.filter(AuditLog.accion == accion)
    if recurso:
        query = query.filter(AuditLog.recurso == recurso)
    if user_id is not None:
        query = query.filter(AuditLog.user_id == user_id)
    if created_from is not None:
        query = query.filter(AuditLog.creado_en >= created_from)
    if created_to is not None:
        query = query.filter(AuditLog.creado_en <= created_to)

    total = query.count()
    rows = (
        query.order_by(AuditLog.creado_en.desc(), AuditLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    items = [
        {
            "id": log.id,
            "user_id": log.user_id,
            "user_email": email,
            "user_nombre": nombre,
            "accion": log.accion,
            "recurso": log.recurso,
            "recurso_id": log.recurso_id,
            "payload": log.payload,
            "ip": log.ip,
            "creado_en": log.creado_en,
        }
        for log, email, nombre in rows
    ]
    return items, total
