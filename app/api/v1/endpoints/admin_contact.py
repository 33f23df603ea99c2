# app/api/v1/endpoints/admin_contact.py
from typing import Optional, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.api.deps.admin import require_admin
from app.core.errors import ContactMessageNotFound
from app.db.session import get_db
from app.models.user import User
from app.schemas.contact import ContactListOut, ContactMessageOut, ContactStatusIn
from app.services import contact as svc
from app.services.audit import audit_log

router = APIRouter(prefix="/contact-messages", tags=["admin-contact"])


@router.get("", response_model=ContactListOut)
def list_messages(
    status: Optional[Literal["unread", "read", "replied"]] = Query(None),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    items = svc.list_messages(db, status=status)
    return ContactListOut(items=[ContactMessageOut.model_validate(m) for m in items], total=len(items))


@router.put("/{message_id}/status", response_model=ContactMessageOut)
def update_status(
    message_id: int,
    data: ContactStatusIn,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        msg = svc.update_status(db, message_id, data.status)
    except ContactMessageNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    audit_log(
        db, actor=admin, accion="update_status", recurso="contact_message",
        recurso_id=message_id, payload={"status": data.status}, request=request,
    )
    db.commit()
    db.refresh(msg)
    return ContactMessageOut.model_validate(msg)


@router.delete("/{message_id}")
def delete_message(
    message_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        svc.delete_message(db, message_id)
    except ContactMessageNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    audit_log(db, actor=admin, accion="delete", recurso="contact_message", recurso_id=message_id, request=request)
    db.commit()
    return {"ok": True, "id": message_id}
