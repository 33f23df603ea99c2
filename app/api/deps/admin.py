# app/api/deps/admin.py
from fastapi import Depends, HTTPException

from app.core.security import get_current_user, user_is_admin
from app.models.user import User


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Requiere un usuario activo con rol 'admin'."""
    if not user_is_admin(user):
        raise HTTPException(status_code=403, detail="Solo administradores")
    return user
