# app/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.security import create_access_token, get_current_user, verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import LoginIn, TokenOut, MeOut

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    """
    Login por correo y contraseña. El mensaje de error es el mismo para
    usuario inexistente y contraseña incorrecta.
    """
    email = data.email.strip().lower()
    user = (
        db.query(User)
        .filter(User.email == email, User.activo.is_(True))
        .first()
    )
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning("Login fallido para %s", email)
        raise HTTPException(status_code=401, detail="Credenciales inválidas")

    token = create_access_token({"sub": str(user.id), "email": user.email, "role": user.role})
    return TokenOut(access_token=token)


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    """
    Devuelve el usuario actual según el token.
    """
    return MeOut.model_validate(current_user)
