# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import get_db
from app.models.user import User

# Solo para docs/Swagger; no ejecuta nada por sí mismo
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
# Variante para rutas públicas donde el token es opcional
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

ADMIN_ROLE = "admin"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # hash con formato inválido en BD
        return False


def create_access_token(subject: dict[str, Any], expires_minutes: int | None = None) -> str:
    """
    Genera un JWT con 'exp' e 'iat'.
    - 'sub' se normaliza a str.
    - 'iat' se pone como epoch seconds (int) para comparaciones.
    """
    settings = get_settings()
    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES

    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)

    claims = dict(subject)
    if "sub" in claims and not isinstance(claims["sub"], str):
        claims["sub"] = str(claims["sub"])

    to_encode = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": exp,  # PyJWT acepta datetime tz-aware
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decodifica exigiendo 'exp' e 'iat' y verificando expiración.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"], "verify_exp": True},
            leeway=5,  # pequeño margen por skew de reloj
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expirado")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")


def _user_from_token(token: str, db: Session) -> User:
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token sin sujeto")

    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Token con 'sub' inválido")

    user = db.query(User).filter(User.id == user_id, User.activo.is_(True)).first()
    if not user:
        raise HTTPException(status_code=401, detail="Usuario no encontrado o inactivo")
    return user


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Devuelve el User activo dueño del token."""
    return _user_from_token(token, db)


def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Para rutas que aceptan visitantes anónimos: sin token devuelve None,
    pero un token presente e inválido sigue siendo 401.
    """
    if not token:
        return None
    return _user_from_token(token, db)


def user_is_admin(user: User) -> bool:
    return (user.role or "").lower() == ADMIN_ROLE
