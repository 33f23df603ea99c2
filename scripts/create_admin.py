#!/usr/bin/env python3
"""
Crea (o actualiza) la cuenta admin. Es la cuenta de sistema que recibe los
cuestionarios anónimos, así que debe existir antes de abrir el intake.
Ejecutar desde la raíz del repo:
    python scripts/create_admin.py --email admin@ejemplo.com --password secreto [--nombre "Admin"]
"""
import argparse
import logging
import os
import sys

# Agregar la raíz del repo al path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.security import hash_password
from app.db.session import SessionLocal
from app.models.user import User

logger = logging.getLogger("create_admin")


def upsert_admin(db, *, email: str, password: str, nombre: str) -> User:
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email, nombre=nombre)
        db.add(user)
        logger.info("Creando admin %s", email)
    else:
        logger.info("Actualizando admin existente %s", email)
    user.password_hash = hash_password(password)
    user.nombre = nombre
    user.role = settings.SYSTEM_USER_ROLE
    user.activo = True
    db.commit()
    db.refresh(user)
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Crea o actualiza la cuenta administradora")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--nombre", default="Administrador")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    with SessionLocal() as db:
        user = upsert_admin(db, email=args.email, password=args.password, nombre=args.nombre)
    print(f"Admin listo: id={user.id} email={user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
