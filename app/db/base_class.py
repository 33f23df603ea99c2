# app/db/base_class.py
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Nombres estables para índices y FKs: Alembic autogenerate y los batch de SQLite los necesitan
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base declarativa común para los modelos de cuestionarios, contacto, usuarios y auditoría."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
