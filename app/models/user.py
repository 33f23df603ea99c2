# app/models/user.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func, text
from sqlalchemy.orm import relationship

from app.db.base_class import Base

ROLES = ("admin", "professional", "assistant")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    nombre = Column(String, nullable=False)
    role = Column(String, nullable=False, index=True, server_default=text("'professional'"))  # admin|professional|assistant
    activo = Column(Boolean, nullable=False, server_default=text("true"))

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    questionnaires = relationship("Questionnaire", back_populates="user", cascade="all, delete-orphan")
