# app/models/contact.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func, text

from app.db.base_class import Base

CONTACT_STATUSES = ("unread", "read", "replied")


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    email = Column(String, nullable=False)
    asunto = Column(String(200), nullable=True)
    mensaje = Column(Text, nullable=False)
    status = Column(String, nullable=False, index=True, server_default=text("'unread'"))  # unread|read|replied

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
