# app/models/questionnaire.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, CheckConstraint, func, text
from sqlalchemy.orm import relationship

from app.db.base_class import Base

QUESTIONNAIRE_TYPES = ("pareja", "personalidad")
STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"


class Questionnaire(Base):
    __tablename__ = "questionnaires"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False, index=True)  # pareja | personalidad

    # JSON serializado como texto: vale igual para columna TEXT o JSON estricta
    personal_info = Column(Text, nullable=False)
    answers = Column(Text, nullable=False)

    status = Column(String, nullable=False, index=True, server_default=text("'pending'"))  # pending | completed

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="questionnaires")

    __table_args__ = (
        CheckConstraint("type IN ('pareja', 'personalidad')", name="ck_questionnaires_type"),
        CheckConstraint("status IN ('pending', 'completed')", name="ck_questionnaires_status"),
    )
