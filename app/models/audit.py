# app/models/audit.py
from sqlalchemy import Column, Integer, String, Text, JSON, DateTime, ForeignKey, func
from app.db.base_class import Base

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id         = Column(Integer, primary_key=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)  # actor
    accion     = Column(String, nullable=False)          # delete | repair | purge | update_status
    recurso    = Column(String, nullable=False)          # questionnaire | contact_message
    recurso_id = Column(Integer, nullable=True)          # NULL para acciones masivas (sweeps)
    payload    = Column(JSON, nullable=True)
    ip         = Column(String, nullable=True)
    ua         = Column(Text, nullable=True)
    creado_en  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
