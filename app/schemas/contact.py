from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

ContactStatus = Literal["unread", "read", "replied"]


class ContactIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    nombre: str = Field(min_length=2, max_length=100)
    email: EmailStr
    asunto: Optional[str] = Field(default=None, max_length=200, validate_default=True)
    mensaje: str = Field(min_length=10, max_length=2000)

    @field_validator("asunto")
    @classmethod
    def default_asunto(cls, v: Optional[str]) -> str:
        return v or "Sin asunto"


class ContactCreatedOut(BaseModel):
    id: int
    message: str = "Mensaje enviado correctamente"


class ContactMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: str
    asunto: Optional[str] = None
    mensaje: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContactStatusIn(BaseModel):
    status: ContactStatus


class ContactStatsOut(BaseModel):
    total: int
    unread: int
    read: int
    replied: int


class ContactListOut(BaseModel):
    items: List[ContactMessageOut]
    total: int
