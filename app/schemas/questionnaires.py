from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, List, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ---------- Entradas ----------

class QuestionnaireSyncIn(BaseModel):
    """
    Envío del front. Los campos son deliberadamente laxos (Any): la forma real de
    las respuestas varía y se limpia en la capa de servicios, y un tipo inválido
    debe responder 400, no 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Any = None
    personal_info: Any = Field(default=None, validation_alias=AliasChoices("personal_info", "personalInfo"))
    answers: Any = None
    completed: bool = False


class QuestionnaireSaveIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    personal_info: Any = Field(default=None, validation_alias=AliasChoices("personal_info", "personalInfo"))
    answers: Any = None
    completed: Optional[bool] = None


# ---------- Salidas ----------

class QuestionnaireCreatedOut(BaseModel):
    id: int
    message: str = "Cuestionario guardado"


class AnswerItemOut(BaseModel):
    index: str
    question: str
    answer: str


class QuestionnaireOut(BaseModel):
    id: int
    type: str
    status: str
    completed: bool
    personal_info: Dict[str, Any]
    answers: Dict[str, str]
    items: List[AnswerItemOut]
    notes: List[str] = []
    user_email: Optional[str] = None
    user_nombre: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class QuestionnaireListOut(BaseModel):
    items: List[QuestionnaireOut]
    pagination: PaginationOut


class TypeStatsOut(BaseModel):
    total: int
    completed: int
    pending: int
    completion_rate: int


class QuestionnaireStatsOut(TypeStatsOut):
    by_type: Dict[str, TypeStatsOut] = {}


class QuestionnaireGroupOut(BaseModel):
    count: int
    questionnaires: List[QuestionnaireOut]


class QuestionnaireGroupedOut(BaseModel):
    total: int
    pareja: QuestionnaireGroupOut
    personalidad: QuestionnaireGroupOut


class SweepNoteOut(BaseModel):
    questionnaire_id: int
    kind: str
    detail: str


class SweepReportOut(BaseModel):
    mode: str
    dry_run: bool
    scanned: int
    repaired: int
    deleted: int
    untouched: int
    failed: int
    affected_ids: List[int] = []
    deleted_ids: List[int] = []
    failed_ids: List[int] = []
    notes: List[SweepNoteOut] = []
