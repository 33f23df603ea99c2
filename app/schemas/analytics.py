from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from app.schemas.questionnaires import PaginationOut, QuestionnaireStatsOut


# ---------- Resumen ----------

class MonthCountOut(BaseModel):
    month: str
    count: int
    completed: int


class AnalyticsSummaryOut(QuestionnaireStatsOut):
    by_month: List[MonthCountOut] = []


# ---------- Demografía ----------

class DomainCountOut(BaseModel):
    domain: str
    count: int


class DemographicsOut(BaseModel):
    age_distribution: Dict[str, int]
    gender_distribution: Dict[str, int]
    sexual_orientation_distribution: Dict[str, int]
    top_domains: List[DomainCountOut]


# ---------- Tendencias ----------

class GrowthPointOut(BaseModel):
    period: str
    count: int
    growth: int


class CompletionPointOut(BaseModel):
    period: str
    completion_rate: int


class PopularTimesOut(BaseModel):
    day_of_week: Dict[str, int]
    hour_of_day: Dict[str, int]


class TrendsOut(BaseModel):
    period: str
    questionnaire_growth: List[GrowthPointOut]
    completion_trends: List[CompletionPointOut]
    popular_times: PopularTimesOut


# ---------- Distribución de respuestas ----------

class AnswerCountOut(BaseModel):
    answer: str
    count: int


class QuestionDistributionOut(BaseModel):
    index: str
    question: str
    total_responses: int
    unique_answers: int
    responses: List[AnswerCountOut]


class AnswerDistributionOut(BaseModel):
    type: str
    total_questionnaires: int
    total_questions: int
    questions: List[QuestionDistributionOut]


# ---------- Auditoría ----------

class AuditLogOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    user_nombre: Optional[str] = None
    accion: str
    recurso: str
    recurso_id: Optional[int] = None
    payload: Optional[Dict[str, Any]] = None
    ip: Optional[str] = None
    creado_en: Optional[datetime] = None


class AuditLogListOut(BaseModel):
    items: List[AuditLogOut]
    pagination: PaginationOut
