# app/api/v1/endpoints/admin_analytics.py
import math
from datetime import datetime
from typing import Optional, Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps.admin import require_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.analytics import (
    AnalyticsSummaryOut, DemographicsOut, TrendsOut, AnswerDistributionOut, AuditLogListOut,
)
from app.schemas.questionnaires import PaginationOut
from app.services import analytics
from app.services.audit import list_audit_logs

router = APIRouter(tags=["admin-analytics"])

TypeParam = Optional[Literal["pareja", "personalidad"]]


# ---------- Analítica ----------
@router.get("/analytics/summary", response_model=AnalyticsSummaryOut)
def analytics_summary(
    type: TypeParam = Query(None),
    created_from: Optional[datetime] = Query(None),
    created_to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return analytics.summary(db, questionnaire_type=type, created_from=created_from, created_to=created_to)


@router.get("/analytics/demographics", response_model=DemographicsOut)
def analytics_demographics(
    type: TypeParam = Query(None),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return analytics.demographics(db, questionnaire_type=type)


@router.get("/analytics/trends", response_model=TrendsOut)
def analytics_trends(
    period: Literal["daily", "weekly", "monthly"] = Query("monthly"),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return analytics.trends(db, period=period)


@router.get("/analytics/answers/{type}", response_model=AnswerDistributionOut)
def analytics_answers(
    type: Literal["pareja", "personalidad"],
    top: int = Query(5, ge=1, le=20),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return analytics.answer_distribution(db, questionnaire_type=type, top=top)


# ---------- Auditoría ----------
@router.get("/audit-logs", response_model=AuditLogListOut)
def audit_logs(
    accion: Optional[str] = Query(None),
    recurso: Optional[str] = Query(None),
    user_id: Optional[int] = Query(None),
    created_from: Optional[datetime] = Query(None),
    created_to: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    items, total = list_audit_logs(
        db, accion=accion, recurso=recurso, user_id=user_id,
        created_from=created_from, created_to=created_to, page=page, limit=limit,
    )
    return AuditLogListOut(
        items=items,
        pagination=PaginationOut(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )
