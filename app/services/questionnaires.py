# app/services/questionnaires.py
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import InvalidType, NoSystemUser, QuestionnaireLocked, QuestionnaireNotFound
from app.models.questionnaire import Questionnaire, QUESTIONNAIRE_TYPES, STATUS_COMPLETED, STATUS_PENDING
from app.models.user import User
from app.services.answers import normalize_answers
from app.services.personal_info import apply_personal_info_defaults

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def parse_json_text(raw: Optional[str]) -> tuple[Any, bool]:
    """Parsea una columna JSON guardada como texto. Devuelve ``(valor, ok)``."""
    if raw is None:
        return None, False
    try:
        return json.loads(raw), True
    except (TypeError, ValueError, RecursionError):
        return None, False


def validate_type(questionnaire_type: Any) -> str:
    if questionnaire_type not in QUESTIONNAIRE_TYPES:
        raise InvalidType(questionnaire_type)
    return questionnaire_type


def resolve_owner_id(db: Session, user_id: Optional[int]) -> int:
    """Id del dueño del cuestionario: el usuario autenticado o la cuenta de sistema."""
    if user_id is not None:
        return user_id
    role = get_settings().SYSTEM_USER_ROLE
    system_id = (
        db.query(User.id)
        .filter(User.role == role, User.activo.is_(True))
        .order_by(User.id.asc())
        .limit(1)
        .scalar()
    )
    if system_id is None:
        logger.error("No hay usuario con rol %r para cuestionarios anónimos", role)
        raise NoSystemUser(role)
    return system_id


def create_questionnaire(
    db: Session,
    *,
    questionnaire_type: Any,
    personal_info: Any,
    answers: Any,
    completed: bool = False,
    user_id: Optional[int] = None,
) -> int:
    """Crea un cuestionario con la información personal y respuestas ya limpias."""
    validate_type(questionnaire_type)

    info, defaulted = apply_personal_info_defaults(personal_info)
    if defaulted:
        logger.info("personal_info incompleto: se aplicaron valores por defecto")
    clean_answers = normalize_answers(answers)
    owner_id = resolve_owner_id(db, user_id)

    row = Questionnaire(
        user_id=owner_id,
        type=questionnaire_type,
        personal_info=dumps(info),
        answers=dumps(clean_answers),
        status=STATUS_COMPLETED if completed else STATUS_PENDING,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info(
        "Cuestionario %s creado: tipo=%s respuestas=%d estado=%s owner=%s",
        row.id, row.type, len(clean_answers), row.status, owner_id,
    )
    return row.id


def get_questionnaire(db: Session, questionnaire_id: int, *, user_id: Optional[int] = None) -> Questionnaire:
    query = db.query(Questionnaire).filter(Questionnaire.id == questionnaire_id)
    if user_id is not None:
        query = query.filter(Questionnaire.user_id == user_id)
    row = query.first()
    if row is None:
        raise QuestionnaireNotFound(questionnaire_id)
    return row


def update_questionnaire(
    db: Session,
    questionnaire_id: int,
    *,
    personal_info: Any = None,
    answers: Any = None,
    completed: Optional[bool] = None,
) -> Questionnaire:
    """Guarda progreso. Solo se permite mientras el cuestionario esté pendiente."""
    row = get_questionnaire(db, questionnaire_id)
    if row.status == STATUS_COMPLETED:
        raise QuestionnaireLocked(questionnaire_id)

    if personal_info is not None:
        info, _ = apply_personal_info_defaults(personal_info)
        row.personal_info = dumps(info)
    if answers is not None:
        row.answers = dumps(normalize_answers(answers))
    if completed:
        row.status = STATUS_COMPLETED

    db.commit()
    db.refresh(row)
    return row


def mark_completed(db: Session, questionnaire_id: int) -> Questionnaire:
    """Marca como completado. Idempotente: si ya lo estaba no se toca la fila."""
    row = get_questionnaire(db, questionnaire_id)
    if row.status != STATUS_COMPLETED:
        row.status = STATUS_COMPLETED
        db.commit()
        db.refresh(row)
        logger.info("Cuestionario %s completado", questionnaire_id)
    return row


def delete_questionnaire(db: Session, questionnaire_id: int) -> None:
    row = get_questionnaire(db, questionnaire_id)
    db.delete(row)
    db.flush()


def filter_questionnaires(
    query,
    *,
    questionnaire_type: Optional[str] = None,
    status: Optional[str] = None,
    q: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    search_answers: bool = True,
):
    if questionnaire_type:
        query = query.filter(Questionnaire.type == questionnaire_type)
    if status:
        query = query.filter(Questionnaire.status == status)
    if q and q.strip():
        term = f"%{q.strip()}%"
        if search_answers:
            query = query.filter(or_(Questionnaire.personal_info.ilike(term), Questionnaire.answers.ilike(term)))
        else:
            query = query.filter(Questionnaire.personal_info.ilike(term))
    if created_from is not None:
        query = query.filter(Questionnaire.created_at >= created_from)
    if created_to is not None:
        query = query.filter(Questionnaire.created_at <= created_to)
    return query


def list_user_questionnaires(
    db: Session,
    user_id: int,
    *,
    questionnaire_type: Optional[str] = None,
    completed: Optional[bool] = None,
    q: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Questionnaire], int]:
    status = None
    if completed is not None:
        status = STATUS_COMPLETED if completed else STATUS_PENDING
    query = filter_questionnaires(
        db.query(Questionnaire).filter(Questionnaire.user_id == user_id),
        questionnaire_type=questionnaire_type,
        status=status,
        q=q,
    )
    total = query.count()
    rows = (
        query.order_by(Questionnaire.created_at.desc(), Questionnaire.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def _rate(completed: int, total: int) -> int:
    return round(completed * 100 / total) if total > 0 else 0


def user_stats(db: Session, user_id: int) -> dict[str, Any]:
    rows = (
        db.query(
            Questionnaire.type,
            func.count(Questionnaire.id),
            func.sum(case((Questionnaire.status == STATUS_COMPLETED, 1), else_=0)),
        )
        .filter(Questionnaire.user_id == user_id)
        .group_by(Questionnaire.type)
        .all()
    )
    by_type: dict[str, dict[str, int]] = {}
    total = completed = 0
    for qtype, n, done in rows:
        n, done = int(n or 0), int(done or 0)
        total += n
        completed += done
        by_type[qtype] = {
            "total": n,
            "completed": done,
            "pending": n - done,
            "completion_rate": _rate(done, n),
        }
    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "completion_rate": _rate(completed, total),
        "by_type": by_type,
    }


def find_latest_by_correo(db: Session, correo: str, questionnaire_type: str) -> Questionnaire:
    """
    Cuestionario más reciente de ese tipo cuyo ``correo`` coincide (sin
    distinguir mayúsculas). El LIKE solo preselecciona; la comparación exacta
    se hace sobre el JSON ya parseado.
    """
    validate_type(questionnaire_type)
    wanted = (correo or "").strip().lower()
    if not wanted:
        raise QuestionnaireNotFound(correo)

    candidates = (
        db.query(Questionnaire)
        .filter(Questionnaire.type == questionnaire_type, Questionnaire.personal_info.ilike(f"%{wanted}%"))
        .order_by(Questionnaire.updated_at.desc(), Questionnaire.id.desc())
        .all()
    )
    for row in candidates:
        info, ok = parse_json_text(row.personal_info)
        if ok and isinstance(info, dict) and str(info.get("correo", "")).strip().lower() == wanted:
            return row
    raise QuestionnaireNotFound(correo)
