# app/services/analytics.py
"""Estadísticas del panel admin sobre los cuestionarios guardados.

Se calculan en Python sobre las filas ya filtradas en SQL: el JSON se guarda
como texto y hay que limpiarlo igual que en el listado antes de contar.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.questionnaire import Questionnaire, STATUS_COMPLETED
from app.services.answers import normalize_answers
from app.services.personal_info import apply_personal_info_defaults
from app.services.presentation import answer_sort_key
from app.services.question_catalog import question_text
from app.services.questionnaires import filter_questionnaires, parse_json_text

logger = logging.getLogger(__name__)

AGE_GROUPS = ("Menor de 18", "18-25", "26-35", "36-45", "46-55", "55+", "No especificada")
DAY_NAMES = ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo")
HOUR_BUCKETS = ((0, 9, "0-9"), (9, 12, "9-12"), (12, 15, "12-15"), (15, 18, "15-18"), (18, 21, "18-21"), (21, 24, "21-24"))

# formato de agrupación y ventana hacia atrás por periodo
PERIODS = {
    "daily": ("%Y-%m-%d", timedelta(days=30)),
    "weekly": ("%G-W%V", timedelta(weeks=26)),
    "monthly": ("%Y-%m", timedelta(days=365)),
}


def _utc_naive(value: datetime) -> datetime:
    # SQLite devuelve fechas sin zona y Postgres con zona; se comparan en UTC sin zona
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _rate(completed: int, total: int) -> int:
    return round(completed * 100 / total) if total > 0 else 0


def _rows(
    db: Session,
    *,
    questionnaire_type: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
) -> list[Questionnaire]:
    query = filter_questionnaires(
        db.query(Questionnaire),
        questionnaire_type=questionnaire_type,
        created_from=created_from,
        created_to=created_to,
    )
    return query.order_by(Questionnaire.created_at.asc(), Questionnaire.id.asc()).all()


def summary(
    db: Session,
    *,
    questionnaire_type: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
) -> dict[str, Any]:
    """Totales, tasa de completado, desglose por tipo y los últimos 6 meses con actividad."""
    rows = _rows(db, questionnaire_type=questionnaire_type, created_from=created_from, created_to=created_to)

    by_type: dict[str, dict[str, int]] = {}
    months: dict[str, dict[str, int]] = {}
    for r in rows:
        done = int(r.status == STATUS_COMPLETED)
        t = by_type.setdefault(r.type, {"total": 0, "completed": 0})
        t["total"] += 1
        t["completed"] += done
        m = months.setdefault(_utc_naive(r.created_at).strftime("%Y-%m"), {"count": 0, "completed": 0})
        m["count"] += 1
        m["completed"] += done

    for t in by_type.values():
        t["pending"] = t["total"] - t["completed"]
        t["completion_rate"] = _rate(t["completed"], t["total"])

    total = len(rows)
    completed = sum(t["completed"] for t in by_type.values())
    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "completion_rate": _rate(completed, total),
        "by_type": by_type,
        "by_month": [{"month": k, **months[k]} for k in sorted(months, reverse=True)[:6]],
    }


def age_group(edad: Any) -> str:
    try:
        age = int(str(edad).strip())
    except ValueError:
        return "No especificada"
    if age < 18:
        return "Menor de 18"
    if age <= 25:
        return "18-25"
    if age <= 35:
        return "26-35"
    if age <= 45:
        return "36-45"
    if age <= 55:
        return "46-55"
    return "55+"


def demographics(db: Session, *, questionnaire_type: Optional[str] = None) -> dict[str, Any]:
    """Distribuciones de edad, género, orientación y dominios de correo (top 5)."""
    ages: Counter = Counter()
    genders: Counter = Counter()
    orientations: Counter = Counter()
    domains: Counter = Counter()

    for r in _rows(db, questionnaire_type=questionnaire_type):
        parsed, ok = parse_json_text(r.personal_info)
        info, _ = apply_personal_info_defaults(parsed if ok else None)
        ages[age_group(info["edad"])] += 1
        genders[info["genero"]] += 1
        orientations[info["orientacionSexual"]] += 1
        correo = info["correo"]
        if "@" in correo:
            domains[correo.rsplit("@", 1)[1].lower()] += 1

    return {
        "age_distribution": {g: ages[g] for g in AGE_GROUPS if ages[g]},
        "gender_distribution": dict(genders.most_common()),
        "sexual_orientation_distribution": dict(orientations.most_common()),
        "top_domains": [{"domain": d, "count": n} for d, n in domains.most_common(5)],
    }


def _hour_bucket(hour: int) -> str:
    for start, end, label in HOUR_BUCKETS:
        if start <= hour < end:
            return label
    return HOUR_BUCKETS[0][2]


def trends(db: Session, *, period: str = "monthly", now: Optional[datetime] = None) -> dict[str, Any]:
    """Crecimiento y tasa de completado por periodo, y días/horas con más envíos."""
    fmt, window = PERIODS[period]
    now = _utc_naive(now) if now is not None else datetime.now(timezone.utc).replace(tzinfo=None)
    since = now - window

    counts: dict[str, dict[str, int]] = {}
    day_of_week: Counter = Counter()
    hour_of_day: Counter = Counter()
    for r in _rows(db):
        created = _utc_naive(r.created_at)
        if created < since:
            continue
        bucket = counts.setdefault(created.strftime(fmt), {"count": 0, "completed": 0})
        bucket["count"] += 1
        bucket["completed"] += int(r.status == STATUS_COMPLETED)
        day_of_week[DAY_NAMES[created.weekday()]] += 1
        hour_of_day[_hour_bucket(created.hour)] += 1

    growth = []
    previous: Optional[int] = None
    for key in sorted(counts):
        count = counts[key]["count"]
        pct = round((count - previous) * 100 / previous) if previous else 0
        growth.append({"period": key, "count": count, "growth": pct})
        previous = count

    return {
        "period": period,
        "questionnaire_growth": growth,
        "completion_trends": [
            {"period": key, "completion_rate": _rate(counts[key]["completed"], counts[key]["count"])}
            for key in sorted(counts)
        ],
        "popular_times": {"day_of_week": dict(day_of_week), "hour_of_day": dict(hour_of_day)},
    }


def answer_distribution(db: Session, *, questionnaire_type: str, top: int = 5) -> dict[str, Any]:
    """
    Para cada pregunta: respuestas más frecuentes, total y número de respuestas
    distintas. Las respuestas se normalizan antes de contar; las filas con JSON
    ilegible se omiten.
    """
    per_question: dict[str, Counter] = {}
    rows = _rows(db, questionnaire_type=questionnaire_type)
    skipped = 0
    for r in rows:
        parsed, ok = parse_json_text(r.answers)
        if not ok:
            skipped += 1
            continue
        for key, answer in normalize_answers(parsed).items():
            if answer.strip():
                per_question.setdefault(key, Counter())[answer] += 1
    if skipped:
        logger.warning("Distribución de respuestas: %d cuestionarios con JSON ilegible omitidos", skipped)

    questions = []
    for key in sorted(per_question, key=answer_sort_key):
        counter = per_question[key]
        questions.append({
            "index": key,
            "question": question_text(questionnaire_type, key),
            "total_responses": sum(counter.values()),
            "unique_answers": len(counter),
            "responses": [{"answer": a, "count": n} for a, n in counter.most_common(top)],
        })
    return {
        "type": questionnaire_type,
        "total_questionnaires": len(rows),
        "total_questions": len(questions),
        "questions": questions,
    }
