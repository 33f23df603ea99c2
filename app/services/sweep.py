# app/services/sweep.py
"""Barridos de mantenimiento sobre los cuestionarios guardados.

Hay dos políticas, expuestas como operaciones separadas porque implican
pérdidas de datos distintas:

* ``repair_questionnaires``: corrige todo lo que puede. Las respuestas con
  ``[object Object]`` se sustituyen por ``"Respuesta no válida"``.
* ``purge_corrupted_questionnaires``: corrige la información personal, pero
  elimina las filas cuyas respuestas tienen ``[object Object]`` o no son JSON.

Cada fila es una unidad de trabajo independiente con su propio commit: si una
falla se hace rollback, se registra y el barrido sigue con la siguiente.
Las filas sin cambios no se escriben (``updated_at`` queda igual).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.questionnaire import Questionnaire
from app.services.answers import CORRUPTION_MARKER, answer_entries, normalize_answer, serialize_value
from app.services.personal_info import apply_personal_info_defaults
from app.services.questionnaires import dumps, parse_json_text

logger = logging.getLogger(__name__)

MODE_REPAIR = "repair"
MODE_PURGE = "purge"

# Tipos de nota de diagnóstico
PARSE_FAILURE = "ParseFailure"
CORRUPTION_DETECTED = "CorruptionDetected"
MISSING_FIELDS = "MissingFields"
LEGACY_PLACEHOLDER = "LegacyPlaceholder"
RENORMALIZED = "Renormalized"
ROW_FAILED = "RowFailed"

# Lo que guardaba el listado admin antiguo cuando no podía parsear las respuestas
LEGACY_ERROR_ANSWERS = {"error": "Error parseando respuestas"}


@dataclass
class RowNote:
    questionnaire_id: int
    kind: str
    detail: str


@dataclass
class RowDiagnosis:
    personal_info: dict[str, Any]
    answers: dict[str, str]
    dirty: bool = False
    corrupted: bool = False
    answers_unparseable: bool = False
    notes: list[RowNote] = field(default_factory=list)


@dataclass
class SweepReport:
    mode: str
    dry_run: bool = False
    scanned: int = 0
    repaired: int = 0
    deleted: int = 0
    untouched: int = 0
    failed: int = 0
    affected_ids: list[int] = field(default_factory=list)
    deleted_ids: list[int] = field(default_factory=list)
    failed_ids: list[int] = field(default_factory=list)
    notes: list[RowNote] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _stringified(value: Any) -> str:
    return value if isinstance(value, str) else serialize_value(value)


def diagnose_row(questionnaire_id: int, personal_info_text: Optional[str], answers_text: Optional[str]) -> RowDiagnosis:
    """Analiza una fila y calcula su versión reparada. No toca la base de datos."""
    notes: list[RowNote] = []
    dirty = False

    # personal_info
    parsed_info, ok = parse_json_text(personal_info_text)
    if not ok or not isinstance(parsed_info, Mapping):
        notes.append(RowNote(questionnaire_id, PARSE_FAILURE, "personal_info no es un objeto JSON válido"))
    info, changed = apply_personal_info_defaults(parsed_info if ok else None)
    if changed:
        dirty = True
        if ok and isinstance(parsed_info, Mapping):
            notes.append(RowNote(questionnaire_id, MISSING_FIELDS, "personal_info con campos faltantes"))

    # answers
    parsed_answers, ok = parse_json_text(answers_text)
    corrupted = False
    unparseable = False
    if not ok:
        unparseable = True
        dirty = True
        answers: dict[str, str] = {}
        notes.append(RowNote(questionnaire_id, PARSE_FAILURE, "answers no es JSON válido"))
    elif parsed_answers == LEGACY_ERROR_ANSWERS:
        dirty = True
        answers = {}
        notes.append(RowNote(questionnaire_id, LEGACY_PLACEHOLDER, "answers con marcador de error antiguo"))
    else:
        if not isinstance(parsed_answers, Mapping):
            # una lista se reindexa por posición; cualquier otra cosa queda vacía
            dirty = True
            notes.append(RowNote(questionnaire_id, RENORMALIZED, "answers no era un objeto"))
        answers = {}
        for key, value in answer_entries(parsed_answers):
            if CORRUPTION_MARKER in _stringified(value):
                corrupted = True
                notes.append(RowNote(questionnaire_id, CORRUPTION_DETECTED, f"respuesta {key} contiene {CORRUPTION_MARKER}"))
            clean = normalize_answer(value)
            if clean != value:
                dirty = True
            answers[key] = clean

    return RowDiagnosis(
        personal_info=info,
        answers=answers,
        dirty=dirty,
        corrupted=corrupted,
        answers_unparseable=unparseable,
        notes=notes,
    )


def _process_row(db: Session, row: Questionnaire, mode: str, dry_run: bool, report: SweepReport) -> None:
    qid = row.id
    diagnosis = diagnose_row(qid, row.personal_info, row.answers)
    report.notes.extend(diagnosis.notes)

    if mode == MODE_PURGE and (diagnosis.corrupted or diagnosis.answers_unparseable):
        if not dry_run:
            db.delete(row)
            db.commit()
        report.deleted += 1
        report.deleted_ids.append(qid)
        report.affected_ids.append(qid)
        logger.info("Cuestionario %s eliminado por datos corruptos%s", qid, " (dry-run)" if dry_run else "")
        return

    if not diagnosis.dirty:
        report.untouched += 1
        return

    if not dry_run:
        row.personal_info = dumps(diagnosis.personal_info)
        row.answers = dumps(diagnosis.answers)
        db.commit()
    report.repaired += 1
    report.affected_ids.append(qid)
    logger.info("Cuestionario %s reparado%s", qid, " (dry-run)" if dry_run else "")


def _sweep(db: Session, mode: str, dry_run: bool) -> SweepReport:
    report = SweepReport(mode=mode, dry_run=dry_run)
    ids = [qid for (qid,) in db.query(Questionnaire.id).order_by(Questionnaire.id.asc()).all()]
    logger.info("Barrido %s sobre %d cuestionarios", mode, len(ids))

    for qid in ids:
        try:
            row = db.get(Questionnaire, qid)
            if row is None:  # borrada entre el listado y el proceso
                continue
            report.scanned += 1
            _process_row(db, row, mode, dry_run, report)
        except Exception as exc:
            db.rollback()
            report.failed += 1
            report.failed_ids.append(qid)
            report.notes.append(RowNote(qid, ROW_FAILED, str(exc)))
            logger.exception("Error procesando cuestionario %s en barrido %s", qid, mode)

    logger.info(
        "Barrido %s terminado: scanned=%d repaired=%d deleted=%d untouched=%d failed=%d",
        mode, report.scanned, report.repaired, report.deleted, report.untouched, report.failed,
    )
    return report


def repair_questionnaires(db: Session, *, dry_run: bool = False) -> SweepReport:
    """Repara todas las filas; nunca elimina."""
    return _sweep(db, MODE_REPAIR, dry_run)


def purge_corrupted_questionnaires(db: Session, *, dry_run: bool = False) -> SweepReport:
    """Elimina las filas con respuestas corruptas y repara el resto."""
    return _sweep(db, MODE_PURGE, dry_run)
