# app/api/v1/endpoints/admin_questionnaires.py
import csv
import io
import logging
from datetime import datetime
from io import BytesIO
from typing import Optional, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session, selectinload

from app.api.deps.admin import require_admin
from app.core.errors import QuestionnaireNotFound
from app.db.session import get_db
from app.models.questionnaire import Questionnaire, QUESTIONNAIRE_TYPES
from app.models.user import User
from app.schemas.questionnaires import QuestionnaireGroupedOut, SweepReportOut
from app.services import questionnaires as svc
from app.services.audit import audit_log
from app.services.personal_info import REQUIRED_FIELDS
from app.services.presentation import answer_sort_key, group_by_type, present_questionnaire
from app.services.question_catalog import question_text
from app.services.sweep import purge_corrupted_questionnaires, repair_questionnaires

router = APIRouter(prefix="/questionnaires", tags=["admin-questionnaires"])
logger = logging.getLogger(__name__)

TypeParam = Optional[Literal["pareja", "personalidad"]]
StatusParam = Optional[Literal["pending", "completed"]]


def _presented(
    db: Session,
    type: Optional[str],
    status: Optional[str],
    q: Optional[str],
    created_from: Optional[datetime],
    created_to: Optional[datetime],
) -> list[dict]:
    query = svc.filter_questionnaires(
        db.query(Questionnaire).options(selectinload(Questionnaire.user)),
        questionnaire_type=type,
        status=status,
        q=q,
        created_from=created_from,
        created_to=created_to,
        search_answers=False,
    )
    rows = query.order_by(Questionnaire.created_at.desc(), Questionnaire.id.desc()).all()
    return [present_questionnaire(r) for r in rows]


# ---------- Listado ----------
@router.get("", response_model=QuestionnaireGroupedOut)
def list_questionnaires(
    type: TypeParam = Query(None),
    status: StatusParam = Query(None),
    q: Optional[str] = Query(None, description="Busca por nombre, apellidos o correo"),
    created_from: Optional[datetime] = Query(None),
    created_to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return group_by_type(_presented(db, type, status, q, created_from, created_to))


# ---------- Export ----------
def _table(presented: list[dict], questionnaire_type: Optional[str]) -> tuple[list[str], list[list]]:
    """
    Cabeceras + filas: datos del cuestionario, información personal y una
    columna por pregunta. Con un solo tipo las cabeceras son el texto de la pregunta.
    """
    keys: set[str] = set()
    for p in presented:
        keys.update(p["answers"].keys())
    ordered = sorted(keys, key=answer_sort_key)

    if questionnaire_type:
        q_headers = [question_text(questionnaire_type, k) for k in ordered]
    else:
        q_headers = [question_text("", k) for k in ordered]

    headers = ["id", "tipo", "estado", "creado", "usuario_email", *REQUIRED_FIELDS, *q_headers]
    rows = []
    for p in presented:
        info = p["personal_info"]
        rows.append([
            p["id"], p["type"], p["status"],
            p["created_at"].isoformat() if p["created_at"] else None,
            p["user_email"],
            *[info.get(f) for f in REQUIRED_FIELDS],
            *[p["answers"].get(k) for k in ordered],
        ])
    return headers, rows


def _csv_response(presented: list[dict], questionnaire_type: Optional[str]) -> StreamingResponse:
    headers, rows = _table(presented, questionnaire_type)

    def stream():
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(headers); yield output.getvalue(); output.seek(0); output.truncate(0)
        for r in rows:
            writer.writerow(r); yield output.getvalue(); output.seek(0); output.truncate(0)

    filename = f"cuestionarios_{questionnaire_type or 'todos'}.csv"
    return StreamingResponse(stream(), media_type="text/csv",
                             headers={"Content-Disposition": f'attachment; filename="{filename}"'})


def _xlsx_response(presented: list[dict], questionnaire_type: Optional[str]) -> StreamingResponse:
    wb = Workbook()
    wb.remove(wb.active)

    # una hoja por tipo, cada una con sus propias preguntas como cabecera
    types = [questionnaire_type] if questionnaire_type else list(QUESTIONNAIRE_TYPES)
    for qtype in types:
        ws = wb.create_sheet(qtype.capitalize())
        headers, rows = _table([p for p in presented if p["type"] == qtype], qtype)
        ws.append(headers)
        for r in rows:
            ws.append(r)

    buf = BytesIO(); wb.save(buf); buf.seek(0)
    filename = f"cuestionarios_{questionnaire_type or 'todos'}.xlsx"
    return StreamingResponse(iter([buf.getvalue()]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'})


@router.get("/export")
def export_questionnaires(
    format: Literal["csv", "xlsx"] = Query("csv"),
    type: TypeParam = Query(None),
    status: StatusParam = Query(None),
    q: Optional[str] = Query(None),
    created_from: Optional[datetime] = Query(None),
    created_to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    presented = _presented(db, type, status, q, created_from, created_to)
    logger.info("Export %s de %d cuestionarios", format, len(presented))
    if format == "xlsx":
        return _xlsx_response(presented, type)
    return _csv_response(presented, type)


# ---------- Mantenimiento ----------
@router.post("/repair", response_model=SweepReportOut)
def repair(
    request: Request,
    dry_run: bool = Query(False),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    report = repair_questionnaires(db, dry_run=dry_run)
    audit_log(
        db, actor=admin, accion="repair", recurso="questionnaires",
        payload={"dry_run": dry_run, "repaired": report.repaired, "failed": report.failed},
        request=request,
    )
    db.commit()
    return report.as_dict()


@router.delete("/corrupted", response_model=SweepReportOut)
def purge_corrupted(
    request: Request,
    dry_run: bool = Query(False),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    report = purge_corrupted_questionnaires(db, dry_run=dry_run)
    audit_log(
        db, actor=admin, accion="purge", recurso="questionnaires",
        payload={"dry_run": dry_run, "deleted_ids": report.deleted_ids, "repaired": report.repaired},
        request=request,
    )
    db.commit()
    return report.as_dict()


@router.delete("/{questionnaire_id}")
def delete_questionnaire(
    questionnaire_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        svc.delete_questionnaire(db, questionnaire_id)
    except QuestionnaireNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    audit_log(db, actor=admin, accion="delete", recurso="questionnaire", recurso_id=questionnaire_id, request=request)
    db.commit()
    logger.info("Cuestionario %s eliminado por %s", questionnaire_id, admin.email)
    return {"ok": True, "id": questionnaire_id}
