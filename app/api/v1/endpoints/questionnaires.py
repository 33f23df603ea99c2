# app/api/v1/endpoints/questionnaires.py
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps.payment import require_paid
from app.core.errors import InvalidType, NoSystemUser, QuestionnaireLocked, QuestionnaireNotFound
from app.core.security import get_current_user, get_optional_user, user_is_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.questionnaires import (
    QuestionnaireSyncIn, QuestionnaireSaveIn, QuestionnaireCreatedOut,
    QuestionnaireOut, QuestionnaireListOut, PaginationOut, QuestionnaireStatsOut,
)
from app.services import questionnaires as svc
from app.services.presentation import present_questionnaire

router = APIRouter(
    prefix="/questionnaires",
    tags=["questionnaires"],
    dependencies=[Depends(require_paid)],
)
logger = logging.getLogger(__name__)


def _owner_filter(user: Optional[User]) -> Optional[int]:
    # anónimos y admins ven cualquier cuestionario por id; el resto solo los suyos
    if user is None or user_is_admin(user):
        return None
    return user.id


def _load(db: Session, questionnaire_id: int, user: Optional[User]):
    try:
        return svc.get_questionnaire(db, questionnaire_id, user_id=_owner_filter(user))
    except QuestionnaireNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sync", response_model=QuestionnaireCreatedOut, status_code=status.HTTP_201_CREATED)
def sync_questionnaire(
    data: QuestionnaireSyncIn,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    """
    Intake del cuestionario. Sin token se asigna a la cuenta de sistema.
    """
    try:
        qid = svc.create_questionnaire(
            db,
            questionnaire_type=data.type,
            personal_info=data.personal_info,
            answers=data.answers,
            completed=data.completed,
            user_id=user.id if user else None,
        )
    except InvalidType as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoSystemUser:
        raise HTTPException(status_code=503, detail="Servicio no configurado: falta la cuenta de administrador")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error guardando cuestionario")
        raise HTTPException(status_code=500, detail="Error guardando el cuestionario")
    return QuestionnaireCreatedOut(id=qid)


@router.get("/mine", response_model=QuestionnaireListOut)
def my_questionnaires(
    type: Optional[str] = Query(None, pattern="^(pareja|personalidad)$"),
    completed: Optional[bool] = Query(None),
    q: Optional[str] = Query(None, description="Busca en información personal y respuestas"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows, total = svc.list_user_questionnaires(
        db, user.id, questionnaire_type=type, completed=completed, q=q, page=page, limit=limit,
    )
    return QuestionnaireListOut(
        items=[QuestionnaireOut(**present_questionnaire(r)) for r in rows],
        pagination=PaginationOut(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )


@router.get("/mine/stats", response_model=QuestionnaireStatsOut)
def my_stats(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return svc.user_stats(db, user.id)


@router.get("/restore/{correo}/{type}", response_model=QuestionnaireOut)
def restore_questionnaire(
    correo: str,
    type: str,
    db: Session = Depends(get_db),
):
    """Recupera el último cuestionario de ese tipo enviado con ese correo."""
    try:
        row = svc.find_latest_by_correo(db, correo, type)
    except InvalidType as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QuestionnaireNotFound:
        raise HTTPException(status_code=404, detail="No hay cuestionarios de ese tipo para ese correo")
    return present_questionnaire(row)


@router.get("/{questionnaire_id}", response_model=QuestionnaireOut)
def get_questionnaire(
    questionnaire_id: int,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    return present_questionnaire(_load(db, questionnaire_id, user))


@router.post("/{questionnaire_id}/save", response_model=QuestionnaireOut)
def save_progress(
    questionnaire_id: int,
    data: QuestionnaireSaveIn,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    _load(db, questionnaire_id, user)
    try:
        row = svc.update_questionnaire(
            db,
            questionnaire_id,
            personal_info=data.personal_info,
            answers=data.answers,
            completed=data.completed,
        )
    except QuestionnaireLocked as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_questionnaire(row)


@router.post("/{questionnaire_id}/complete", response_model=QuestionnaireOut)
def complete_questionnaire(
    questionnaire_id: int,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    _load(db, questionnaire_id, user)
    return present_questionnaire(svc.mark_completed(db, questionnaire_id))
