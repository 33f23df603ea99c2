import json

import pytest

from app.core.errors import InvalidType, NoSystemUser, QuestionnaireLocked, QuestionnaireNotFound
from app.models.questionnaire import Questionnaire
from app.services import questionnaires as svc


def test_invalid_type_creates_no_row(db, admin_user):
    with pytest.raises(InvalidType):
        svc.create_questionnaire(db, questionnaire_type="invalid", personal_info={}, answers={})
    assert db.query(Questionnaire).count() == 0


def test_anonymous_without_system_user_fails(db):
    with pytest.raises(NoSystemUser):
        svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={}, answers={})
    assert db.query(Questionnaire).count() == 0


def test_inactive_admin_is_not_system_user(db, admin_user):
    admin_user.activo = False
    db.commit()
    with pytest.raises(NoSystemUser):
        svc.resolve_owner_id(db, None)


def test_anonymous_goes_to_system_user(db, admin_user):
    qid = svc.create_questionnaire(
        db,
        questionnaire_type="personalidad",
        personal_info={"nombre": "Ana", "correo": "ana@x.com"},
        answers={"0": {"answer": {"answer": "Sí, mucho"}}, "1": "[object Object]"},
    )
    row = db.get(Questionnaire, qid)
    assert row.user_id == admin_user.id
    assert row.status == "pending"
    assert json.loads(row.answers) == {"0": "Sí, mucho", "1": "Respuesta no válida"}
    info = json.loads(row.personal_info)
    assert info["apellidos"] == "Desconocido"
    assert info["correo"] == "ana@x.com"


def test_authenticated_owner(db, admin_user, pro_user):
    qid = svc.create_questionnaire(
        db, questionnaire_type="pareja", personal_info=None, answers=[], completed=True, user_id=pro_user.id,
    )
    row = db.get(Questionnaire, qid)
    assert row.user_id == pro_user.id
    assert row.status == "completed"


def test_update_and_complete(db, admin_user):
    qid = svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={}, answers={"0": "Sí"})
    row = svc.update_questionnaire(db, qid, answers={"0": "No", "1": {"value": "A veces"}})
    assert json.loads(row.answers) == {"0": "No", "1": "A veces"}

    row = svc.mark_completed(db, qid)
    assert row.status == "completed"
    # idempotente
    assert svc.mark_completed(db, qid).status == "completed"

    with pytest.raises(QuestionnaireLocked):
        svc.update_questionnaire(db, qid, answers={"0": "Sí"})


def test_get_scoped_to_owner(db, admin_user, pro_user):
    qid = svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={}, answers={})
    with pytest.raises(QuestionnaireNotFound):
        svc.get_questionnaire(db, qid, user_id=pro_user.id)
    assert svc.get_questionnaire(db, qid).id == qid


def test_user_listing_and_stats(db, admin_user, pro_user):
    svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={"nombre": "Marta"},
                             answers={}, user_id=pro_user.id, completed=True)
    svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={"nombre": "Luis"},
                             answers={}, user_id=pro_user.id)
    svc.create_questionnaire(db, questionnaire_type="personalidad", personal_info={}, answers={},
                             user_id=pro_user.id)
    svc.create_questionnaire(db, questionnaire_type="pareja", personal_info={}, answers={})

    rows, total = svc.list_user_questionnaires(db, pro_user.id, questionnaire_type="pareja")
    assert total == 2

    rows, total = svc.list_user_questionnaires(db, pro_user.id, q="marta")
    assert total == 1

    rows, total = svc.list_user_questionnaires(db, pro_user.id, completed=False, limit=1)
    assert total == 2
    assert len(rows) == 1

    stats = svc.user_stats(db, pro_user.id)
    assert stats["total"] == 3
    assert stats["completed"] == 1
    assert stats["pending"] == 2
    assert stats["completion_rate"] == 33
    assert stats["by_type"]["pareja"] == {"total": 2, "completed": 1, "pending": 1, "completion_rate": 50}
