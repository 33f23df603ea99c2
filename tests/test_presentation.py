import json

from app.models.questionnaire import Questionnaire
from app.services.presentation import group_by_type, present_answers, present_questionnaire
from app.services.question_catalog import PAREJA_QUESTIONS, PERSONALIDAD_QUESTIONS, question_text


def test_catalog_sizes():
    assert len(PAREJA_QUESTIONS) == 17
    assert len(PERSONALIDAD_QUESTIONS) == 66


def test_question_text_fallbacks():
    assert question_text("pareja", "0") == PAREJA_QUESTIONS[0]
    assert question_text("pareja", "17") == "Pregunta 18"
    assert question_text("pareja", "extra") == "extra"
    assert question_text("pareja", "-1") == "-1"


def test_items_sorted_numerically_with_non_numeric_last():
    items = present_answers("personalidad", {"10": "c", "extra": "d", "2": "b", "0": "a"})
    assert [i["index"] for i in items] == ["0", "2", "10", "extra"]
    assert items[0]["question"] == PERSONALIDAD_QUESTIONS[0]
    assert items[-1]["question"] == "extra"


def _stored(db, owner, personal_info, answers, type="pareja"):
    row = Questionnaire(user_id=owner.id, type=type, personal_info=personal_info, answers=answers)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_present_renormalizes_legacy_rows(db, admin_user):
    row = _stored(
        db, admin_user,
        personal_info='{"nombre": "Ana"}',
        answers=json.dumps({"0": {"answer": "Sí"}, "1": "[object Object]"}),
    )
    out = present_questionnaire(row)
    assert out["answers"] == {"0": "Sí", "1": "Respuesta no válida"}
    assert out["personal_info"]["apellidos"] == "Desconocido"
    assert out["completed"] is False
    assert out["user_email"] == admin_user.email
    assert any("corrupta" in n for n in out["notes"])


def test_present_survives_broken_json(db, admin_user):
    row = _stored(db, admin_user, personal_info="{roto", answers="tampoco")
    out = present_questionnaire(row)
    assert out["answers"] == {}
    assert out["items"] == []
    assert out["personal_info"]["nombre"] == "Usuario"
    assert len(out["notes"]) == 2


def test_group_by_type():
    grouped = group_by_type([{"type": "pareja"}, {"type": "personalidad"}, {"type": "pareja"}])
    assert grouped["total"] == 3
    assert grouped["pareja"]["count"] == 2
    assert grouped["personalidad"]["count"] == 1
