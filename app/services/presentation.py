# app/services/presentation.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.models.questionnaire import Questionnaire, STATUS_COMPLETED
from app.services.answers import trace_answers
from app.services.personal_info import apply_personal_info_defaults
from app.services.question_catalog import question_text
from app.services.questionnaires import parse_json_text


def answer_sort_key(key: str) -> tuple[int, int, str]:
    # índices numéricos primero y en orden numérico ("2" < "10"); el resto al final
    try:
        return (0, int(key), "")
    except ValueError:
        return (1, 0, key)


def present_answers(questionnaire_type: str, answers: Mapping[str, str]) -> list[dict[str, str]]:
    """Empareja cada respuesta con el texto de su pregunta."""
    return [
        {"index": key, "question": question_text(questionnaire_type, key), "answer": answers[key]}
        for key in sorted(answers, key=answer_sort_key)
    ]


def present_questionnaire(row: Questionnaire) -> dict[str, Any]:
    """Vista de lectura de un cuestionario.

    Vuelve a parsear y normalizar lo guardado aunque la escritura ya lo haga:
    las filas antiguas pueden traer JSON roto o respuestas ``[object Object]``.
    Los problemas encontrados se devuelven en ``notes`` en vez de fallar.
    """
    notes: list[str] = []

    parsed_info, ok = parse_json_text(row.personal_info)
    if not ok or not isinstance(parsed_info, Mapping):
        notes.append("personal_info ilegible: se muestran valores por defecto")
    personal_info, _ = apply_personal_info_defaults(parsed_info if ok else None)

    parsed_answers, ok = parse_json_text(row.answers)
    if not ok:
        notes.append("answers ilegible: se muestran sin respuestas")
        answers: dict[str, str] = {}
    else:
        traced = trace_answers(parsed_answers)
        for key, result in traced.items():
            if result.corrupted:
                notes.append(f"respuesta {key} corrupta")
        answers = {key: result.text for key, result in traced.items()}

    user = row.user
    return {
        "id": row.id,
        "type": row.type,
        "status": row.status,
        "completed": row.status == STATUS_COMPLETED,
        "personal_info": personal_info,
        "answers": answers,
        "items": present_answers(row.type, answers),
        "notes": notes,
        "user_email": user.email if user is not None else None,
        "user_nombre": user.nombre if user is not None else None,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def group_by_type(presented: list[dict[str, Any]]) -> dict[str, Any]:
    """Agrupa para el panel admin: ``{total, pareja: {...}, personalidad: {...}}``."""
    pareja = [q for q in presented if q["type"] == "pareja"]
    personalidad = [q for q in presented if q["type"] == "personalidad"]
    return {
        "total": len(presented),
        "pareja": {"count": len(pareja), "questionnaires": pareja},
        "personalidad": {"count": len(personalidad), "questionnaires": personalidad},
    }
