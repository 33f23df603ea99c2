# app/services/answers.py
"""Normalización de respuestas de cuestionario.

El front ha enviado las respuestas con formas distintas a lo largo del tiempo:
strings, ``{"answer": "..."}``, ``{"answer": {"answer": "..."}}``,
``{"value": ...}``, etc., y en algunos casos el literal ``[object Object]``
(un objeto JS convertido a string sin extraer su valor). Este módulo reduce
cualquier forma a un único string limpio.

La precedencia es una lista ordenada de estrategias; gana la primera que
produce texto:

    missing               None                         -> "Sin respuesta"
    string_value          str                          -> tal cual
    scalar                bool / int / float           -> "true"/"false", "3", "2.5"
    nested_answer         {"answer": "x"}              -> "x"
    double_nested_answer  {"answer": {"answer": "x"}}  -> "x"
    named_field:value     {"value": "x"}               -> "x"
    named_field:response  {"response": "x"}            -> "x"
    named_field:text      {"text": "x"}                -> "x"
    named_field:label     {"label": "x"}               -> "x"
    named_field:name      {"name": "x"}                -> "x"
    first_non_null        primer campo/elemento != None
    raw_serialize         JSON del valor completo
    stringify             str() para cualquier otro objeto

Después, si el candidato contiene ``[object Object]`` se sustituye por
``"Respuesta no válida"``. Las funciones nunca lanzan excepciones.
"""
from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SIN_RESPUESTA = "Sin respuesta"
RESPUESTA_NO_VALIDA = "Respuesta no válida"
CORRUPTION_MARKER = "[object Object]"

# Campos "con nombre" que se prueban, en orden, cuando no hay "answer"
NAMED_FIELDS = ("value", "response", "text", "label", "name")


@dataclass(frozen=True)
class NormalizedAnswer:
    text: str
    strategy: str
    corrupted: bool = False


def is_corrupted(text: str) -> bool:
    return CORRUPTION_MARKER in text


def _format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def _scalar_text(value: Any) -> Optional[str]:
    """Texto de un valor "hoja": string no vacío, booleano o número."""
    if isinstance(value, str):
        return value if value != "" else None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return None


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except RecursionError:
        # anidamiento más profundo que el límite de recursión
        return RESPUESTA_NO_VALIDA


def serialize_value(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except RecursionError:
        logger.warning("Respuesta con anidamiento excesivo: no se puede serializar")
        return RESPUESTA_NO_VALIDA
    except (TypeError, ValueError):
        # claves no serializables o referencias circulares
        return _safe_str(value)


def _stringify(value: Any) -> str:
    text = _scalar_text(value)
    if text is not None:
        return text
    if isinstance(value, str):
        return value
    return serialize_value(value)


# --- estrategias sobre registros (dict) ---

def _nested_answer(record: Mapping) -> Optional[str]:
    return _scalar_text(record.get("answer"))


def _double_nested_answer(record: Mapping) -> Optional[str]:
    inner = record.get("answer")
    if isinstance(inner, Mapping):
        return _scalar_text(inner.get("answer"))
    return None


def _named_field(name: str) -> Callable[[Mapping], Optional[str]]:
    def extract(record: Mapping) -> Optional[str]:
        return _scalar_text(record.get(name))
    return extract


def _first_non_null(values) -> Optional[str]:
    for v in values:
        if v is not None:
            return _stringify(v)
    return None


RECORD_STRATEGIES: tuple[tuple[str, Callable[[Mapping], Optional[str]]], ...] = (
    ("nested_answer", _nested_answer),
    ("double_nested_answer", _double_nested_answer),
    *((f"named_field:{name}", _named_field(name)) for name in NAMED_FIELDS),
    ("first_non_null", lambda record: _first_non_null(record.values())),
    ("raw_serialize", serialize_value),
)

SEQUENCE_STRATEGIES: tuple[tuple[str, Callable[[Any], Optional[str]]], ...] = (
    ("first_non_null", _first_non_null),
    ("raw_serialize", serialize_value),
)


def _extract(raw: Any) -> tuple[str, str]:
    if raw is None:
        return SIN_RESPUESTA, "missing"
    if isinstance(raw, str):
        return raw, "string_value"
    scalar = _scalar_text(raw)
    if scalar is not None:
        return scalar, "scalar"

    if isinstance(raw, Mapping):
        strategies = RECORD_STRATEGIES
    elif isinstance(raw, (list, tuple)):
        strategies = SEQUENCE_STRATEGIES
    else:
        return _safe_str(raw), "stringify"

    for tag, strategy in strategies:
        try:
            text = strategy(raw)
        except Exception:  # un Mapping "raro" no debe romper la normalización
            continue
        if text is not None:
            return text, tag
    return _safe_str(raw), "stringify"


def trace_answer(raw: Any) -> NormalizedAnswer:
    """Como ``normalize_answer`` pero indicando qué estrategia se aplicó."""
    text, strategy = _extract(raw)
    if is_corrupted(text):
        return NormalizedAnswer(RESPUESTA_NO_VALIDA, strategy, corrupted=True)
    return NormalizedAnswer(text, strategy)


def normalize_answer(raw: Any) -> str:
    """Convierte una respuesta de forma desconocida en un string limpio."""
    return trace_answer(raw).text


def answer_entries(payload: Any) -> list[tuple[str, Any]]:
    """Pares ``(clave, valor)``: un dict por clave, una lista por posición, otra cosa vacío."""
    if isinstance(payload, Mapping):
        return [(str(k), v) for k, v in payload.items()]
    if isinstance(payload, (list, tuple)):
        return [(str(i), v) for i, v in enumerate(payload)]
    return []


def trace_answers(payload: Any) -> dict[str, NormalizedAnswer]:
    """Normaliza todas las respuestas de un envío conservando las claves del cliente.

    Un dict se procesa por clave; una lista se indexa por posición; cualquier
    otra cosa se trata como "sin respuestas".
    """
    traced: dict[str, NormalizedAnswer] = {}
    for key, raw in answer_entries(payload):
        result = trace_answer(raw)
        if result.corrupted:
            logger.warning("Respuesta corrupta en pregunta %s (%s)", key, result.strategy)
        elif result.strategy in ("first_non_null", "raw_serialize", "stringify"):
            logger.info("Respuesta de la pregunta %s convertida con %s", key, result.strategy)
        traced[key] = result
    return traced


def normalize_answers(payload: Any) -> dict[str, str]:
    return {key: result.text for key, result in trace_answers(payload).items()}
