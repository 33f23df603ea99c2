# app/services/personal_info.py
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

REQUIRED_FIELDS = ("nombre", "apellidos", "edad", "genero", "correo", "orientacionSexual")

FIELD_DEFAULTS = {
    "nombre": "Usuario",
    "apellidos": "Desconocido",
    "edad": "N/A",
    "genero": "N/A",
    "correo": "N/A",
    "orientacionSexual": "N/A",
}


def default_personal_info() -> dict[str, str]:
    return dict(FIELD_DEFAULTS)


def _parse(raw: Any) -> Mapping | None:
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            return None
        return parsed if isinstance(parsed, Mapping) else None
    return None


def apply_personal_info_defaults(raw: Any) -> tuple[dict[str, Any], bool]:
    """Completa la información personal con los valores por defecto.

    Devuelve ``(registro, cambiado)``. Si ``raw`` no se puede interpretar como
    un objeto se sustituye entero por el registro por defecto. Si se puede, solo
    se rellenan los campos requeridos ausentes o vacíos; las claves extra del
    cliente se conservan. Intake y barridos de mantenimiento usan esta misma
    función.
    """
    parsed = _parse(raw)
    if parsed is None:
        return default_personal_info(), True

    record = dict(parsed)
    changed = False
    for field in REQUIRED_FIELDS:
        value = record.get(field)
        if value is None or value == "":
            record[field] = FIELD_DEFAULTS[field]
            changed = True
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            record[field] = str(value)
            changed = True
        elif not isinstance(value, str):
            # un objeto anidado aquí no es recuperable de forma fiable
            record[field] = FIELD_DEFAULTS[field]
            changed = True
    return record, changed
