import itertools

import pytest

from app.services.personal_info import (
    FIELD_DEFAULTS, REQUIRED_FIELDS, apply_personal_info_defaults, default_personal_info,
)


def test_missing_fields_are_defaulted_individually():
    record, changed = apply_personal_info_defaults({"nombre": "Ana", "correo": "ana@x.com"})
    assert changed
    assert record == {
        "nombre": "Ana",
        "apellidos": "Desconocido",
        "edad": "N/A",
        "genero": "N/A",
        "correo": "ana@x.com",
        "orientacionSexual": "N/A",
    }


def test_unparseable_text_gives_full_defaults():
    record, changed = apply_personal_info_defaults("{no es json")
    assert changed
    assert record == default_personal_info()


def test_json_text_is_parsed():
    record, _ = apply_personal_info_defaults('{"nombre": "Luis", "edad": 30}')
    assert record["nombre"] == "Luis"
    assert record["edad"] == "30"


def test_non_object_gives_full_defaults():
    assert apply_personal_info_defaults(["Ana"])[0] == FIELD_DEFAULTS
    assert apply_personal_info_defaults(None)[0] == FIELD_DEFAULTS


def test_empty_strings_are_defaulted():
    record, changed = apply_personal_info_defaults({f: "" for f in REQUIRED_FIELDS})
    assert changed
    assert record == FIELD_DEFAULTS


def test_complete_record_is_unchanged_and_extras_kept():
    raw = {
        "nombre": "Ana", "apellidos": "Pérez", "edad": "28", "genero": "F",
        "correo": "ana@x.com", "orientacionSexual": "Heterosexual", "telefono": "600",
    }
    record, changed = apply_personal_info_defaults(raw)
    assert not changed
    assert record == raw


def test_result_always_complete():
    for raw in ({}, {"nombre": {"x": 1}}, {"genero": True}, b'{"correo": "a@b.c"}'):
        record, _ = apply_personal_info_defaults(raw)
        assert all(isinstance(record[f], str) and record[f] for f in REQUIRED_FIELDS)


SAMPLE = {
    "nombre": "Ana", "apellidos": "Pérez", "edad": "28", "genero": "F",
    "correo": "ana@x.com", "orientacionSexual": "Bisexual",
}
FIELD_SUBSETS = [
    subset
    for size in range(len(REQUIRED_FIELDS) + 1)
    for subset in itertools.combinations(REQUIRED_FIELDS, size)
]


@pytest.mark.parametrize("present", FIELD_SUBSETS, ids=lambda s: "+".join(s) or "vacio")
def test_every_subset_is_completed(present):
    record, changed = apply_personal_info_defaults({f: SAMPLE[f] for f in present})
    assert all(isinstance(record[f], str) and record[f] for f in REQUIRED_FIELDS)
    for f in REQUIRED_FIELDS:
        assert record[f] == (SAMPLE[f] if f in present else FIELD_DEFAULTS[f])
    assert changed == (len(present) < len(REQUIRED_FIELDS))
