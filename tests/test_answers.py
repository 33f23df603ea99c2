import pytest

from app.services.answers import (
    RESPUESTA_NO_VALIDA, SIN_RESPUESTA, normalize_answer, normalize_answers, trace_answer,
)


# ---------- Escenarios de referencia ----------

def test_double_nested_answer():
    assert normalize_answer({"answer": {"answer": "Sí, mucho"}}) == "Sí, mucho"


def test_unknown_fields_fall_back_to_first_non_null():
    result = trace_answer({"foo": "bar", "baz": None})
    assert result.text == "bar"
    assert result.strategy == "first_non_null"


def test_stringified_object_is_replaced():
    result = trace_answer("[object Object]")
    assert result.text == RESPUESTA_NO_VALIDA
    assert result.corrupted


# ---------- Precedencia ----------

@pytest.mark.parametrize("raw, expected, strategy", [
    (None, SIN_RESPUESTA, "missing"),
    ("A veces", "A veces", "string_value"),
    ("", "", "string_value"),
    (3, "3", "scalar"),
    (2.0, "2", "scalar"),
    (2.5, "2.5", "scalar"),
    (True, "true", "scalar"),
    ({"answer": "Nunca"}, "Nunca", "nested_answer"),
    ({"answer": 4}, "4", "nested_answer"),
    ({"value": "Siempre"}, "Siempre", "named_field:value"),
    ({"response": "Casi nunca"}, "Casi nunca", "named_field:response"),
    ({"text": "Texto libre"}, "Texto libre", "named_field:text"),
    ({"label": "Etiqueta"}, "Etiqueta", "named_field:label"),
    ({"name": "Nombre"}, "Nombre", "named_field:name"),
    ([None, "segunda"], "segunda", "first_non_null"),
    ({}, "{}", "raw_serialize"),
    ({"a": None}, '{"a": null}', "raw_serialize"),
])
def test_precedence(raw, expected, strategy):
    result = trace_answer(raw)
    assert result.text == expected
    assert result.strategy == strategy


def test_answer_wins_over_value():
    assert normalize_answer({"value": "v", "answer": "a"}) == "a"


def test_value_wins_over_text():
    assert normalize_answer({"text": "t", "value": "v"}) == "v"


def test_empty_answer_falls_through_to_named_field():
    assert normalize_answer({"answer": "", "value": "v"}) == "v"


def test_nested_structure_is_serialized_not_object_object():
    out = normalize_answer({"foo": {"x": 1}})
    assert out == '{"x": 1}'


def test_corruption_inside_named_field():
    assert normalize_answer({"value": "[object Object]"}) == RESPUESTA_NO_VALIDA


def test_corruption_inside_serialized_record():
    assert normalize_answer({"foo": ["[object Object]"]}) == RESPUESTA_NO_VALIDA


# ---------- Propiedades ----------

class Weird:
    def __str__(self):
        return "weird"


def _deep(depth, leaf="x"):
    value = leaf
    for _ in range(depth):
        value = {"foo": value}
    return value


@pytest.mark.parametrize("raw", [
    None, "", "x", 0, -1.5, False, [], {}, {"answer": None}, {"answer": {"answer": None}},
    [[], {}], {"a": {"b": {"c": [1, 2]}}}, Weird(), {1: "clave numérica"},
    _deep(5000), [_deep(5000)],
])
def test_total_and_idempotent(raw):
    first = normalize_answer(raw)
    assert isinstance(first, str)
    assert "[object Object]" not in first
    assert normalize_answer(first) == first


def test_normalize_answers_keeps_client_keys():
    payload = {"0": "Sí", "5": {"answer": "No"}, "extra": None}
    assert normalize_answers(payload) == {"0": "Sí", "5": "No", "extra": SIN_RESPUESTA}


def test_normalize_answers_indexes_lists():
    assert normalize_answers(["a", {"value": "b"}]) == {"0": "a", "1": "b"}


def test_normalize_answers_non_collection_is_empty():
    assert normalize_answers("no es un mapa") == {}
    assert normalize_answers(None) == {}


def test_deep_nesting_is_not_serialized():
    assert normalize_answer(_deep(5000)) == RESPUESTA_NO_VALIDA
    assert normalize_answers({"0": _deep(5000), "1": "Sí"}) == {"0": RESPUESTA_NO_VALIDA, "1": "Sí"}
