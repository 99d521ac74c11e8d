"""Response parser tests — envelope traversal, brace slicing, field defaults"""
import json

import pytest

from turnover.models import ItemCondition
from turnover.vision.errors import AnalysisError, ErrorKind
from turnover.vision.parser import extract_content, extract_payload, parse_response

LAMP = {
    "name": "Desk Lamp",
    "category": "Home & Garden",
    "condition": "good",
    "estimatedValue": 15,
    "confidenceScore": 0.7,
    "description": "A lamp.",
    "insights": "Sells fast.",
}


def _envelope(content: str) -> str:
    return json.dumps({"choices": [{"message": {"content": content}}]})


def _with(**overrides) -> str:
    payload = {**LAMP, **overrides}
    return _envelope("Here you go: " + json.dumps(payload))


def _without(*keys: str) -> str:
    payload = {k: v for k, v in LAMP.items() if k not in keys}
    return _envelope(json.dumps(payload))


def _kind(body: str) -> ErrorKind:
    with pytest.raises(AnalysisError) as exc_info:
        parse_response(body)
    return exc_info.value.kind


# ── happy path ────────────────────────────────────────────────────────────────


def test_parses_payload_wrapped_in_prose():
    result = parse_response(_with())
    assert result.name == "Desk Lamp"
    assert result.category == "Home & Garden"
    assert result.condition is ItemCondition.GOOD
    assert result.estimated_value == 15
    assert result.confidence_score == 0.7
    assert result.description == "A lamp."
    assert result.insights == "Sells fast."


def test_parses_literal_envelope_text():
    body = (
        '{"choices":[{"message":{"content":"Here you go: {\\"name\\":\\"Desk Lamp\\",'
        '\\"category\\":\\"Home & Garden\\",\\"condition\\":\\"good\\",\\"estimatedValue\\":15,'
        '\\"confidenceScore\\":0.7,\\"description\\":\\"A lamp.\\",\\"insights\\":\\"Sells fast.\\"}"}}]}'
    )
    result = parse_response(body)
    assert result.name == "Desk Lamp"
    assert result.condition is ItemCondition.GOOD
    assert result.estimated_value == 15


def test_extra_envelope_and_payload_keys_are_ignored():
    body = json.dumps(
        {
            "id": "chatcmpl-1",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": json.dumps({**LAMP, "brand": "IKEA"})}},
                {"index": 1, "message": {"content": "ignored"}},
            ],
        }
    )
    assert parse_response(body).name == "Desk Lamp"


def test_category_outside_vocabulary_is_accepted():
    assert parse_response(_with(category="Musical Instruments")).category == "Musical Instruments"


@pytest.mark.parametrize("raw", ["new", "likeNew", "excellent", "good", "fair", "poor"])
def test_every_condition_value_maps(raw):
    assert parse_response(_with(condition=raw)).condition.value == raw


# ── leniency ──────────────────────────────────────────────────────────────────


def test_unknown_condition_falls_back_to_good():
    assert parse_response(_with(condition="mint")).condition is ItemCondition.GOOD


def test_condition_is_case_sensitive():
    assert parse_response(_with(condition="LikeNew")).condition is ItemCondition.GOOD


def test_missing_numbers_use_defaults():
    result = parse_response(_without("estimatedValue", "confidenceScore"))
    assert result.estimated_value == 0
    assert result.confidence_score == 0.5


def test_wrongly_typed_numbers_use_defaults():
    result = parse_response(_with(estimatedValue="15", confidenceScore=True))
    assert result.estimated_value == 0
    assert result.confidence_score == 0.5


def test_confidence_is_not_clamped():
    assert parse_response(_with(confidenceScore=1.7)).confidence_score == 1.7


def test_missing_or_non_string_text_fields_become_empty():
    result = parse_response(_with(description=None, insights=["a"]))
    assert result.description == ""
    assert result.insights == ""
    assert parse_response(_without("description", "insights")).insights == ""


# ── required fields ───────────────────────────────────────────────────────────


@pytest.mark.parametrize("key", ["name", "category", "condition"])
def test_missing_required_field_is_incomplete(key):
    assert _kind(_without(key)) is ErrorKind.INCOMPLETE_RESPONSE


def test_non_string_required_field_is_incomplete():
    assert _kind(_with(condition=3)) is ErrorKind.INCOMPLETE_RESPONSE
    assert _kind(_with(name=None)) is ErrorKind.INCOMPLETE_RESPONSE


# ── format failures ───────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "",
        "[]",
        json.dumps({}),
        json.dumps({"choices": []}),
        json.dumps({"choices": {"message": {"content": "{}"}}}),
        json.dumps({"choices": [{"message": {}}]}),
        json.dumps({"choices": [{"message": {"content": None}}]}),
        json.dumps({"choices": ["text"]}),
    ],
)
def test_bad_envelope_is_invalid_format(body):
    assert _kind(body) is ErrorKind.INVALID_RESPONSE_FORMAT


@pytest.mark.parametrize(
    "content",
    [
        "I could not identify this item.",
        "",
        "[1, 2, 3]",
        "name: lamp }",
        "} reversed {",
    ],
)
def test_content_without_object_is_invalid_format(content):
    assert _kind(_envelope(content)) is ErrorKind.INVALID_RESPONSE_FORMAT


def test_unparseable_embedded_object_is_invalid_format():
    assert _kind(_envelope("{name: 'lamp'}")) is ErrorKind.INVALID_RESPONSE_FORMAT


def test_braces_in_trailing_prose_break_extraction():
    content = "Result: " + json.dumps(LAMP) + " Hope that helps {smile}"
    assert _kind(_envelope(content)) is ErrorKind.INVALID_RESPONSE_FORMAT


def test_extract_content_returns_first_choice():
    assert extract_content(_envelope("hello")) == "hello"


def test_extract_payload_slices_outermost_braces():
    assert extract_payload('x {"a": {"b": 1}} y') == {"a": {"b": 1}}
