"""Response parser — turns a chat-completions body into an AnalysisResult."""
import json
import logging
from typing import Any

from turnover.constants import DEFAULT_CONFIDENCE_SCORE, DEFAULT_ESTIMATED_VALUE
from turnover.models import AnalysisResult, ItemCondition
from turnover.vision.errors import AnalysisError, ErrorKind

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("name", "category", "condition")


# ── pure helpers (module-level so tests can import them directly) ──────────────


def extract_content(body: str) -> str:
    """Return choices[0].message.content from the response envelope."""
    try:
        envelope = json.loads(body)
    except (json.JSONDecodeError, TypeError) as exc:
        raise AnalysisError(ErrorKind.INVALID_RESPONSE_FORMAT) from exc

    match envelope:
        case {"choices": [{"message": {"content": str() as content}}, *_]}:
            return content
        case _:
            raise AnalysisError(ErrorKind.INVALID_RESPONSE_FORMAT)


def extract_payload(content: str) -> dict[str, Any]:
    """Slice from the first '{' to the last '}' and parse it as a JSON object.

    The model may wrap the object in prose; anything outside the outermost
    braces is ignored.
    """
    start, end = content.find("{"), content.rfind("}")
    if start == -1 or end < start:
        raise AnalysisError(ErrorKind.INVALID_RESPONSE_FORMAT)
    try:
        payload = json.loads(content[start : end + 1])
    except json.JSONDecodeError as exc:
        logger.debug("Embedded JSON did not parse: %s", exc)
        raise AnalysisError(ErrorKind.INVALID_RESPONSE_FORMAT) from exc
    match payload:
        case dict():
            return payload
        case _:
            raise AnalysisError(ErrorKind.INVALID_RESPONSE_FORMAT)


def _number(value: Any, default: float) -> float:
    match value:
        case bool():
            return default
        case int() | float():
            return float(value)
        case _:
            return default


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def build_result(payload: dict[str, Any]) -> AnalysisResult:
    missing = [key for key in _REQUIRED_FIELDS if not isinstance(payload.get(key), str)]
    if missing:
        logger.debug("Analysis payload missing fields: %s", ", ".join(missing))
        raise AnalysisError(ErrorKind.INCOMPLETE_RESPONSE)

    return AnalysisResult(
        name=payload["name"],
        category=payload["category"],
        condition=ItemCondition.from_raw(payload["condition"]),
        estimated_value=_number(payload.get("estimatedValue"), DEFAULT_ESTIMATED_VALUE),
        confidence_score=_number(payload.get("confidenceScore"), DEFAULT_CONFIDENCE_SCORE),
        description=_text(payload.get("description")),
        insights=_text(payload.get("insights")),
    )


def parse_response(body: str) -> AnalysisResult:
    """Parse a raw HTTP 200 body. Raises AnalysisError on any failure."""
    return build_result(extract_payload(extract_content(body)))
