"""
Parsing of JSON payloads embedded in AI provider responses.
"""

import json
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import ParseError
from .models import RelevanceVerdict

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)

_verdict_adapter = TypeAdapter(RelevanceVerdict)


def parse_json_payload(text: str) -> Any:
    """
    Decode JSON from a response that may wrap it in a ``` code fence.

    Raises:
        ParseError: if no valid JSON is found
    """
    if not text or not text.strip():
        raise ParseError("Empty response")

    match = _FENCE_RE.search(text)
    candidate = match.group(1).strip() if match else text.strip()

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e


def _to_verdict(item: Any) -> RelevanceVerdict:
    # Some models return each object as a JSON-encoded string
    if isinstance(item, str):
        try:
            item = json.loads(item)
        except json.JSONDecodeError as e:
            raise ParseError(f"Array element is not JSON: {e}") from e
    try:
        return _verdict_adapter.validate_python(item)
    except ValidationError as e:
        raise ParseError(f"Unexpected relevance format: {e}") from e


def parse_verdict(text: str) -> RelevanceVerdict:
    """Parse a single {"score": X, "reason": "..."} object."""
    return _to_verdict(parse_json_payload(text))


def parse_verdicts(text: str, expected: int) -> list[RelevanceVerdict]:
    """Parse a JSON array of exactly `expected` relevance objects."""
    data = parse_json_payload(text)
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array, got {type(data).__name__}")
    if len(data) != expected:
        raise ParseError(f"Expected {expected} results, got {len(data)}")
    return [_to_verdict(item) for item in data]
