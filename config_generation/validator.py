"""Parsing layer for raw LLM mapping-configuration output.

Only checks that the response is a JSON object. Whether that object is a
usable mapping configuration is decided later by the mapping validator.
"""

import json
import re
from typing import Any, Dict, List

_FENCED_BLOCK = re.compile(r"^```[A-Za-z]*\s*(.*?)\s*```$", re.DOTALL)


class LLMOutputValidationError(Exception):
    """Raised when LLM output cannot be read as a candidate configuration.

    Attributes:
        stage: "json_parse" when the text is not JSON, "shape" when the JSON
            is not an object.
        errors: Human-readable reasons.
        raw_response: The untouched model output.
    """

    def __init__(self, stage: str, errors: List[str], raw_response: str) -> None:
        super().__init__(f"LLM output rejected at stage '{stage}': {'; '.join(errors)}")
        self.stage = stage
        self.errors = errors
        self.raw_response = raw_response


def _strip_markdown_fences(text: str) -> str:
    stripped = text.strip()
    fenced = _FENCED_BLOCK.match(stripped)
    return fenced.group(1) if fenced else stripped


def parse_candidate_config(raw_response: str) -> Dict[str, Any]:
    """Turn raw model output into an untrusted candidate configuration.

    Markdown fences are ignored, and a payload of the form
    ``{"config": {...}}`` is unwrapped unless it already carries
    ``fieldMappings`` at the top level.

    Raises:
        LLMOutputValidationError: If the text is not JSON or not an object.
    """
    try:
        payload = json.loads(_strip_markdown_fences(raw_response))
    except (json.JSONDecodeError, TypeError) as exc:
        raise LLMOutputValidationError("json_parse", [str(exc)], raw_response) from exc

    if not isinstance(payload, dict):
        raise LLMOutputValidationError(
            "shape",
            [f"expected a JSON object, got {type(payload).__name__}"],
            raw_response,
        )

    inner = payload.get("config")
    if isinstance(inner, dict) and "fieldMappings" not in payload:
        return inner
    return payload
