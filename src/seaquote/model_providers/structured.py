"""Validate free-form model output against a pydantic response model."""

from __future__ import annotations

import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from seaquote.core.exceptions import ModelResponseError

M = TypeVar("M", bound=BaseModel)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def extract_json(text: str) -> str:
    """Strip Markdown fences and surrounding prose, keep the outermost object."""
    cleaned = _FENCE.sub("", text.strip())
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        raise ModelResponseError(f"No JSON object in model response: {text[:200]!r}")
    return cleaned[start:end + 1]


def parse_structured_response(text: str, response_model: type[M]) -> M:
    """Parse and validate a model response; ModelResponseError on any failure."""
    if not text or not text.strip():
        raise ModelResponseError("Empty model response")
    payload = extract_json(text)
    try:
        return response_model.model_validate(json.loads(payload))
    except json.JSONDecodeError as exc:
        raise ModelResponseError(f"Model response is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ModelResponseError(
            f"Model response failed {response_model.__name__} validation: {exc}"
        ) from exc
