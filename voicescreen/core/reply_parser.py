"""
Structured parsing of model replies.

Models are asked for a bare JSON object but routinely wrap it in prose or
code fences. This module is the single place where that unpredictability is
absorbed: a reply either validates against a pydantic schema or the caller's
fallback is used.
"""

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from voicescreen.core.exceptions import ParseFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_json_object(reply: str) -> dict:
    """
    Pull the outermost JSON object out of a free-text reply.

    Raises:
        ParseFailure: No object present, or it is not valid JSON
    """
    json_start = reply.find("{")
    json_end = reply.rfind("}") + 1
    if json_start < 0 or json_end <= json_start:
        raise ParseFailure("no JSON object in reply")

    try:
        data = json.loads(reply[json_start:json_end])
    except json.JSONDecodeError as e:
        raise ParseFailure(f"invalid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise ParseFailure("reply JSON is not an object")
    return data


def parse_reply(reply: str, schema: type[ModelT]) -> ModelT:
    """
    Validate a model reply against `schema`.

    Raises:
        ParseFailure: Reply has no JSON object or it fails validation
    """
    data = extract_json_object(reply or "")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ParseFailure(f"{schema.__name__} validation failed: {e.error_count()} error(s)") from e


def parse_reply_or(reply: str, schema: type[ModelT], fallback: ModelT) -> ModelT:
    """Validate a model reply, returning `fallback` when it does not fit."""
    try:
        return parse_reply(reply, schema)
    except ParseFailure as e:
        logger.warning(f"Falling back for {schema.__name__}: {e}")
        return fallback
