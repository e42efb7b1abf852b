"""Validates raw recognizer payloads into the closed RecognitionOutput type."""

import math
from typing import Any

from prospect_intel.recognition.exceptions import RecognitionValidationError
from prospect_intel.recognition.layout import split_lines
from prospect_intel.recognition.models import RecognitionOutput

_MAX_LINES = 2000


def validate_and_build(data: dict[str, Any]) -> RecognitionOutput:
    """Validate a decoded recognizer payload and build a RecognitionOutput.

    ``lines`` defaults to the split ``text`` and ``blocks`` may be given either
    as lists of lines or as newline-joined strings.

    Raises:
        RecognitionValidationError: on any validation failure.
    """
    text = _build_text(data.get("text"))
    lines = _build_lines(data.get("lines"), text)
    blocks = _build_blocks(data.get("blocks"))
    confidence = _build_confidence(data.get("confidence"))
    return RecognitionOutput(text=text, lines=lines, blocks=blocks, confidence=confidence)


def _build_text(raw: Any) -> str:
    if raw is None:
        raise RecognitionValidationError("Missing required field: text")
    if not isinstance(raw, str):
        raise RecognitionValidationError("'text' must be a string")
    return raw


def _build_lines(raw: Any, text: str) -> list[str]:
    if raw is None:
        return split_lines(text)
    if not isinstance(raw, list):
        raise RecognitionValidationError("'lines' must be a list")
    if len(raw) > _MAX_LINES:
        raise RecognitionValidationError(f"Too many lines: {len(raw)} (max {_MAX_LINES})")
    lines: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise RecognitionValidationError(f"Line at index {i} must be a string")
        lines.append(item.strip())
    return lines


def _build_blocks(raw: Any) -> list[list[str]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise RecognitionValidationError("'blocks' must be a list")
    blocks: list[list[str]] = []
    for i, item in enumerate(raw):
        if isinstance(item, str):
            blocks.append(split_lines(item))
            continue
        if not isinstance(item, list) or not all(isinstance(line, str) for line in item):
            raise RecognitionValidationError(
                f"Block at index {i} must be a string or a list of strings"
            )
        blocks.append([line.strip() for line in item])
    return blocks


def _build_confidence(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise RecognitionValidationError("'confidence' must be a number")
    value = float(raw)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise RecognitionValidationError(f"'confidence' must be in [0, 1], got {value}")
    return value
