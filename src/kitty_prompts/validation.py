"""Validation composition.

Primitives expect a validator returning ``None`` for valid input or an
error message string. Questions carry an optional ``required`` flag and
an optional custom validator; this module folds both into the primitive's
contract. Legacy validators signal success with ``True`` only, native
ones may also return ``None``.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Optional

from .config import PromptSettings
from .models import AnswersView, Dialect, Question

Validator = Callable[[Any], Optional[str]]

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED = re.compile(r"0([xXoObB])([0-9a-fA-F]+)", re.ASCII)
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2}
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def is_empty(value: Any) -> bool:
    """True for ``None`` or a string that is empty after stripping."""
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def compose_validator(
    question: Question,
    answers: AnswersView,
    settings: PromptSettings | None = None,
) -> Validator:
    """Build the single validator handed to a primitive.

    Order is fixed: the required check runs first and short-circuits, so a
    custom validator never sees an empty value of a required question.
    Exceptions raised by the custom validator are not caught.
    """
    settings = settings or PromptSettings()
    custom = question.validate

    def validate(value: Any) -> Optional[str]:
        if question.required and is_empty(value):
            return settings.required_message

        if custom is None:
            return None

        result = custom(value, answers)
        if result is True:
            return None
        if result is None and question.dialect is Dialect.NATIVE:
            return None
        if isinstance(result, str):
            return result
        return settings.invalid_message

    return validate


def parse_number(text: str) -> int | float:
    """Parse numeric text the way form input is read as a number.

    Accepts signed decimals with optional exponent, ``0x``/``0o``/``0b``
    integers and ``Infinity``. Digit-group underscores, ``inf``/``nan``
    spellings and non-ASCII digits are rejected. Plain integer text comes
    back as ``int``.

    Raises:
        ValueError: If the text is not a number
    """
    stripped = text.strip()
    if stripped in _INFINITY:
        return _INFINITY[stripped]

    prefixed = _PREFIXED.fullmatch(stripped)
    if prefixed:
        return int(prefixed.group(2), _PREFIX_BASES[prefixed.group(1).lower()])

    if _INTEGER.fullmatch(stripped):
        return int(stripped)
    if _DECIMAL.fullmatch(stripped):
        return float(stripped)
    raise ValueError(f"not a number: {text!r}")


def number_validator(inner: Validator | None, settings: PromptSettings | None = None) -> Validator:
    """Reject non-empty text that does not parse, then defer to ``inner``."""
    settings = settings or PromptSettings()

    def validate(value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            try:
                parse_number(value)
            except ValueError:
                return settings.number_message
        return inner(value) if inner is not None else None

    return validate


__all__ = [
    "Validator",
    "is_empty",
    "compose_validator",
    "parse_number",
    "number_validator",
]
