"""Per-question resolution helpers.

Small building blocks the ask loop runs for every question:

- :func:`normalize_questions` turns one question or a list into a list
- :func:`should_ask` evaluates the ``when`` gate
- :func:`resolve_value` resolves ``T | Callable[[Answers], T]`` fields
- :func:`apply_filter` post-processes a primitive result
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .models import AnswersView, Question


def normalize_questions(questions: Any) -> List[Any]:
    """Return questions as a list in declaration order.

    A single question (mapping or :class:`Question`) becomes a one-item
    list. No validation happens here.
    """
    if isinstance(questions, (Question, Mapping)):
        return [questions]
    if isinstance(questions, Sequence) and not isinstance(questions, (str, bytes)):
        return list(questions)
    return [questions]


async def should_ask(when: Any, answers: AnswersView) -> bool:
    """Evaluate a ``when`` gate against the answers recorded so far.

    ``None`` means ask. Boolean literals are used as-is. Callables receive
    the answers and may return an awaitable.
    """
    if when is None:
        return True
    if callable(when):
        result = when(answers)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)
    return bool(when)


def resolve_value(value: Any, answers: AnswersView) -> Any:
    """Call ``value`` with the answers when it is callable, else return it."""
    if callable(value):
        return value(answers)
    return value


async def apply_filter(
    filter_fn: Optional[Callable[..., Any]],
    value: Any,
    answers: AnswersView,
) -> Any:
    """Run the question's filter over a raw result, if it has one."""
    if filter_fn is None:
        return value
    result = filter_fn(value, answers)
    if inspect.isawaitable(result):
        result = await result
    return result


__all__ = [
    "normalize_questions",
    "should_ask",
    "resolve_value",
    "apply_filter",
]
