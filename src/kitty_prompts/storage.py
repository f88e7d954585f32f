"""Bridge between answers and per-project storage.

Questions flagged ``store`` take a previously saved answer as their
default, and their final answer is written back once the session ends.
The storage medium itself belongs to the host; anything exposing
``get(name)`` and ``set(name, value)`` works.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from .models import Question

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """Name/value store scoped to the current project."""

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...


def load_stored_defaults(
    questions: Sequence[Question],
    storage: Optional[Storage],
) -> List[Question]:
    """Return questions with stored answers substituted as defaults.

    A stored value replaces the question's ``default`` outright, including
    a callable default. Questions without ``store`` are returned as-is.
    Errors raised by ``storage.get`` propagate.
    """
    if storage is None:
        return list(questions)

    derived: List[Question] = []
    for question in questions:
        if question.store:
            stored = storage.get(question.name)
            if stored is not None:
                logger.debug("Using stored default for %r", question.name)
                question = replace(question, default=stored)
        derived.append(question)
    return derived


def save_answers(
    questions: Sequence[Question],
    answers: Mapping[str, Any],
    storage: Optional[Storage],
) -> None:
    """Persist answers of ``store`` questions that have a defined value."""
    if storage is None:
        return

    for question in questions:
        if not question.store:
            continue
        value = answers.get(question.name)
        if value is None:
            continue
        storage.set(question.name, value)
        logger.info("Stored answer for %r", question.name)


__all__ = ["Storage", "load_stored_defaults", "save_answers"]
