"""Exception hierarchy for the prompt engine."""

from __future__ import annotations

from typing import Any, Dict


class PromptError(Exception):
    """Base exception for prompt engine errors."""
    pass


class QuestionError(PromptError):
    """A question could not be turned into a prompt."""
    pass


class InvalidQuestion(QuestionError):
    """Question is malformed (missing name, duplicate name, bad choice list)."""

    def __init__(self, reason: str, name: str | None = None):
        self.reason = reason
        self.name = name
        if name:
            super().__init__(f"Invalid question '{name}': {reason}")
        else:
            super().__init__(f"Invalid question: {reason}")


class UnsupportedQuestionType(QuestionError):
    """Question declares a type no primitive can answer.

    Raised while questions are parsed, so a session carrying an unknown
    type fails before anything is asked.
    """

    def __init__(self, question_type: Any, name: str | None = None):
        self.question_type = question_type
        self.name = name
        target = f" (question '{name}')" if name else ""
        super().__init__(f"Unknown prompt type: {question_type!r}{target}")


class PromptCancelled(PromptError):
    """User aborted a primitive; the session ends without answers.

    Attributes:
        name: Name of the question that was being asked
        answers: Answers recorded before the cancelled question
    """

    def __init__(self, name: str, answers: Dict[str, Any] | None = None):
        self.name = name
        self.answers = dict(answers or {})
        super().__init__(f"Prompt cancelled at question '{name}'")


__all__ = [
    "PromptError",
    "QuestionError",
    "InvalidQuestion",
    "UnsupportedQuestionType",
    "PromptCancelled",
]
