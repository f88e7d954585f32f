"""Kitty prompts - declarative question sessions for scaffolding tools.

Usage:
    adapter = PromptAdapter()
    answers = await adapter.prompt([
        {"name": "projectName", "type": "input", "required": True},
        {"name": "useTS", "type": "confirm", "default": False},
    ])
"""

from .adapter import PromptAdapter
from .config import PromptSettings, is_interactive, load_settings
from .exceptions import (
    InvalidQuestion,
    PromptCancelled,
    PromptError,
    QuestionError,
    UnsupportedQuestionType,
)
from .generator import Environment, PromptGenerator, is_test_adapter
from .models import (
    Choice,
    Dialect,
    Option,
    Question,
    QuestionType,
    Separator,
    question_from_dict,
)
from .primitives import CANCEL, PromptPrimitives, is_cancel
from .queue import SessionQueue
from .storage import Storage, load_stored_defaults, save_answers

__all__ = [
    "CANCEL",
    "Choice",
    "Dialect",
    "Environment",
    "InvalidQuestion",
    "Option",
    "PromptAdapter",
    "PromptCancelled",
    "PromptError",
    "PromptGenerator",
    "PromptPrimitives",
    "PromptSettings",
    "Question",
    "QuestionError",
    "QuestionType",
    "Separator",
    "SessionQueue",
    "Storage",
    "UnsupportedQuestionType",
    "is_cancel",
    "is_interactive",
    "is_test_adapter",
    "load_settings",
    "load_stored_defaults",
    "question_from_dict",
    "save_answers",
]
