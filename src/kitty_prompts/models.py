"""Question data models.

Questions form a closed set of frozen dataclasses, one per prompt kind.
Both authoring dialects (Inquirer-style ``default``/``choices`` and
Clack-style ``initialValue``/``options``) parse into the same classes, so
an unknown ``type`` is rejected when the question is built, not when it
is asked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Sequence

from .exceptions import InvalidQuestion, UnsupportedQuestionType

logger = logging.getLogger(__name__)

Answers = Dict[str, Any]
# Read-only view handed to when/validate/filter callables
AnswersView = Mapping[str, Any]


class QuestionType(StrEnum):
    """Canonical prompt kinds (one per primitive shape)."""

    TEXT = "text"
    PASSWORD = "password"
    CONFIRM = "confirm"
    SELECT = "select"
    MULTISELECT = "multiselect"
    NUMBER = "number"
    AUTOCOMPLETE = "autocomplete"
    AUTOCOMPLETE_MULTISELECT = "autocompleteMultiselect"
    EXPAND = "expand"


# Declared type -> canonical kind. Legacy names map onto native kinds.
TYPE_ALIASES: Dict[str, QuestionType] = {
    "input": QuestionType.TEXT,
    "text": QuestionType.TEXT,
    "password": QuestionType.PASSWORD,
    "confirm": QuestionType.CONFIRM,
    "list": QuestionType.SELECT,
    "rawlist": QuestionType.SELECT,
    "select": QuestionType.SELECT,
    "checkbox": QuestionType.MULTISELECT,
    "multiselect": QuestionType.MULTISELECT,
    "number": QuestionType.NUMBER,
    "autocomplete": QuestionType.AUTOCOMPLETE,
    "autocompleteMultiselect": QuestionType.AUTOCOMPLETE_MULTISELECT,
    "expand": QuestionType.EXPAND,
}

DEFAULT_TYPE = "input"


class Dialect(StrEnum):
    """Authoring dialect a question was written in."""

    LEGACY = "legacy"  # Inquirer: validators return True or a message
    NATIVE = "native"  # Clack: validators return None or a message


# Type names and keys only the native dialect uses
NATIVE_TYPES = frozenset({"text", "select", "multiselect", "autocomplete", "autocompleteMultiselect"})
NATIVE_KEYS = frozenset(
    {
        "initialValue",
        "initialValues",
        "defaultValue",
        "options",
        "cursorAt",
        "maxItems",
        "placeholder",
        "initial_value",
        "initial_values",
        "default_value",
        "cursor_at",
        "max_items",
    }
)

# Authoring keys (camelCase) -> dataclass attributes
FIELD_ALIASES: Dict[str, str] = {
    "initialValue": "initial_value",
    "initialValues": "initial_values",
    "defaultValue": "default_value",
    "maxItems": "max_items",
    "cursorAt": "cursor_at",
}


@dataclass(frozen=True)
class Separator:
    """Visual separator inside a legacy choice list. Never selectable."""

    line: str = "──────────────"


@dataclass(frozen=True)
class Option:
    """One entry handed to a list-like primitive."""

    value: Any
    label: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class Choice:
    """Authoring-side list entry.

    ``label`` may be supplied as ``name`` (legacy dialect); ``key`` is the
    shortcut letter used by ``expand`` questions.
    """

    value: Any
    label: Optional[str] = None
    name: Optional[str] = None
    hint: Optional[str] = None
    checked: bool = False
    key: Optional[str] = None

    @property
    def display(self) -> str:
        if self.label:
            return self.label
        if self.name:
            return self.name
        return str(self.value)


@dataclass(frozen=True)
class Question:
    """Fields shared by every question kind."""

    name: str
    message: Any = None  # str | Callable[[Answers], str]; falls back to name
    type: Optional[str] = None  # declared type, as authored
    default: Any = None  # value | Callable[[Answers], value]
    validate: Optional[Callable[..., Any]] = None
    filter: Optional[Callable[..., Any]] = None
    when: Any = None  # bool | Callable[[Answers], bool | Awaitable[bool]]
    store: bool = False
    required: bool = False
    dialect: Dialect = Dialect.LEGACY

    kind: ClassVar[QuestionType]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidQuestion("name must be a non-empty string")
        if self.when is not None and not isinstance(self.when, bool) and not callable(self.when):
            raise InvalidQuestion("when must be a boolean or a callable", self.name)
        if not isinstance(self.dialect, Dialect):
            try:
                object.__setattr__(self, "dialect", Dialect(self.dialect))
            except ValueError:
                raise InvalidQuestion(f"unknown dialect {self.dialect!r}", self.name) from None


@dataclass(frozen=True)
class TextQuestion(Question):
    kind: ClassVar[QuestionType] = QuestionType.TEXT

    placeholder: Optional[str] = None
    default_value: Optional[str] = None
    initial_value: Any = None


@dataclass(frozen=True)
class PasswordQuestion(Question):
    kind: ClassVar[QuestionType] = QuestionType.PASSWORD

    mask: Optional[str] = None


@dataclass(frozen=True)
class ConfirmQuestion(Question):
    kind: ClassVar[QuestionType] = QuestionType.CONFIRM

    initial_value: Any = None
    active: str = "Yes"
    inactive: str = "No"


@dataclass(frozen=True)
class NumberQuestion(Question):
    kind: ClassVar[QuestionType] = QuestionType.NUMBER

    placeholder: Optional[str] = None
    initial_value: Any = None


@dataclass(frozen=True)
class _ListQuestion(Question):
    """Base for kinds that need a choice list (``options`` or ``choices``)."""

    choices: Optional[Sequence[Any]] = None
    options: Optional[Sequence[Any]] = None
    max_items: Optional[int] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        items = self.options if self.options is not None else self.choices
        if items is None:
            raise InvalidQuestion("choices or options are required", self.name)
        if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
            raise InvalidQuestion("choices must be a list", self.name)


@dataclass(frozen=True)
class SelectQuestion(_ListQuestion):
    kind: ClassVar[QuestionType] = QuestionType.SELECT

    initial_value: Any = None


@dataclass(frozen=True)
class MultiSelectQuestion(_ListQuestion):
    kind: ClassVar[QuestionType] = QuestionType.MULTISELECT

    initial_values: Optional[Sequence[Any]] = None
    cursor_at: Any = None


@dataclass(frozen=True)
class AutocompleteQuestion(SelectQuestion):
    kind: ClassVar[QuestionType] = QuestionType.AUTOCOMPLETE

    placeholder: Optional[str] = None


@dataclass(frozen=True)
class AutocompleteMultiSelectQuestion(MultiSelectQuestion):
    kind: ClassVar[QuestionType] = QuestionType.AUTOCOMPLETE_MULTISELECT

    placeholder: Optional[str] = None


@dataclass(frozen=True)
class ExpandQuestion(Question):
    kind: ClassVar[QuestionType] = QuestionType.EXPAND

    choices: Sequence[Any] = field(default_factory=tuple)
    initial_value: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.choices, (str, bytes, Mapping)) or not isinstance(self.choices, Sequence):
            raise InvalidQuestion("choices must be a list", self.name)


QUESTION_CLASSES: Dict[QuestionType, type[Question]] = {
    QuestionType.TEXT: TextQuestion,
    QuestionType.PASSWORD: PasswordQuestion,
    QuestionType.CONFIRM: ConfirmQuestion,
    QuestionType.SELECT: SelectQuestion,
    QuestionType.MULTISELECT: MultiSelectQuestion,
    QuestionType.NUMBER: NumberQuestion,
    QuestionType.AUTOCOMPLETE: AutocompleteQuestion,
    QuestionType.AUTOCOMPLETE_MULTISELECT: AutocompleteMultiSelectQuestion,
    QuestionType.EXPAND: ExpandQuestion,
}


def resolve_kind(declared: Any, name: str | None = None) -> QuestionType:
    """Map a declared ``type`` to its canonical kind.

    Raises:
        UnsupportedQuestionType: If no primitive answers this type
    """
    if declared is None:
        declared = DEFAULT_TYPE
    kind = TYPE_ALIASES.get(declared) if isinstance(declared, str) else None
    if kind is None:
        raise UnsupportedQuestionType(declared, name)
    return kind


def question_from_dict(data: Mapping[str, Any]) -> Question:
    """Build a typed question from an authoring mapping (either dialect).

    Keys may be camelCase as authored or snake_case. ``pageSize`` is read
    as ``max_items`` when ``maxItems`` is absent. Unknown keys are ignored.
    """
    if not isinstance(data, Mapping):
        raise InvalidQuestion(f"expected a mapping, got {type(data).__name__}")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidQuestion("name must be a non-empty string")

    declared = data.get("type") or DEFAULT_TYPE
    cls = QUESTION_CLASSES[resolve_kind(declared, name)]
    known = {f.name for f in fields(cls)}

    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        attr = FIELD_ALIASES.get(key, key)
        if key == "pageSize":
            if "maxItems" in data or "max_items" in data:
                continue
            attr = "max_items"
        if attr in known:
            kwargs[attr] = value
        else:
            logger.debug("Ignoring field %r on question %r", key, name)

    kwargs["type"] = declared
    kwargs.setdefault("dialect", detect_dialect(data, declared))
    return cls(**kwargs)


def detect_dialect(data: Mapping[str, Any], declared: str) -> Dialect:
    """Native when the type name or any key belongs only to the native dialect."""
    if declared in NATIVE_TYPES or any(key in NATIVE_KEYS for key in data):
        return Dialect.NATIVE
    return Dialect.LEGACY


def coerce_question(question: Question | Mapping[str, Any]) -> Question:
    """Return ``question`` as a typed :class:`Question`.

    Raises:
        UnsupportedQuestionType: For a bare :class:`Question`, which has no kind
    """
    if isinstance(question, Question):
        if getattr(type(question), "kind", None) is None:
            raise UnsupportedQuestionType(question.type, question.name)
        return question
    return question_from_dict(question)


def parse_questions(questions: Sequence[Question | Mapping[str, Any]]) -> List[Question]:
    """Parse a normalized question list, rejecting duplicate names."""
    parsed: List[Question] = []
    seen: set[str] = set()
    for raw in questions:
        question = coerce_question(raw)
        if question.name in seen:
            raise InvalidQuestion("name is used by another question in this session", question.name)
        seen.add(question.name)
        parsed.append(question)
    return parsed


__all__ = [
    "Answers",
    "AnswersView",
    "QuestionType",
    "Dialect",
    "TYPE_ALIASES",
    "Separator",
    "Option",
    "Choice",
    "Question",
    "TextQuestion",
    "PasswordQuestion",
    "ConfirmQuestion",
    "NumberQuestion",
    "SelectQuestion",
    "MultiSelectQuestion",
    "AutocompleteQuestion",
    "AutocompleteMultiSelectQuestion",
    "ExpandQuestion",
    "QUESTION_CLASSES",
    "resolve_kind",
    "question_from_dict",
    "detect_dialect",
    "coerce_question",
    "parse_questions",
]
