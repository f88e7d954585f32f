"""Choice list translation for list-like primitives."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from .exceptions import InvalidQuestion
from .models import Choice, Option, Separator


def to_choice(raw: Any, question_name: str | None = None) -> Optional[Choice]:
    """Read one authored entry as a :class:`Choice`.

    Bare strings become ``value == label``. Separators yield ``None``.
    """
    if isinstance(raw, Separator):
        return None
    if isinstance(raw, Choice):
        return raw
    if isinstance(raw, Option):
        return Choice(value=raw.value, label=raw.label, hint=raw.hint)
    if isinstance(raw, str):
        return Choice(value=raw, label=raw)
    if isinstance(raw, Mapping):
        if raw.get("type") == "separator":
            return None
        return Choice(
            value=raw.get("value"),
            label=raw.get("label"),
            name=raw.get("name"),
            hint=raw.get("hint"),
            checked=bool(raw.get("checked", False)),
            key=raw.get("key"),
        )
    raise InvalidQuestion(f"unsupported choice entry {raw!r}", question_name)


def translate_choices(items: Sequence[Any], question_name: str | None = None) -> List[Option]:
    """Translate authored choices or options into primitive options.

    The label prefers ``label`` over ``name``; separators are dropped.
    """
    options: List[Option] = []
    for raw in items:
        choice = to_choice(raw, question_name)
        if choice is None:
            continue
        options.append(Option(value=choice.value, label=choice.display, hint=choice.hint))
    return options


def checked_values(items: Sequence[Any], question_name: str | None = None) -> List[Any]:
    """Values of the entries flagged ``checked``, in list order."""
    values: List[Any] = []
    for raw in items:
        choice = to_choice(raw, question_name)
        if choice is not None and choice.checked:
            values.append(choice.value)
    return values


def _expand_entries(items: Sequence[Any], question_name: str | None) -> List[Choice]:
    entries: List[Choice] = []
    for raw in items:
        # Expand lists drop anything that is not a keyed or valued entry
        if isinstance(raw, str) or raw is None:
            continue
        choice = to_choice(raw, question_name)
        if choice is None:
            continue
        if choice.value in (None, "") and not choice.key:
            continue
        entries.append(choice)
    return entries


def expand_options(items: Sequence[Any], question_name: str | None = None) -> List[Option]:
    """Options for an ``expand`` question, labelled ``"k) label"`` when keyed.

    An entry without a value answers with its key.
    """
    options: List[Option] = []
    for choice in _expand_entries(items, question_name):
        value = choice.value if choice.value not in (None, "") else choice.key
        label = choice.label or choice.name or str(value)
        if choice.key:
            label = f"{choice.key}) {label}"
        options.append(Option(value=value, label=label, hint=choice.hint))
    return options


def expand_keys(items: Sequence[Any], question_name: str | None = None) -> str:
    """Concatenated shortcut keys of the valid entries (``"yn"``)."""
    return "".join(choice.key for choice in _expand_entries(items, question_name) if choice.key)


__all__ = [
    "to_choice",
    "translate_choices",
    "checked_values",
    "expand_options",
    "expand_keys",
]
