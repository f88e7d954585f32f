"""Question-to-primitive dispatch.

Each question kind maps to exactly one primitive call. The dispatcher
resolves the dynamic fields, translates choice lists, composes the
validator and shapes the keyword arguments the primitive receives.
Initial values are only passed when they resolve to something, and a
native initial value (``initialValue``/``initialValues``) always wins
over a legacy ``default``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from .choices import checked_values, expand_keys, expand_options, translate_choices
from .config import PromptSettings
from .models import (
    AnswersView,
    AutocompleteMultiSelectQuestion,
    AutocompleteQuestion,
    ConfirmQuestion,
    ExpandQuestion,
    MultiSelectQuestion,
    NumberQuestion,
    PasswordQuestion,
    Question,
    QuestionType,
    SelectQuestion,
    TextQuestion,
)
from .primitives import PromptPrimitives, is_cancel
from .resolution import resolve_value
from .validation import compose_validator, number_validator, parse_number

logger = logging.getLogger(__name__)

Handler = Callable[[PromptPrimitives, Any, "_Resolved", PromptSettings], Awaitable[Any]]


class _Resolved:
    """Fields of one question resolved against the current answers."""

    __slots__ = ("message", "default", "answers")

    def __init__(self, message: str, default: Any, answers: AnswersView):
        self.message = message
        self.default = default
        self.answers = answers


def _prefer(native: Any, legacy: Any) -> Any:
    return native if native is not None else legacy


def _defined(**kwargs: Any) -> Dict[str, Any]:
    """Drop keyword arguments that resolved to ``None``."""
    return {key: value for key, value in kwargs.items() if value is not None}


def _as_list(value: Any) -> Optional[List[Any]]:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _list_items(question: SelectQuestion | MultiSelectQuestion) -> Sequence[Any]:
    return question.options if question.options is not None else question.choices or ()


def _multiselect_initial(question: MultiSelectQuestion, resolved: _Resolved) -> Optional[List[Any]]:
    """Native ``initialValues``, else pre-checked choices, else ``default``."""
    native = _as_list(resolve_value(question.initial_values, resolved.answers))
    if native is not None:
        return native
    checked = checked_values(_list_items(question), question.name)
    if checked:
        return checked
    return _as_list(resolved.default)


def coerce_number(result: Any) -> Any:
    """Turn non-empty numeric text into a number; pass anything else through."""
    if is_cancel(result) or not isinstance(result, str) or not result.strip():
        return result
    return parse_number(result)


async def _ask_text(primitives: PromptPrimitives, question: TextQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    return await primitives.text(
        name=question.name,
        message=resolved.message,
        validate=compose_validator(question, resolved.answers, settings),
        **_defined(
            placeholder=question.placeholder,
            default_value=question.default_value,
            initial_value=initial,
        ),
    )


async def _ask_password(primitives: PromptPrimitives, question: PasswordQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    return await primitives.password(
        name=question.name,
        message=resolved.message,
        validate=compose_validator(question, resolved.answers, settings),
        **_defined(mask=question.mask),
    )


async def _ask_confirm(primitives: PromptPrimitives, question: ConfirmQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    return await primitives.confirm(
        name=question.name,
        message=resolved.message,
        initial_value=bool(initial) if initial is not None else False,
        active=question.active,
        inactive=question.inactive,
    )


async def _ask_select(primitives: PromptPrimitives, question: SelectQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    return await primitives.select(
        name=question.name,
        message=resolved.message,
        options=translate_choices(_list_items(question), question.name),
        **_defined(initial_value=initial, max_items=question.max_items),
    )


async def _ask_multiselect(primitives: PromptPrimitives, question: MultiSelectQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    return await primitives.multiselect(
        name=question.name,
        message=resolved.message,
        options=translate_choices(_list_items(question), question.name),
        required=bool(question.required),
        **_defined(
            initial_values=_multiselect_initial(question, resolved),
            cursor_at=question.cursor_at,
            max_items=question.max_items,
        ),
    )


async def _ask_number(primitives: PromptPrimitives, question: NumberQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    result = await primitives.text(
        name=question.name,
        message=resolved.message,
        validate=number_validator(compose_validator(question, resolved.answers, settings), settings),
        **_defined(
            placeholder=question.placeholder,
            initial_value=str(initial) if initial is not None else None,
        ),
    )
    return coerce_number(result)


async def _ask_autocomplete(primitives: PromptPrimitives, question: AutocompleteQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    return await primitives.autocomplete(
        name=question.name,
        message=resolved.message,
        options=translate_choices(_list_items(question), question.name),
        **_defined(
            initial_value=initial,
            max_items=question.max_items,
            placeholder=question.placeholder,
        ),
    )


async def _ask_autocomplete_multiselect(
    primitives: PromptPrimitives,
    question: AutocompleteMultiSelectQuestion,
    resolved: _Resolved,
    settings: PromptSettings,
) -> Any:
    return await primitives.autocomplete_multiselect(
        name=question.name,
        message=resolved.message,
        options=translate_choices(_list_items(question), question.name),
        required=bool(question.required),
        **_defined(
            initial_values=_multiselect_initial(question, resolved),
            max_items=question.max_items,
            placeholder=question.placeholder,
        ),
    )


async def _ask_expand(primitives: PromptPrimitives, question: ExpandQuestion, resolved: _Resolved, settings: PromptSettings) -> Any:
    options = expand_options(question.choices, question.name)
    keys = expand_keys(question.choices, question.name)
    message = f"{resolved.message} ({keys})" if keys else resolved.message

    initial = _prefer(resolve_value(question.initial_value, resolved.answers), resolved.default)
    if initial is None and options:
        initial = options[0].value

    return await primitives.select(
        name=question.name,
        message=message,
        options=options,
        **_defined(initial_value=initial),
    )


_HANDLERS: Dict[QuestionType, Handler] = {
    QuestionType.TEXT: _ask_text,
    QuestionType.PASSWORD: _ask_password,
    QuestionType.CONFIRM: _ask_confirm,
    QuestionType.SELECT: _ask_select,
    QuestionType.MULTISELECT: _ask_multiselect,
    QuestionType.NUMBER: _ask_number,
    QuestionType.AUTOCOMPLETE: _ask_autocomplete,
    QuestionType.AUTOCOMPLETE_MULTISELECT: _ask_autocomplete_multiselect,
    QuestionType.EXPAND: _ask_expand,
}


async def dispatch_question(
    primitives: PromptPrimitives,
    question: Question,
    answers: AnswersView,
    settings: PromptSettings | None = None,
) -> Any:
    """Ask one question through its primitive and return the raw result.

    ``message`` and ``default`` are resolved here, once, against the
    answers recorded so far. The result may be the cancellation marker;
    checking for it is the caller's job.
    """
    settings = settings or PromptSettings()
    message = resolve_value(question.message, answers)
    resolved = _Resolved(
        message=str(message) if message not in (None, "") else question.name,
        default=resolve_value(question.default, answers),
        answers=answers,
    )

    handler = _HANDLERS[question.kind]
    logger.debug("Asking %r via %s (declared type %r)", question.name, question.kind.value, question.type or question.kind.value)
    return await handler(primitives, question, resolved, settings)


__all__ = ["dispatch_question", "coerce_number"]
