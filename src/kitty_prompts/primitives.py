"""Contract between the engine and the interactive input widgets.

The engine never renders anything. It calls one coroutine on a
:class:`PromptPrimitives` implementation per question and receives either
the value the user entered or :data:`CANCEL`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from .models import Option
from .validation import Validator


class _Cancel:
    """Sentinel type for a cancelled primitive."""

    _instance: Optional["_Cancel"] = None

    def __new__(cls) -> "_Cancel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"

    def __bool__(self) -> bool:
        return False


CANCEL = _Cancel()


def is_cancel(value: Any) -> bool:
    """True when a primitive result is the cancellation marker."""
    return value is CANCEL


@runtime_checkable
class PromptPrimitives(Protocol):
    """Interactive widgets a :class:`~kitty_prompts.adapter.PromptAdapter` drives.

    Every method receives the question ``name`` and its resolved
    ``message``. List primitives receive translated :class:`Option` lists.
    Initial values are passed only when the question resolved one.
    """

    async def text(
        self,
        *,
        name: str,
        message: str,
        placeholder: Optional[str] = None,
        default_value: Optional[str] = None,
        initial_value: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Any: ...

    async def password(
        self,
        *,
        name: str,
        message: str,
        mask: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Any: ...

    async def confirm(
        self,
        *,
        name: str,
        message: str,
        initial_value: bool = False,
        active: str = "Yes",
        inactive: str = "No",
    ) -> Any: ...

    async def select(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_value: Any = None,
        max_items: Optional[int] = None,
    ) -> Any: ...

    async def multiselect(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_values: Optional[Sequence[Any]] = None,
        required: bool = False,
        cursor_at: Any = None,
        max_items: Optional[int] = None,
    ) -> Any: ...

    async def autocomplete(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_value: Any = None,
        max_items: Optional[int] = None,
        placeholder: Optional[str] = None,
    ) -> Any: ...

    async def autocomplete_multiselect(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_values: Optional[Sequence[Any]] = None,
        required: bool = False,
        max_items: Optional[int] = None,
        placeholder: Optional[str] = None,
    ) -> Any: ...

    def log_error(self, message: str) -> None: ...

    def intro(self, message: str) -> None: ...

    def outro(self, message: str) -> None: ...


def option_values(options: Sequence[Option]) -> List[Any]:
    return [option.value for option in options]


__all__ = [
    "CANCEL",
    "is_cancel",
    "PromptPrimitives",
    "Validator",
    "option_values",
]
