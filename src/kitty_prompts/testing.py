"""Scripted primitives and a test adapter.

:class:`ScriptedPrimitives` answers from a name-keyed mapping and accepts
the initial value for anything unscripted, which also makes it the
primitive set for non-interactive runs. :class:`TestAdapter` declares
itself a test substitute, so generators keep it instead of installing
their own adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence

from .adapter import PromptAdapter
from .config import PromptSettings
from .models import Option
from .primitives import CANCEL, is_cancel
from .validation import Validator


@dataclass
class PrimitiveCall:
    """One recorded primitive invocation."""

    primitive: str
    name: str
    kwargs: Dict[str, Any] = field(default_factory=dict)


class ScriptedPrimitives:
    """Primitive set driven by a mapping of question name to answer.

    Scripted text answers go through the validator the engine composed;
    a rejected answer raises ``ValueError`` carrying the message. Use
    :data:`~kitty_prompts.primitives.CANCEL` as an answer to simulate a
    user abort.
    """

    def __init__(self, answers: Optional[Mapping[str, Any]] = None) -> None:
        self.answers: Dict[str, Any] = dict(answers or {})
        self.calls: List[PrimitiveCall] = []
        self.messages: List[tuple[str, str]] = []

    def _record(self, primitive: str, name: str, kwargs: Dict[str, Any]) -> None:
        self.calls.append(PrimitiveCall(primitive=primitive, name=name, kwargs=dict(kwargs)))

    def call_for(self, name: str) -> PrimitiveCall:
        """Return the recorded call for question ``name``."""
        for call in self.calls:
            if call.name == name:
                return call
        raise KeyError(name)

    @property
    def asked(self) -> List[str]:
        """Question names in the order they reached a primitive."""
        return [call.name for call in self.calls]

    def _check(self, name: str, value: Any, validate: Optional[Validator]) -> Any:
        if validate is not None and not is_cancel(value):
            error = validate(value)
            if error is not None:
                raise ValueError(f"Answer for '{name}' rejected: {error}")
        return value

    async def text(self, *, name: str, message: str, validate: Optional[Validator] = None, **kwargs: Any) -> Any:
        self._record("text", name, {"message": message, "validate": validate, **kwargs})
        if name in self.answers:
            value = self.answers[name]
        else:
            value = kwargs.get("initial_value")
            if value is None:
                value = ""
        if value == "" and kwargs.get("default_value") is not None:
            value = kwargs["default_value"]
        return self._check(name, value, validate)

    async def password(self, *, name: str, message: str, validate: Optional[Validator] = None, **kwargs: Any) -> Any:
        self._record("password", name, {"message": message, "validate": validate, **kwargs})
        return self._check(name, self.answers.get(name, ""), validate)

    async def confirm(self, *, name: str, message: str, initial_value: bool = False, **kwargs: Any) -> Any:
        self._record("confirm", name, {"message": message, "initial_value": initial_value, **kwargs})
        return self.answers.get(name, initial_value)

    async def select(self, *, name: str, message: str, options: Sequence[Option], **kwargs: Any) -> Any:
        self._record("select", name, {"message": message, "options": list(options), **kwargs})
        if name in self.answers:
            return self.answers[name]
        if kwargs.get("initial_value") is not None:
            return kwargs["initial_value"]
        return options[0].value if options else None

    async def multiselect(self, *, name: str, message: str, options: Sequence[Option], **kwargs: Any) -> Any:
        self._record("multiselect", name, {"message": message, "options": list(options), **kwargs})
        if name in self.answers:
            return self.answers[name]
        return list(kwargs.get("initial_values") or [])

    async def autocomplete(self, *, name: str, message: str, options: Sequence[Option], **kwargs: Any) -> Any:
        self._record("autocomplete", name, {"message": message, "options": list(options), **kwargs})
        if name in self.answers:
            return self.answers[name]
        if kwargs.get("initial_value") is not None:
            return kwargs["initial_value"]
        return options[0].value if options else None

    async def autocomplete_multiselect(self, *, name: str, message: str, options: Sequence[Option], **kwargs: Any) -> Any:
        self._record("autocomplete_multiselect", name, {"message": message, "options": list(options), **kwargs})
        if name in self.answers:
            return self.answers[name]
        return list(kwargs.get("initial_values") or [])

    def log_error(self, message: str) -> None:
        self.messages.append(("error", message))

    def intro(self, message: str) -> None:
        self.messages.append(("intro", message))

    def outro(self, message: str) -> None:
        self.messages.append(("outro", message))


class TestAdapter(PromptAdapter):
    """Adapter over :class:`ScriptedPrimitives` for generator tests."""

    __test__ = False  # not a pytest test class
    is_test_adapter: ClassVar[bool] = True

    def __init__(
        self,
        answers: Optional[Mapping[str, Any]] = None,
        settings: Optional[PromptSettings] = None,
    ) -> None:
        super().__init__(primitives=ScriptedPrimitives(answers), settings=settings)


__all__ = ["CANCEL", "PrimitiveCall", "ScriptedPrimitives", "TestAdapter"]
