"""Host integration: a generator whose ``prompt`` goes through the adapter.

The host environment carries the adapter. A generator installs its own
adapter type unless the host already supplied one of that type or a
test substitute.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from .adapter import PromptAdapter
from .models import Answers, parse_questions
from .resolution import normalize_questions
from .storage import Storage, load_stored_defaults, save_answers

logger = logging.getLogger(__name__)


def is_test_adapter(adapter: Any) -> bool:
    """True for adapters that declare themselves test substitutes.

    Test adapters set the class attribute ``is_test_adapter = True``.
    """
    return getattr(adapter, "is_test_adapter", False) is True


@dataclass
class Environment:
    """Minimal host environment: the adapter prompts run through."""

    adapter: Any


class PromptGenerator:
    """Base class for scaffolding generators that ask questions.

    Args:
        env: Host environment; created when omitted
        config: Default storage for ``store`` questions
    """

    adapter_class: ClassVar[type[PromptAdapter]] = PromptAdapter

    def __init__(self, env: Optional[Environment] = None, config: Optional[Storage] = None) -> None:
        if env is not None:
            adapter = env.adapter
            if not is_test_adapter(adapter) and not isinstance(adapter, self.adapter_class):
                logger.debug(
                    "Replacing host adapter %s with %s",
                    type(adapter).__name__,
                    self.adapter_class.__name__,
                )
                env.adapter = self.adapter_class()
        else:
            env = Environment(adapter=self.adapter_class())

        self.env = env
        self.config = config

    def intro(self, message: str) -> None:
        """Open a prompt run with a framed heading."""
        self.env.adapter.primitives.intro(message)

    def outro(self, message: str) -> None:
        """Close a prompt run with a framed footer."""
        self.env.adapter.primitives.outro(message)

    def _resolve_storage(self, storage: Any) -> Optional[Storage]:
        if storage is None:
            return self.config
        if isinstance(storage, str):
            return getattr(self, storage)
        return storage

    async def prompt(self, questions: Any, storage: Any = None) -> Answers:
        """Ask questions, bridging ``store`` questions to storage.

        Args:
            questions: One question or a list, in either dialect
            storage: ``None`` for :attr:`config`, an attribute name on this
                generator, or a storage object

        Returns:
            Answers keyed by question name
        """
        store = self._resolve_storage(storage)
        parsed = parse_questions(normalize_questions(questions))
        with_defaults = load_stored_defaults(parsed, store)

        answers = await self.env.adapter.prompt(with_defaults)

        save_answers(parsed, answers, store)
        return answers


__all__ = ["Environment", "PromptGenerator", "is_test_adapter"]
