"""Prompt adapter: the ask loop behind ``prompt()``.

The adapter owns a primitive set and a :class:`SessionQueue`. Each call to
:meth:`PromptAdapter.prompt` becomes one queued session that:

1. normalizes and parses the questions (unknown types fail here)
2. evaluates each question's ``when`` gate against earlier answers
3. dispatches askable questions to a primitive
4. stops the session if the primitive reports a cancellation
5. runs the question's filter and records the answer
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .config import PromptSettings, load_settings
from .dispatch import dispatch_question
from .exceptions import PromptCancelled
from .models import Answers, Question, parse_questions
from .primitives import PromptPrimitives, is_cancel
from .queue import SessionQueue
from .resolution import apply_filter, normalize_questions, should_ask

logger = logging.getLogger(__name__)


class PromptAdapter:
    """Serialized prompt entry point for one terminal.

    Args:
        primitives: Widget implementation; defaults to
            :class:`~kitty_prompts.terminal.TerminalPrimitives`, or to
            :class:`~kitty_prompts.testing.ScriptedPrimitives` (accept
            defaults) when the settings report a non-interactive context
        settings: Engine messages and mode; read from the environment
            when omitted
    """

    def __init__(
        self,
        primitives: Optional[PromptPrimitives] = None,
        settings: Optional[PromptSettings] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.primitives = primitives if primitives is not None else self._default_primitives()
        self._queue = SessionQueue()

    def _default_primitives(self) -> PromptPrimitives:
        if not self.settings.interactive:
            from .testing import ScriptedPrimitives

            logger.info("No terminal available, accepting defaults")
            return ScriptedPrimitives()

        from .terminal import TerminalPrimitives

        return TerminalPrimitives()

    async def prompt(
        self,
        questions: Any,
        initial_answers: Optional[Mapping[str, Any]] = None,
    ) -> Answers:
        """Ask ``questions`` once every earlier session on this adapter settled.

        Args:
            questions: One question or a list, as :class:`Question` objects
                or authoring mappings in either dialect
            initial_answers: Answers to seed the session with

        Returns:
            Answers keyed by question name, in the order they were asked

        Raises:
            QuestionError: A question is malformed or has an unknown type
            PromptCancelled: The user cancelled a primitive
        """
        return await self._queue.enqueue(lambda: self._run_session(questions, initial_answers))

    async def _run_session(
        self,
        questions: Any,
        initial_answers: Optional[Mapping[str, Any]],
    ) -> Answers:
        parsed = parse_questions(normalize_questions(questions))
        answers: Answers = dict(initial_answers or {})
        # Resolvers see a live read-only view; only the loop writes answers
        view = MappingProxyType(answers)

        logger.info("Prompt session started with %d question(s)", len(parsed))
        for question in parsed:
            if not await should_ask(question.when, view):
                logger.debug("Skipping %r: when gate is closed", question.name)
                continue

            result = await dispatch_question(self.primitives, question, view, self.settings)
            self._check_cancel(question, result, answers)
            answers[question.name] = await apply_filter(question.filter, result, view)

        logger.info("Prompt session finished with %d answer(s)", len(answers))
        return answers

    def _check_cancel(self, question: Question, result: Any, answers: Answers) -> None:
        if not is_cancel(result):
            return
        self.primitives.log_error(self.settings.cancel_message)
        logger.info("Prompt session cancelled at %r", question.name)
        raise PromptCancelled(question.name, answers)


__all__ = ["PromptAdapter"]
