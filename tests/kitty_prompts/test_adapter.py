"""Tests for the ask loop: ordering, gates, filters, cancellation, errors."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from kitty_prompts.adapter import PromptAdapter
from kitty_prompts.config import PromptSettings
from kitty_prompts.exceptions import InvalidQuestion, PromptCancelled, UnsupportedQuestionType
from kitty_prompts.models import Question, TextQuestion
from kitty_prompts.primitives import CANCEL
from kitty_prompts.terminal import TerminalPrimitives
from kitty_prompts.testing import ScriptedPrimitives


class YieldingPrimitives(ScriptedPrimitives):
    """Scripted primitives that suspend on every call, like a real terminal."""

    async def text(self, **kwargs):
        await asyncio.sleep(0)
        return await super().text(**kwargs)

    async def confirm(self, **kwargs):
        await asyncio.sleep(0)
        return await super().confirm(**kwargs)


class TestScenarios:
    @pytest.mark.asyncio
    async def test_required_project_name(self, make_adapter):
        question = {"name": "projectName", "type": "input", "required": True}

        with pytest.raises(ValueError, match="This field is required"):
            await make_adapter({"projectName": ""}).prompt(question)

        answers = await make_adapter({"projectName": "my-app"}).prompt(question)
        assert answers == {"projectName": "my-app"}

    @pytest.mark.asyncio
    async def test_conditional_question_is_absent_when_skipped(self, make_adapter):
        adapter = make_adapter({"useTS": False, "tsPath": "src"})
        answers = await adapter.prompt(
            [
                {"name": "useTS", "type": "confirm", "default": False},
                {"name": "tsPath", "type": "input", "when": lambda a: a["useTS"] is True},
            ]
        )
        assert answers == {"useTS": False}
        assert "tsPath" not in answers
        assert adapter.primitives.asked == ["useTS"]

    @pytest.mark.asyncio
    async def test_conditional_question_is_asked_when_open(self, make_adapter):
        answers = await make_adapter({"useTS": True, "tsPath": "src"}).prompt(
            [
                {"name": "useTS", "type": "confirm", "default": False},
                {"name": "tsPath", "type": "input", "when": lambda a: a["useTS"] is True},
            ]
        )
        assert answers == {"useTS": True, "tsPath": "src"}

    @pytest.mark.asyncio
    async def test_expand_defaults_to_first_choice(self, make_adapter):
        adapter = make_adapter()
        answers = await adapter.prompt(
            {
                "name": "overwrite",
                "type": "expand",
                "message": "Overwrite?",
                "choices": [
                    {"key": "y", "value": "yes", "name": "Yes"},
                    {"key": "n", "value": "no", "name": "No"},
                ],
            }
        )
        assert answers == {"overwrite": "yes"}
        assert adapter.primitives.call_for("overwrite").kwargs["message"] == "Overwrite? (yn)"

    @pytest.mark.asyncio
    async def test_prechecked_multiselect_accepted_unchanged(self, make_adapter):
        answers = await make_adapter().prompt(
            {
                "name": "features",
                "type": "checkbox",
                "choices": [{"value": "lint", "checked": True}, {"value": "test"}],
            }
        )
        assert answers == {"features": ["lint"]}


class TestOrdering:
    @pytest.mark.asyncio
    async def test_answers_follow_ask_order_and_omit_skipped(self, make_adapter):
        adapter = make_adapter({"c": "3", "a": "1"})
        answers = await adapter.prompt(
            [
                {"name": "c"},
                {"name": "b", "when": False},
                {"name": "a"},
            ]
        )
        assert list(answers) == ["c", "a"]
        assert adapter.primitives.asked == ["c", "a"]

    @pytest.mark.asyncio
    async def test_later_gate_sees_earlier_answers_only(self, make_adapter):
        seen = []

        def gate(answers):
            seen.append(sorted(answers))
            return True

        await make_adapter({"first": "x", "second": "y", "third": "z"}).prompt(
            [{"name": "first"}, {"name": "second", "when": gate}, {"name": "third"}]
        )
        assert seen == [["first"]]

    @pytest.mark.asyncio
    async def test_async_when_is_awaited(self, make_adapter):
        async def gate(answers):
            await asyncio.sleep(0)
            return False

        answers = await make_adapter({"a": "x"}).prompt([{"name": "a", "when": gate}])
        assert answers == {}

    @pytest.mark.asyncio
    async def test_initial_answers_seed_the_session(self, make_adapter):
        answers = await make_adapter({"b": "2"}).prompt(
            [{"name": "b", "when": lambda a: a.get("a") == "1"}],
            initial_answers={"a": "1"},
        )
        assert answers == {"a": "1", "b": "2"}

    @pytest.mark.asyncio
    async def test_question_objects_are_accepted(self, make_adapter):
        answers = await make_adapter({"name": "demo"}).prompt(TextQuestion(name="name", message="Name?"))
        assert answers == {"name": "demo"}

    @pytest.mark.asyncio
    async def test_resolvers_cannot_mutate_answers(self, make_adapter):
        def sneaky(answers):
            answers["injected"] = True
            return True

        with pytest.raises(TypeError):
            await make_adapter({"a": "x", "b": "y"}).prompt([{"name": "a"}, {"name": "b", "when": sneaky}])


class TestFilters:
    @pytest.mark.asyncio
    async def test_filter_result_is_recorded(self, make_adapter):
        answers = await make_adapter({"projectName": "  My App "}).prompt(
            {"name": "projectName", "filter": lambda v, a: v.strip().lower().replace(" ", "-")}
        )
        assert answers == {"projectName": "my-app"}

    @pytest.mark.asyncio
    async def test_filter_receives_earlier_answers(self, make_adapter):
        answers = await make_adapter({"scope": "acme", "pkg": "ui"}).prompt(
            [{"name": "scope"}, {"name": "pkg", "filter": lambda v, a: f"@{a['scope']}/{v}"}]
        )
        assert answers["pkg"] == "@acme/ui"

    @pytest.mark.asyncio
    async def test_number_filter_receives_coerced_value(self, make_adapter):
        answers = await make_adapter({"port": "21"}).prompt(
            {"name": "port", "type": "number", "filter": lambda v, a: v * 2}
        )
        assert answers == {"port": 42}

    @pytest.mark.asyncio
    async def test_filter_applies_to_confirm(self, make_adapter):
        answers = await make_adapter({"ok": True}).prompt(
            {"name": "ok", "type": "confirm", "filter": lambda v, a: "yes" if v else "no"}
        )
        assert answers == {"ok": "yes"}


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_stops_session(self, make_adapter):
        never = MagicMock()
        adapter = make_adapter({"a": "x", "b": CANCEL, "c": "z"})

        with pytest.raises(PromptCancelled) as excinfo:
            await adapter.prompt([{"name": "a"}, {"name": "b", "filter": never}, {"name": "c"}])

        assert excinfo.value.name == "b"
        assert excinfo.value.answers == {"a": "x"}
        assert adapter.primitives.asked == ["a", "b"]
        assert ("error", "Operation cancelled") in adapter.primitives.messages
        never.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_notice_uses_settings(self):
        primitives = ScriptedPrimitives({"a": CANCEL})
        adapter = PromptAdapter(primitives=primitives, settings=PromptSettings(cancel_message="Bye"))

        with pytest.raises(PromptCancelled):
            await adapter.prompt({"name": "a", "type": "confirm"})
        assert primitives.messages == [("error", "Bye")]

    @pytest.mark.asyncio
    async def test_cancelled_number_is_not_coerced(self, make_adapter):
        with pytest.raises(PromptCancelled):
            await make_adapter({"port": CANCEL}).prompt({"name": "port", "type": "number"})

    @pytest.mark.asyncio
    async def test_next_session_runs_after_cancel(self, make_adapter):
        adapter = make_adapter({"a": CANCEL, "b": "ok"})

        with pytest.raises(PromptCancelled):
            await adapter.prompt({"name": "a"})
        assert await adapter.prompt({"name": "b"}) == {"b": "ok"}


class TestErrors:
    @pytest.mark.asyncio
    async def test_unknown_type_fails_before_asking(self, make_adapter):
        adapter = make_adapter({"a": "x"})

        with pytest.raises(UnsupportedQuestionType, match="'editor'"):
            await adapter.prompt([{"name": "a"}, {"name": "b", "type": "editor"}])
        assert adapter.primitives.asked == []

    @pytest.mark.asyncio
    async def test_duplicate_names_fail_before_asking(self, make_adapter):
        adapter = make_adapter()
        with pytest.raises(InvalidQuestion):
            await adapter.prompt([{"name": "a"}, {"name": "a"}])
        assert adapter.primitives.asked == []

    @pytest.mark.asyncio
    async def test_legacy_validator_returning_nothing_rejects(self, make_adapter):
        with pytest.raises(ValueError, match="Invalid input"):
            await make_adapter({"q": "x"}).prompt({"name": "q", "type": "input", "validate": lambda v, a: None})

    @pytest.mark.asyncio
    async def test_native_validator_returning_nothing_accepts(self, make_adapter):
        answers = await make_adapter({"q": "x"}).prompt({"name": "q", "type": "text", "validate": lambda v, a: None})
        assert answers == {"q": "x"}

    @pytest.mark.asyncio
    async def test_bare_question_is_unsupported(self, make_adapter):
        with pytest.raises(UnsupportedQuestionType):
            await make_adapter().prompt(Question(name="q"))

    @pytest.mark.asyncio
    async def test_validator_exception_propagates(self, make_adapter):
        def broken(value, answers):
            raise RuntimeError("validator exploded")

        with pytest.raises(RuntimeError, match="validator exploded"):
            await make_adapter({"a": "x"}).prompt({"name": "a", "validate": broken})


class TestConcurrentSessions:
    @pytest.mark.asyncio
    async def test_sessions_on_one_adapter_do_not_interleave(self):
        primitives = YieldingPrimitives()
        adapter = PromptAdapter(primitives=primitives)

        first = [{"name": "a1"}, {"name": "a2", "type": "confirm"}, {"name": "a3"}]
        second = [{"name": "b1"}, {"name": "b2", "type": "confirm"}]

        results = await asyncio.gather(adapter.prompt(first), adapter.prompt(second))

        assert primitives.asked == ["a1", "a2", "a3", "b1", "b2"]
        assert list(results[0]) == ["a1", "a2", "a3"]
        assert list(results[1]) == ["b1", "b2"]

    @pytest.mark.asyncio
    async def test_failed_session_does_not_block_queue(self):
        primitives = YieldingPrimitives({"ok": "fine"})
        adapter = PromptAdapter(primitives=primitives)

        results = await asyncio.gather(
            adapter.prompt({"name": "bad", "type": "editor"}),
            adapter.prompt({"name": "ok"}),
            return_exceptions=True,
        )
        assert isinstance(results[0], UnsupportedQuestionType)
        assert results[1] == {"ok": "fine"}

    @pytest.mark.asyncio
    async def test_adapters_are_independent(self):
        release = asyncio.Event()

        class BlockingPrimitives(ScriptedPrimitives):
            async def text(self, **kwargs):
                await release.wait()
                return await super().text(**kwargs)

        blocked = PromptAdapter(primitives=BlockingPrimitives({"a": "x"}))
        free = PromptAdapter(primitives=ScriptedPrimitives({"b": "y"}))

        pending = asyncio.create_task(blocked.prompt({"name": "a"}))
        await asyncio.sleep(0)
        assert await free.prompt({"name": "b"}) == {"b": "y"}
        assert not pending.done()

        release.set()
        assert await pending == {"a": "x"}


class TestDefaultPrimitives:
    def test_non_interactive_settings_accept_defaults(self):
        adapter = PromptAdapter(settings=PromptSettings(interactive=False))
        assert isinstance(adapter.primitives, ScriptedPrimitives)

    def test_interactive_settings_use_terminal(self):
        adapter = PromptAdapter(settings=PromptSettings(interactive=True))
        assert isinstance(adapter.primitives, TerminalPrimitives)

    def test_settings_default_to_environment(self):
        loaded = PromptSettings(cancel_message="Bye", interactive=False)
        with patch("kitty_prompts.adapter.load_settings", return_value=loaded) as mock_load:
            adapter = PromptAdapter()

        mock_load.assert_called_once_with()
        assert adapter.settings is loaded
        assert isinstance(adapter.primitives, ScriptedPrimitives)

    def test_environment_flag_switches_to_defaults(self, monkeypatch):
        monkeypatch.setenv("KITTY_PROMPTS_NON_INTERACTIVE", "1")
        adapter = PromptAdapter()
        assert adapter.settings.interactive is False
        assert isinstance(adapter.primitives, ScriptedPrimitives)

    @pytest.mark.asyncio
    async def test_non_interactive_session_accepts_defaults(self):
        adapter = PromptAdapter(settings=PromptSettings(interactive=False))
        answers = await adapter.prompt(
            [
                {"name": "projectName", "default": "my-app"},
                {"name": "useTS", "type": "confirm", "default": True},
            ]
        )
        assert answers == {"projectName": "my-app", "useTS": True}
