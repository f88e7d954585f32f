"""Pytest fixtures for prompt engine tests."""

from typing import Any, Dict, List, Tuple

import pytest

from kitty_prompts.testing import ScriptedPrimitives, TestAdapter


class DictStorage:
    """In-memory storage recording every write."""

    def __init__(self, data: Dict[str, Any] | None = None):
        self.data: Dict[str, Any] = dict(data or {})
        self.writes: List[Tuple[str, Any]] = []

    def get(self, name: str) -> Any:
        return self.data.get(name)

    def set(self, name: str, value: Any) -> None:
        self.data[name] = value
        self.writes.append((name, value))


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return DictStorage()


@pytest.fixture
def primitives():
    """Scripted primitives with no answers (accept defaults)."""
    return ScriptedPrimitives()


@pytest.fixture
def make_adapter():
    """Factory for test adapters answering from a mapping."""

    def _make(answers: Dict[str, Any] | None = None) -> TestAdapter:
        return TestAdapter(answers)

    return _make


@pytest.fixture
def make_storage():
    """Factory for pre-seeded in-memory storage."""
    return DictStorage
