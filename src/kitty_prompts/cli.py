"""``kitty-prompts`` command line.

Runs a YAML question file through a :class:`PromptAdapter` and prints the
answers as JSON. This is the outermost caller, so it is the place that
turns a cancelled session into a process exit.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from ruamel.yaml import YAML

from .adapter import PromptAdapter
from .config import load_settings
from .exceptions import PromptCancelled, PromptError
from .testing import ScriptedPrimitives

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="kitty-prompts",
    help="Ask scaffolding questions from a YAML file.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def callback() -> None:
    """Scaffolding prompt tools."""


def load_question_file(path: Path) -> List[Any]:
    """Read a list of questions (or a single question) from YAML."""
    yaml = YAML(typ="safe")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.load(f)

    if data is None:
        return []
    if isinstance(data, dict) and "questions" in data:
        data = data["questions"]
    return data if isinstance(data, list) else [data]


def _parse_answer_overrides(pairs: List[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got '{pair}'", param_hint="--answer")
        try:
            overrides[name] = json.loads(raw)
        except json.JSONDecodeError:
            overrides[name] = raw
    return overrides


@app.command()
def ask(
    questions_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML file with questions"),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        help="Accept defaults instead of prompting",
    ),
    answer: Optional[List[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer NAME=VALUE in non-interactive runs (VALUE parsed as JSON when possible)",
    ),
) -> None:
    """Ask the questions in QUESTIONS_FILE and print the answers as JSON."""
    try:
        questions = load_question_file(questions_file)
    except Exception as exc:
        console.print(f"[red]Error:[/red] Could not read {questions_file}: {exc}")
        raise typer.Exit(1)
    logger.debug("Loaded %d question(s) from %s", len(questions), questions_file)

    settings = load_settings()
    overrides = _parse_answer_overrides(answer or [])

    primitives = None
    if non_interactive or not settings.interactive:
        primitives = ScriptedPrimitives(overrides)
    elif overrides:
        console.print("[yellow]--answer is only used with --non-interactive[/yellow]")
    adapter = PromptAdapter(primitives=primitives, settings=settings)

    try:
        answers = asyncio.run(adapter.prompt(questions))
    except PromptCancelled:
        raise typer.Exit(0)
    except PromptError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    console.print_json(json.dumps(answers, default=str))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
