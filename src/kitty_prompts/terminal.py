"""Terminal primitives built on Rich, Typer and readchar.

Text and password entry use ``typer.prompt`` with a validation loop.
Confirm, select and multiselect render an arrow-key panel with
``rich.live.Live``; the autocomplete variants add type-to-filter. Escape
or Ctrl+C answers :data:`~kitty_prompts.primitives.CANCEL`.

Key handling blocks, so every primitive runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, List, Optional, Sequence

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import Option
from .primitives import CANCEL
from .validation import Validator


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.BACKSPACE:
        return "backspace"

    if key == readchar.key.SPACE:
        return "space"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _window(indices: List[int], cursor: int, max_items: Optional[int]) -> List[int]:
    """Slice of ``indices`` to render, keeping the cursor visible."""
    if not max_items or len(indices) <= max_items:
        return indices
    position = indices.index(cursor) if cursor in indices else 0
    start = min(max(0, position - max_items + 1), len(indices) - max_items)
    return indices[start:start + max_items]


def choose(
    console: Console,
    message: str,
    options: Sequence[Option],
    *,
    initial_values: Iterable[Any] = (),
    cursor_value: Any = None,
    multiple: bool = False,
    required: bool = False,
    filterable: bool = False,
    max_items: Optional[int] = None,
    placeholder: Optional[str] = None,
) -> Any:
    """Interactive selection using arrow keys with Rich Live display.

    Returns the chosen value (a list of values when ``multiple``), or
    ``CANCEL`` on Escape / Ctrl+C.
    """
    if not options:
        return [] if multiple else None

    initial = list(initial_values)
    selected: set[int] = {i for i, option in enumerate(options) if option.value in initial}
    cursor = 0
    anchor = cursor_value if cursor_value is not None else (initial[0] if initial else None)
    for i, option in enumerate(options):
        if option.value == anchor:
            cursor = i
            break
    query = ""
    warning = ""

    def matches() -> List[int]:
        if not query:
            return list(range(len(options)))
        needle = query.lower()
        return [i for i, option in enumerate(options) if needle in option.label.lower()]

    def build_panel() -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        if filterable:
            shown = escape(query) if query else f"[dim]{escape(placeholder or 'Type to filter')}[/dim]"
            table.add_row("", f"Search: {shown}")

        visible = matches()
        for i in _window(visible, cursor, max_items):
            option = options[i]
            pointer = "▶" if i == cursor else " "
            label = f"[cyan]{escape(option.label)}[/cyan]"
            if option.hint:
                label += f" [dim]({escape(option.hint)})[/dim]"
            if multiple:
                indicator = "[cyan]☑" if i in selected else "[bright_black]☐"
                label = f"{indicator} {label}"
            table.add_row(pointer, label)
        if not visible:
            table.add_row("", "[dim]No matches[/dim]")

        if warning:
            table.add_row("", f"[yellow]{escape(warning)}[/yellow]")
        table.add_row("", "")
        if multiple:
            help_text = "Use ↑/↓ to move, Space to toggle, Enter to confirm, Esc to cancel"
        else:
            help_text = "Use ↑/↓ to navigate, Enter to select, Esc to cancel"
        table.add_row("", f"[dim]{help_text}[/dim]")

        return Panel(table, title=f"[bold]{escape(message)}[/bold]", border_style="cyan", padding=(1, 2))

    console.print()

    with Live(build_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                return CANCEL

            visible = matches()
            warning = ""
            if key == "escape":
                return CANCEL
            if key in ("up", "down") and visible:
                position = visible.index(cursor) if cursor in visible else 0
                step = -1 if key == "up" else 1
                cursor = visible[(position + step) % len(visible)]
            elif key == "space" and multiple:
                if cursor in selected:
                    selected.remove(cursor)
                else:
                    selected.add(cursor)
            elif key == "enter":
                if multiple:
                    values = [options[i].value for i in range(len(options)) if i in selected]
                    if values or not required:
                        return values
                    warning = "Select at least one option"
                elif cursor in visible:
                    return options[cursor].value
            elif filterable and key == "space":
                query += " "
            elif filterable and key == "backspace":
                query = query[:-1]
            elif filterable and len(key) == 1 and key.isprintable():
                query += key

            if filterable:
                visible = matches()
                if visible and cursor not in visible:
                    cursor = visible[0]

            live.update(build_panel(), refresh=True)


class TerminalPrimitives:
    """Primitive set rendering to a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def _read_text(
        self,
        message: str,
        *,
        placeholder: Optional[str] = None,
        default_value: Optional[str] = None,
        initial_value: Any = None,
        validate: Optional[Validator] = None,
        hide_input: bool = False,
    ) -> Any:
        default = initial_value if initial_value is not None else default_value
        prompt_text = message
        if placeholder and default in (None, ""):
            prompt_text = f"{message} ({placeholder})"

        while True:
            try:
                value = typer.prompt(
                    prompt_text,
                    default="" if default is None else str(default),
                    show_default=default not in (None, "") and not hide_input,
                    hide_input=hide_input,
                )
            except (typer.Abort, KeyboardInterrupt, EOFError):
                return CANCEL

            if value == "" and default_value is not None:
                value = default_value

            error = validate(value) if validate is not None else None
            if error is None:
                return value
            self.console.print(f"[red]{escape(error)}[/red]")

    async def text(
        self,
        *,
        name: str,
        message: str,
        placeholder: Optional[str] = None,
        default_value: Optional[str] = None,
        initial_value: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Any:
        return await asyncio.to_thread(
            self._read_text,
            message,
            placeholder=placeholder,
            default_value=default_value,
            initial_value=initial_value,
            validate=validate,
        )

    async def password(
        self,
        *,
        name: str,
        message: str,
        mask: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Any:
        return await asyncio.to_thread(self._read_text, message, validate=validate, hide_input=True)

    async def confirm(
        self,
        *,
        name: str,
        message: str,
        initial_value: bool = False,
        active: str = "Yes",
        inactive: str = "No",
    ) -> Any:
        options = [Option(value=True, label=active), Option(value=False, label=inactive)]
        return await asyncio.to_thread(
            choose, self.console, message, options, initial_values=[bool(initial_value)]
        )

    async def select(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_value: Any = None,
        max_items: Optional[int] = None,
    ) -> Any:
        return await asyncio.to_thread(
            choose,
            self.console,
            message,
            options,
            cursor_value=initial_value,
            max_items=max_items,
        )

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
    ) -> Any:
        return await asyncio.to_thread(
            choose,
            self.console,
            message,
            options,
            initial_values=initial_values or (),
            cursor_value=cursor_at,
            multiple=True,
            required=required,
            max_items=max_items,
        )

    async def autocomplete(
        self,
        *,
        name: str,
        message: str,
        options: Sequence[Option],
        initial_value: Any = None,
        max_items: Optional[int] = None,
        placeholder: Optional[str] = None,
    ) -> Any:
        return await asyncio.to_thread(
            choose,
            self.console,
            message,
            options,
            cursor_value=initial_value,
            filterable=True,
            max_items=max_items,
            placeholder=placeholder,
        )

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
    ) -> Any:
        return await asyncio.to_thread(
            choose,
            self.console,
            message,
            options,
            initial_values=initial_values or (),
            multiple=True,
            required=required,
            filterable=True,
            max_items=max_items,
            placeholder=placeholder,
        )

    def log_error(self, message: str) -> None:
        self.console.print(f"[red]✖ {escape(message)}[/red]")

    def intro(self, message: str) -> None:
        self.console.print(f"[cyan]┌[/cyan]  [bold]{escape(message)}[/bold]")

    def outro(self, message: str) -> None:
        self.console.print(f"[cyan]└[/cyan]  {escape(message)}")


__all__ = ["TerminalPrimitives", "choose", "get_key"]
