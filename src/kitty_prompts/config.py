"""Prompt engine settings and interactivity detection.

Settings hold the user-facing messages the engine emits itself. They can
be overridden through ``KITTY_PROMPTS_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required"
INVALID_MESSAGE = "Invalid input"
NUMBER_MESSAGE = "Please enter a valid number"
CANCEL_MESSAGE = "Operation cancelled"

ENV_PREFIX = "KITTY_PROMPTS_"

_CI_ENV_VARS = [
    "CI",
    "GITHUB_ACTIONS",
    "JENKINS_HOME",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
    "BUILDKITE",
]

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PromptSettings:
    """Messages and mode used by an adapter.

    Attributes:
        required_message: Error shown when a required field is left empty
        invalid_message: Error shown when a custom validator rejects input
            without giving its own message
        number_message: Error shown when ``number`` input does not parse
        cancel_message: Notice emitted when the user cancels a prompt
        interactive: False when prompts must not wait for a terminal
    """

    required_message: str = REQUIRED_MESSAGE
    invalid_message: str = INVALID_MESSAGE
    number_message: str = NUMBER_MESSAGE
    cancel_message: str = CANCEL_MESSAGE
    interactive: bool = True


def is_interactive(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Detect if running in an interactive terminal.

    Checks:
    1. sys.stdin.isatty() -- True if connected to a terminal
    2. CI environment variables (CI, GITHUB_ACTIONS, JENKINS_HOME, etc.)

    Returns:
        True if interactive, False if non-interactive (CI, piped input, etc.)
    """
    env = os.environ if environ is None else environ

    if not sys.stdin.isatty():
        return False

    for var in _CI_ENV_VARS:
        if env.get(var):
            return False

    return True


def load_settings(environ: Optional[Mapping[str, str]] = None) -> PromptSettings:
    """Build settings from defaults plus ``KITTY_PROMPTS_*`` overrides.

    ``KITTY_PROMPTS_NON_INTERACTIVE`` forces non-interactive mode; otherwise
    :func:`is_interactive` decides.
    """
    env = os.environ if environ is None else environ

    def _message(key: str, fallback: str) -> str:
        value = env.get(f"{ENV_PREFIX}{key}")
        return value if value else fallback

    forced = env.get(f"{ENV_PREFIX}NON_INTERACTIVE", "").strip().lower() in _TRUTHY
    interactive = False if forced else is_interactive(env)
    if not interactive:
        logger.info("Non-interactive mode detected")
        logger.info("  stdin.isatty(): %s", sys.stdin.isatty())
        detected_ci = [k for k in _CI_ENV_VARS if env.get(k)]
        if detected_ci:
            logger.info("  CI env vars: %s", detected_ci)

    return PromptSettings(
        required_message=_message("REQUIRED_MESSAGE", REQUIRED_MESSAGE),
        invalid_message=_message("INVALID_MESSAGE", INVALID_MESSAGE),
        number_message=_message("NUMBER_MESSAGE", NUMBER_MESSAGE),
        cancel_message=_message("CANCEL_MESSAGE", CANCEL_MESSAGE),
        interactive=interactive,
    )


__all__ = [
    "PromptSettings",
    "REQUIRED_MESSAGE",
    "INVALID_MESSAGE",
    "NUMBER_MESSAGE",
    "CANCEL_MESSAGE",
    "is_interactive",
    "load_settings",
]
