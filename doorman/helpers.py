"""Shared utilities for the doorman CLI.

Conventions:
- All human-facing messages go to stdout (info, warn, error, say), errors included.
- ANSI colors are emitted only when stdout is a TTY.
- Confirmation answers are read from an explicitly passed stream.
"""

from __future__ import annotations

import sys
from typing import TextIO

from doorman.errors import PromptError

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------


def _use_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _sgr(code: str, text: str) -> str:
    if _use_color():
        return f"\033[{code}m{text}\033[0m"
    return text


def _green(text: str) -> str:
    return _sgr("32", text)


def _yellow(text: str) -> str:
    return _sgr("33", text)


def _red(text: str) -> str:
    return _sgr("31", text)


# ---------------------------------------------------------------------------
# Messaging (all to stdout)
# ---------------------------------------------------------------------------


def say(msg: str) -> None:
    """Print *msg* verbatim to stdout."""
    print(msg, file=sys.stdout)


def info(msg: str) -> None:
    """Print an informational message to stdout."""
    print(f"{_green('•')} {msg}", file=sys.stdout)


def warn(msg: str) -> None:
    """Print a warning message to stdout."""
    print(f"{_yellow('!')} {msg}", file=sys.stdout)


def error(msg: str) -> None:
    """Print an error message to stdout."""
    print(f"{_red('✗')} {msg}", file=sys.stdout)


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def confirm(prompt: str, stream: TextIO | None = None) -> bool:
    """Ask *prompt* on stdout and read one answer line from *stream*.

    Only a literal ``yes`` (case-insensitive, surrounding whitespace ignored)
    confirms. EOF without a newline counts as whatever was typed so far.
    KeyboardInterrupt counts as a decline.

    Raises PromptError if the stream cannot be read.
    """
    reader = stream if stream is not None else sys.stdin
    sys.stdout.write(prompt)
    sys.stdout.flush()
    try:
        line = reader.readline()
    except KeyboardInterrupt:
        print(file=sys.stdout)
        return False
    except (OSError, ValueError) as exc:
        raise PromptError(f"cannot read confirmation: {exc}") from exc
    return line.strip().lower() == "yes"
