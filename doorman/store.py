"""Credential file host: path resolution and owner-only file primitives.

The reconciler only talks to a ``CredentialFile``; everything that touches the
operating system (home lookup, ``mkdir``, ``open``) lives here and surfaces
failures as typed ``DoormanError`` subclasses with the OS error chained.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from doorman.errors import (
    DirectoryCreationError,
    FileReadError,
    FileWriteError,
    IdentityResolutionError,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SSH_DIR_MODE = 0o700
KEYS_FILE_MODE = 0o600

# Undecodable bytes round-trip unchanged.
_ERRORS = "surrogateescape"


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def authorized_keys_path(override: str | None = None) -> Path:
    """Return the credential file path (``~/.ssh/authorized_keys`` by default).

    *override* may use ``~``; it is expanded against the operator's home.
    """
    try:
        if override:
            return Path(override).expanduser()
        return Path.home() / ".ssh" / "authorized_keys"
    except (RuntimeError, KeyError) as exc:
        raise IdentityResolutionError(f"cannot determine home directory: {exc}") from exc


# ---------------------------------------------------------------------------
# Credential file
# ---------------------------------------------------------------------------


class CredentialFile:
    """Single authorized_keys file with append-only and full-rewrite writes."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"CredentialFile({str(self.path)!r})"

    def exists(self) -> bool:
        try:
            os.stat(self.path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise FileReadError(f"cannot stat {self.path}: {exc}") from exc
        return True

    def read(self) -> str:
        """Return the contents exactly as stored (no newline translation)."""
        try:
            with open(self.path, encoding="utf-8", errors=_ERRORS, newline="") as fh:
                return fh.read()
        except (OSError, ValueError) as exc:
            raise FileReadError(f"cannot read {self.path}: {exc}") from exc

    def ensure_parent(self) -> None:
        """Create the parent directory (mode 0700) when missing."""
        parent = self.path.parent
        if parent.is_dir():
            return
        try:
            parent.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(f"cannot create {parent}: {exc}") from exc

    def append(self, text: str) -> None:
        """Append *text* on its own line; existing bytes are never rewritten."""
        try:
            with _open_fd(self.path, os.O_WRONLY | os.O_APPEND) as fh:
                # Start on a new line so entries never fuse.
                if os.fstat(fh.fileno()).st_size > 0:
                    fh.write("\n")
                fh.write(text)
        except (OSError, ValueError) as exc:
            raise FileWriteError(f"cannot append to {self.path}: {exc}") from exc

    def write(self, text: str) -> None:
        """Replace the whole file with *text* (created as 0600 if absent)."""
        try:
            with _open_fd(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC) as fh:
                fh.write(text)
        except (OSError, ValueError) as exc:
            raise FileWriteError(f"cannot write {self.path}: {exc}") from exc


def _open_fd(path: Path, flags: int) -> TextIO:
    """Open *path* with raw *flags* (mode 0600) as untranslated UTF-8 text."""
    fd = os.open(path, flags, KEYS_FILE_MODE)
    try:
        return os.fdopen(fd, "w", encoding="utf-8", errors=_ERRORS, newline="")
    except Exception:
        os.close(fd)
        raise
