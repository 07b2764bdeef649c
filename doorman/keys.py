"""Key tagging and owner matching.

A stored key line carries its owner as the final token::

    ssh-ed25519 AAAAC3Nz... alice

Tagging appends ``" " + identity`` to every published key line; removal drops
exactly the lines whose suffix is ``" " + identity``, so ``bob`` never matches
``bobby`` and an identity embedded mid-line is ignored.
"""

from __future__ import annotations


def tag_keys(raw: bytes | str, identity: str) -> str:
    """Return *raw* key lines, stripped, non-blank, each tagged with *identity*.

    Lines are joined with ``"\\n"``, without a trailing newline. Empty or
    whitespace-only input yields ``""``.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    tagged = [f"{line} {identity}" for line in (ln.strip() for ln in text.split("\n")) if line]
    return "\n".join(tagged)


def remove_tagged(contents: str, identity: str) -> str:
    """Return *contents* without the lines owned by *identity*.

    Lines are compared as-is (no stripping): a line is dropped only if it ends
    with exactly ``" " + identity``. Survivors keep their order.
    """
    suffix = f" {identity}"
    kept = [line for line in contents.split("\n") if not line.endswith(suffix)]
    return "\n".join(kept)
