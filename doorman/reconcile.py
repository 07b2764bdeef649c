"""Add/remove protocols against the credential file.

Both protocols share one shape::

    tag -> check file -> (show + confirm) -> apply -> DONE
                                  \\-> ABORTED

Any I/O failure (prompt, mkdir, read, write) propagates as a typed
``DoormanError``. Nothing here prints errors or exits; the CLI maps outcomes
and exceptions to messages and exit codes.

Collaborators are passed in explicitly:

- ``store``  : object with ``exists/read/append/write/ensure_parent``
  (see ``doorman.store.CredentialFile``)
- ``confirm``: ``(prompt) -> bool``; may raise ``PromptError``
- ``show``   : ``(text) -> None``; surfaces the block about to be changed
"""

from __future__ import annotations

import enum
from typing import Callable

from doorman.errors import NoKeysFound
from doorman.helpers import say
from doorman.keys import remove_tagged, tag_keys

Confirm = Callable[[str], bool]
Show = Callable[[str], None]

CREATE_PROMPT = "The authorized_keys file does not exist. Do you want to create it? (yes/no): "
ADD_PROMPT = "Do you want to add these keys? (yes/no): "
REMOVE_PROMPT = "Do you want to remove these keys? (yes/no): "


class Outcome(enum.Enum):
    DONE = "done"
    ABORTED = "aborted"  # operator declined
    NOOP = "noop"  # nothing to do


def _tagged_or_fail(raw: bytes | str, identity: str) -> str:
    block = tag_keys(raw, identity)
    if not block:
        raise NoKeysFound(f"no public keys found for user '{identity}'")
    return block


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def add_keys(raw: bytes | str, identity: str, store, confirm: Confirm, show: Show = say) -> Outcome:
    """Append *identity*'s keys to the credential file after confirmation.

    A missing file costs one extra confirmation and is then created with the
    tagged block as its entire content. An existing file is only appended to.
    Keys already present are appended again (no deduplication).
    """
    block = _tagged_or_fail(raw, identity)

    exists = store.exists()
    if not exists and not confirm(CREATE_PROMPT):
        return Outcome.ABORTED

    show(f"Keys to be added:\n{block}")
    if not confirm(ADD_PROMPT):
        return Outcome.ABORTED

    store.ensure_parent()
    if exists:
        store.append(block)
    else:
        store.write(block)
    return Outcome.DONE


def remove_keys(raw: bytes | str, identity: str, store, confirm: Confirm, show: Show = say) -> Outcome:
    """Drop every credential line tagged with *identity* after confirmation.

    *raw* is only displayed; matching is done on the ``" " + identity``
    suffix, so lines added for this identity are removed even if the
    published key set has changed since.
    """
    block = _tagged_or_fail(raw, identity)

    if not store.exists():
        return Outcome.NOOP

    show(f"Keys to be removed:\n{block}")
    if not confirm(REMOVE_PROMPT):
        return Outcome.ABORTED

    # Read everything before writing anything.
    contents = store.read()
    store.write(remove_tagged(contents, identity))
    return Outcome.DONE
