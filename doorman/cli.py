"""CLI entrypoint for doorman.

    doorman add <identity>       # authorize the identity's published keys
    doorman remove <identity>    # revoke every key tagged with the identity

This is the only layer that knows about exit codes.
"""

from __future__ import annotations

import argparse
import functools
import math
import sys
from typing import TextIO

from doorman import __version__
from doorman.config import load_config
from doorman.errors import ConfigError, DoormanError, FetchError, NoKeysFound, UsageError
from doorman.fetch import fetch_keys
from doorman.helpers import confirm, error, info, say
from doorman.reconcile import Outcome, add_keys, remove_keys
from doorman.store import CredentialFile, authorized_keys_path

_ACTIONS = {
    "add": (add_keys, "Keys added successfully!", "error adding keys to authorized_keys:"),
    "remove": (remove_keys, "Keys removed successfully!", "error removing keys from authorized_keys:"),
}


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage on stdout and raises instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stdout)
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="doorman",
        description="Grant or revoke SSH access using an identity's published public keys.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"doorman {__version__}",
    )

    sub = parser.add_subparsers(dest="command")
    sub.required = True

    p_add = sub.add_parser("add", help="Append the identity's keys to authorized_keys")
    p_add.add_argument("identity", help="Remote account whose keys are fetched and tagged")

    p_remove = sub.add_parser("remove", help="Remove every authorized_keys entry tagged with the identity")
    p_remove.add_argument("identity", help="Remote account whose tagged entries are removed")

    return parser


def _timeout(cfg: dict) -> float:
    value = cfg["source"]["timeout"]
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid source timeout: {value!r}") from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"invalid source timeout: {value!r} (must be a positive number)")
    return timeout


def _url_template(cfg: dict) -> str:
    template = cfg["source"]["url"]
    if not isinstance(template, str):
        raise ConfigError(f"invalid source url: {template!r}")
    try:
        template.format(identity="")
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(f"invalid source url {template!r}: only {{identity}} may be substituted") from exc
    return template


def _store_override(cfg: dict) -> str | None:
    value = cfg["store"]["authorized_keys"]
    if not isinstance(value, str):
        raise ConfigError(f"invalid store authorized_keys: {value!r}")
    return value or None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run(argv: list[str] | None = None, *, stdin: TextIO | None = None) -> None:
    """Parse *argv*, fetch keys, and apply the requested action.

    Raises DoormanError (or a subclass) on any failure.
    """
    args = _build_parser().parse_args(argv)
    identity: str = args.identity
    if not identity or any(ch.isspace() for ch in identity):
        raise UsageError(f"invalid identity {identity!r}: must be non-empty and contain no whitespace")

    cfg = load_config()
    url_template, timeout, override = _url_template(cfg), _timeout(cfg), _store_override(cfg)
    try:
        raw = fetch_keys(identity, url_template=url_template, timeout=timeout)
    except FetchError as exc:
        raise FetchError(f"error fetching keys: {exc}") from exc

    action, done_msg, failure = _ACTIONS[args.command]
    ask = functools.partial(confirm, stream=stdin if stdin is not None else sys.stdin)
    try:
        store = CredentialFile(authorized_keys_path(override))
        outcome = action(raw, identity, store, ask)
    except NoKeysFound:
        raise
    except DoormanError as exc:
        raise type(exc)(f"{failure} {exc}") from exc

    if outcome is Outcome.DONE:
        say(done_msg)
    elif outcome is Outcome.ABORTED:
        info("Operation aborted.")
    else:
        info("The authorized_keys file does not exist. Nothing to remove.")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    try:
        run(argv)
    except DoormanError as exc:
        error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
