"""doorman: grant and revoke SSH access from an identity's published public keys."""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("doorman")
except Exception:
    __version__ = "0.3.0"  # fallback for editable installs without metadata
