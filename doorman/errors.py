"""Error taxonomy.

Every failure is raised with its originating cause chained (``raise ... from``).
Operator declines and no-op runs are not errors; see ``doorman.reconcile.Outcome``.
"""

from __future__ import annotations


class DoormanError(Exception):
    pass


class FetchError(DoormanError):
    """Key source transport failure or non-200 status."""


class NoKeysFound(FetchError):
    """The key source answered, but with no usable key lines."""


class IdentityResolutionError(DoormanError):
    """The operator's home directory could not be determined."""


class PromptError(DoormanError):
    """The confirmation input stream failed."""


class DirectoryCreationError(DoormanError):
    pass


class FileReadError(DoormanError):
    pass


class FileWriteError(DoormanError):
    pass


class UsageError(DoormanError):
    pass


class ConfigError(DoormanError):
    """The configuration file or an effective setting is unusable."""
