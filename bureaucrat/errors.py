"""Exception hierarchy for bureaucrat.

Every error carries the exit code the CLI should return and the level it
should be logged at. Some conditions (no config, unborn branch) are not
failures for a commit hook and exit 0.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .utils import truncate_path


class BureaucratError(Exception):
    """Base class for all bureaucrat errors."""

    exit_code = 1
    log_level = logging.ERROR
    hint = ""


class ConfigError(BureaucratError):
    """Raised when a configuration file cannot be read or is malformed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Invalid configuration in {truncate_path(path)}: {reason}")
        self.path = Path(path)
        self.reason = reason


class NoConfigurationError(BureaucratError):
    """No configuration file in the repository; bureaucrat is inactive."""

    exit_code = 0
    log_level = logging.WARNING

    def __init__(self) -> None:
        super().__init__("No configuration file was found")


class NoRepositoryError(BureaucratError):
    def __init__(self) -> None:
        super().__init__("Could not find repository")


class NoBranchError(BureaucratError):
    """HEAD points at a branch without commits."""

    exit_code = 0
    log_level = logging.WARNING

    def __init__(self) -> None:
        super().__init__("Branch doesn't exist yet")


class GitError(BureaucratError):
    """Unexpected failure while talking to git."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Error while accessing repository: {message}")


class BareRepositoryError(BureaucratError):
    def __init__(self) -> None:
        super().__init__("Repository is bare; not installing hook")


class HookExistsError(BureaucratError):
    """A prepare-commit-msg hook not written by bureaucrat is in the way."""

    def __init__(self, path: Path, hint: str = "") -> None:
        super().__init__(f"Hook already exists at {truncate_path(path)}")
        self.path = path
        self.hint = hint


class ForeignHookError(BureaucratError):
    """Refusing to remove a hook that bureaucrat did not install."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not removing {truncate_path(path)}: hook was not installed by bureaucrat")
        self.path = path


class MessageFileNotFoundError(BureaucratError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path
