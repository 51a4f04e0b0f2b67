"""Git access for bureaucrat through the git command line."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .config import find_config
from .errors import GitError, NoBranchError, NoConfigurationError, NoRepositoryError

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 10
HOOK_NAME = "prepare-commit-msg"


def run_git(args: list[str], cwd: Path | str | None = None) -> tuple[bool, str, str]:
    """Run a git command, return (success, stdout, stderr)."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e
    except subprocess.TimeoutExpired as e:
        raise GitError(f"'git {' '.join(args)}' timed out") from e
    return result.returncode == 0, result.stdout.strip(), result.stderr.strip()


class Repository:
    """The git repository bureaucrat is working in."""

    def __init__(self, git_dir: Path, workdir: Path | None) -> None:
        self.git_dir = git_dir
        self.workdir = workdir

    @property
    def is_bare(self) -> bool:
        return self.workdir is None

    @classmethod
    def open(cls, cwd: Path | str | None = None) -> Repository:
        """Open the repository containing cwd (default: current directory)."""
        cwd = Path(cwd) if cwd is not None else Path.cwd()
        ok, git_dir, stderr = run_git(["rev-parse", "--absolute-git-dir"], cwd)
        if not ok:
            if "not a git repository" in stderr.lower():
                raise NoRepositoryError()
            raise GitError(stderr or "git rev-parse failed")

        ok, bare, stderr = run_git(["rev-parse", "--is-bare-repository"], cwd)
        if not ok:
            raise GitError(stderr)
        workdir = None
        if bare != "true":
            ok, toplevel, stderr = run_git(["rev-parse", "--show-toplevel"], cwd)
            # Inside .git itself there is no work tree to report.
            if ok and toplevel:
                workdir = Path(toplevel)
        logger.debug("Opened repository at %s", git_dir)
        return cls(Path(git_dir), workdir)

    def _git(self, *args: str) -> tuple[bool, str, str]:
        return run_git(list(args), self.workdir or self.git_dir)

    def current_branch(self) -> str:
        """Name of the checked-out branch; ``HEAD`` when detached."""
        ok, branch, stderr = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if ok:
            return branch
        # Unborn branch: HEAD points at a ref that has no commit yet.
        ok_sym, _, _ = self._git("symbolic-ref", "-q", "HEAD")
        if ok_sym:
            raise NoBranchError()
        raise GitError(stderr or "could not read HEAD")

    def discover_config(self) -> Path:
        """Path of the configuration file in the work tree root."""
        if self.workdir is None:
            logger.warning("Could not find work directory")
            raise NoConfigurationError()
        path = find_config(self.workdir)
        if path is None:
            raise NoConfigurationError()
        return path

    def hook_path(self, name: str = HOOK_NAME) -> Path:
        """Where git looks for hook name.

        Honours core.hooksPath and points linked worktrees at the common
        hooks directory.
        """
        ok, path, stderr = self._git("rev-parse", "--path-format=absolute", "--git-path", f"hooks/{name}")
        if not ok or not path:
            raise GitError(stderr or f"could not resolve hooks/{name}")
        return Path(path)
