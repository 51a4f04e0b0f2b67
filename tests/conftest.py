"""Shared test fixtures for bureaucrat tests."""

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

os.environ.pop("BUREAUCRAT_LOG", None)


class _StdoutHandler(logging.Handler):
    """A handler that always writes to the *current* sys.stdout.

    Unlike StreamHandler(sys.stdout), this resolves sys.stdout at emit-time
    so it works with pytest's capsys fixture.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            sys.stdout.write(msg + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


@pytest.fixture(autouse=True)
def _setup_logging():
    """Route all bureaucrat loggers to stdout so capsys can capture them."""
    handler = _StdoutHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger("bureaucrat")
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False

    yield

    root_logger.handlers.clear()


def git(cwd: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True)


def init_git(path: Path, branch: str = "main", commit: bool = True) -> Path:
    """Initialize a real git repo, optionally with an initial commit."""
    git(path, "init", "-b", branch)
    git(path, "config", "user.email", "test@test.com")
    git(path, "config", "user.name", "Test")
    git(path, "config", "commit.gpgsign", "false")
    if commit:
        (path / "README.md").write_text("# test\n")
        git(path, "add", "README.md")
        git(path, "commit", "-m", "Initial commit")
    return path


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating git repositories below tmp_path."""
    def _make(name: str = "repo", branch: str = "main", commit: bool = True, bare: bool = False) -> Path:
        root = tmp_path / name
        root.mkdir()
        if bare:
            git(root, "init", "--bare")
            return root
        return init_git(root, branch=branch, commit=commit)
    return _make


@pytest.fixture
def repo(make_repo, monkeypatch):
    """A git repository on feature/GH-123-test, used as the current directory."""
    root = make_repo(branch="feature/GH-123-test")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def git_cmd():
    """Run git in a directory: git_cmd(path, "checkout", "-b", "x")."""
    return git
