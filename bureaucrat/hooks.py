"""
Install and remove the bureaucrat prepare-commit-msg hook.

Handles: hook_script, is_bureaucrat_hook, install_hook, uninstall_hook.
"""

import logging
from pathlib import Path

from .errors import BareRepositoryError, ForeignHookError, HookExistsError
from .git import Repository
from .utils import truncate_path

logger = logging.getLogger(__name__)

HOOK_MARKER = "# bureaucrat prepare-commit-msg hook"

OVERWRITE_HINT = "Use `bureaucrat install --overwrite` to install hook anyways"


def hook_script() -> str:
    """Shell script git runs as prepare-commit-msg."""
    return (
        "#!/usr/bin/env bash\n"
        f"{HOOK_MARKER}\n"
        "# Tags commit messages with the issue reference from the branch name\n\n"
        "# Find bureaucrat command (PATH, local venv, or python -m)\n"
        'if command -v bureaucrat &> /dev/null; then\n    exec bureaucrat run "$@"\n'
        'elif [ -f ".venv/bin/bureaucrat" ]; then\n    exec .venv/bin/bureaucrat run "$@"\n'
        'elif [ -f "venv/bin/bureaucrat" ]; then\n    exec venv/bin/bureaucrat run "$@"\n'
        'else\n    exec python3 -m bureaucrat run "$@"\nfi\n'
    )


def is_bureaucrat_hook(hook_path: Path) -> bool:
    """Check whether the hook at hook_path was written by bureaucrat."""
    try:
        return HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hook(repository: Repository, overwrite: bool = False) -> Path:
    """Write the prepare-commit-msg hook into repository.

    A hook from another tool is only replaced when overwrite is set.
    Returns the hook path.
    """
    if repository.is_bare:
        raise BareRepositoryError()

    hook_path = repository.hook_path()
    if hook_path.exists():
        if is_bureaucrat_hook(hook_path):
            logger.debug("Refreshing existing bureaucrat hook")
        elif not overwrite:
            raise HookExistsError(hook_path, OVERWRITE_HINT)
        else:
            logger.debug("Overwriting existing hook")

    hook_path.parent.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(hook_script(), encoding="utf-8")
    hook_path.chmod(0o755)
    return hook_path


def uninstall_hook(repository: Repository) -> bool:
    """Remove the bureaucrat hook. Returns False when there was none."""
    hook_path = repository.hook_path()
    if not hook_path.exists():
        logger.debug("No hook at %s", truncate_path(hook_path))
        return False
    if not is_bureaucrat_hook(hook_path):
        raise ForeignHookError(hook_path)
    hook_path.unlink()
    return True
