"""Small path helpers shared by the CLI and hook installer."""

from pathlib import Path


def truncate_path(path: Path | str) -> Path:
    """Return path relative to the current directory when it lies below it.

    Paths outside the current directory are returned unchanged.
    """
    path = Path(path)
    try:
        cwd = Path.cwd().resolve()
    except OSError:
        return path
    try:
        return path.resolve().relative_to(cwd)
    except ValueError:
        return path
