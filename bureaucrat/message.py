"""Insert a resolved tag into a commit message.

The tag is prepended to the first line as ``"<prefix>-<id> "``. If the
message already mentions the tag (amend, re-run hook, typed by hand) it is
left alone, so applying the hook twice gives the same result as once.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from .errors import MessageFileNotFoundError
from .resolver import Tag

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"
# Everything below this line (e.g. the diff from `git commit -v`) is dropped by git.
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def render_tag(tag: Tag) -> str:
    """Literal text of a tag, e.g. ``GH-1234``."""
    return str(tag)


def _tag_regex(tag: Tag) -> re.Pattern:
    # GH-12 must not be found inside GH-123 or XGH-12.
    return re.compile(rf"(?<![\w-]){re.escape(render_tag(tag))}(?!\d)", re.IGNORECASE)


def has_tag(message: str, tag: Tag) -> bool:
    """Check whether the tag already appears outside git comment lines."""
    pattern = _tag_regex(tag)
    for line in message.splitlines():
        if line == SCISSORS_LINE:
            break
        if line.startswith(COMMENT_CHAR):
            continue
        if pattern.search(line):
            return True
    return False


def insert_tag(message: str, tag: Tag) -> str:
    """Prepend the tag to the first line of message unless already present."""
    if has_tag(message, tag):
        return message
    return f"{render_tag(tag)} {message}"


def tag_message_file(path: Path | str, tag: Tag) -> bool:
    """Insert tag into the commit message file at path.

    The file is replaced atomically. Returns True when it was modified.
    """
    path = Path(path)
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise MessageFileNotFoundError(path) from e

    updated = insert_tag(contents, tag)
    if updated == contents:
        logger.debug("Commit message already references %s", render_tag(tag))
        return False

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".bureaucrat-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(updated)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Tagged commit message with %s", render_tag(tag))
    return True
