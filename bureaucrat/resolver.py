"""Tag resolver: find an issue reference in a git branch name.

A branch such as ``feature/GH-1234-login`` resolves to ``Tag("GH", "1234")``
when ``GH`` is a configured code. CVE identifiers (``CVE-2024-53908``) are
always recognised and take precedence over configured codes.

Matching is done by a small scanner per code instead of one big regex:

    <code> [-] <digits> (end | non-digit)
    CVE - <4 digits> - <digits> (end | -)

Only the leaf segment (after the last ``/``) is examined. When branch
prefixes are configured, the first segment must be one of them.
"""

from __future__ import annotations

from typing import NamedTuple

from .config import Config

CVE_PREFIX = "CVE"
CVE_YEAR_DIGITS = 4
SEPARATOR = "-"


class Tag(NamedTuple):
    """Issue reference resolved from a branch name."""

    prefix: str
    id: str

    def __str__(self) -> str:
        return f"{self.prefix}{SEPARATOR}{self.id}"


def leaf_segment(branch_name: str) -> str:
    """Return the last ``/``-separated component of a branch name."""
    return branch_name.rsplit("/", 1)[-1]


def branch_prefix_allowed(branch_name: str, branch_prefixes: tuple[str, ...] | list[str]) -> bool:
    """Check the leading path segment against the allow-list.

    An empty allow-list accepts every branch. Otherwise the branch needs at
    least two segments and its first one must equal an entry exactly.
    """
    if not branch_prefixes:
        return True
    segments = branch_name.split("/")
    if len(segments) < 2:
        return False
    return segments[0] in branch_prefixes


def _digit_run(text: str, start: int) -> int:
    """Return the index just past the ASCII digit run starting at start."""
    end = start
    while end < len(text) and text[end] in "0123456789":
        end += 1
    return end


def _starts_with_ignore_case(text: str, literal: str) -> bool:
    return text[: len(literal)].upper() == literal.upper()


def match_code(leaf: str, code: str) -> Tag | None:
    """Match ``<code>[-]<digits>`` at the start of leaf.

    The digit run must be followed by the end of the leaf or a non-digit
    character, which always holds once the run is maximal.
    """
    if not code or not _starts_with_ignore_case(leaf, code):
        return None
    pos = len(code)
    if leaf[pos : pos + 1] == SEPARATOR:
        pos += 1
    end = _digit_run(leaf, pos)
    if end == pos:
        return None
    return Tag(code, leaf[pos:end])


def match_cve(leaf: str) -> Tag | None:
    """Match ``CVE-YYYY-N+`` at the start of leaf, ending at ``-`` or end."""
    if not _starts_with_ignore_case(leaf, CVE_PREFIX):
        return None
    pos = len(CVE_PREFIX)
    if leaf[pos : pos + 1] != SEPARATOR:
        return None
    year_start = pos + 1
    year_end = _digit_run(leaf, year_start)
    if year_end - year_start != CVE_YEAR_DIGITS:
        return None
    if leaf[year_end : year_end + 1] != SEPARATOR:
        return None
    seq_start = year_end + 1
    seq_end = _digit_run(leaf, seq_start)
    if seq_end == seq_start:
        return None
    if seq_end < len(leaf) and leaf[seq_end] != SEPARATOR:
        return None
    return Tag(CVE_PREFIX, leaf[year_start:seq_end])


def resolve(branch_name: str, config: Config) -> Tag | None:
    """Resolve the tag for branch_name, or None when nothing applies."""
    if not branch_name:
        return None
    if not branch_prefix_allowed(branch_name, config.branch_prefixes):
        return None

    leaf = leaf_segment(branch_name)
    tag = match_cve(leaf)
    if tag is not None:
        return tag

    for code in config.codes:
        tag = match_code(leaf, code)
        if tag is not None:
            return tag
    return None
