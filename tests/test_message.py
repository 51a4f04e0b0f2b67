"""Tests for bureaucrat.message - tag insertion into commit messages."""

import pytest

from bureaucrat.errors import MessageFileNotFoundError
from bureaucrat.message import has_tag, insert_tag, render_tag, tag_message_file
from bureaucrat.resolver import Tag

GIT_COMMIT_MSG = (
    "\n# Please enter the commit message for your changes. Lines starting\n"
    "# with '#' will be ignored, and an empty message aborts the commit.\n"
)

GH = Tag("GH", "123")
SCISSORS = "# ------------------------ >8 ------------------------\n"


class TestRenderTag:
    def test_code(self):
        assert render_tag(GH) == "GH-123"

    def test_cve(self):
        assert render_tag(Tag("CVE", "2024-53908")) == "CVE-2024-53908"


class TestHasTag:
    def test_present_in_subject(self):
        assert has_tag("GH-123 Fix login\n", GH)

    def test_present_in_body(self):
        assert has_tag("Fix login\n\nRefs GH-123\n", GH)

    def test_absent(self):
        assert not has_tag("Fix login\n", GH)

    def test_longer_id_is_not_a_match(self):
        assert not has_tag("GH-1234 Fix login\n", GH)

    def test_embedded_in_other_code_is_not_a_match(self):
        assert not has_tag("XGH-123 Fix login\n", GH)

    def test_comment_lines_are_ignored(self):
        assert not has_tag("Fix\n# On branch feature/GH-123-test\n", GH)

    def test_case_insensitive(self):
        assert has_tag("gh-123 fix\n", GH)

    def test_verbose_diff_below_scissors_is_ignored(self):
        message = GIT_COMMIT_MSG + SCISSORS + (
            "# Do not modify or remove the line above.\n"
            "diff --git a/CHANGELOG b/CHANGELOG\n"
            "+Fixed login (GH-123)\n"
        )
        assert not has_tag(message, GH)
        assert insert_tag(message, GH).startswith("GH-123 ")

    def test_tag_above_scissors_still_found(self):
        message = "Closes GH-123\n" + SCISSORS + "+unrelated\n"
        assert has_tag(message, GH)


class TestInsertTag:
    def test_prepends_to_first_line(self):
        assert insert_tag("Fix login\n\nBody\n", GH) == "GH-123 Fix login\n\nBody\n"

    def test_git_template(self):
        result = insert_tag(GIT_COMMIT_MSG, GH)
        assert result == "GH-123 " + GIT_COMMIT_MSG
        assert result.splitlines()[0] == "GH-123 "

    def test_empty_message(self):
        assert insert_tag("", GH) == "GH-123 "

    def test_already_tagged_unchanged(self):
        message = "GH-123 Fix login\n"
        assert insert_tag(message, GH) == message

    @pytest.mark.parametrize("message", ["", "Fix\n", GIT_COMMIT_MSG, "Refs GH-12\n"])
    def test_idempotent(self, message):
        once = insert_tag(message, GH)
        assert insert_tag(once, GH) == once


class TestTagMessageFile:
    def test_writes_tag(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text(GIT_COMMIT_MSG)
        assert tag_message_file(path, GH) is True
        assert path.read_text() == "GH-123 " + GIT_COMMIT_MSG

    def test_second_run_is_noop(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text(GIT_COMMIT_MSG)
        tag_message_file(path, GH)
        assert tag_message_file(path, GH) is False
        assert path.read_text() == "GH-123 " + GIT_COMMIT_MSG

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("Fix\n")
        tag_message_file(path, GH)
        assert [p.name for p in tmp_path.iterdir()] == ["COMMIT_EDITMSG"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(MessageFileNotFoundError):
            tag_message_file(tmp_path / "missing", GH)

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("Fix\n")
        tag_message_file(str(path), GH)
        assert path.read_text() == "GH-123 Fix\n"
