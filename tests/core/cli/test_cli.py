"""Tests for the CLI entry point."""

import re

from click.testing import CliRunner

from ideathread.core.cli import main

COMMANDS = [
    "new",
    "continue",
    "reflect",
    "edit",
    "show",
    "timeline",
    "dates",
    "search",
    "ref",
    "rename",
    "rm",
    "rm-entry",
    "sync",
]


def _invoke(tmp_config_file, *args, **kwargs):
    return CliRunner().invoke(main, ["--config", tmp_config_file, *args], **kwargs)


def _created_ids(output):
    thread_id = re.search(r"Created (\S+)", output).group(1)
    entry_id = re.search(r"Entry (\S+)", output).group(1)
    return thread_id, entry_id


class TestCliGroup:
    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "idea threads" in result.output
        for name in COMMANDS:
            assert name in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_timeline_help(self):
        result = CliRunner().invoke(main, ["timeline", "--help"])
        assert result.exit_code == 0
        assert "--by" in result.output


class TestCapture:
    def test_new_then_show(self, tmp_config_file):
        result = _invoke(tmp_config_file, "new", "First thought", "--title", "Kickoff")
        assert result.exit_code == 0, result.output
        thread_id, entry_id = _created_ids(result.output)
        assert "-kickoff-" in thread_id

        shown = _invoke(tmp_config_file, "show", thread_id)
        assert shown.exit_code == 0
        assert "First thought" in shown.output
        assert entry_id in shown.output

    def test_new_rejects_blank_content(self, tmp_config_file):
        result = _invoke(tmp_config_file, "new", "   ")
        assert result.exit_code != 0
        assert "Content cannot be empty" in result.output

    def test_continue_reflect_edit(self, tmp_config_file):
        thread_id, entry_id = _created_ids(_invoke(tmp_config_file, "new", "start").output)

        assert _invoke(tmp_config_file, "continue", thread_id, "second").exit_code == 0
        reflected = _invoke(tmp_config_file, "reflect", thread_id, "a reply")
        assert reflected.exit_code == 0
        edited = _invoke(tmp_config_file, "edit", entry_id, "start, revised")
        assert edited.exit_code == 0
        assert f"Updated {entry_id}" in edited.output

        shown = _invoke(tmp_config_file, "show", thread_id).output
        assert "start, revised" in shown
        assert "second" in shown
        assert "[ai]" in shown

    def test_continue_missing_thread(self, tmp_config_file):
        result = _invoke(tmp_config_file, "continue", ".ideas/2024/01/none.md", "x")
        assert result.exit_code != 0
        assert "Thread not found" in result.output


class TestView:
    def test_show_path_outside_ideas_root(self, tmp_config_file):
        result = _invoke(tmp_config_file, "show", "../../etc/passwd")
        assert result.exit_code != 0
        assert "Thread not found" in result.output

    def test_empty_timeline(self, tmp_config_file):
        result = _invoke(tmp_config_file, "timeline")
        assert result.exit_code == 0
        assert "No ideas yet." in result.output

    def test_timeline_and_dates(self, tmp_config_file):
        _invoke(tmp_config_file, "new", "morning idea")
        for by in ("entry", "thread"):
            result = _invoke(tmp_config_file, "timeline", "--by", by)
            assert result.exit_code == 0
            assert "today" in result.output
            assert "morning idea" in result.output

        dates = _invoke(tmp_config_file, "dates")
        assert re.search(r"^\d{4}-\d{2}-\d{2}$", dates.output, re.MULTILINE)

    def test_search(self, tmp_config_file):
        _invoke(tmp_config_file, "new", "rust lifetimes")
        assert "rust-lifetimes" in _invoke(tmp_config_file, "search", "RUST").output
        assert "No matches." in _invoke(tmp_config_file, "search", "haskell").output

    def test_ref_round_trip(self, tmp_config_file):
        thread_id, entry_id = _created_ids(_invoke(tmp_config_file, "new", "linked").output)
        ref = _invoke(tmp_config_file, "ref", thread_id, "--entry", entry_id).output.strip()
        assert ref.startswith("idea://")
        assert f"entry={entry_id}" in ref

        shown = _invoke(tmp_config_file, "show", ref)
        assert shown.exit_code == 0
        assert "linked" in shown.output


class TestManage:
    def test_rename(self, tmp_config_file):
        thread_id, _ = _created_ids(_invoke(tmp_config_file, "new", "old name").output)
        result = _invoke(tmp_config_file, "rename", thread_id, "New Name")
        assert result.exit_code == 0
        assert "-new-name-" in result.output

    def test_rm_with_confirmation(self, tmp_config_file):
        thread_id, _ = _created_ids(_invoke(tmp_config_file, "new", "bye").output)
        assert _invoke(tmp_config_file, "rm", thread_id, "--yes").exit_code == 0
        assert _invoke(tmp_config_file, "show", thread_id).exit_code != 0

    def test_rm_unknown_thread_fails(self, tmp_config_file):
        result = _invoke(tmp_config_file, "rm", ".ideas/2024/01/2024-01-15-typo-1.md", "--yes")
        assert result.exit_code != 0
        assert "Thread not found" in result.output

    def test_rm_aborts_without_confirmation(self, tmp_config_file):
        thread_id, _ = _created_ids(_invoke(tmp_config_file, "new", "stay").output)
        result = _invoke(tmp_config_file, "rm", thread_id, input="n\n")
        assert result.exit_code != 0
        assert _invoke(tmp_config_file, "show", thread_id).exit_code == 0

    def test_rm_entry_last_entry_removes_thread(self, tmp_config_file):
        thread_id, entry_id = _created_ids(_invoke(tmp_config_file, "new", "lonely").output)
        assert _invoke(tmp_config_file, "rm-entry", entry_id).exit_code == 0
        assert "No ideas yet." in _invoke(tmp_config_file, "timeline").output

    def test_sync(self, tmp_config_file):
        result = _invoke(tmp_config_file, "sync")
        assert result.exit_code == 0
        assert "Synced 0, conflicts 0 (local)" in result.output

    def test_unknown_backend(self, tmp_config_file, monkeypatch):
        monkeypatch.setenv("IDEATHREAD_STORAGE__BACKEND", "cloud")
        result = _invoke(tmp_config_file, "sync")
        assert result.exit_code != 0
        assert "Unknown storage backend" in result.output
