"""Tests for the convoy command line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from convoy.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def desc_file(tmp_path):
    path = tmp_path / "convoy.txt"
    path.write_text("Convoy tracking 2 issues\nNotify: mayor/\nMolecule: mol-123")
    return path


# ── subscribers ────────────────────────────────────────────

class TestSubscribersShow:

    def test_from_file(self, runner, desc_file):
        result = runner.invoke(cli, ["subscribers", "show", str(desc_file)])
        assert result.exit_code == 0
        assert result.output == "mayor/\n"

    def test_from_stdin(self, runner):
        result = runner.invoke(cli, ["subscribers", "show"], input="x\nSubscribers: a/, b/\n")
        assert result.exit_code == 0
        assert result.output == "a/\nb/\n"

    def test_json(self, runner):
        result = runner.invoke(cli, ["subscribers", "show", "--json"], input="x\nSubscribers: a/, b/")
        assert result.exit_code == 0
        assert json.loads(result.output) == ["a/", "b/"]

    def test_none(self, runner):
        result = runner.invoke(cli, ["subscribers", "show"], input="no metadata here")
        assert result.exit_code == 0
        assert result.output == ""


class TestSubscribersWrite:

    def test_set_migrates(self, runner, desc_file):
        result = runner.invoke(cli, ["subscribers", "set", "-f", str(desc_file), "mayor/", "deacon/"])
        assert result.exit_code == 0
        assert result.output == "Convoy tracking 2 issues\nSubscribers: mayor/, deacon/\nMolecule: mol-123\n"

    def test_set_does_not_touch_file(self, runner, desc_file):
        before = desc_file.read_text()
        runner.invoke(cli, ["subscribers", "set", "-f", str(desc_file), "x/"])
        assert desc_file.read_text() == before

    def test_set_nothing_removes_line(self, runner):
        result = runner.invoke(cli, ["subscribers", "set"], input="Title\nSubscribers: a/\n")
        assert result.exit_code == 0
        assert result.output == "Title\n"

    def test_add_skips_existing(self, runner):
        result = runner.invoke(cli, ["subscribers", "add", "a/", "c/"], input="Title\nSubscribers: a/, b/")
        assert result.exit_code == 0
        assert "Subscribers: a/, b/, c/" in result.output

    def test_add_requires_subscriber(self, runner):
        result = runner.invoke(cli, ["subscribers", "add"], input="Title")
        assert result.exit_code == 2

    def test_remove(self, runner):
        result = runner.invoke(cli, ["subscribers", "remove", "b/"], input="Title\nSubscribers: a/, b/")
        assert result.exit_code == 0
        assert result.output == "Title\nSubscribers: a/\n"

    def test_remove_unknown_warns(self, runner):
        result = runner.invoke(cli, ["subscribers", "remove", "z/"], input="Title\nSubscribers: a/")
        assert result.exit_code == 0
        assert "Subscribers: a/" in result.output
        assert "Not subscribed: z/" in result.output


# ── render ─────────────────────────────────────────────────

class TestRender:

    def test_role(self, runner):
        result = runner.invoke(cli, ["render", "role", "witness", "--set", "rig_name=gastown", "--set", "polecats=nux, slit"])
        assert result.exit_code == 0
        assert "gastown" in result.output
        assert "- nux" in result.output
        assert "- slit" in result.output

    def test_message_int_coercion(self, runner):
        result = runner.invoke(cli, [
            "render", "message", "nudge",
            "--set", "polecat=nux", "--set", "reason=idle",
            "--set", "nudge-count=3", "--set", "max_nudges=3",
        ])
        assert result.exit_code == 0
        assert "final nudge" in result.output

    def test_unknown_role(self, runner):
        result = runner.invoke(cli, ["render", "role", "deacon"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unknown_message(self, runner):
        result = runner.invoke(cli, ["render", "message", "party"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_required_field(self, runner):
        result = runner.invoke(cli, ["render", "message", "spawn", "--set", "issue=gt-1"])
        assert result.exit_code == 1
        assert "title" in result.output

    def test_bad_pair(self, runner):
        result = runner.invoke(cli, ["render", "message", "nudge", "--set", "polecat"])
        assert result.exit_code == 2

    def test_unknown_field(self, runner):
        result = runner.invoke(cli, ["render", "message", "nudge", "--set", "colour=red"])
        assert result.exit_code == 2

    def test_bad_int(self, runner):
        result = runner.invoke(cli, [
            "render", "message", "nudge", "--set", "polecat=nux", "--set", "reason=x", "--set", "nudge_count=many",
        ])
        assert result.exit_code == 2

    def test_custom_template_dir(self, runner, template_dir, monkeypatch):
        monkeypatch.setenv("CONVOY_TEMPLATE_DIR", str(template_dir))
        result = runner.invoke(cli, ["render", "role", "mayor", "--set", "town_root=/town"])
        assert result.exit_code == 0
        assert result.output == "Custom mayor of /town\n"

    def test_missing_template_dir(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("CONVOY_TEMPLATE_DIR", str(tmp_path / "gone"))
        result = runner.invoke(cli, ["render", "role", "mayor"])
        assert result.exit_code == 1


# ── misc ───────────────────────────────────────────────────

class TestMisc:

    def test_templates_table(self, runner):
        result = runner.invoke(cli, ["templates"])
        assert result.exit_code == 0
        assert "witness" in result.output
        assert "escalation" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "subscribers show" in result.output

    def test_version(self, runner):
        from convoy import __version__
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_debug_flag(self, runner):
        result = runner.invoke(cli, ["--debug", "subscribers", "show"], input="Notify: a/")
        assert result.exit_code == 0
        assert "a/" in result.output
        assert logging.getLogger("convoy").level == logging.DEBUG

    def test_invalid_log_level_is_clean_error(self, runner, monkeypatch):
        monkeypatch.setenv("CONVOY_LOG_LEVEL", "verbose")
        result = runner.invoke(cli, ["subscribers", "show"], input="Subscribers: a/")
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "log_level" in result.output

    def test_log_level_case_insensitive(self, runner, monkeypatch):
        monkeypatch.setenv("CONVOY_LOG_LEVEL", "info")
        result = runner.invoke(cli, ["subscribers", "show"], input="Subscribers: a/")
        assert result.exit_code == 0
        assert logging.getLogger("convoy").level == logging.INFO

    def test_existing_logging_not_replaced(self, tmp_path):
        from convoy.cli.shared import setup_logging

        root = logging.getLogger()
        sentinel = logging.NullHandler()
        root.addHandler(sentinel)
        try:
            setup_logging("INFO", str(tmp_path / "convoy.log"))
            assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
            assert not (tmp_path / "convoy.log").exists()
        finally:
            root.removeHandler(sentinel)
