"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from circuit_crew.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    """Invoke the CLI against a temporary data directory."""

    def _invoke(*args):
        return runner.invoke(main, ["--data-dir", str(tmp_path), "--owner", "tester", *args])

    return _invoke


@pytest.fixture
def initialized(invoke):
    result = invoke("init")
    assert result.exit_code == 0, result.output
    return invoke


class TestInit:
    def test_requires_init(self, invoke):
        result = invoke("exercises", "list")
        assert result.exit_code == 1
        assert "not initialized" in result.output

    def test_init_seeds_library(self, invoke):
        result = invoke("init")
        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert "19 exercises" in result.output


class TestLibraryCommands:
    """Tests for exercises and people commands."""

    def test_list_exercises(self, initialized):
        result = initialized("exercises", "list")
        assert result.exit_code == 0
        assert "Goblet Squat" in result.output
        assert "Total: 19 exercise(s)" in result.output

    def test_add_and_remove_exercise(self, initialized):
        result = initialized("exercises", "add", "Arnold Press", "--rom", "55", "--reps", "12")
        assert result.exit_code == 0, result.output

        duplicate = initialized("exercises", "add", "arnold press", "--rom", "55", "--reps", "12")
        assert duplicate.exit_code == 1

        assert "Arnold Press" in initialized("exercises", "list").output
        assert initialized("exercises", "remove", "Arnold Press").exit_code == 0
        assert "Arnold Press" not in initialized("exercises", "list").output

    def test_people(self, initialized):
        assert "Nobody here yet" in initialized("people", "list").output

        assert initialized("people", "add", "Alexandra", "--nickname", "Alex").exit_code == 0
        assert "Alexandra" in initialized("people", "list").output

        assert initialized("people", "remove", "alex").exit_code == 0
        assert initialized("people", "remove", "alex").exit_code == 1


class TestSettingsCommands:
    def test_set_and_show(self, initialized):
        result = initialized("settings", "set", "--rest", "10", "--extreme-count", "1")
        assert result.exit_code == 0, result.output

        shown = initialized("settings", "show").output
        assert "Rest duration:     10s" in shown
        assert "Extreme rounds:    1" in shown

    def test_out_of_range(self, initialized):
        result = initialized("settings", "set", "--rest", "2")
        assert result.exit_code == 1
        assert "rest_duration_sec" in result.output

    def test_nothing_to_change(self, initialized):
        assert initialized("settings", "set").exit_code == 1


class TestSessionCommands:
    """Tests for composing, simulating and reviewing sessions."""

    def test_compose(self, initialized):
        result = initialized("session", "compose", "--target", "12", "--seed", "5")
        assert result.exit_code == 0, result.output
        assert "12 exercises" in result.output
        assert "Estimated:" in result.output

    def test_simulate_needs_people(self, initialized):
        result = initialized("session", "simulate", "--quiet")
        assert result.exit_code == 1
        assert "No participants" in result.output

    def test_simulate_unknown_person(self, initialized):
        result = initialized("session", "simulate", "--person", "Nobody")
        assert result.exit_code == 2

    def test_simulate_records_history(self, initialized):
        initialized("people", "add", "Alex")

        result = initialized("session", "simulate", "--target", "9", "--seed", "2", "--extreme-count", "0")
        assert result.exit_code == 0, result.output
        assert "Session complete" in result.output
        assert "go" in result.output
        # Nine 40 s exercises with eight 5 s rests
        assert "Duration:  6:40" in result.output

        history = initialized("history")
        assert history.exit_code == 0
        assert "Alex" in history.output

        stats = initialized("stats")
        assert "Sessions:  1" in stats.output
        assert "Alex" in stats.output

    def test_simulate_with_skip(self, initialized):
        initialized("people", "add", "Alex")

        result = initialized(
            "session", "simulate", "--quiet", "--target", "9", "--extreme-count", "0", "--skip", "9"
        )
        assert result.exit_code == 0, result.output
        # The last exercise is skipped one second in
        assert "Duration:  6:01" in result.output

    def test_summary_lists_each_exercise(self, initialized):
        initialized("people", "add", "Alex")

        result = initialized(
            "session", "simulate", "--quiet", "--target", "9", "--seed", "4", "--extreme-count", "1"
        )
        assert result.exit_code == 0, result.output
        assert "Extreme:   1" in result.output
        assert "Distance" in result.output
        assert result.output.count("EXTREME") == 1
        assert "60s" in result.output
        assert result.output.count("40s") == 8

    def test_compose_drop_exercise(self, initialized):
        result = initialized("session", "compose", "--target", "12", "--seed", "5", "--drop", "goblet squat")
        assert result.exit_code == 0, result.output
        assert "Goblet Squat" not in result.output

    def test_compose_drop_unknown_exercise(self, initialized):
        result = initialized("session", "compose", "--drop", "Cartwheel")
        assert result.exit_code == 2

    def test_history_empty(self, initialized):
        assert "No sessions recorded yet" in initialized("history").output
