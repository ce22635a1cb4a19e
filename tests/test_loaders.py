"""Tests for flat-file input loading."""

import logging
from datetime import date

import pytest

from oncallrota.domain.models import ConfigurationError, RotaConfig
from oncallrota.loaders.files import (
    RotaInputs,
    load_dates,
    load_inputs,
    load_team,
    load_unavailability,
    parse_date,
)
from oncallrota.scheduling.rotation import identity_shuffle


@pytest.fixture
def write(tmp_path):
    """Write a text file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestLoadTeam:
    """Tests for team file loading."""

    def test_reads_trimmed_names(self, write):
        path = write("team.txt", "  Alice \n\n# on leave\nBob\nCarol\n")
        assert load_team(path, shuffle=identity_shuffle) == ["Alice", "Bob", "Carol"]

    def test_default_shuffle_is_a_permutation(self, write):
        path = write("team.txt", "\n".join(f"M{i}" for i in range(10)))
        assert sorted(load_team(path)) == sorted(f"M{i}" for i in range(10))

    def test_missing_file_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_team(tmp_path / "missing.txt")

    def test_empty_team_is_configuration_error(self, write):
        path = write("team.txt", "\n# nobody\n\n")
        with pytest.raises(ConfigurationError):
            load_team(path)


class TestLoadDates:
    """Tests for holiday and patching date files."""

    def test_parse_date(self):
        assert parse_date(" 2024-12-25 ") == date(2024, 12, 25)
        with pytest.raises(ValueError):
            parse_date("25/12/2024")

    def test_reads_dates_and_skips_malformed(self, write, caplog):
        path = write("holidays.txt", "2024-12-25\nnot-a-date\n\n2024-02-30\n2025-01-01\n")

        with caplog.at_level(logging.WARNING, logger="oncallrota.loaders.files"):
            dates = load_dates(path)

        assert dates == frozenset({date(2024, 12, 25), date(2025, 1, 1)})
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2
        assert "holidays.txt:2" in warnings[0].getMessage()

    def test_missing_file_is_empty(self, tmp_path):
        assert load_dates(tmp_path / "nothing.txt") == frozenset()


class TestLoadUnavailability:
    """Tests for unavailability file loading."""

    def test_groups_dates_by_member(self, write):
        path = write(
            "unavailability.txt",
            "Alice,2024-01-15\nAlice, 2024-01-16\nBob,2024-01-20\n",
        )
        index = load_unavailability(path)
        assert index == {
            "Alice": frozenset({date(2024, 1, 15), date(2024, 1, 16)}),
            "Bob": frozenset({date(2024, 1, 20)}),
        }

    def test_skips_malformed_lines(self, write, caplog):
        path = write(
            "unavailability.txt",
            "Alice,2024-01-15\nBob\n,2024-01-15\nCarol,2024-13-01\nDan,2024-01-01,extra\n",
        )
        with caplog.at_level(logging.WARNING, logger="oncallrota.loaders.files"):
            index = load_unavailability(path)

        assert list(index) == ["Alice"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 4

    def test_missing_file_is_empty(self, tmp_path):
        assert load_unavailability(tmp_path / "nothing.txt") == {}


class TestLoadInputs:
    """Tests for loading a full run's inputs from a config."""

    def test_loads_all_inputs(self, write, tmp_path):
        config = RotaConfig(
            team_file=write("team.txt", "Alice\nBob\n"),
            holidays_file=write("holidays.txt", "2024-12-25\n"),
            patching_file=write("patching.txt", "2024-12-10\n"),
            unavailability_file=write("unavailability.txt", "Alice,2024-12-24\n"),
        )
        inputs = load_inputs(config, shuffle=identity_shuffle)

        assert inputs.roster == ("Alice", "Bob")
        calendar = inputs.calendar()
        assert calendar.contains_holiday(date(2024, 12, 25))
        assert calendar.contains_patching(date(2024, 12, 10))
        assert calendar.is_unavailable("Alice", date(2024, 12, 24))

    def test_seeded_config_gives_stable_roster(self, write):
        config = RotaConfig(
            team_file=write("team.txt", "\n".join(f"M{i}" for i in range(12))),
            holidays_file=write("h.txt", ""),
            patching_file=write("p.txt", ""),
            unavailability_file=write("u.txt", ""),
            seed=42,
        )
        assert load_inputs(config).roster == load_inputs(config).roster

    def test_warns_about_unknown_unavailable_members(self, write, caplog):
        config = RotaConfig(
            team_file=write("team.txt", "Alice\n"),
            holidays_file=write("h.txt", ""),
            patching_file=write("p.txt", ""),
            unavailability_file=write("u.txt", "Zed,2024-01-01\n"),
        )
        with caplog.at_level(logging.WARNING, logger="oncallrota.loaders.files"):
            inputs = load_inputs(config)

        assert inputs.unknown_unavailable_members() == ["Zed"]
        assert any("Zed" in r.getMessage() for r in caplog.records)


class TestUndecodableInput:
    """Tests for lines that are not valid UTF-8."""

    @pytest.fixture
    def write_bytes(self, tmp_path):
        def _write(name: str, content: bytes):
            path = tmp_path / name
            path.write_bytes(content)
            return path

        return _write

    def test_bad_date_line_is_skipped(self, write_bytes, caplog):
        path = write_bytes("holidays.txt", b"2024-12-25\n\xff\n2025-01-01\n")

        with caplog.at_level(logging.WARNING, logger="oncallrota.loaders.files"):
            dates = load_dates(path)

        assert dates == frozenset({date(2024, 12, 25), date(2025, 1, 1)})
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "holidays.txt:2" in warnings[0]

    def test_bad_team_line_is_skipped(self, write_bytes, caplog):
        path = write_bytes("team.txt", b"Alice\n\xff\xfeBob\nCarol\n")

        with caplog.at_level(logging.WARNING, logger="oncallrota.loaders.files"):
            team = load_team(path, shuffle=identity_shuffle)

        assert team == ["Alice", "Carol"]
        assert any("team.txt:2" in r.getMessage() for r in caplog.records)

    def test_bad_unavailability_line_is_skipped(self, write_bytes):
        path = write_bytes("u.txt", b"Alice,2024-01-15\nB\xffb,2024-01-16\n")
        assert load_unavailability(path) == {"Alice": frozenset({date(2024, 1, 15)})}

    def test_byte_order_mark_is_ignored(self, write_bytes):
        path = write_bytes("team.txt", b"\xef\xbb\xbfAlice\nBob\n")
        assert load_team(path, shuffle=identity_shuffle) == ["Alice", "Bob"]


class TestRotaInputs:
    """Tests for the loaded input bundle."""

    def test_unavailability_is_read_only(self):
        inputs = RotaInputs(
            roster=("Alice",),
            unavailability={"Alice": {date(2024, 1, 15)}},
        )

        with pytest.raises(TypeError):
            inputs.unavailability["Bob"] = frozenset()
        assert inputs.unavailability["Alice"] == frozenset({date(2024, 1, 15)})

    def test_inputs_are_hashable(self):
        first = RotaInputs(roster=("Alice", "Bob"), unavailability={"Alice": {date(2024, 1, 15)}})
        second = RotaInputs(roster=("Alice", "Bob"), unavailability={"Alice": {date(2024, 1, 15)}})

        assert first == second
        assert hash(first) == hash(second)
