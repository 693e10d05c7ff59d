"""Tests for configuration loading and validation."""

import logging
import tempfile
from pathlib import Path

import pytest

from shift_roster.config import (
    ConfigLoader,
    ConfigurationError,
    InvalidDateFormatError,
)
from shift_roster.models import Request, Worker


def write_yaml(content: str) -> Path:
    """Write YAML content to a temporary file and return the path."""
    f = tempfile.NamedTemporaryFile(
        mode="w", suffix=".yaml", delete=False, encoding="utf-8"
    )
    f.write(content)
    f.close()
    return Path(f.name)


class TestConfigLoaderBasics:
    """Basic config loading tests."""

    def test_file_not_found_raises_error(self):
        """Loading non-existent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader("/nonexistent/path.yaml")

    def test_load_minimal_valid_config(self):
        """Only the planning month is required; staffing uses defaults."""
        yaml = """
planning:
  month: 2025-01
"""
        settings = ConfigLoader(write_yaml(yaml)).load()

        assert (settings.year, settings.month) == (2025, 1)
        assert ConfigLoader(write_yaml(yaml)).load() == settings
        assert settings.policy.weekday_day == 2
        assert settings.policy.weekday_night == 1
        assert settings.policy.weekend_day == 1
        assert settings.policy.weekend_night == 1
        assert settings.policy.treat_public_holidays_as_weekends is True
        assert settings.priority_worker_ids == frozenset()
        assert settings.workers == []

    def test_full_config(self):
        yaml = """
planning:
  month: 2025-01

staffing:
  weekday: {day: 3, night: 2}
  weekend: {day: 1, night: 1}
  treat_public_holidays_as_weekends: false

public_holidays: [2025-01-01, "2025-01-13"]
priority_workers: [E001, 42]
"""
        settings = ConfigLoader(write_yaml(yaml)).load()

        assert settings.policy.weekday_day == 3
        assert settings.policy.weekday_night == 2
        assert settings.policy.treat_public_holidays_as_weekends is False
        assert settings.policy.public_holidays == frozenset(
            {"2025-01-01", "2025-01-13"}
        )
        assert settings.priority_worker_ids == frozenset({"E001", "42"})

    def test_settings_before_load_raises(self):
        loader = ConfigLoader(write_yaml("planning:\n  month: 2025-01\n"))
        with pytest.raises(RuntimeError, match="not loaded"):
            loader.settings
        with pytest.raises(RuntimeError, match="not loaded"):
            loader.raw_config
        with pytest.raises(RuntimeError, match="not loaded"):
            loader.get_summary()

    def test_summary(self):
        yaml = """
planning:
  month: 2025-01
priority_workers: [E002, E001]
"""
        loader = ConfigLoader(write_yaml(yaml))
        loader.load()
        assert loader.raw_config["planning"]["month"] == "2025-01"
        summary = loader.get_summary()

        assert "Planning Month: 2025-01" in summary
        assert "Priority workers: E001, E002" in summary


class TestPlanning:
    """Tests for the target month."""

    def test_year_and_month_integers(self):
        yaml = """
planning:
  year: 2024
  month: 2
"""
        settings = ConfigLoader(write_yaml(yaml)).load()
        assert (settings.year, settings.month) == (2024, 2)
        assert settings.month_key == "2024-02"

    @pytest.mark.parametrize(
        "planning",
        [
            "month: 2025-13",
            "month: January",
            "year: 2025\n  month: 13",
            "year: 2025\n  month: '1'",
            "year: 2025",
        ],
    )
    def test_invalid_month_raises_error(self, planning: str):
        yaml = f"""
planning:
  {planning}
"""
        with pytest.raises(ConfigurationError):
            ConfigLoader(write_yaml(yaml)).load()

    def test_missing_planning_raises_error(self):
        with pytest.raises(ConfigurationError, match="planning.month is required"):
            ConfigLoader(write_yaml("staffing: {}\n")).load()

    def test_non_mapping_raises_error(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigLoader(write_yaml("- just\n- a list\n")).load()


class TestStaffingValidation:
    """Tests for staffing headcounts."""

    @pytest.mark.parametrize("value", ["-1", "1.5", "two", "true"])
    def test_invalid_headcount_raises_error(self, value: str):
        yaml = f"""
planning:
  month: 2025-01
staffing:
  weekday:
    night: {value}
"""
        with pytest.raises(ConfigurationError, match="non-negative integer"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_flag_must_be_boolean(self):
        yaml = """
planning:
  month: 2025-01
staffing:
  treat_public_holidays_as_weekends: sometimes
"""
        with pytest.raises(ConfigurationError, match="true or false"):
            ConfigLoader(write_yaml(yaml)).load()


class TestDateParsing:
    """Tests for date format validation."""

    def test_non_iso_holiday_raises_error(self):
        """Non-ISO date format raises InvalidDateFormatError."""
        yaml = """
planning:
  month: 2025-01
public_holidays: ["01/13/2025"]
"""
        with pytest.raises(InvalidDateFormatError, match="ISO 8601"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_holiday_outside_month_warns(self, caplog):
        yaml = """
planning:
  month: 2025-01
public_holidays: [2025-02-11]
"""
        with caplog.at_level(logging.WARNING, logger="shift_roster.config"):
            settings = ConfigLoader(write_yaml(yaml)).load()

        assert settings.policy.public_holidays == frozenset({"2025-02-11"})
        assert "outside the planning month" in caplog.text

    def test_holiday_check_uses_month_override(self, caplog):
        """Holidays are checked against the month actually scheduled."""
        yaml = """
planning:
  month: 2025-01
public_holidays: [2025-02-11]
"""
        with caplog.at_level(logging.WARNING, logger="shift_roster.config"):
            settings = ConfigLoader(write_yaml(yaml)).load(month_override="2025-02")

        assert (settings.year, settings.month) == (2025, 2)
        assert "outside the planning month" not in caplog.text

    def test_holiday_in_yaml_month_warns_after_override(self, caplog):
        yaml = """
planning:
  month: 2025-01
public_holidays: [2025-01-13]
"""
        with caplog.at_level(logging.WARNING, logger="shift_roster.config"):
            ConfigLoader(write_yaml(yaml)).load(month_override="2025-02")

        assert "2025-01-13 is outside the planning month 2025-02" in caplog.text

    def test_invalid_month_override_raises_error(self):
        loader = ConfigLoader(write_yaml("planning:\n  month: 2025-01\n"))
        with pytest.raises(ConfigurationError, match="month override"):
            loader.load(month_override="2025-13")
        with pytest.raises(RuntimeError, match="not loaded"):
            loader.settings


class TestWorkers:
    """Tests for workers declared in YAML and roster merging."""

    def test_workers_with_requests(self):
        yaml = """
planning:
  month: 2025-01
workers:
  - id: E001
    name: Sato
    requests:
      - 2025-01-03
      - {date: 2025-01-04, priority: true}
  - id: E002
    name: Suzuki
"""
        settings = ConfigLoader(write_yaml(yaml)).load()

        assert [w.id for w in settings.workers] == ["E001", "E002"]
        assert settings.workers[0].requests == [
            Request("2025-01-03", False),
            Request("2025-01-04", True),
        ]

    @pytest.mark.parametrize("value", ["'false'", '"FALSE"', "1", "'yes'"])
    def test_request_priority_must_be_boolean(self, value: str):
        """Quoted strings are not silently read as priority requests."""
        yaml = f"""
planning:
  month: 2025-01
workers:
  - id: E001
    name: Sato
    requests:
      - {{date: 2025-01-04, priority: {value}}}
"""
        with pytest.raises(ConfigurationError, match="true or false"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_request_priority_false(self):
        yaml = """
planning:
  month: 2025-01
workers:
  - id: E001
    name: Sato
    requests:
      - {date: 2025-01-04, priority: false}
"""
        settings = ConfigLoader(write_yaml(yaml)).load()
        assert settings.workers[0].requests == [Request("2025-01-04", False)]

    def test_worker_without_name_raises_error(self):
        yaml = """
planning:
  month: 2025-01
workers:
  - id: E001
"""
        with pytest.raises(ConfigurationError, match="id and a name"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_invalid_request_date_raises_error(self):
        yaml = """
planning:
  month: 2025-01
workers:
  - id: E001
    name: Sato
    requests: [2025/01/03]
"""
        with pytest.raises(InvalidDateFormatError):
            ConfigLoader(write_yaml(yaml)).load()

    def test_build_config_merges_by_id(self):
        yaml = """
planning:
  month: 2025-01
priority_workers: [E002]
workers:
  - id: E001
    name: Sato
    requests: [2025-01-03]
"""
        settings = ConfigLoader(write_yaml(yaml)).load()
        config = settings.build_config(
            [
                Worker(id="E001", name="Sato", requests=[Request("2025-01-05")]),
                Worker(id="E002", name="Suzuki"),
            ]
        )

        assert [w.id for w in config.workers] == ["E001", "E002"]
        assert config.workers[0].requests == [
            Request("2025-01-03"),
            Request("2025-01-05"),
        ]
        assert config.priority_worker_ids == frozenset({"E002"})
        assert (config.year, config.month) == (2025, 1)
        # YAML workers are copied, not shared
        assert settings.workers[0].requests == [Request("2025-01-03")]

    def test_requests_csv_relative_to_config(self):
        path = write_yaml("planning:\n  month: 2025-01\nrequests_csv: data/req.csv\n")
        settings = ConfigLoader(path).load()
        assert settings.requests_csv == path.parent / "data" / "req.csv"
