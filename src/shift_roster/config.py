"""
Configuration loader for parsing YAML roster configuration.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .calendar_utils import is_canonical_date, parse_month_key
from .models import Request, ScheduleConfig, StaffingPolicy, Worker

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""

    pass


class InvalidDateFormatError(ConfigurationError):
    """Raised when a date is not in ISO 8601 format (YYYY-MM-DD)."""

    pass


@dataclass
class RosterSettings:
    """Parsed configuration, before the roster is attached."""

    year: int
    month: int
    policy: StaffingPolicy
    priority_worker_ids: frozenset = frozenset()
    workers: List[Worker] = field(default_factory=list)
    requests_csv: Path | None = None

    @property
    def month_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def build_config(self, workers: List[Worker] | None = None) -> ScheduleConfig:
        """
        Combine these settings with a roster into a ScheduleConfig.

        Workers listed in the YAML come first; workers from ``workers`` are
        merged in by id, their requests appended to any YAML requests.
        """
        roster: Dict[str, Worker] = {}
        for worker in self.workers + list(workers or []):
            existing = roster.get(worker.id)
            if existing is None:
                roster[worker.id] = Worker(
                    id=worker.id, name=worker.name, requests=list(worker.requests)
                )
            else:
                existing.requests.extend(worker.requests)

        return ScheduleConfig(
            year=self.year,
            month=self.month,
            policy=self.policy,
            workers=list(roster.values()),
            priority_worker_ids=self.priority_worker_ids,
        )


class ConfigLoader:
    """Loads and validates roster configuration from YAML files."""

    DEFAULT_STAFFING = {
        "weekday": {"day": 2, "night": 1},
        "weekend": {"day": 1, "night": 1},
    }

    def __init__(self, config_path: str | Path):
        """
        Initialize the ConfigLoader with a configuration file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        self._raw_config: Dict[str, Any] | None = None
        self._settings: RosterSettings | None = None

    def load(self, month_override: str | None = None) -> RosterSettings:
        """
        Load and parse the configuration file.

        Args:
            month_override: Optional YYYY-MM replacing the planning month

        Returns:
            RosterSettings with all parsed data

        Raises:
            InvalidDateFormatError: If dates are not in ISO 8601 format
            ConfigurationError: If configuration is invalid
        """
        with open(self.config_path, "r", encoding="utf-8") as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(self._raw_config).__name__}"
            )

        settings = self._parse_config()
        if month_override:
            try:
                settings.year, settings.month = parse_month_key(month_override)
            except ValueError as e:
                raise ConfigurationError(f"Invalid month override: {e}") from e

        self._settings = settings
        self._check_holiday_dates()

        return self._settings

    @property
    def settings(self) -> RosterSettings:
        """
        Get the loaded settings.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._settings is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._settings

    @property
    def raw_config(self) -> Dict[str, Any]:
        """
        Get the raw configuration dictionary.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._raw_config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._raw_config

    def _parse_config(self) -> RosterSettings:
        """Parse raw YAML data into RosterSettings."""
        raw = self._raw_config

        year, month = self._parse_planning(raw.get("planning") or {})
        policy = self._parse_policy(
            raw.get("staffing") or {}, raw.get("public_holidays") or []
        )
        priority_ids = frozenset(
            str(worker_id) for worker_id in raw.get("priority_workers") or []
        )
        workers = self._parse_workers(raw.get("workers") or [])

        requests_csv = raw.get("requests_csv")
        if requests_csv is not None:
            requests_csv = Path(requests_csv)
            if not requests_csv.is_absolute():
                requests_csv = self.config_path.parent / requests_csv

        return RosterSettings(
            year=year,
            month=month,
            policy=policy,
            priority_worker_ids=priority_ids,
            workers=workers,
            requests_csv=requests_csv,
        )

    def _parse_planning(self, planning: Dict[str, Any]) -> tuple[int, int]:
        """Parse the target month from 'month: YYYY-MM' or year/month pairs."""
        month = planning.get("month")
        year = planning.get("year")

        if year is None:
            if month is None:
                raise ConfigurationError("planning.month is required (YYYY-MM)")
            try:
                return parse_month_key(str(month))
            except ValueError as e:
                raise ConfigurationError(f"Invalid planning.month: {e}") from e

        if not isinstance(year, int) or not isinstance(month, int):
            raise ConfigurationError(
                f"planning.year and planning.month must be integers, "
                f"got year={year!r}, month={month!r}"
            )
        if not 1 <= month <= 12:
            raise ConfigurationError(f"Month must be between 1 and 12, got {month}")
        return year, month

    def _parse_policy(
        self, staffing: Dict[str, Any], holidays_raw: List[Any]
    ) -> StaffingPolicy:
        """Parse staffing headcounts and the public-holiday list."""
        counts = {}
        for period in ("weekday", "weekend"):
            section = staffing.get(period) or {}
            for shift in ("day", "night"):
                value = section.get(shift, self.DEFAULT_STAFFING[period][shift])
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ConfigurationError(
                        f"staffing.{period}.{shift} must be a non-negative integer, "
                        f"got: {value!r}"
                    )
                counts[f"{period}_{shift}"] = value

        treat_as_weekend = staffing.get("treat_public_holidays_as_weekends", True)
        if not isinstance(treat_as_weekend, bool):
            raise ConfigurationError(
                "staffing.treat_public_holidays_as_weekends must be true or false"
            )

        return StaffingPolicy(
            **counts,
            treat_public_holidays_as_weekends=treat_as_weekend,
            public_holidays=frozenset(
                self._parse_date(value, "public holiday") for value in holidays_raw
            ),
        )

    def _parse_workers(self, workers_raw: List[Dict[str, Any]]) -> List[Worker]:
        """Parse workers declared directly in the YAML file."""
        workers = []

        for worker_data in workers_raw:
            worker_id = str(worker_data.get("id") or "").strip()
            name = str(worker_data.get("name") or "").strip()
            if not worker_id or not name:
                raise ConfigurationError(
                    f"Each worker needs an id and a name, got: {worker_data}"
                )

            requests = []
            for entry in worker_data.get("requests") or []:
                if isinstance(entry, dict):
                    requested = entry.get("date")
                    priority = entry.get("priority", False)
                    if not isinstance(priority, bool):
                        raise ConfigurationError(
                            f"priority of request {requested} for {worker_id} "
                            f"must be true or false, got: {priority!r}"
                        )
                else:
                    requested, priority = entry, False
                requests.append(
                    Request(
                        date=self._parse_date(requested, f"request of {worker_id}"),
                        priority=priority,
                    )
                )

            workers.append(Worker(id=worker_id, name=name, requests=requests))

        return workers

    def _parse_date(self, value: Any, what: str) -> str:
        """Normalize a YAML date (parsed or quoted) to a canonical string."""
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str) and is_canonical_date(value.strip()):
            return value.strip()
        raise InvalidDateFormatError(
            f"{what} must be in ISO 8601 format (YYYY-MM-DD), got: {value}. "
            f"Example: 2025-01-13"
        )

    def _check_holiday_dates(self) -> None:
        """Warn about public holidays outside the target month."""
        settings = self._settings

        for holiday in sorted(settings.policy.public_holidays):
            if not holiday.startswith(settings.month_key):
                logger.warning(
                    "Public holiday %s is outside the planning month %s",
                    holiday,
                    settings.month_key,
                )

    def get_summary(self) -> str:
        """
        Get a summary of the loaded configuration.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        settings = self.settings
        policy = settings.policy

        lines = [
            f"Configuration from: {self.config_path}",
            f"Planning Month: {settings.month_key}",
            f"Weekday staffing: {policy.weekday_day} day / {policy.weekday_night} night",
            f"Weekend staffing: {policy.weekend_day} day / {policy.weekend_night} night",
            f"Public holidays: {len(policy.public_holidays)} "
            f"({'weekend' if policy.treat_public_holidays_as_weekends else 'weekday'} staffing)",
            f"Priority workers: {', '.join(sorted(settings.priority_worker_ids)) or 'none'}",
        ]

        return "\n".join(lines)
