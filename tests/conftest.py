"""Shared fixtures for shift-roster tests."""

import pytest

from shift_roster.models import (
    Request,
    ScheduleConfig,
    StaffingPolicy,
    Worker,
)


@pytest.fixture
def uniform_policy() -> StaffingPolicy:
    """One day and one night worker on every date."""
    return StaffingPolicy(
        weekday_day=1,
        weekday_night=1,
        weekend_day=1,
        weekend_night=1,
    )


@pytest.fixture
def legacy_policy() -> StaffingPolicy:
    """Default staffing with two January 2025 public holidays."""
    return StaffingPolicy(
        weekday_day=2,
        weekday_night=1,
        weekend_day=1,
        weekend_night=1,
        treat_public_holidays_as_weekends=True,
        public_holidays=frozenset({"2025-01-01", "2025-01-13"}),
    )


@pytest.fixture
def two_worker_config(uniform_policy: StaffingPolicy) -> ScheduleConfig:
    """A has a priority request for Jan 1st, B has no requests."""
    return ScheduleConfig(
        year=2025,
        month=1,  # Jan 1st 2025 is a Wednesday
        policy=uniform_policy,
        workers=[
            Worker(id="A", name="Alice", requests=[Request("2025-01-01", True)]),
            Worker(id="B", name="Bob"),
        ],
    )


@pytest.fixture
def team_config(legacy_policy: StaffingPolicy) -> ScheduleConfig:
    """Five workers with a mix of ordinary and priority requests."""
    return ScheduleConfig(
        year=2025,
        month=1,
        policy=legacy_policy,
        workers=[
            Worker(
                id="E001",
                name="Sato",
                requests=[Request("2025-01-03"), Request("2025-01-04")],
            ),
            Worker(
                id="E002",
                name="Suzuki",
                requests=[Request("2025-01-03", True), Request("2025-01-20")],
            ),
            Worker(
                id="E003",
                name="Takahashi",
                requests=[Request("2025-01-03"), Request("2025-01-10")],
            ),
            Worker(id="E004", name="Tanaka", requests=[Request("2025-01-03")]),
            Worker(id="E005", name="Ito"),
        ],
        priority_worker_ids=frozenset({"E003"}),
    )
