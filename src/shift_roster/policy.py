"""
Staffing requirements per date.
"""

from typing import NamedTuple

from .calendar_utils import is_weekend
from .models import StaffingPolicy


class StaffingRequirement(NamedTuple):
    """Required headcount for the day and night shift of one date."""

    day: int
    night: int


def is_policy_weekend(check_date: str, policy: StaffingPolicy) -> bool:
    """
    Check whether a date is staffed like a weekend.

    Saturdays and Sundays always are; public holidays are too when the
    policy treats them as weekends.
    """
    if is_weekend(check_date):
        return True
    return (
        policy.treat_public_holidays_as_weekends
        and policy.is_public_holiday(check_date)
    )


def required_staffing(check_date: str, policy: StaffingPolicy) -> StaffingRequirement:
    """Required day and night headcount for a date."""
    if is_policy_weekend(check_date, policy):
        return StaffingRequirement(policy.weekend_day, policy.weekend_night)
    return StaffingRequirement(policy.weekday_day, policy.weekday_night)
