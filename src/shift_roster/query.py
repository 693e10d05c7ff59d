"""
Read-only lookups over a generated schedule.
"""

from typing import Iterable, List, Mapping

from .models import DaySchedule, ShiftKind


def shift_of(
    schedule: Mapping[str, DaySchedule], check_date: str, worker_id: str
) -> ShiftKind:
    """
    Classify a worker on a date.

    Requested-off wins over day, day over night; anything else (including a
    date missing from the schedule) is an ordinary day off.
    """
    day_schedule = schedule.get(check_date)
    if day_schedule is None:
        return ShiftKind.PUBLIC_OFF
    return day_schedule.shift_of(worker_id)


def worker_row(
    schedule: Mapping[str, DaySchedule], dates: Iterable[str], worker_id: str
) -> List[ShiftKind]:
    """A worker's classification for each of the given dates."""
    return [shift_of(schedule, check_date, worker_id) for check_date in dates]


def export_code(kind: ShiftKind) -> str:
    return kind.code
