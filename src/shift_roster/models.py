"""
Data models for the monthly shift roster.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .calendar_utils import days_in_month, month_dates


class ShiftKind(Enum):
    """What a worker does on a given date."""

    DAY = "day"
    NIGHT = "night"
    REQUESTED_OFF = "requested_off"
    PUBLIC_OFF = "public_off"

    @property
    def code(self) -> str:
        """Short code used in exported grids (blank for an ordinary day off)."""
        return _SHIFT_CODES[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @classmethod
    def from_code(cls, code: str) -> "ShiftKind":
        """Map an exported grid code back to a shift kind."""
        code = (code or "").strip()
        for kind, kind_code in _SHIFT_CODES.items():
            if kind_code and kind_code == code:
                return kind
        return cls.PUBLIC_OFF


_SHIFT_CODES = {
    ShiftKind.DAY: "日",
    ShiftKind.NIGHT: "夜",
    ShiftKind.REQUESTED_OFF: "休",
    ShiftKind.PUBLIC_OFF: "",
}


@dataclass(frozen=True)
class Request:
    """A request for a day off on a specific date."""

    date: str  # YYYY-MM-DD
    priority: bool = False


@dataclass
class Worker:
    """A worker and their off-requests, in the order they were submitted."""

    id: str
    name: str
    requests: List[Request] = field(default_factory=list)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Worker id cannot be empty")

    def request_for(self, check_date: str) -> Request | None:
        """Return the first request for a date, if any."""
        for request in self.requests:
            if request.date == check_date:
                return request
        return None


@dataclass
class StaffingPolicy:
    """Required headcount per shift for weekdays and weekends."""

    weekday_day: int = 2
    weekday_night: int = 1
    weekend_day: int = 1
    weekend_night: int = 1
    treat_public_holidays_as_weekends: bool = True
    public_holidays: frozenset = frozenset()

    def __post_init__(self):
        for name in ("weekday_day", "weekday_night", "weekend_day", "weekend_night"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        self.public_holidays = frozenset(self.public_holidays)

    def is_public_holiday(self, check_date: str) -> bool:
        return check_date in self.public_holidays


@dataclass
class ScheduleConfig:
    """Everything needed for one allocation run."""

    year: int
    month: int
    policy: StaffingPolicy
    workers: List[Worker]
    priority_worker_ids: frozenset = frozenset()

    def __post_init__(self):
        self.priority_worker_ids = frozenset(self.priority_worker_ids)

    @property
    def num_days(self) -> int:
        """Number of days in the target month."""
        return days_in_month(self.year, self.month)

    @property
    def dates(self) -> List[str]:
        """Canonical dates of the target month, day 1 first."""
        return month_dates(self.year, self.month)

    @property
    def month_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def get_worker(self, worker_id: str) -> Worker:
        """Get a worker by id."""
        for worker in self.workers:
            if worker.id == worker_id:
                return worker
        raise ValueError(f"Worker '{worker_id}' not found")


@dataclass
class WorkerRunState:
    """Per-run mutable state for one worker, owned by the allocator."""

    worker: Worker
    shifts: Dict[str, ShiftKind] = field(default_factory=dict)
    day_shifts: int = 0
    night_shifts: int = 0

    def is_assigned(self, check_date: str) -> bool:
        return check_date in self.shifts

    def assign(self, check_date: str, kind: ShiftKind) -> None:
        if check_date in self.shifts:
            raise ValueError(
                f"Worker '{self.worker.id}' already assigned on {check_date}"
            )
        self.shifts[check_date] = kind
        if kind is ShiftKind.DAY:
            self.day_shifts += 1
        elif kind is ShiftKind.NIGHT:
            self.night_shifts += 1


@dataclass
class DaySchedule:
    """Who does what on a single date."""

    date: str
    day: List[str] = field(default_factory=list)
    night: List[str] = field(default_factory=list)
    requested_off: List[str] = field(default_factory=list)
    public_off: List[str] = field(default_factory=list)

    def add(self, kind: ShiftKind, worker_id: str) -> None:
        self.ids_for(kind).append(worker_id)

    def ids_for(self, kind: ShiftKind) -> List[str]:
        """The list of worker ids holding a shift kind on this date."""
        return {
            ShiftKind.DAY: self.day,
            ShiftKind.NIGHT: self.night,
            ShiftKind.REQUESTED_OFF: self.requested_off,
            ShiftKind.PUBLIC_OFF: self.public_off,
        }[kind]

    def shift_of(self, worker_id: str) -> ShiftKind:
        """
        Classify a worker on this date.

        Requested-off wins over day, day over night; anyone else is on an
        ordinary day off.
        """
        if worker_id in self.requested_off:
            return ShiftKind.REQUESTED_OFF
        if worker_id in self.day:
            return ShiftKind.DAY
        if worker_id in self.night:
            return ShiftKind.NIGHT
        return ShiftKind.PUBLIC_OFF

    def members(self) -> List[str]:
        """All worker ids appearing on this date."""
        return self.requested_off + self.day + self.night + self.public_off


@dataclass(frozen=True)
class ScheduleWarning:
    """A shift that could not be fully staffed."""

    date: str
    shift: ShiftKind
    required: int
    actual: int

    @property
    def shortfall(self) -> int:
        return self.required - self.actual

    @property
    def message(self) -> str:
        return (
            f"{self.date} {self.shift.label} shift: "
            f"required {self.required}, assigned {self.actual}"
        )


@dataclass
class WorkerSummary:
    """Monthly totals for one worker."""

    worker: Worker
    day_shifts: int
    night_shifts: int
    requested_off: int
    public_off: int

    @property
    def total_shifts(self) -> int:
        return self.day_shifts + self.night_shifts


@dataclass
class ScheduleResult:
    """Complete result of one allocation run."""

    config: ScheduleConfig
    days: Dict[str, DaySchedule]
    warnings: List[ScheduleWarning] = field(default_factory=list)

    @property
    def has_shortfall(self) -> bool:
        return bool(self.warnings)

    def shift_of(self, check_date: str, worker_id: str) -> ShiftKind:
        """Classify a worker on a date; dates outside the schedule are days off."""
        day_schedule = self.days.get(check_date)
        if day_schedule is None:
            return ShiftKind.PUBLIC_OFF
        return day_schedule.shift_of(worker_id)

    def worker_summaries(self) -> List[WorkerSummary]:
        """Per-worker totals in roster order."""
        summaries = []
        for worker in self.config.workers:
            counts = {kind: 0 for kind in ShiftKind}
            for check_date in self.days:
                counts[self.shift_of(check_date, worker.id)] += 1
            summaries.append(
                WorkerSummary(
                    worker=worker,
                    day_shifts=counts[ShiftKind.DAY],
                    night_shifts=counts[ShiftKind.NIGHT],
                    requested_off=counts[ShiftKind.REQUESTED_OFF],
                    public_off=counts[ShiftKind.PUBLIC_OFF],
                )
            )
        return summaries

    def get_worker_summary(self, worker_id: str) -> WorkerSummary:
        """Get the summary for a specific worker."""
        for summary in self.worker_summaries():
            if summary.worker.id == worker_id:
                return summary
        raise ValueError(f"Worker '{worker_id}' not found in results")
