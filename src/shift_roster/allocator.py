"""
Greedy day-by-day shift allocation.
"""

import logging
import random
from typing import Dict, List

from .calendar_utils import previous_date
from .models import (
    DaySchedule,
    ScheduleConfig,
    ScheduleResult,
    ScheduleWarning,
    ShiftKind,
    WorkerRunState,
)
from .policy import required_staffing
from .resolver import RequestStatus, is_priority_worker, resolve_request

logger = logging.getLogger(__name__)

RunStates = Dict[str, WorkerRunState]


class SchedulingError(Exception):
    """Raised when a schedule cannot be generated at all."""

    pass


class EmptyRosterError(SchedulingError):
    """Raised when there are no workers to schedule."""

    pass


class InvalidPeriodError(SchedulingError):
    """Raised when the target year/month is not a real month."""

    pass


class ShiftAllocator:
    """Assigns day and night shifts for one month using a greedy heuristic.

    Off-requests are granted first for the whole month. Shifts are then
    filled date by date, preferring the workers with the fewest shifts of
    that kind so far. Shortfalls are recorded as warnings.
    """

    def __init__(self, config: ScheduleConfig, rng: random.Random | None = None):
        """
        Initialize the allocator.

        Args:
            config: Workers, policy and target month
            rng: Optional random source; when given, ties between equally
                loaded workers are broken randomly instead of by worker id
        """
        self.config = config
        self.rng = rng

    def allocate(self) -> ScheduleResult:
        """
        Run the allocation and return the schedule.

        Returns:
            ScheduleResult with one DaySchedule per date and any warnings

        Raises:
            EmptyRosterError: If the roster has no workers
            InvalidPeriodError: If the target month is invalid
        """
        self._check_preconditions()
        cfg = self.config
        logger.info(
            "Allocating %s for %d workers", cfg.month_key, len(cfg.workers)
        )

        states = self._create_run_states()
        schedule = {d: DaySchedule(date=d) for d in cfg.dates}
        warnings: List[ScheduleWarning] = []

        for check_date in cfg.dates:
            self._assign_requested_off(states, schedule[check_date])

        for check_date in cfg.dates:
            day_schedule = schedule[check_date]
            requirement = required_staffing(check_date, cfg.policy)
            warnings.extend(
                self._assign_day_shift(states, day_schedule, requirement.day)
            )
            warnings.extend(
                self._assign_night_shift(states, day_schedule, requirement.night)
            )
            self._assign_public_off(states, day_schedule)

        logger.info(
            "Allocated %s with %d shortfall warning(s)", cfg.month_key, len(warnings)
        )
        return ScheduleResult(config=cfg, days=schedule, warnings=warnings)

    def _check_preconditions(self) -> None:
        cfg = self.config
        if not cfg.workers:
            raise EmptyRosterError("No workers to schedule")
        if not isinstance(cfg.month, int) or not 1 <= cfg.month <= 12:
            raise InvalidPeriodError(
                f"Month must be between 1 and 12, got {cfg.month!r}"
            )
        if not isinstance(cfg.year, int) or not 1 <= cfg.year <= 9999:
            raise InvalidPeriodError(f"Invalid year: {cfg.year!r}")

    def _create_run_states(self) -> RunStates:
        """Fresh per-worker state, keyed by worker id."""
        return {
            worker.id: WorkerRunState(worker=worker) for worker in self.config.workers
        }

    def _assign(
        self,
        state: WorkerRunState,
        day_schedule: DaySchedule,
        kind: ShiftKind,
    ) -> None:
        state.assign(day_schedule.date, kind)
        day_schedule.add(kind, state.worker.id)

    def _assign_requested_off(
        self, states: RunStates, day_schedule: DaySchedule
    ) -> None:
        """Grant off-requests for a date, priority requests first."""
        check_date = day_schedule.date
        priority_ids = self.config.priority_worker_ids

        for state in states.values():
            status = resolve_request(state.worker, check_date, priority_ids)
            if status is RequestStatus.PRIORITY and not state.is_assigned(check_date):
                self._assign(state, day_schedule, ShiftKind.REQUESTED_OFF)

        for state in states.values():
            status = resolve_request(state.worker, check_date, priority_ids)
            if (
                status is RequestStatus.ORDINARY
                and not state.is_assigned(check_date)
                and not is_priority_worker(state.worker, priority_ids)
            ):
                self._assign(state, day_schedule, ShiftKind.REQUESTED_OFF)

    def _candidates(
        self, states: RunStates, check_date: str, kind: ShiftKind
    ) -> List[WorkerRunState]:
        """Unassigned workers, least loaded with this shift kind first."""
        available = [s for s in states.values() if not s.is_assigned(check_date)]

        def load(state: WorkerRunState) -> int:
            if kind is ShiftKind.DAY:
                return state.day_shifts
            return state.night_shifts

        if self.rng is not None:
            tie_breaks = {s.worker.id: self.rng.random() for s in available}
            return sorted(available, key=lambda s: (load(s), tie_breaks[s.worker.id]))
        return sorted(available, key=lambda s: (load(s), s.worker.id))

    def _assign_day_shift(
        self, states: RunStates, day_schedule: DaySchedule, required: int
    ) -> List[ScheduleWarning]:
        check_date = day_schedule.date
        day_before = previous_date(check_date)
        assigned = len(day_schedule.day)

        for state in self._candidates(states, check_date, ShiftKind.DAY):
            if assigned >= required:
                break
            # Rest rule: no day shift right after a night shift.
            if state.shifts.get(day_before) is ShiftKind.NIGHT:
                continue
            self._assign(state, day_schedule, ShiftKind.DAY)
            assigned += 1

        return self._shortfall(check_date, ShiftKind.DAY, required, assigned)

    def _assign_night_shift(
        self, states: RunStates, day_schedule: DaySchedule, required: int
    ) -> List[ScheduleWarning]:
        check_date = day_schedule.date
        assigned = len(day_schedule.night)

        for state in self._candidates(states, check_date, ShiftKind.NIGHT):
            if assigned >= required:
                break
            self._assign(state, day_schedule, ShiftKind.NIGHT)
            assigned += 1

        return self._shortfall(check_date, ShiftKind.NIGHT, required, assigned)

    def _assign_public_off(
        self, states: RunStates, day_schedule: DaySchedule
    ) -> None:
        for state in states.values():
            if not state.is_assigned(day_schedule.date):
                self._assign(state, day_schedule, ShiftKind.PUBLIC_OFF)

    def _shortfall(
        self, check_date: str, kind: ShiftKind, required: int, actual: int
    ) -> List[ScheduleWarning]:
        if actual >= required:
            return []
        warning = ScheduleWarning(
            date=check_date, shift=kind, required=required, actual=actual
        )
        logger.warning("Understaffed: %s", warning.message)
        return [warning]
