"""
Shift Roster - Monthly day/night shift allocation honoring off-requests.
"""

__version__ = "0.1.0"

from .allocator import (
    EmptyRosterError,
    InvalidPeriodError,
    SchedulingError,
    ShiftAllocator,
)
from .config import ConfigLoader, ConfigurationError, InvalidDateFormatError
from .exporters import CSVExporter, GridExporter, TSVExporter, read_grid
from .ingest import IngestionError, load_requests_csv
from .models import (
    DaySchedule,
    Request,
    ScheduleConfig,
    ScheduleResult,
    ScheduleWarning,
    ShiftKind,
    StaffingPolicy,
    Worker,
    WorkerSummary,
)
from .policy import required_staffing
from .query import shift_of
from .reporter import ScheduleReporter

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "InvalidDateFormatError",
    "IngestionError",
    "load_requests_csv",
    "Request",
    "Worker",
    "StaffingPolicy",
    "ScheduleConfig",
    "ScheduleResult",
    "DaySchedule",
    "ScheduleWarning",
    "ShiftKind",
    "WorkerSummary",
    "required_staffing",
    "shift_of",
    "SchedulingError",
    "EmptyRosterError",
    "InvalidPeriodError",
    "ShiftAllocator",
    "GridExporter",
    "TSVExporter",
    "CSVExporter",
    "read_grid",
    "ScheduleReporter",
]
