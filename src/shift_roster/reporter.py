"""
Reporting and output formatting for shift rosters.
"""

import pandas as pd

from .calendar_utils import parse_date
from .models import ScheduleResult, ShiftKind
from .policy import required_staffing


class ScheduleReporter:
    """Formats and displays allocation results."""

    def __init__(self, result: ScheduleResult):
        self.result = result
        self._names = {w.id: w.name for w in result.config.workers}

    def print_report(self, quiet: bool) -> None:
        """Print complete roster report."""
        self._print_header()
        self._print_daily_schedule()
        self._print_warnings()

        if not quiet:
            self._print_worker_summary()

    def _print_title(self, title: str) -> None:
        print("=" * 80)
        print(title)
        print("=" * 80)

    def _print_header(self) -> None:
        """Print report header."""
        cfg = self.result.config
        self._print_title("SHIFT ROSTER")

        print(f"\nMonth: {cfg.month_key} ({cfg.num_days} days)")
        print(f"Workers: {len(cfg.workers)}")
        print(f"Shortfall warnings: {len(self.result.warnings)}")
        print()

    def _names_of(self, worker_ids: list[str]) -> str:
        return ", ".join(self._names.get(wid, wid) for wid in worker_ids)

    def _print_daily_schedule(self) -> None:
        """Print day-by-day schedule."""
        self._print_title("DAILY SCHEDULE")

        policy = self.result.config.policy
        for check_date, day_schedule in self.result.days.items():
            requirement = required_staffing(check_date, policy)
            weekday = parse_date(check_date).strftime("%a")
            if policy.is_public_holiday(check_date):
                weekday += " (holiday)"
            print(
                f"{check_date} {weekday}  "
                f"Day [{len(day_schedule.day)}/{requirement.day}]: "
                f"{self._names_of(day_schedule.day):30s} "
                f"Night [{len(day_schedule.night)}/{requirement.night}]: "
                f"{self._names_of(day_schedule.night)}"
            )
            if day_schedule.requested_off:
                print(f"{'':15s}Requested off: {self._names_of(day_schedule.requested_off)}")
        print()

    def _print_warnings(self) -> None:
        """Print staffing shortfalls."""
        self._print_title("STAFFING WARNINGS")

        if not self.result.warnings:
            print("\n✓ All shifts fully staffed")
            print()
            return

        for warning in self.result.warnings:
            print(f"  • {warning.message}")
        print()

    def _print_worker_summary(self) -> None:
        """Print worker shift summary table."""
        self._print_title("WORKER SUMMARY")

        data = []
        for summary in self.result.worker_summaries():
            data.append(
                {
                    "Worker": summary.worker.name,
                    "ID": summary.worker.id,
                    "Day": summary.day_shifts,
                    "Night": summary.night_shifts,
                    "Total": summary.total_shifts,
                    "Requested Off": summary.requested_off,
                    "Off": summary.public_off,
                }
            )

        df = pd.DataFrame(data).set_index("Worker")
        print(df.to_string())
        print()

    def to_dataframe(self) -> pd.DataFrame:
        """Long-format assignments: one row per worker per date."""
        data = []

        for check_date in self.result.days:
            for worker in self.result.config.workers:
                kind = self.result.shift_of(check_date, worker.id)
                data.append(
                    {
                        "Date": check_date,
                        "Worker": worker.name,
                        "ID": worker.id,
                        "Shift": kind.value,
                    }
                )

        return pd.DataFrame(data, columns=["Date", "Worker", "ID", "Shift"])

    def export_to_csv(self, filepath: str, include_off: bool = False) -> None:
        """Export assignments to a long-format CSV file."""
        df = self.to_dataframe()
        if not include_off:
            df = df[df["Shift"] != ShiftKind.PUBLIC_OFF.value]
        df.to_csv(filepath, index=False)
        print(f"\n✓ Schedule exported to {filepath}")
