"""
Export strategies for schedule data.

This module implements the Strategy Pattern for exporting schedule results
to delimited grids. Each exporter encapsulates a specific output format.
"""

import csv
from abc import ABC, abstractmethod
from pathlib import Path

from .models import ScheduleConfig, ScheduleResult, ShiftKind, Worker
from .query import export_code, worker_row

# Spreadsheet applications need the BOM to detect UTF-8.
GRID_ENCODING = "utf-8-sig"
DEFAULT_ROW_LABEL = "従業員"


def default_filename(config: ScheduleConfig, extension: str = "tsv") -> str:
    """Legacy download name for an exported month, e.g. シフト表_2025-01.tsv"""
    return f"シフト表_{config.month_key}.{extension}"


class ExportStrategy(ABC):
    """Abstract base class for schedule export strategies.

    Subclasses implement specific export formats.
    Common helper methods for data transformation are provided here.
    """

    def __init__(self, result: ScheduleResult):
        """Initialize the export strategy.

        Args:
            result: The schedule result to export
        """
        self.result = result

    @abstractmethod
    def export(self, filepath: str | Path) -> None:
        """Export schedule to the specified file.

        Args:
            filepath: Path to the output file
        """
        pass

    def _get_dates(self) -> list[str]:
        """Ordered canonical dates of the scheduled month."""
        return self.result.config.dates

    def _get_worker_codes(self, worker: Worker) -> list[str]:
        """Export codes for one worker, one per day of the month."""
        return [
            export_code(kind)
            for kind in worker_row(self.result.days, self._get_dates(), worker.id)
        ]


class GridExporter(ExportStrategy):
    """Exports the schedule as a worker-by-day grid.

    Output format:
    - Header row: row label, then day of month 1..N
    - One row per worker in roster order: display name, then one code per day
    """

    def __init__(
        self,
        result: ScheduleResult,
        delimiter: str = "\t",
        row_label: str = DEFAULT_ROW_LABEL,
    ):
        """Initialize the grid exporter.

        Args:
            result: The schedule result to export
            delimiter: Column separator (tab by default)
            row_label: Text of the top-left header cell
        """
        super().__init__(result)
        self.delimiter = delimiter
        self.row_label = row_label

    def rows(self) -> list[list[str]]:
        """Build the grid, header row first."""
        dates = self._get_dates()
        header = [self.row_label] + [str(day) for day in range(1, len(dates) + 1)]
        rows = [header]
        for worker in self.result.config.workers:
            rows.append([worker.name] + self._get_worker_codes(worker))
        return rows

    def export(self, filepath: str | Path) -> None:
        """Write the grid as UTF-8 with a byte-order mark.

        Args:
            filepath: Path to the output file
        """
        with open(filepath, "w", newline="", encoding=GRID_ENCODING) as f:
            writer = csv.writer(f, delimiter=self.delimiter, lineterminator="\n")
            writer.writerows(self.rows())

        print(f"\n✓ Schedule exported to {filepath}")


class TSVExporter(GridExporter):
    """Tab-separated grid, the legacy export format."""

    def __init__(self, result: ScheduleResult, row_label: str = DEFAULT_ROW_LABEL):
        super().__init__(result, delimiter="\t", row_label=row_label)


class CSVExporter(GridExporter):
    """Comma-separated grid."""

    def __init__(self, result: ScheduleResult, row_label: str = DEFAULT_ROW_LABEL):
        super().__init__(result, delimiter=",", row_label=row_label)


def read_grid(
    filepath: str | Path, delimiter: str = "\t"
) -> list[tuple[str, list[ShiftKind]]]:
    """
    Read an exported grid back into per-worker classifications.

    Args:
        filepath: Path to a file written by GridExporter
        delimiter: Column separator used when exporting

    Returns:
        (worker name, shift kinds for day 1..N) per worker row, in file order
    """
    with open(filepath, newline="", encoding=GRID_ENCODING) as f:
        reader = csv.reader(f, delimiter=delimiter)
        header = next(reader, None)
        if header is None:
            return []
        num_days = len(header) - 1

        workers = []
        for row in reader:
            if not row:
                continue
            codes = row[1:] + [""] * (num_days - len(row[1:]))
            workers.append(
                (row[0], [ShiftKind.from_code(code) for code in codes[:num_days]])
            )
    return workers
