"""
Loading of off-requests from CSV files.

Expected columns: ID, Name, Date (YYYY-MM-DD) and optionally Priority
(TRUE/FALSE). One row per requested day off.
"""

import logging
from pathlib import Path

import pandas as pd

from .calendar_utils import is_canonical_date
from .models import Request, Worker

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("ID", "Name", "Date")


class IngestionError(Exception):
    """Raised when a request file cannot be turned into a roster."""

    pass


def _skip_bad_line(bad_line: list[str]) -> None:
    logger.warning(
        "Skipping invalid request row with %d fields: %s",
        len(bad_line),
        ",".join(bad_line),
    )
    return None


def load_requests_csv(filepath: str | Path) -> list[Worker]:
    """
    Load workers and their off-requests from a CSV file.

    Invalid rows (blank fields, malformed dates, extra fields) are skipped
    with a warning.

    Args:
        filepath: Path to the CSV file

    Returns:
        Workers in order of first appearance, requests in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        IngestionError: If the file cannot be parsed, required columns are
            missing or no row is valid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.EmptyDataError as e:
        raise IngestionError(f"Request file is empty: {path}") from e
    except UnicodeDecodeError as e:
        raise IngestionError(
            f"Request file is not UTF-8 encoded: {path}. "
            f"Save it as UTF-8 CSV and try again"
        ) from e
    except pd.errors.ParserError as e:
        raise IngestionError(f"Request file could not be parsed: {e}") from e

    df = df.fillna("")
    df.columns = [str(col).strip() for col in df.columns]
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise IngestionError(
            f"Request file is missing column(s): {', '.join(missing)}. "
            f"Expected header: ID,Name,Date,Priority"
        )
    if df.empty:
        raise IngestionError(f"Request file has a header but no rows: {path}")

    workers: dict[str, Worker] = {}
    for index, row in df.iterrows():
        worker_id = row["ID"].strip()
        name = row["Name"].strip()
        requested = row["Date"].strip()
        priority = row.get("Priority", "").strip().upper() == "TRUE"

        if not worker_id or not name or not is_canonical_date(requested):
            logger.warning("Skipping invalid request row %d: %s", index + 2, dict(row))
            continue

        if worker_id not in workers:
            workers[worker_id] = Worker(id=worker_id, name=name)
        workers[worker_id].requests.append(Request(date=requested, priority=priority))

    if not workers:
        raise IngestionError(f"No valid request rows in {path}")

    logger.info("Loaded %d worker(s) from %s", len(workers), path)
    return list(workers.values())
