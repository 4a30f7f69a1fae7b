"""
CSV export of predictions and course demand.

Rows are written as plain comma-joined text. Values are not quoted or
escaped, so identifiers must not contain commas.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

from enrollment_forecast.schema import DemandRecord, ScoredCandidate

logger = logging.getLogger(__name__)

PREDICTIONS_HEADER = "student_id,course_id,term,probability"
DEMAND_HEADER = "course_id,term,expected_enrollment"


def write_csv(path: str, header: str, rows: Iterable[str]) -> Path:
    """
    Write a header line followed by one line per row.

    Args:
        path: Output file path (parent directories are created)
        header: Header line without trailing newline
        rows: Pre-formatted lines

    Returns:
        Path of the written file
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8", newline="") as f:
        f.write(header + "\n")
        for row in rows:
            f.write(row + "\n")
    logger.info(f"File written: {out}")
    return out


def export_predictions(scored: Sequence[ScoredCandidate], path: str) -> Path:
    """Write predictions_by_student.csv style output."""
    return write_csv(
        path,
        PREDICTIONS_HEADER,
        (f"{s.student_id},{s.course_id},{s.term},{s.probability!r}" for s in scored)
    )


def export_demand(demand: Sequence[DemandRecord], path: str) -> Path:
    """Write demand_by_course.csv style output, keeping the given order."""
    return write_csv(
        path,
        DEMAND_HEADER,
        (f"{d.course_id},{d.term},{d.expected_enrollment:.2f}" for d in demand)
    )
