"""
Aggregation of student-level probabilities to course demand.

Transforms scored (student, course, term) rows into expected enrollment per
course and term.
"""

import logging
from typing import List, Sequence

import pandas as pd

from enrollment_forecast.schema import DemandRecord, ScoredCandidate

logger = logging.getLogger(__name__)


def aggregate_demand(scored: Sequence[ScoredCandidate]) -> List[DemandRecord]:
    """
    Aggregate scored candidates to (course_id, term) level.

    expected_enrollment is the sum of member probabilities, i.e. the expected
    headcount if each student enrolls independently.

    Args:
        scored: Scored candidate rows (not modified)

    Returns:
        DemandRecords sorted by expected_enrollment descending. Ties keep the
        order in which each (course_id, term) was first seen.
    """
    if not scored:
        logger.info("No scored candidates to aggregate")
        return []

    logger.info(f"Aggregating {len(scored)} student-level predictions to course level")

    df = pd.DataFrame(
        {
            "course_id": [row.course_id for row in scored],
            "term": [row.term for row in scored],
            "probability": [row.probability for row in scored],
        }
    )

    aggregated = (
        df.groupby(["course_id", "term"], sort=False, as_index=False)
        .agg({"probability": "sum"})
        .rename(columns={"probability": "expected_enrollment"})
    )

    # groupby(sort=False) keeps discovery order and sorted() is stable, so ties keep it
    demand = sorted(
        (
            DemandRecord(course_id=course_id, term=term, expected_enrollment=float(total))
            for course_id, term, total in aggregated.itertuples(index=False, name=None)
        ),
        key=lambda record: record.expected_enrollment,
        reverse=True
    )

    logger.info(f"Aggregated to {len(demand)} course/term groups")
    logger.info(f"Total expected enrollment: {aggregated['expected_enrollment'].sum():.2f}")

    return demand
