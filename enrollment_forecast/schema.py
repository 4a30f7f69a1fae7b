"""
Row schema and immutable records for the enrollment pipeline.

The column schema is an ordered list of (name, type) pairs that the loader
uses to validate and convert tabular input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

CANDIDATE_SCHEMA: Tuple[Tuple[str, type], ...] = (
    ("student_id", str),
    ("course_id", str),
    ("term", str),
    ("credits", float),
    ("prereq_count", float),
    ("is_morning", bool),
    ("is_online", bool),
    ("lag_course_demand_t1", float),
    ("lag_student_load_t1", float),
)

TRAIN_SCHEMA: Tuple[Tuple[str, type], ...] = CANDIDATE_SCHEMA + (("label", bool),)


@dataclass(frozen=True)
class CandidateExample:
    """A future-term (student, course, term) row awaiting prediction."""

    student_id: str
    course_id: str
    term: str
    credits: float
    prereq_count: float
    is_morning: bool
    is_online: bool
    lag_course_demand_t1: float
    lag_student_load_t1: float


@dataclass(frozen=True)
class LabeledExample(CandidateExample):
    """A historical row with a known outcome (label=True means enrolled)."""

    label: bool


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate row plus the model's enrollment probability."""

    candidate: CandidateExample
    probability: float

    def __post_init__(self):
        p = float(self.probability)
        if math.isnan(p) or p < 0.0 or p > 1.0:
            raise ValueError(f"probability must be in [0, 1], got {self.probability}")
        object.__setattr__(self, "probability", p)

    @property
    def student_id(self) -> str:
        return self.candidate.student_id

    @property
    def course_id(self) -> str:
        return self.candidate.course_id

    @property
    def term(self) -> str:
        return self.candidate.term


@dataclass(frozen=True)
class DemandRecord:
    course_id: str
    term: str
    expected_enrollment: float


@dataclass(frozen=True)
class Split:
    """Disjoint train/test partition of a labeled dataset."""

    train: Tuple[LabeledExample, ...]
    test: Tuple[LabeledExample, ...]

    @property
    def train_positives(self) -> int:
        return sum(1 for row in self.train if row.label)

    @property
    def train_negatives(self) -> int:
        return len(self.train) - self.train_positives

    @property
    def test_positives(self) -> int:
        return sum(1 for row in self.test if row.label)

    @property
    def test_negatives(self) -> int:
        return len(self.test) - self.test_positives
