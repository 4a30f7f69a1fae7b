"""Shared fixtures for the enrollment forecasting tests."""

from __future__ import annotations

from typing import Callable, Dict, Sequence

import pytest

from enrollment_forecast.classifier import Classifier, TrainedModel
from enrollment_forecast.schema import CandidateExample, LabeledExample

TRAIN_HEADER = (
    "student_id,course_id,term,credits,prereq_count,is_morning,is_online,"
    "lag_course_demand_t1,lag_student_load_t1,label"
)
CANDIDATE_HEADER = (
    "student_id,course_id,term,credits,prereq_count,is_morning,is_online,"
    "lag_course_demand_t1,lag_student_load_t1"
)


def make_example(
    student_id: str,
    label: bool,
    course_id: str = "MATH101",
    term: str = "2024-1",
    is_morning: bool = True,
) -> LabeledExample:
    return LabeledExample(
        student_id=student_id,
        course_id=course_id,
        term=term,
        credits=3.0,
        prereq_count=0.0,
        is_morning=is_morning,
        is_online=False,
        lag_course_demand_t1=50.0,
        lag_student_load_t1=12.0,
        label=label,
    )


def make_candidate(student_id: str, course_id: str, term: str = "2025-1") -> CandidateExample:
    return CandidateExample(
        student_id=student_id,
        course_id=course_id,
        term=term,
        credits=3.0,
        prereq_count=1.0,
        is_morning=False,
        is_online=True,
        lag_course_demand_t1=40.0,
        lag_student_load_t1=9.0,
    )


class LookupModel(TrainedModel):
    """Scores rows from a fixed function of the row."""

    def __init__(self, score: Callable[[CandidateExample], float], decision_threshold: float = 0.5):
        self._score = score
        self.decision_threshold = decision_threshold

    def score_probability(self, row: CandidateExample) -> float:
        return self._score(row)


class LookupClassifier(Classifier):
    """Records the rows it was fitted on and returns a LookupModel."""

    def __init__(self, score: Callable[[CandidateExample], float], decision_threshold: float = 0.5):
        self.score = score
        self.decision_threshold = decision_threshold
        self.fitted_on: Sequence[LabeledExample] = ()

    def fit(self, rows):
        self.fitted_on = tuple(rows)
        return LookupModel(self.score, self.decision_threshold)


@pytest.fixture
def balanced_examples() -> list[LabeledExample]:
    """10 enrolled and 10 not-enrolled rows with unique student ids."""
    positives = [make_example(f"P{i:02d}", True) for i in range(10)]
    negatives = [make_example(f"N{i:02d}", False, is_morning=False) for i in range(10)]
    return positives + negatives


@pytest.fixture
def course_probabilities() -> Dict[str, float]:
    return {"MATH101": 0.8, "CS200": 0.4, "HIST210": 0.1}


@pytest.fixture
def write_train_csv(tmp_path):
    def _write(lines, name="train.csv"):
        path = tmp_path / name
        path.write_text("\n".join([TRAIN_HEADER, *lines]) + "\n")
        return path
    return _write


@pytest.fixture
def write_candidates_csv(tmp_path):
    def _write(lines, name="candidates.csv"):
        path = tmp_path / name
        path.write_text("\n".join([CANDIDATE_HEADER, *lines]) + "\n")
        return path
    return _write
