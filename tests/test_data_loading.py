"""Tests for CSV loading against the column schema."""

from __future__ import annotations

import pytest

from enrollment_forecast.data_loading import (
    load_candidate_examples,
    load_labeled_examples,
    parse_bool,
)
from enrollment_forecast.schema import CandidateExample, LabeledExample


def test_loads_typed_labeled_rows(write_train_csv):
    path = write_train_csv([
        "S001,MATH101,2024-1,4,0,true,false,118,15,true",
        "S002,CS200,2024-1,3,1,0,1,64.5,12,0",
    ])

    rows = load_labeled_examples(str(path))

    assert rows == [
        LabeledExample("S001", "MATH101", "2024-1", 4.0, 0.0, True, False, 118.0, 15.0, True),
        LabeledExample("S002", "CS200", "2024-1", 3.0, 1.0, False, True, 64.5, 12.0, False),
    ]


def test_loads_candidates_and_ignores_extra_columns(tmp_path):
    path = tmp_path / "candidates.csv"
    path.write_text(
        "student_id,course_id,term,credits,prereq_count,is_morning,is_online,"
        "lag_course_demand_t1,lag_student_load_t1,section\n"
        "S010,MATH101,2025-1,4,0,TRUE,FALSE,131,12,A\n"
    )

    rows = load_candidate_examples(str(path))

    assert rows == [CandidateExample("S010", "MATH101", "2025-1", 4.0, 0.0, True, False, 131.0, 12.0)]


def test_header_only_file(write_candidates_csv):
    assert load_candidate_examples(str(write_candidates_csv([]))) == []


def test_missing_column_is_reported(tmp_path):
    path = tmp_path / "train.csv"
    path.write_text("student_id,course_id,term\nS001,MATH101,2024-1\n")

    with pytest.raises(ValueError, match="label"):
        load_labeled_examples(str(path))


def test_bad_boolean_is_reported(write_train_csv):
    path = write_train_csv(["S001,MATH101,2024-1,4,0,maybe,false,118,15,true"])
    with pytest.raises(ValueError, match="is_morning"):
        load_labeled_examples(str(path))


def test_bad_number_is_reported(write_train_csv):
    path = write_train_csv(["S001,MATH101,2024-1,four,0,true,false,118,15,true"])
    with pytest.raises(ValueError, match="credits"):
        load_labeled_examples(str(path))


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_labeled_examples(str(tmp_path / "nope.csv"))


@pytest.mark.parametrize("text,expected", [
    ("true", True), ("True", True), ("1", True), (" yes ", True),
    ("false", False), ("FALSE", False), ("0", False), ("no", False),
])
def test_parse_bool(text, expected):
    assert parse_bool(text) is expected
