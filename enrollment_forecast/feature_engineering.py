"""
Feature engineering for the enrollment classifier.

Hashes the categorical course/term columns, converts boolean flags to
floats and concatenates them with the numeric columns.
"""

import logging
from dataclasses import asdict
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.feature_extraction import FeatureHasher

from enrollment_forecast.config import Config
from enrollment_forecast.schema import CANDIDATE_SCHEMA, CandidateExample, LabeledExample

logger = logging.getLogger(__name__)

CATEGORICAL_FEATURES = ["course_id", "term"]
BOOLEAN_FEATURES = ["is_morning", "is_online"]
NUMERIC_FEATURES = ["credits", "prereq_count", "lag_course_demand_t1", "lag_student_load_t1"]


def examples_to_frame(rows: Sequence[CandidateExample]) -> pd.DataFrame:
    """
    Convert records into a DataFrame.

    Columns follow the candidate schema, plus ``label`` when present.
    """
    columns = [name for name, _ in CANDIDATE_SCHEMA]
    if rows and isinstance(rows[0], LabeledExample):
        columns.append("label")
    return pd.DataFrame([asdict(row) for row in rows], columns=columns)


def build_feature_matrix(
    rows: Sequence[CandidateExample],
    n_hash_features: int = Config.HASH_FEATURES
) -> np.ndarray:
    """
    Build a dense feature matrix for the classifier.

    student_id is an identifier only and is never used as a feature.

    Args:
        rows: Candidate or labeled records
        n_hash_features: Number of hash buckets for categorical columns

    Returns:
        Array of shape (len(rows), n_hash_features + 6)
    """
    df = examples_to_frame(rows)

    hasher = FeatureHasher(n_features=n_hash_features, input_type="string", alternate_sign=False)
    tokens = [
        [f"{col}={value}" for col, value in zip(CATEGORICAL_FEATURES, values)]
        for values in df[CATEGORICAL_FEATURES].itertuples(index=False, name=None)
    ]
    hashed = hasher.transform(tokens).toarray() if tokens else np.zeros((0, n_hash_features))

    flags = df[BOOLEAN_FEATURES].astype(float).to_numpy()
    numeric = df[NUMERIC_FEATURES].astype(float).to_numpy()

    X = np.hstack([hashed, flags, numeric])
    logger.debug(f"Built feature matrix with shape {X.shape}")
    return X


def label_vector(rows: Sequence[LabeledExample]) -> np.ndarray:
    """Return labels as an integer array (1 = enrolled)."""
    return np.array([1 if row.label else 0 for row in rows], dtype=int)
