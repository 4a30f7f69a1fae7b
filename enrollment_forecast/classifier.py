"""
Binary classifier capability used by the pipeline.

The pipeline only depends on ``Classifier.fit`` and
``TrainedModel.score_probability``; any supervised binary classifier can be
substituted by subclassing these two classes.
"""

import logging
import pickle
from pathlib import Path
from typing import Sequence

import numpy as np
from sklearn.ensemble import HistGradientBoostingClassifier

from enrollment_forecast.config import Config
from enrollment_forecast.exceptions import InsufficientDataError
from enrollment_forecast.feature_engineering import build_feature_matrix, label_vector
from enrollment_forecast.schema import CandidateExample, LabeledExample

logger = logging.getLogger(__name__)


class TrainedModel:
    """A fitted model. Exposes scoring only."""

    decision_threshold: float = Config.DECISION_THRESHOLD

    def score_probability(self, row: CandidateExample) -> float:
        """Probability in [0, 1] that the row's student enrolls."""
        raise NotImplementedError("Subclasses must implement score_probability")

    def score_probabilities(self, rows: Sequence[CandidateExample]) -> np.ndarray:
        return np.array([self.score_probability(row) for row in rows], dtype=float)

    def predict_label(self, row: CandidateExample) -> bool:
        return self.score_probability(row) >= self.decision_threshold

    def save(self, filepath: str) -> None:
        """Pickle the model to disk, creating the parent directory."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            pickle.dump(self, f)
        logger.info(f"Model saved to {path}")


class Classifier:
    """Trainable binary classifier."""

    def fit(self, rows: Sequence[LabeledExample]) -> TrainedModel:
        raise NotImplementedError("Subclasses must implement fit")


class GradientBoostingEnrollmentModel(TrainedModel):
    """Trained gradient-boosted trees over the hashed feature matrix."""

    def __init__(
        self,
        estimator: HistGradientBoostingClassifier,
        n_hash_features: int,
        decision_threshold: float = Config.DECISION_THRESHOLD
    ):
        self.estimator = estimator
        self.n_hash_features = n_hash_features
        self.decision_threshold = decision_threshold
        # Column of predict_proba holding the positive class
        self._positive_index = list(estimator.classes_).index(1)

    def score_probabilities(self, rows: Sequence[CandidateExample]) -> np.ndarray:
        if not rows:
            return np.zeros(0, dtype=float)
        X = build_feature_matrix(rows, n_hash_features=self.n_hash_features)
        proba = self.estimator.predict_proba(X)[:, self._positive_index]
        return np.clip(proba, 0.0, 1.0)

    def score_probability(self, row: CandidateExample) -> float:
        return float(self.score_probabilities([row])[0])


class GradientBoostingEnrollmentClassifier(Classifier):
    """
    Gradient-boosted decision trees for enrollment probability.

    Uses scikit-learn's histogram-based boosting, which grows leaf-wise trees
    bounded by max_leaf_nodes in the same way LightGBM does.
    """

    def __init__(
        self,
        learning_rate: float = Config.GBM_LEARNING_RATE,
        max_iter: int = Config.GBM_MAX_ITER,
        max_leaf_nodes: int = Config.GBM_MAX_LEAF_NODES,
        min_samples_leaf: int = Config.GBM_MIN_SAMPLES_LEAF,
        n_hash_features: int = Config.HASH_FEATURES,
        decision_threshold: float = Config.DECISION_THRESHOLD,
        random_state: int = Config.MODEL_SEED
    ):
        self.learning_rate = learning_rate
        self.max_iter = max_iter
        self.max_leaf_nodes = max_leaf_nodes
        self.min_samples_leaf = min_samples_leaf
        self.n_hash_features = n_hash_features
        self.decision_threshold = decision_threshold
        self.random_state = random_state

    def fit(self, rows: Sequence[LabeledExample]) -> GradientBoostingEnrollmentModel:
        """
        Fit on labeled rows.

        Raises:
            InsufficientDataError: If the rows do not contain both classes
        """
        y = label_vector(rows)
        if len(np.unique(y)) < 2:
            raise InsufficientDataError("Training rows must contain both enrolled and not-enrolled examples")

        X = build_feature_matrix(rows, n_hash_features=self.n_hash_features)

        # Small training sets cannot fill leaves of the configured size
        min_samples_leaf = max(1, min(self.min_samples_leaf, len(rows) // 10))

        logger.info(
            f"Training gradient-boosted classifier on {len(rows)} rows "
            f"(learning_rate={self.learning_rate}, max_iter={self.max_iter}, "
            f"min_samples_leaf={min_samples_leaf})"
        )

        estimator = HistGradientBoostingClassifier(
            learning_rate=self.learning_rate,
            max_iter=self.max_iter,
            max_leaf_nodes=self.max_leaf_nodes,
            min_samples_leaf=min_samples_leaf,
            early_stopping=False,
            random_state=self.random_state
        )
        estimator.fit(X, y)

        logger.info(f"Model training completed ({estimator.n_iter_} boosting iterations)")

        return GradientBoostingEnrollmentModel(
            estimator,
            n_hash_features=self.n_hash_features,
            decision_threshold=self.decision_threshold
        )


def load_model(filepath: str) -> TrainedModel:
    """Load a model written by ``TrainedModel.save``."""
    with open(filepath, "rb") as f:
        model = pickle.load(f)
    if not isinstance(model, TrainedModel):
        raise ValueError(f"{filepath} does not contain a trained enrollment model")
    logger.info(f"Model loaded from {filepath}")
    return model
