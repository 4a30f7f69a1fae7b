"""
Model training and evaluation.

Fits a classifier on the training split and scores the test split. Metrics
are only computed when the test split holds both classes.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from sklearn.metrics import accuracy_score, auc, f1_score, precision_recall_curve

from enrollment_forecast.classifier import Classifier, TrainedModel
from enrollment_forecast.feature_engineering import label_vector
from enrollment_forecast.schema import LabeledExample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    auc_pr: float
    f1: float
    accuracy: float
    test_size: int
    positives: int
    negatives: int

    def summary(self) -> str:
        return f"AUC-PR={self.auc_pr:.3f}  F1={self.f1:.3f}  Acc={self.accuracy:.2%}"


@dataclass(frozen=True)
class SkippedEvaluation:
    """Marker returned when the test split cannot support classification metrics."""

    reason: str
    test_size: int
    positives: int
    negatives: int


def compute_metrics(
    y_true: np.ndarray,
    y_score: np.ndarray,
    threshold: float = 0.5
) -> EvaluationResult:
    """
    Compute AUC-PR, F1 and accuracy for binary labels and probabilities.

    Args:
        y_true: 0/1 labels containing both classes
        y_score: Positive-class probabilities
        threshold: Probability at or above which a row is predicted positive

    Returns:
        EvaluationResult
    """
    y_true = np.asarray(y_true, dtype=int)
    y_score = np.asarray(y_score, dtype=float)
    y_pred = (y_score >= threshold).astype(int)

    precision, recall, _ = precision_recall_curve(y_true, y_score)
    positives = int(y_true.sum())

    return EvaluationResult(
        auc_pr=float(auc(recall, precision)),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        accuracy=float(accuracy_score(y_true, y_pred)),
        test_size=len(y_true),
        positives=positives,
        negatives=len(y_true) - positives
    )


def train_and_evaluate(
    train_set: Sequence[LabeledExample],
    test_set: Sequence[LabeledExample],
    classifier: Classifier
) -> Tuple[TrainedModel, Union[EvaluationResult, SkippedEvaluation]]:
    """
    Fit on the training split, score the test split and evaluate.

    Classifier errors are not caught.

    Args:
        train_set: Rows to fit on
        test_set: Rows to score and evaluate against
        classifier: Any Classifier implementation

    Returns:
        Tuple of (trained model, EvaluationResult or SkippedEvaluation)
    """
    logger.info(f"Fitting classifier on {len(train_set)} training rows")
    model = classifier.fit(train_set)

    y_true = label_vector(test_set)
    y_score = model.score_probabilities(test_set)

    positives = int(y_true.sum())
    negatives = len(y_true) - positives

    if positives == 0 or negatives == 0:
        skipped = SkippedEvaluation(
            reason="test set contains a single class; AUC-PR/F1 omitted",
            test_size=len(y_true),
            positives=positives,
            negatives=negatives
        )
        logger.warning(
            f"Test set has only one class (positives={positives}, negatives={negatives}); "
            "skipping AUC-PR/F1/accuracy"
        )
        return model, skipped

    evaluation = compute_metrics(y_true, y_score, threshold=model.decision_threshold)

    logger.info("Model Evaluation Results:")
    logger.info(f"  {evaluation.summary()}")
    logger.info(f"  Test rows: {evaluation.test_size} (positives={positives}, negatives={negatives})")

    return model, evaluation
