"""
Next-term enrollment scoring.

Applies a trained model to candidate rows.
"""

import logging
from typing import List, Sequence

import numpy as np

from enrollment_forecast.classifier import TrainedModel
from enrollment_forecast.schema import CandidateExample, ScoredCandidate

logger = logging.getLogger(__name__)


def score_candidates(
    model: TrainedModel,
    candidates: Sequence[CandidateExample]
) -> List[ScoredCandidate]:
    """
    Score each candidate with the model's enrollment probability.

    Output order matches input order, one ScoredCandidate per candidate.
    """
    probabilities = np.clip(model.score_probabilities(candidates), 0.0, 1.0)

    scored = [
        ScoredCandidate(candidate=candidate, probability=float(p))
        for candidate, p in zip(candidates, probabilities)
    ]

    if scored:
        logger.info(f"Scored {len(scored)} candidates")
        logger.info(f"Average enrollment probability: {probabilities.mean():.3f}")
    else:
        logger.warning("No candidates to score")

    return scored
