"""
End-to-end enrollment demand pipeline.

Runs as one linear sequence: load -> split -> train/evaluate -> save model ->
database check -> score candidates -> export predictions -> aggregate ->
export demand.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from enrollment_forecast.aggregation import aggregate_demand
from enrollment_forecast.classifier import Classifier, GradientBoostingEnrollmentClassifier, TrainedModel
from enrollment_forecast.config import Config
from enrollment_forecast.data_loading import load_candidate_examples, load_labeled_examples
from enrollment_forecast.database import check_database_connection
from enrollment_forecast.export import export_demand, export_predictions
from enrollment_forecast.forecasting import score_candidates
from enrollment_forecast.model_training import EvaluationResult, SkippedEvaluation, train_and_evaluate
from enrollment_forecast.schema import DemandRecord, ScoredCandidate, Split
from enrollment_forecast.splitting import stratified_split

logger = logging.getLogger(__name__)

PREDICTIONS_FILENAME = "predictions_by_student.csv"
DEMAND_FILENAME = "demand_by_course.csv"


@dataclass(frozen=True)
class PipelineResult:
    split: Split
    model: TrainedModel
    evaluation: Union[EvaluationResult, SkippedEvaluation]
    scored: List[ScoredCandidate]
    demand: List[DemandRecord]
    predictions_path: Path
    demand_path: Path
    model_path: Optional[Path]


def run_pipeline(
    train_path: str = Config.TRAIN_PATH,
    candidates_path: str = Config.CANDIDATES_PATH,
    output_dir: str = Config.OUTPUT_DIR,
    model_path: Optional[str] = Config.MODEL_PATH,
    test_fraction: float = Config.TEST_FRACTION,
    seed: int = Config.SPLIT_SEED,
    classifier: Optional[Classifier] = None,
    check_database: bool = True
) -> PipelineResult:
    """
    Run the full pipeline and write both CSV outputs.

    Args:
        train_path: Labeled training CSV
        candidates_path: Next-term candidate CSV
        output_dir: Directory for predictions_by_student.csv and demand_by_course.csv
        model_path: Where to save the trained model (None to skip saving)
        test_fraction: Share of each class held out for evaluation
        seed: Split seed
        classifier: Classifier to fit (default: gradient-boosted trees)
        check_database: Whether to run the Supabase reachability check

    Returns:
        PipelineResult

    Raises:
        InsufficientDataError: If the training data lacks a label class
    """
    classifier = classifier or GradientBoostingEnrollmentClassifier()

    logger.info("\n[Step 1] Loading training data...")
    examples = load_labeled_examples(train_path)

    logger.info("\n[Step 2] Stratified train/test split...")
    split = stratified_split(examples, test_fraction=test_fraction, seed=seed)

    logger.info("\n[Step 3] Training and evaluating model...")
    model, evaluation = train_and_evaluate(split.train, split.test, classifier)

    saved_model_path = None
    if model_path:
        model.save(model_path)
        saved_model_path = Path(model_path)

    if check_database:
        logger.info("\n[Step 4] Checking database connection...")
        check_database_connection()

    logger.info("\n[Step 5] Scoring next-term candidates...")
    candidates = load_candidate_examples(candidates_path)
    scored = score_candidates(model, candidates)

    logger.info("\n[Step 6] Exporting results...")
    out_dir = Path(output_dir)
    predictions_path = export_predictions(scored, str(out_dir / PREDICTIONS_FILENAME))

    demand = aggregate_demand(scored)
    demand_path = export_demand(demand, str(out_dir / DEMAND_FILENAME))

    return PipelineResult(
        split=split,
        model=model,
        evaluation=evaluation,
        scored=scored,
        demand=demand,
        predictions_path=predictions_path,
        demand_path=demand_path,
        model_path=saved_model_path
    )
