#!/usr/bin/env python3
"""
Main orchestration script for the enrollment demand pipeline.

This script:
1. Loads labeled historical (student, course, term) rows
2. Splits them into train/test sets, stratified by label
3. Trains a gradient-boosted classifier and evaluates it on the test set
4. Saves the trained model
5. Optionally checks the Supabase connection
6. Scores next-term candidates
7. Writes predictions_by_student.csv and demand_by_course.csv
"""

import argparse
import logging
import sys

from enrollment_forecast.config import Config
from enrollment_forecast.model_training import EvaluationResult
from enrollment_forecast.pipeline import run_pipeline

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forecast next-term course enrollment demand.")
    parser.add_argument("--train", default=Config.TRAIN_PATH, help="Labeled training CSV")
    parser.add_argument("--candidates", default=Config.CANDIDATES_PATH, help="Next-term candidates CSV")
    parser.add_argument("--output-dir", default=Config.OUTPUT_DIR, help="Directory for output CSVs")
    parser.add_argument("--model-path", default=Config.MODEL_PATH, help="Where to save the trained model")
    parser.add_argument("--test-fraction", type=float, default=Config.TEST_FRACTION,
                        help="Share of each class held out for evaluation")
    parser.add_argument("--seed", type=int, default=Config.SPLIT_SEED, help="Split seed")
    parser.add_argument("--skip-db-check", action="store_true", help="Skip the Supabase connection check")
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    args = parse_args(argv)
    try:
        logger.info("=" * 60)
        logger.info("Starting Enrollment Demand Pipeline")
        logger.info("=" * 60)

        result = run_pipeline(
            train_path=args.train,
            candidates_path=args.candidates,
            output_dir=args.output_dir,
            model_path=args.model_path,
            test_fraction=args.test_fraction,
            seed=args.seed,
            check_database=not args.skip_db_check
        )

        logger.info("\n" + "=" * 60)
        logger.info("Enrollment Demand Pipeline Completed Successfully!")
        logger.info("=" * 60)
        logger.info("\nSummary:")
        logger.info(f"  Train rows: {len(result.split.train)}  Test rows: {len(result.split.test)}")
        if isinstance(result.evaluation, EvaluationResult):
            logger.info(f"  {result.evaluation.summary()}")
        else:
            logger.info(f"  Metrics skipped: {result.evaluation.reason}")
        logger.info(f"  Candidates scored: {len(result.scored)}")
        logger.info(f"  Courses forecast: {len(result.demand)}")
        logger.info(f"  Outputs: {result.predictions_path} and {result.demand_path}")

    except Exception as e:
        logger.error(f"\nPipeline failed with error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
