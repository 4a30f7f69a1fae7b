"""
Configuration management for the enrollment forecasting pipeline.

Loads environment variables and validates settings.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the enrollment forecasting pipeline."""

    # Input / output locations
    TRAIN_PATH: str = os.getenv("TRAIN_PATH", "data/train.csv")
    CANDIDATES_PATH: str = os.getenv("CANDIDATES_PATH", "data/candidates_next_term.csv")
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", ".")
    MODEL_PATH: str = os.getenv("MODEL_PATH", "models/enroll_model.pkl")

    # Split configuration
    TEST_FRACTION: float = float(os.getenv("TEST_FRACTION", "0.30"))
    SPLIT_SEED: int = int(os.getenv("SPLIT_SEED", "7"))

    # Model configuration (gradient-boosted trees)
    MODEL_SEED: int = int(os.getenv("MODEL_SEED", "7"))
    DECISION_THRESHOLD: float = 0.5
    HASH_FEATURES: int = 1024  # Hash buckets shared by course_id and term
    GBM_LEARNING_RATE: float = 0.1
    GBM_MAX_ITER: int = 100
    GBM_MAX_LEAF_NODES: int = 31
    GBM_MIN_SAMPLES_LEAF: int = 20

    # Supabase credentials (optional, only used for the reachability check)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    SUPABASE_HEALTHCHECK_TABLE: str = os.getenv("SUPABASE_HEALTHCHECK_TABLE", "enrollments")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def has_database(cls) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(cls.SUPABASE_URL and cls.SUPABASE_SERVICE_ROLE_KEY)

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If a setting is out of range.
        """
        problems = []

        if not 0.0 < cls.TEST_FRACTION < 1.0:
            problems.append(f"TEST_FRACTION must be in (0, 1), got {cls.TEST_FRACTION}")
        if not 0.0 <= cls.DECISION_THRESHOLD <= 1.0:
            problems.append(f"DECISION_THRESHOLD must be in [0, 1], got {cls.DECISION_THRESHOLD}")
        if cls.HASH_FEATURES < 1:
            problems.append(f"HASH_FEATURES must be positive, got {cls.HASH_FEATURES}")
        if cls.GBM_MAX_ITER < 1:
            problems.append(f"GBM_MAX_ITER must be positive, got {cls.GBM_MAX_ITER}")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")


# Validate configuration on import
Config.validate()
