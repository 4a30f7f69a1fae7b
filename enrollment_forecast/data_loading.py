"""
Tabular data loading.

Reads comma-separated files with a header row into typed records, using an
explicit (name, type) schema for validation and conversion.
"""

import logging
from typing import Callable, List, Sequence, Tuple

import pandas as pd

from enrollment_forecast.schema import (
    CANDIDATE_SCHEMA,
    TRAIN_SCHEMA,
    CandidateExample,
    LabeledExample,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "y", "t"}
FALSE_VALUES = {"false", "0", "no", "n", "f"}


def validate_columns(df: pd.DataFrame, schema: Sequence[Tuple[str, type]], source: str) -> None:
    """
    Validate that DataFrame contains all schema columns.

    Raises:
        ValueError: If required columns are missing
    """
    required = [name for name, _ in schema]
    missing = [col for col in required if col not in df.columns]

    if missing:
        raise ValueError(
            f"{source} is missing required columns: {', '.join(missing)}. "
            f"Found columns: {', '.join(df.columns)}"
        )

    logger.info(f"{source} validation passed ({len(df)} rows)")


def parse_bool(value: str) -> bool:
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


def _convert_column(series: pd.Series, column_type: type, column: str) -> pd.Series:
    try:
        if column_type is bool:
            return series.map(parse_bool)
        if column_type is float:
            return series.str.strip().astype(float)
        return series.str.strip()
    except ValueError as e:
        raise ValueError(f"Invalid value in column '{column}': {e}") from e


def load_examples(
    path: str,
    schema: Sequence[Tuple[str, type]],
    record_type: Callable
) -> List:
    """
    Load a delimited file into records.

    Args:
        path: CSV file with header row
        schema: Ordered (column name, type) pairs; extra file columns are ignored
        record_type: Callable building one record from the schema columns

    Returns:
        List of records in file order
    """
    logger.info(f"Loading {path}")
    df = pd.read_csv(path, sep=",", dtype=str, keep_default_na=False)
    validate_columns(df, schema, path)

    typed = pd.DataFrame(
        {name: _convert_column(df[name], column_type, name) for name, column_type in schema}
    )

    records = [record_type(**row) for row in typed.to_dict("records")]
    logger.info(f"Loaded {len(records)} rows from {path}")
    return records


def load_labeled_examples(path: str) -> List[LabeledExample]:
    return load_examples(path, TRAIN_SCHEMA, LabeledExample)


def load_candidate_examples(path: str) -> List[CandidateExample]:
    return load_examples(path, CANDIDATE_SCHEMA, CandidateExample)
