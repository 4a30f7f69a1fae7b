"""
Stratified train/test splitting.

Splits each label class independently so that train and test keep the class
ratio of the full dataset, with fix-ups for very small classes.
"""

import logging
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from enrollment_forecast.config import Config
from enrollment_forecast.exceptions import InsufficientDataError
from enrollment_forecast.schema import LabeledExample, Split

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource:
    """Seeded pseudo-random generator passed explicitly to the splitter."""

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a new list holding ``items`` in a random order."""
        order = self._rng.permutation(len(items))
        return [items[i] for i in order]


def _split_class(
    items: Sequence[T],
    test_fraction: float,
    rng: RandomSource
) -> Tuple[List[T], List[T]]:
    """
    Split one label class into (train, test).

    test_count = max(1, round(n * test_fraction)), clamped to n - 1 so train
    keeps a row. A class of one row therefore goes entirely to train.
    """
    shuffled = rng.shuffle(items)

    test_count = max(1, round(len(shuffled) * test_fraction))
    if test_count >= len(shuffled):
        test_count = len(shuffled) - 1

    test_part = shuffled[:test_count]
    train_part = shuffled[test_count:]

    if not train_part and len(test_part) > 1:
        train_part.append(test_part.pop(0))
    if not test_part and len(train_part) > 1:
        test_part.append(train_part.pop(0))

    return train_part, test_part


def stratified_split(
    examples: Sequence[LabeledExample],
    test_fraction: float = Config.TEST_FRACTION,
    seed: int = Config.SPLIT_SEED,
    rng: Optional[RandomSource] = None
) -> Split:
    """
    Partition labeled examples into train and test sets per label class.

    Positives are shuffled first, then negatives, from a single generator, so
    the same seed always reproduces the same split. Output lists are
    class-grouped: positive rows first, then negative rows.

    Args:
        examples: Labeled rows to split
        test_fraction: Share of each class to hold out, in (0, 1)
        seed: Seed for the generator (ignored when ``rng`` is given)
        rng: Optional pre-built generator

    Returns:
        Split with disjoint train and test tuples covering every input row

    Raises:
        ValueError: If test_fraction is outside (0, 1)
        InsufficientDataError: If the dataset lacks either label class
    """
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")

    positives = [row for row in examples if row.label]
    negatives = [row for row in examples if not row.label]

    if not positives or not negatives:
        raise InsufficientDataError(
            "At least one row with label=1 and one row with label=0 are required "
            f"(got {len(positives)} positive, {len(negatives)} negative)"
        )

    if rng is None:
        rng = RandomSource(seed)

    pos_train, pos_test = _split_class(positives, test_fraction, rng)
    neg_train, neg_test = _split_class(negatives, test_fraction, rng)

    split = Split(
        train=tuple(pos_train + neg_train),
        test=tuple(pos_test + neg_test)
    )

    logger.info(
        f"Stratified split (seed={rng.seed}): train={len(split.train)} test={len(split.test)} "
        f"(posTrain={len(pos_train)}, negTrain={len(neg_train)}, "
        f"posTest={len(pos_test)}, negTest={len(neg_test)})"
    )

    return split
