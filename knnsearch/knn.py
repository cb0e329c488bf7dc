import logging
import math
import numbers
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, List, NamedTuple, Sequence

import numpy as np

from .dataset import Dataset
from .distance import Metric
from .errors import DimensionMismatch, InvalidK, SplitWouldBeEmpty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Split:
    train: Dataset
    test: Dataset


class Neighbor(NamedTuple):
    index: int
    distance: float
    label: Hashable


def train_test_split(dataset: Dataset, test_fraction: float = 0.25) -> Split:
    """Split ``dataset`` positionally into train and test parts.

    ``round(test_fraction * n)`` records (halves rounded up, clamped to
    ``[1, n - 1]``) are taken from the end of the dataset as the test set;
    everything before them is the training set. The split never shuffles, so
    the same dataset and fraction always give the same split.
    """
    if not 0.0 < test_fraction < 1.0:
        raise SplitWouldBeEmpty(
            f"test fraction must be strictly between 0 and 1, got {test_fraction}"
        )
    n = len(dataset)
    if n < 2:
        raise SplitWouldBeEmpty(f"cannot split {n} record(s) into train and test sets")
    test_count = int(math.floor(test_fraction * n + 0.5))
    test_count = min(max(test_count, 1), n - 1)
    cut = n - test_count
    logger.debug("splitting %d records: %d train, %d test", n, cut, test_count)
    return Split(dataset.subset(range(cut)), dataset.subset(range(cut, n)))


def _check_query(train: Dataset, query) -> np.ndarray:
    query = np.asarray(query, dtype=float)
    if query.ndim != 1 or query.size != train.feature_length:
        raise DimensionMismatch(
            f"query has {query.size} values but the dataset has {train.feature_length} features"
        )
    return query


def _check_k(train: Dataset, k: int) -> None:
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise InvalidK(f"k must be a positive integer, got {k!r}")
    if k > len(train):
        raise InvalidK(f"k value {k} exceeds the {len(train)} available training records")


def rank_neighbors(train: Dataset, query, metric=Metric.EUCLIDEAN) -> np.ndarray:
    """Training positions ordered nearest first.

    Equal distances keep their training order.
    """
    metric = Metric.from_name(metric)
    distances = metric.to_rows(train.features, _check_query(train, query))
    return np.argsort(distances, kind="stable")


def get_neighbors(train: Dataset, query, metric=Metric.EUCLIDEAN, k: int = 3) -> List[Neighbor]:
    metric = Metric.from_name(metric)
    query = _check_query(train, query)
    _check_k(train, k)
    distances = metric.to_rows(train.features, query)
    order = np.argsort(distances, kind="stable")[:k]
    return [Neighbor(int(i), float(distances[i]), train.labels[i]) for i in order]


def vote_counts(labels: Sequence[Hashable]) -> Counter:
    """Label tallies, keyed in the order each label is first seen."""
    return Counter(labels)


def vote(labels: Sequence[Hashable]) -> Hashable:
    """Majority label among ``labels``, which must be ordered nearest first.

    ``most_common`` is stable, so among labels with the same count the one
    whose nearest supporting neighbor comes first wins.
    """
    if not labels:
        raise InvalidK("cannot vote without neighbors")
    return vote_counts(labels).most_common(1)[0][0]


def classify(train: Dataset, query, metric=Metric.EUCLIDEAN, k: int = 3) -> Hashable:
    neighbors = get_neighbors(train, query, metric, k)
    return vote([n.label for n in neighbors])


def accuracy_metric(actual, predicted) -> float:
    if len(actual) != len(predicted):
        raise DimensionMismatch(
            f"{len(actual)} actual labels but {len(predicted)} predictions"
        )
    if len(actual) == 0:
        raise SplitWouldBeEmpty("cannot score an empty test set")
    correct = sum(1 for a, p in zip(actual, predicted) if a == p)
    return correct / len(actual)
