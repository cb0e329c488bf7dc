import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence, Tuple

import pandas as pd

from . import config
from .dataset import Dataset, load_dataset, parse_datapoint
from .distance import Metric
from .errors import EmptySearchSpace, InvalidK
from .kspec import KSpec, parse_k_spec
from .knn import (
    Split,
    accuracy_metric,
    classify,
    get_neighbors,
    rank_neighbors,
    train_test_split,
    vote,
    vote_counts,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KAccuracy:
    k: int
    correct: int
    total: int

    @property
    def accuracy(self) -> float:
        return self.correct / self.total


@dataclass(frozen=True)
class SearchResult:
    accuracies: Tuple[KAccuracy, ...]
    best_k: int
    best_accuracy: float
    train_size: int
    test_size: int

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "k": [a.k for a in self.accuracies],
                "correct": [a.correct for a in self.accuracies],
                "total": [a.total for a in self.accuracies],
                "accuracy": [a.accuracy for a in self.accuracies],
            }
        )


@dataclass(frozen=True)
class Prediction:
    label: Hashable
    k: int
    votes: Dict[Hashable, int]

    def shares(self) -> Dict[Hashable, float]:
        return {label: count / self.k for label, count in self.votes.items()}


def check_candidates(candidates, train_size: int) -> KSpec:
    """Turn ``candidates`` into a KSpec that fits ``train_size`` or raise."""
    if isinstance(candidates, KSpec):
        spec = candidates
    elif isinstance(candidates, str):
        spec = parse_k_spec(candidates)
    else:
        values = tuple(candidates)
        if not values:
            raise EmptySearchSpace("no candidate k values given")
        spec = KSpec(values)
    return spec.validate(train_size)


def search(split: Split, metric=Metric.EUCLIDEAN, candidates=(1, 3, 5)) -> SearchResult:
    """Score every candidate k on ``split.test`` and pick the most accurate.

    Candidates are checked against the training size before any work starts.
    Ties on accuracy go to the smallest k.
    """
    metric = Metric.from_name(metric)
    spec = check_candidates(candidates, len(split.train))
    train, test = split.train, split.test

    # one ranking per test row serves every k
    rankings = [rank_neighbors(train, record.features, metric) for record in test]
    actual = test.labels

    accuracies: List[KAccuracy] = []
    for k in spec:
        correct = sum(
            1
            for order, truth in zip(rankings, actual)
            if vote([train.labels[i] for i in order[:k]]) == truth
        )
        result = KAccuracy(k, correct, len(test))
        logger.info("k: %d | passed: %d/%d %.2f", k, correct, len(test), result.accuracy)
        accuracies.append(result)

    best = accuracies[0]
    for result in accuracies[1:]:
        if result.accuracy > best.accuracy:
            best = result
    logger.info("best k: %d accuracy: %.4f", best.k, best.accuracy)
    return SearchResult(tuple(accuracies), best.k, best.accuracy, len(train), len(test))


def predict(dataset: Dataset, query, metric=Metric.EUCLIDEAN, k_spec=config.DEFAULT_PREDICT_K) -> Prediction:
    """Label ``query`` using the single k in ``k_spec``.

    A range of k values is rejected; ranges belong to ``search``.
    """
    spec = parse_k_spec(k_spec)
    if not spec.is_single:
        raise InvalidK(f"predict needs a single k value, got the range {spec}")
    k = spec.smallest
    neighbors = get_neighbors(dataset, query, metric, k)
    labels = [n.label for n in neighbors]
    return Prediction(vote(labels), k, dict(vote_counts(labels)))


def run_search(
    data_path,
    columns: Sequence,
    label,
    k_spec=config.DEFAULT_SEARCH_K,
    metric=config.DEFAULT_METRIC,
    test_fraction: float = config.DEFAULT_TEST_FRACTION,
    has_header: bool = True,
) -> SearchResult:
    metric = Metric.from_name(metric)
    spec = parse_k_spec(k_spec)
    dataset = load_dataset(data_path, columns, label, has_header)
    split = train_test_split(dataset, test_fraction)
    logger.info("train size: %d test size: %d", len(split.train), len(split.test))
    return search(split, metric, spec)


def run_predict(
    data_path,
    columns: Sequence,
    label,
    datapoint,
    k_spec=config.DEFAULT_PREDICT_K,
    metric=config.DEFAULT_METRIC,
    has_header: bool = True,
) -> Prediction:
    metric = Metric.from_name(metric)
    spec = parse_k_spec(k_spec)
    if isinstance(datapoint, str):
        datapoint = parse_datapoint(datapoint, len(columns))
    dataset = load_dataset(data_path, columns, label, has_header)
    return predict(dataset, datapoint, metric, spec)


def evaluate_k(split: Split, metric, k: int) -> float:
    """Accuracy of a single k on ``split.test``, classifying row by row."""
    predictions = [classify(split.train, r.features, metric, k) for r in split.test]
    return accuracy_metric(split.test.labels, predictions)


if __name__ == "__main__":
    result = run_search(config.SAMPLE_CSV, config.SAMPLE_COLUMNS, config.SAMPLE_LABEL)
    print(f"Best k: {result.best_k}\nAccuracy: {result.best_accuracy:.2%}")
