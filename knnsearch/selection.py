"""Greedy forward selection of feature columns.

For each candidate k the search starts with no columns and repeatedly adds
the remaining column that gives the best test accuracy together with the
columns already chosen, until every column has been added. Each addition is
recorded as a step so the caller can see how accuracy develops as the
feature set grows.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .distance import Metric
from .errors import DimensionMismatch
from .knn import Split
from .pipeline import check_candidates, search

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionStep:
    k: int
    columns: Tuple[int, ...]
    accuracy: float


@dataclass(frozen=True)
class ColumnSelectionResult:
    steps: Tuple[SelectionStep, ...]
    best: SelectionStep
    column_names: Optional[Tuple[str, ...]] = None

    def names(self, step: SelectionStep) -> List[str]:
        if self.column_names is None:
            return [str(c) for c in step.columns]
        return [self.column_names[c] for c in step.columns]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "k": [s.k for s in self.steps],
                "columns": [" ".join(self.names(s)) for s in self.steps],
                "accuracy": [s.accuracy for s in self.steps],
            }
        )


def _accuracy(split: Split, columns: Sequence[int], metric: Metric, k: int) -> float:
    projected = Split(split.train.project(columns), split.test.project(columns))
    return search(projected, metric, (k,)).best_accuracy


def select_columns(
    split: Split,
    metric=Metric.EUCLIDEAN,
    candidates=(3,),
    column_names: Optional[Sequence[str]] = None,
) -> ColumnSelectionResult:
    metric = Metric.from_name(metric)
    spec = check_candidates(candidates, len(split.train))
    width = split.train.feature_length
    if column_names is not None and len(column_names) != width:
        raise DimensionMismatch(f"{len(column_names)} column names for {width} feature columns")

    steps: List[SelectionStep] = []
    for k in spec:
        selected: List[int] = []
        available = list(range(width))
        while available:
            best_column, best_accuracy = None, -1.0
            for column in available:
                accuracy = _accuracy(split, selected + [column], metric, k)
                logger.debug("k: %d columns: %s accuracy: %.4f", k, selected + [column], accuracy)
                if accuracy > best_accuracy:
                    best_column, best_accuracy = column, accuracy
            selected.append(best_column)
            available.remove(best_column)
            steps.append(SelectionStep(k, tuple(selected), best_accuracy))
            logger.info("k: %d added column %d, accuracy %.4f", k, best_column, best_accuracy)

    # highest accuracy; ties go to fewer columns, then the smaller k
    best = steps[0]
    for step in steps[1:]:
        if step.accuracy > best.accuracy or (
            step.accuracy == best.accuracy and len(step.columns) < len(best.columns)
        ):
            best = step
    names = tuple(column_names) if column_names is not None else None
    return ColumnSelectionResult(tuple(steps), best, names)
