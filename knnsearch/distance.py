from enum import Enum

import numpy as np

from .errors import DimensionMismatch, UnknownMetric


def _as_pair(a, b):
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"cannot compare vectors of length {a.size} and {b.size}"
        )
    return a, b


def euclidean(a, b) -> float:
    a, b = _as_pair(a, b)
    return float(np.sqrt(np.sum((a - b) ** 2)))


def manhattan(a, b) -> float:
    a, b = _as_pair(a, b)
    return float(np.sum(np.abs(a - b)))


class Metric(Enum):
    """Supported distance metrics.

    Calling a member compares two vectors; ``to_rows`` compares one query
    against every row of a feature matrix at once.
    """

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise UnknownMetric(f"unknown distance '{name}' (choose from: {choices})") from None

    def __call__(self, a, b) -> float:
        if self is Metric.EUCLIDEAN:
            return euclidean(a, b)
        return manhattan(a, b)

    def to_rows(self, matrix: np.ndarray, query) -> np.ndarray:
        query = np.asarray(query, dtype=float)
        if query.ndim != 1 or matrix.shape[1] != query.size:
            raise DimensionMismatch(
                f"query has {query.size} values, rows have {matrix.shape[1]}"
            )
        diff = matrix - query
        if self is Metric.EUCLIDEAN:
            return np.sqrt(np.sum(diff ** 2, axis=1))
        return np.sum(np.abs(diff), axis=1)
