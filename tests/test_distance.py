import math

import numpy as np
import pytest

from knnsearch.distance import Metric, euclidean, manhattan
from knnsearch.errors import DimensionMismatch, UnknownMetric

VECTORS = [
    ([0.0, 0.0], [3.0, 4.0]),
    ([1.5, -2.0, 7.25], [-3.0, 0.5, 7.0]),
    ([100.0], [-100.0]),
]


def test_euclidean_known_value():
    assert euclidean([0, 0], [3, 4]) == 5.0


def test_manhattan_known_value():
    assert manhattan([0, 0], [3, 4]) == 7.0
    assert manhattan([1, -1, 2], [0, 1, 2]) == 3.0


@pytest.mark.parametrize("a,b", VECTORS)
def test_symmetric(a, b):
    assert euclidean(a, b) == euclidean(b, a)
    assert manhattan(a, b) == manhattan(b, a)


@pytest.mark.parametrize("a,b", VECTORS)
def test_zero_on_identical_vectors(a, b):
    for v in (a, b):
        assert euclidean(v, v) == 0.0
        assert manhattan(v, v) == 0.0


@pytest.mark.parametrize("fn", [euclidean, manhattan])
def test_length_mismatch(fn):
    with pytest.raises(DimensionMismatch):
        fn([1.0, 2.0], [1.0, 2.0, 3.0])


def test_metric_from_name():
    assert Metric.from_name("euclidean") is Metric.EUCLIDEAN
    assert Metric.from_name(" Manhattan ") is Metric.MANHATTAN
    assert Metric.from_name(Metric.MANHATTAN) is Metric.MANHATTAN
    with pytest.raises(UnknownMetric):
        Metric.from_name("cosine")


def test_metric_call_dispatches():
    assert Metric.EUCLIDEAN([0, 0], [3, 4]) == 5.0
    assert Metric.MANHATTAN([0, 0], [3, 4]) == 7.0


@pytest.mark.parametrize("metric", list(Metric))
def test_to_rows_matches_pairwise(metric):
    matrix = np.array([[0.0, 0.0], [1.0, 2.0], [-4.5, 3.25]])
    query = [0.5, -1.0]
    rows = metric.to_rows(matrix, query)
    for row, value in zip(matrix, rows):
        assert math.isclose(value, metric(query, row))


def test_to_rows_rejects_wrong_query_length():
    with pytest.raises(DimensionMismatch):
        Metric.EUCLIDEAN.to_rows(np.zeros((3, 2)), [1.0, 2.0, 3.0])
