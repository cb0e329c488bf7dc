import pytest

from knnsearch.dataset import Dataset
from knnsearch.distance import Metric
from knnsearch.errors import DimensionMismatch, InvalidK
from knnsearch.knn import Split
from knnsearch.selection import select_columns


@pytest.fixture
def informative_split():
    # column 0 separates the classes, column 1 is constant
    train = Dataset.from_rows([
        ([0.0, 0.0], "A"),
        ([9.0, 0.0], "B"),
        ([1.0, 0.0], "A"),
        ([10.0, 0.0], "B"),
    ])
    test = Dataset.from_rows([([0.5, 0.0], "A"), ([9.5, 0.0], "B")])
    return Split(train, test)


def test_informative_column_is_added_first(informative_split):
    result = select_columns(informative_split, Metric.EUCLIDEAN, [1, 3], ["x", "noise"])
    assert [(s.k, s.columns, s.accuracy) for s in result.steps] == [
        (1, (0,), 1.0),
        (1, (0, 1), 1.0),
        (3, (0,), 1.0),
        (3, (0, 1), 1.0),
    ]


def test_best_prefers_fewer_columns_then_smaller_k(informative_split):
    result = select_columns(informative_split, "manhattan", [1, 3], ["x", "noise"])
    assert result.best.k == 1
    assert result.best.columns == (0,)
    assert result.names(result.best) == ["x"]


def test_selection_frame(informative_split):
    frame = select_columns(informative_split, Metric.EUCLIDEAN, [1]).to_frame()
    assert frame["columns"].tolist() == ["0", "0 1"]
    assert frame["accuracy"].tolist() == [1.0, 1.0]


def test_selection_validates_inputs(informative_split):
    with pytest.raises(InvalidK):
        select_columns(informative_split, Metric.EUCLIDEAN, [5])
    with pytest.raises(DimensionMismatch):
        select_columns(informative_split, Metric.EUCLIDEAN, [1], ["only_one"])
