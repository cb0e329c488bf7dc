import sys
import pathlib

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from data.generate_iris import generate_iris
from knnsearch.dataset import Dataset


@pytest.fixture
def two_clusters():
    return Dataset.from_rows([
        ([0, 0], "A"),
        ([0, 1], "A"),
        ([10, 10], "B"),
        ([10, 11], "B"),
    ])


@pytest.fixture
def iris_csv(tmp_path):
    return generate_iris(str(tmp_path / "iris.csv"), seed=1)
