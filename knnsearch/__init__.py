from .dataset import Dataset, Record, load_dataset
from .distance import Metric, euclidean, manhattan
from .knn import Split, classify, train_test_split
from .kspec import KSpec, parse_k_spec
from .pipeline import Prediction, SearchResult, predict, search

__all__ = [
    "Dataset",
    "Record",
    "load_dataset",
    "Metric",
    "euclidean",
    "manhattan",
    "Split",
    "classify",
    "train_test_split",
    "KSpec",
    "parse_k_spec",
    "Prediction",
    "SearchResult",
    "predict",
    "search",
]
