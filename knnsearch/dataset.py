import logging
import math
import os
from collections import Counter
from typing import Hashable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import DataParseError, DimensionMismatch, SchemaMismatch

logger = logging.getLogger(__name__)


class Record(NamedTuple):
    features: Tuple[float, ...]
    label: Hashable


class Dataset:
    """Ordered, read-only table of numeric feature rows and their labels.

    Every row has the same number of features. The feature matrix is a
    float64 numpy array with the writeable flag cleared, so neither the
    dataset nor anything derived from it can alter the values in place.
    """

    def __init__(self, features: np.ndarray, labels: Sequence[Hashable]):
        features = np.array(features, dtype=float, copy=True)
        if features.ndim != 2:
            raise SchemaMismatch("features must be a two dimensional table")
        if features.shape[0] != len(labels):
            raise SchemaMismatch(
                f"{features.shape[0]} feature rows but {len(labels)} labels"
            )
        if features.shape[0] == 0:
            raise SchemaMismatch("dataset has no rows")
        features.setflags(write=False)
        self._features = features
        self._labels = tuple(labels)

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[Sequence[float], Hashable]]) -> "Dataset":
        """Build a dataset from ``(features, label)`` pairs, keeping their order."""
        vectors = []
        labels = []
        length = None
        for index, (features, label) in enumerate(rows):
            values = [float(v) for v in features]
            if length is None:
                length = len(values)
            elif len(values) != length:
                raise SchemaMismatch(
                    f"row {index} has {len(values)} features, expected {length}"
                )
            for column, value in enumerate(values):
                if not math.isfinite(value):
                    raise DataParseError(
                        f"row {index} column {column} is not a finite number: {value}"
                    )
            vectors.append(values)
            labels.append(label)
        if not vectors:
            raise SchemaMismatch("dataset has no rows")
        if length == 0:
            raise SchemaMismatch("rows have no feature values")
        return cls(np.array(vectors, dtype=float).reshape(len(vectors), length), labels)

    def __len__(self):
        return len(self._labels)

    def __iter__(self):
        for row, label in zip(self._features, self._labels):
            yield Record(tuple(float(v) for v in row), label)

    def __repr__(self):
        return f"Dataset(rows={len(self)}, feature_length={self.feature_length})"

    @property
    def features(self) -> np.ndarray:
        return self._features

    @property
    def labels(self) -> Tuple[Hashable, ...]:
        return self._labels

    @property
    def feature_length(self) -> int:
        return self._features.shape[1]

    @property
    def records(self) -> List[Record]:
        return list(self)

    def subset(self, indices: Sequence[int]) -> "Dataset":
        indices = list(indices)
        return Dataset(self._features[indices], [self._labels[i] for i in indices])

    def project(self, columns: Sequence[int]) -> "Dataset":
        columns = list(columns)
        for column in columns:
            if not 0 <= column < self.feature_length:
                raise DimensionMismatch(
                    f"feature column {column} out of range for length {self.feature_length}"
                )
        return Dataset(self._features[:, columns], self._labels)

    def label_counts(self) -> Counter:
        return Counter(self._labels)


def resolve_column(spec, headers: Optional[Sequence[str]], width: Optional[int] = None) -> int:
    """Turn a column name or zero based index into a position.

    Digit strings are treated as indices. When the source has no header row
    only indices are accepted.
    """
    if isinstance(spec, int) or str(spec).isdecimal():
        index = int(spec)
        limit = len(headers) if headers is not None else width
        if index < 0 or (limit is not None and index >= limit):
            raise DataParseError(f"column index {index} is out of range ({limit} columns)")
        return index
    if headers is None:
        raise DataParseError(
            f"the data has no header row but a named column was given: {spec}"
        )
    try:
        return list(headers).index(str(spec))
    except ValueError:
        raise DataParseError(
            f"unknown column '{spec}' (available: {', '.join(map(str, headers))})"
        ) from None


def dataset_from_frame(frame: pd.DataFrame, columns: Sequence, label, has_header: bool = True) -> Dataset:
    """Build a Dataset from the given feature columns and label column of ``frame``."""
    if not columns:
        raise DataParseError("no feature columns specified")
    headers = [str(c) for c in frame.columns] if has_header else None
    width = frame.shape[1]
    positions = [resolve_column(c, headers, width) for c in columns]
    label_position = resolve_column(label, headers, width)

    numeric = frame.iloc[:, positions].apply(pd.to_numeric, errors="coerce")
    bad = ~np.isfinite(numeric.to_numpy(dtype=float))
    if bad.any():
        row, col = np.argwhere(bad)[0]
        # report 1-based data rows, the way a spreadsheet would show them
        raise DataParseError(
            f"failed to parse column data. row: {row + 1} column: {columns[col]} "
            f"value: {frame.iloc[row, positions[col]]!r}"
        )

    labels = frame.iloc[:, label_position]
    missing = (labels.isna() | (labels.astype(str).str.strip() == "")).to_numpy()
    if missing.any():
        row = int(np.flatnonzero(missing)[0])
        raise DataParseError(f"missing label. row: {row + 1}")

    dataset = Dataset(numeric.to_numpy(dtype=float), [str(v) for v in labels])
    logger.debug("built %r from columns %s, label %s", dataset, positions, label_position)
    return dataset


def load_dataset(path, columns: Sequence, label, has_header: bool = True) -> Dataset:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"CSV not found at: {path}")
    try:
        frame = pd.read_csv(
            path,
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataParseError(f"failed to parse csv file {path}: {exc}") from exc
    logger.info("loaded %s with shape %s", path, frame.shape)
    return dataset_from_frame(frame, columns, label, has_header)


def parse_datapoint(text: str, expected_length: Optional[int] = None) -> Tuple[float, ...]:
    """Parse a comma separated list of numbers such as ``"5.1,3.5"``."""
    values = []
    for part in str(text).split(","):
        try:
            value = float(part.strip())
        except ValueError:
            raise DataParseError(f"failed to parse datapoint value: {part!r}") from None
        if not math.isfinite(value):
            raise DataParseError(f"datapoint value is not a finite number: {part!r}")
        values.append(value)
    if expected_length is not None and len(values) != expected_length:
        raise DimensionMismatch(
            f"datapoint has {len(values)} values but {expected_length} columns were selected"
        )
    return tuple(values)
