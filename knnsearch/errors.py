class KnnError(ValueError):
    """Base class for every input-validation failure raised by knnsearch."""


class DimensionMismatch(KnnError):
    """A vector's length disagrees with the dataset's feature length."""


class InvalidK(KnnError):
    """A neighbor count, or K specification, that cannot be used."""


class EmptySearchSpace(KnnError):
    """No candidate k values were supplied to a search."""


class SplitWouldBeEmpty(KnnError):
    """A train/test split would leave one side without records."""


class SchemaMismatch(KnnError):
    """Rows disagree on the number of feature values, or there are no rows."""


class DataParseError(KnnError):
    """A raw cell, column reference or datapoint literal could not be used."""


class UnknownMetric(KnnError):
    """A distance selector that is not one of the supported metrics."""
