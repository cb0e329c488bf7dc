import os

# k specifications
DEFAULT_PREDICT_K = "3"
DEFAULT_SEARCH_K = "3-10"

# Evaluation
DEFAULT_TEST_FRACTION = 0.25
DEFAULT_METRIC = "euclidean"     # options: "euclidean", "manhattan"

# Logging
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUP_COUNT = 3

# Sample data written by data/generate_iris.py
SAMPLE_CSV = os.path.join("data", "iris.csv")
SAMPLE_COLUMNS = ["sepal_length", "sepal_width", "petal_length", "petal_width"]
SAMPLE_LABEL = "species"
