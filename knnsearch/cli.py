"""Command line entry point.

    knnsearch predict -f data/iris.csv --col petal_length --col petal_width \\
        --label species --datapoint 1.4,0.2 -k 5
    knnsearch search -f data/iris.csv --col 2 --col 3 --label 4 -k 1-15,2
    knnsearch select -f data/iris.csv --col 0 --col 1 --col 2 --col 3 --label 4
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .dataset import load_dataset, parse_datapoint
from .distance import Metric
from .errors import KnnError
from .knn import train_test_split
from .kspec import parse_k_spec
from .logging_setups import basic_logging_setup
from .pipeline import predict, search
from .selection import select_columns

logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser, default_k: str) -> None:
    parser.add_argument("-f", "--file", required=True, help="Path to the input CSV file")
    parser.add_argument(
        "-c", "--col", dest="columns", action="append", default=[],
        help="Feature column, by header name or zero based index (repeatable)",
    )
    parser.add_argument("--label", required=True, help="Column holding the label")
    parser.add_argument("--no-header", action="store_true", help="The CSV has no header row")
    parser.add_argument(
        "--algo", default=config.DEFAULT_METRIC, choices=[m.value for m in Metric],
        help="Distance used to compare rows",
    )
    parser.add_argument(
        "-k", default=default_k,
        help="Neighbor count: N, an inclusive range A-B, or a stepped range A-B,S",
    )
    parser.add_argument(
        "--log-level", default=config.DEFAULT_LOG_LEVEL, type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knnsearch",
        description="k nearest neighbors classification over CSV data",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("predict", help="Predict the label of one datapoint")
    _add_common(p, config.DEFAULT_PREDICT_K)
    p.add_argument("--datapoint", required=True, help="Comma separated feature values")

    s = commands.add_parser("search", help="Find the k with the best test accuracy")
    _add_common(s, config.DEFAULT_SEARCH_K)
    s.add_argument("--test", type=float, default=config.DEFAULT_TEST_FRACTION,
                   help="Fraction of rows, taken from the end, used for testing")

    sel = commands.add_parser("select", help="Greedily select feature columns for each k")
    _add_common(sel, config.DEFAULT_SEARCH_K)
    sel.add_argument("--test", type=float, default=config.DEFAULT_TEST_FRACTION,
                     help="Fraction of rows, taken from the end, used for testing")
    return parser


def _predict(args) -> None:
    datapoint = parse_datapoint(args.datapoint, len(args.columns))
    spec = parse_k_spec(args.k)
    dataset = load_dataset(args.file, args.columns, args.label, not args.no_header)
    prediction = predict(dataset, datapoint, args.algo, spec)
    print(f"k value: {prediction.k} | {' '.join(str(v) for v in datapoint)}")
    for label, share in prediction.shares().items():
        print(f"  {label}: {prediction.votes[label]} {share:.2f}")
    print(f"Predicted: {prediction.label}")


def _search(args) -> None:
    spec = parse_k_spec(args.k)
    dataset = load_dataset(args.file, args.columns, args.label, not args.no_header)
    split = train_test_split(dataset, args.test)
    print(f"train size: {len(split.train)} test size: {len(split.test)}")
    result = search(split, args.algo, spec)
    print(result.to_frame().to_string(index=False, float_format="{:.4f}".format))
    print(f"Best k: {result.best_k}\nAccuracy: {result.best_accuracy:.2%}")


def _select(args) -> None:
    spec = parse_k_spec(args.k)
    dataset = load_dataset(args.file, args.columns, args.label, not args.no_header)
    split = train_test_split(dataset, args.test)
    print(f"train size: {len(split.train)} test size: {len(split.test)}")
    result = select_columns(split, args.algo, spec, [str(c) for c in args.columns])
    print(result.to_frame().to_string(index=False, float_format="{:.4f}".format))
    best = result.best
    print(f"Best k: {best.k} columns: {' '.join(result.names(best))}\nAccuracy: {best.accuracy:.2%}")


COMMANDS = {"predict": _predict, "search": _search, "select": _select}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.columns:
        parser.error("no columns specified to pull numeric data from")

    basic_logging_setup(args.log_level, args.log_file)
    try:
        COMMANDS[args.command](args)
    except KnnError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 2
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
