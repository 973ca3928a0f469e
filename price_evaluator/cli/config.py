"""
CLI configuration management.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any

from ..linalg import SINGULARITY_EPSILON


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add evaluator arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--records",
        dest="records_path",
        type=str,
        help="JSON or YAML file with the training records.",
        default=os.environ.get("PRICE_EVALUATOR_RECORDS", ""),
    )

    parser.add_argument(
        "--price_record",
        dest="price_record",
        type=str,
        help='Record to price with the fitted model, as JSON: \'{"properties": {"age": 4}}\'.',
        default=os.environ.get("PRICE_EVALUATOR_PRICE_RECORD", ""),
    )

    parser.add_argument(
        "--solver.singularity_epsilon",
        dest="singularity_epsilon",
        type=float,
        help="Pivot threshold, on the equilibrated XtX, below which it is treated as singular.",
        default=float(
            os.environ.get("PRICE_EVALUATOR_SINGULARITY_EPSILON", str(SINGULARITY_EPSILON))
        ),
    )

    parser.add_argument(
        "--executor.max_concurrent",
        dest="max_concurrent",
        type=int,
        help="Maximum number of tasks running at once.",
        default=int(os.environ.get("PRICE_EVALUATOR_MAX_CONCURRENT", "4")),
    )

    parser.add_argument(
        "--metrics.off",
        dest="metrics_off",
        action="store_true",
        help="Skip fit metrics on the training records.",
        default=os.environ.get("PRICE_EVALUATOR_METRICS_OFF", "false").lower() == "true",
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "INFO"),
    )


def get_config(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments and return configuration."""
    parser = argparse.ArgumentParser(
        description="Fit a linear pricing model to heterogeneous records",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_args(parser)
    config = parser.parse_args(argv)

    if config.records_path:
        config.records_path = Path(config.records_path)

    return config


def check_config(config: argparse.Namespace) -> None:
    """
    Validate configuration.

    Raises:
        ValueError: If configuration is invalid.
    """
    if not config.records_path:
        raise ValueError("--records is required (or set PRICE_EVALUATOR_RECORDS env var)")

    if config.singularity_epsilon <= 0:
        raise ValueError("--solver.singularity_epsilon must be positive")

    if config.max_concurrent < 1:
        raise ValueError("--executor.max_concurrent must be at least 1")


def config_to_dict(config: argparse.Namespace) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "records_path": str(config.records_path),
        "price_record": config.price_record,
        "singularity_epsilon": config.singularity_epsilon,
        "max_concurrent": config.max_concurrent,
        "metrics_off": config.metrics_off,
        "log_level": config.log_level,
    }


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
