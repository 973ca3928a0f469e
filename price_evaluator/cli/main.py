"""
Price evaluator CLI - fit a pricing model to a records file.

Usage:
    python -m price_evaluator --records cars.json
    python -m price_evaluator --records cars.yaml --price_record '{"properties": {"age": 4}}'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from ..data import DataError, load_records, parse_record
from ..regression import (
    MetricsError,
    ModelHolder,
    RegressionSolver,
    SolverConfig,
    score_model,
)
from ..services import EvaluationService, PricingService
from ..tasks import ExecutorConfig, ProgressEvent, TaskExecutor
from .config import check_config, config_to_dict, get_config, setup_logging

logger = logging.getLogger(__name__)


def _log_progress(event: ProgressEvent) -> None:
    logger.info(f"[{event.percent:3d}%] {event.message}")


async def run(config: argparse.Namespace) -> int:
    """
    Fit, score and optionally price, printing a JSON report to stdout.

    Returns:
        Process exit code (0 on success)

    Raises:
        ValueError: If configuration or --price_record is invalid
        DataError: If the records file cannot be loaded
    """
    check_config(config)
    logger.info(f"Config: {config_to_dict(config)}")

    records = load_records(config.records_path)
    price_record = (
        parse_record(json.loads(config.price_record), default_label="price_record")
        if config.price_record
        else None
    )

    holder = ModelHolder()
    solver = RegressionSolver(SolverConfig(singularity_epsilon=config.singularity_epsilon))
    executor = TaskExecutor(ExecutorConfig(max_concurrent=config.max_concurrent))

    task = EvaluationService(solver, holder).create_task(records)
    task.add_progress_listener(_log_progress)
    outcome = await executor.execute(task)

    if not outcome.success:
        print(f"ERROR: Evaluation failed: {outcome.error_message}", file=sys.stderr)
        return 1

    model = outcome.value
    report: dict[str, Any] = {"records": len(records), "model": model.to_dict()}

    if not config.metrics_off:
        try:
            report["metrics"] = score_model(model, records).to_dict()
        except MetricsError as e:
            logger.warning(f"Skipping fit metrics: {e}")

    if price_record is not None:
        price_outcome = await executor.execute(PricingService(holder).create_task(price_record))
        if not price_outcome.success:
            print(f"ERROR: Pricing failed: {price_outcome.error_message}", file=sys.stderr)
            return 1
        report["price"] = round(price_outcome.value, 2)

    print(json.dumps(report, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    config = get_config(argv)
    setup_logging(config.log_level)

    try:
        return asyncio.run(run(config))
    except (ValueError, DataError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
