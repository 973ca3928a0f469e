"""
Command-line host for the evaluation pipeline.

This package contains:
- Config: CLI argument parsing (with environment variable defaults) and logging setup
- main: loads records, runs the evaluation task and prints a JSON report

The actual business logic is in price_evaluator.services.
"""

from .config import (
    add_args,
    check_config,
    config_to_dict,
    get_config,
    setup_logging,
)
from .main import main, run

__all__ = [
    "main",
    "run",
    "add_args",
    "check_config",
    "config_to_dict",
    "get_config",
    "setup_logging",
]
