"""
Ordinary least squares via the normal equations.

    A = (Xt X)^-1 Xt Y

Feature counts are small (one column per distinct property name plus the
bias), so the closed form is used instead of an iterative solver.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..data.feature_set import (
    FeatureVocabulary,
    build_design_matrix,
    build_target_matrix,
)
from ..data.models import Record
from ..linalg import SINGULARITY_EPSILON, DimensionMismatchError, Matrix, SingularMatrixError
from .errors import UnderdeterminedModelError
from .models import PricingModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    """Configuration for the regression solver."""

    singularity_epsilon: float = SINGULARITY_EPSILON
    """Pivot threshold passed to Matrix.invert(); applies to the equilibrated XtX."""


class RegressionSolver:
    """
    Fits a PricingModel to design/target matrices.

    Usage:
        solver = RegressionSolver()
        x, vocabulary = build_design_matrix(records)
        y = build_target_matrix(records)
        model = solver.solve(x, y, vocabulary)
    """

    def __init__(self, config: SolverConfig | None = None):
        self._config = config or SolverConfig()

    @property
    def config(self) -> SolverConfig:
        return self._config

    def solve(self, x: Matrix, y: Matrix, vocabulary: FeatureVocabulary) -> PricingModel:
        """
        Solve the normal equations and name the coefficients.

        Args:
            x: Design matrix (n x (1 + len(vocabulary))), column 0 is the bias
            y: Target matrix (n x 1)
            vocabulary: Property names for columns 1.. of x

        Returns:
            PricingModel with row 0 as base and row 1+k as vocabulary[k]

        Raises:
            UnderdeterminedModelError: If XtX is singular
            DimensionMismatchError: If x, y and vocabulary disagree in shape
        """
        if x.cols != 1 + len(vocabulary):
            raise DimensionMismatchError(
                f"Design matrix has {x.cols} columns, vocabulary needs {1 + len(vocabulary)}"
            )

        xt = x.transpose()
        xtx = xt.multiply(x)
        xty = xt.multiply(y)

        try:
            inverse = xtx.invert(epsilon=self._config.singularity_epsilon)
        except SingularMatrixError as e:
            raise UnderdeterminedModelError(
                f"Cannot fit {len(vocabulary)} properties plus bias from {x.rows} records: {e}"
            ) from e

        a = inverse.multiply(xty)
        model = _extract_model(a, vocabulary)

        logger.debug(f"Solved {x.rows} records x {len(vocabulary)} properties")
        return model

    def fit(self, records: Sequence[Record]) -> PricingModel:
        """
        Build X and Y from records and solve.

        Raises:
            EmptyInputError: If records is empty
            MissingPriceError: If a record has no price
            UnderdeterminedModelError: If the system has no unique solution
        """
        x, vocabulary = build_design_matrix(records)
        y = build_target_matrix(records)
        return self.solve(x, y, vocabulary)


def _extract_model(a: Matrix, vocabulary: FeatureVocabulary) -> PricingModel:
    return PricingModel(
        base=a.get(0, 0),
        coefficients={name: a.get(k + 1, 0) for k, name in enumerate(vocabulary)},
    )
