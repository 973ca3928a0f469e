"""Unit tests for fit metrics."""

import numpy as np
import pytest

from price_evaluator.data import EmptyInputError, MissingPriceError, Record, RecordSet
from price_evaluator.regression import (
    MetricsConfig,
    MetricsError,
    PricingModel,
    RegressionSolver,
    calculate_metrics,
    score_model,
)


class TestCalculateMetrics:
    """Tests for calculate_metrics."""

    def test_perfect_predictions(self) -> None:
        y = np.array([100.0, 200.0, 300.0])

        metrics = calculate_metrics(y, y, MetricsConfig())

        assert metrics.mae == 0.0
        assert metrics.mape == 0.0
        assert metrics.rmse == 0.0
        assert metrics.r2 == 1.0
        assert metrics.accuracy == {0.05: 1.0, 0.10: 1.0, 0.15: 1.0}

    def test_known_values(self) -> None:
        y_true = np.array([10_000.0, 20_000.0, 40_000.0])
        y_pred = np.array([11_000.0, 19_000.0, 40_000.0])

        metrics = calculate_metrics(y_true, y_pred, MetricsConfig())

        assert metrics.mae == pytest.approx(2000 / 3)
        assert metrics.mape == pytest.approx(0.05)
        assert metrics.mdape == pytest.approx(0.05)
        assert metrics.rmse == pytest.approx(np.sqrt(2_000_000 / 3))
        assert metrics.get_accuracy(0.05) == pytest.approx(1 / 3)
        assert metrics.get_accuracy(0.15) == 1.0
        assert metrics.n_samples == 3

    def test_mape_cap(self) -> None:
        y_true = np.array([100.0, 100.0])
        y_pred = np.array([500.0, 100.0])

        capped = calculate_metrics(y_true, y_pred, MetricsConfig(max_pct_error=1.0))
        uncapped = calculate_metrics(y_true, y_pred, MetricsConfig())

        assert capped.mape == pytest.approx(0.5)
        assert uncapped.mape == pytest.approx(2.0)

    def test_constant_ground_truth_r2(self) -> None:
        y_true = np.array([100.0, 100.0])

        assert calculate_metrics(y_true, y_true, MetricsConfig()).r2 == 1.0
        assert calculate_metrics(y_true, np.array([90.0, 110.0]), MetricsConfig()).r2 == 0.0

    def test_length_mismatch(self) -> None:
        with pytest.raises(MetricsError, match="length mismatch"):
            calculate_metrics(np.array([1.0, 2.0]), np.array([1.0]), MetricsConfig())

    def test_empty(self) -> None:
        with pytest.raises(EmptyInputError):
            calculate_metrics(np.array([]), np.array([]), MetricsConfig())

    def test_non_positive_ground_truth(self) -> None:
        with pytest.raises(MetricsError, match="positive"):
            calculate_metrics(np.array([0.0, 10.0]), np.array([1.0, 10.0]), MetricsConfig())


class TestScoreModel:
    """Tests for score_model."""

    def test_fitted_model_scores_perfectly_on_exact_data(self, car_records: RecordSet) -> None:
        model = RegressionSolver().fit(car_records)

        metrics = score_model(model, car_records)

        assert metrics.n_samples == len(car_records)
        assert metrics.mape == pytest.approx(0.0, abs=1e-6)
        assert metrics.r2 == pytest.approx(1.0)

    def test_uses_config(self, linear_records: RecordSet) -> None:
        model = PricingModel(base=0.0, coefficients={"x": 11.0})

        metrics = score_model(model, linear_records, MetricsConfig(accuracy_thresholds=(0.2,)))

        assert metrics.mape == pytest.approx(0.1)
        assert metrics.accuracy == {0.2: 1.0}

    def test_record_without_price(self) -> None:
        model = PricingModel(base=1.0)

        with pytest.raises(MissingPriceError):
            score_model(model, [Record({"x": 1})])

    def test_empty(self) -> None:
        with pytest.raises(EmptyInputError):
            score_model(PricingModel(base=1.0), [])


class TestMetricsFromResiduals:
    """Over- and under-prediction count the same; the cap only touches MAPE."""

    def test_symmetric_in_residual_sign(self) -> None:
        y_true = np.array([100.0, 200.0])

        over = calculate_metrics(y_true, np.array([110.0, 220.0]), MetricsConfig())
        under = calculate_metrics(y_true, np.array([90.0, 180.0]), MetricsConfig())

        assert over.mae == under.mae == pytest.approx(15.0)
        assert over.mape == under.mape == pytest.approx(0.1)
        assert over.r2 == pytest.approx(under.r2)

    def test_cap_leaves_median_and_accuracy_alone(self) -> None:
        y_true = np.array([100.0, 100.0, 100.0])
        y_pred = np.array([500.0, 500.0, 100.0])

        metrics = calculate_metrics(y_true, y_pred, MetricsConfig(max_pct_error=1.0))

        assert metrics.mape == pytest.approx(2 / 3)
        assert metrics.mdape == pytest.approx(4.0)
        assert metrics.get_accuracy(0.05) == pytest.approx(1 / 3)
