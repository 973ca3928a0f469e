"""Unit tests for CLI configuration."""

from pathlib import Path

import pytest

from price_evaluator.cli import check_config, config_to_dict, get_config
from price_evaluator.linalg import SINGULARITY_EPSILON


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PRICE_EVALUATOR_RECORDS",
        "PRICE_EVALUATOR_PRICE_RECORD",
        "PRICE_EVALUATOR_SINGULARITY_EPSILON",
        "PRICE_EVALUATOR_MAX_CONCURRENT",
        "PRICE_EVALUATOR_METRICS_OFF",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestGetConfig:
    """Tests for get_config."""

    def test_defaults(self) -> None:
        config = get_config([])

        assert config.records_path == ""
        assert config.price_record == ""
        assert config.singularity_epsilon == SINGULARITY_EPSILON
        assert config.max_concurrent == 4
        assert config.metrics_off is False
        assert config.log_level == "INFO"

    def test_arguments(self) -> None:
        config = get_config(
            [
                "--records", "cars.yaml",
                "--solver.singularity_epsilon", "1e-6",
                "--executor.max_concurrent", "2",
                "--metrics.off",
                "--log_level", "DEBUG",
            ]
        )

        assert config.records_path == Path("cars.yaml")
        assert config.singularity_epsilon == 1e-6
        assert config.max_concurrent == 2
        assert config.metrics_off is True
        assert config.log_level == "DEBUG"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRICE_EVALUATOR_RECORDS", "/data/cars.json")
        monkeypatch.setenv("PRICE_EVALUATOR_SINGULARITY_EPSILON", "1e-8")
        monkeypatch.setenv("PRICE_EVALUATOR_METRICS_OFF", "true")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        config = get_config([])

        assert config.records_path == Path("/data/cars.json")
        assert config.singularity_epsilon == 1e-8
        assert config.metrics_off is True
        assert config.log_level == "WARNING"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(SystemExit):
            get_config(["--log_level", "LOUD"])


class TestCheckConfig:
    """Tests for check_config."""

    def test_valid(self) -> None:
        check_config(get_config(["--records", "cars.json"]))

    def test_records_required(self) -> None:
        with pytest.raises(ValueError, match="--records"):
            check_config(get_config([]))

    def test_epsilon_must_be_positive(self) -> None:
        config = get_config(["--records", "cars.json", "--solver.singularity_epsilon", "0"])

        with pytest.raises(ValueError, match="singularity_epsilon"):
            check_config(config)

    def test_max_concurrent_at_least_one(self) -> None:
        config = get_config(["--records", "cars.json", "--executor.max_concurrent", "0"])

        with pytest.raises(ValueError, match="max_concurrent"):
            check_config(config)


def test_config_to_dict() -> None:
    result = config_to_dict(get_config(["--records", "cars.json"]))

    assert result["records_path"] == "cars.json"
    assert result["max_concurrent"] == 4
    assert set(result) == {
        "records_path",
        "price_record",
        "singularity_epsilon",
        "max_concurrent",
        "metrics_off",
        "log_level",
    }
