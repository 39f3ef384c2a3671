"""Tests for configuration validation."""

import pytest

from goverage.config.schema import GoverageConfig
from goverage.config.validator import validate_config


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_defaults_are_valid(self) -> None:
        result = validate_config(GoverageConfig())

        assert result.valid
        assert str(result) == "Valid"

    def test_unknown_covermode(self) -> None:
        result = validate_config(GoverageConfig(covermode="sometimes"))

        assert not result.valid
        assert result.errors[0].path == "covermode"

    @pytest.mark.parametrize("mode", ["set", "count"])
    def test_race_rejects_non_atomic(self, mode: str) -> None:
        result = validate_config(GoverageConfig(race=True, covermode=mode))

        assert not result.valid
        assert "golang/go#12118" in result.errors[0].message

    def test_race_without_covermode(self) -> None:
        assert validate_config(GoverageConfig(race=True)).valid

    def test_empty_coverprofile(self) -> None:
        result = validate_config(GoverageConfig(coverprofile=""))

        assert [e.path for e in result.errors] == ["coverprofile"]

    @pytest.mark.parametrize("cpu", ["1", "1,2,4"])
    def test_valid_cpu(self, cpu: str) -> None:
        assert validate_config(GoverageConfig(cpu=cpu)).valid

    @pytest.mark.parametrize("cpu", ["", "0", "two", "1,,2"])
    def test_invalid_cpu(self, cpu: str) -> None:
        assert not validate_config(GoverageConfig(cpu=cpu)).valid

    @pytest.mark.parametrize("parallel", ["0", "-1", "x"])
    def test_invalid_parallel(self, parallel: str) -> None:
        assert not validate_config(GoverageConfig(parallel=parallel)).valid

    @pytest.mark.parametrize("timeout", ["0", "30s", "10m", "1h30m", "1.5h", "250ms", ".5s", "1.s", "-1m", "+2h", "1µs"])
    def test_valid_timeout(self, timeout: str) -> None:
        assert validate_config(GoverageConfig(timeout=timeout)).valid

    @pytest.mark.parametrize("timeout", ["10", "ten minutes", "5d", "", ".s", "-", "1h-2m"])
    def test_invalid_timeout(self, timeout: str) -> None:
        assert not validate_config(GoverageConfig(timeout=timeout)).valid

    def test_vendor_pattern_warns(self) -> None:
        result = validate_config(GoverageConfig(patterns=("./vendor/...", "./internal/...")))

        assert result.valid
        assert result.warning_count == 1
        assert result.warnings[0].severity == "warning"

    def test_errors_joined_in_message(self) -> None:
        result = validate_config(GoverageConfig(covermode="bad", parallel="x"))

        assert str(result).count(";") == 1
