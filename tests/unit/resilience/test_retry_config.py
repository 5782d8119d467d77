"""Unit tests for RetryTuning, RetryConfig and RetryConfigBuilder."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from singleflight.config.settings import EnvSettingsLoader
from singleflight.config.validation import InvalidSettingValueError, MissingRequiredSettingError
from singleflight.resilience.retry import ConstantBackoff, ExponentialBackoff, RetryConfig, RetryTuning
from singleflight.testing.fakes import RecordingLogger


def collaborators() -> dict[str, object]:
    return {"attempt": AsyncMock(), "on_success": Mock(), "on_end": Mock()}


# ---------------------------------------------------------------------------
# RetryTuning
# ---------------------------------------------------------------------------


class TestRetryTuning:
    def test_defaults(self) -> None:
        t = RetryTuning()
        assert t.name == "unknown"
        assert t.min_ms == 0
        assert t.base == 1.2
        assert t.exponent == 33
        assert t.limit is None

    @pytest.mark.parametrize(
        "field, value",
        [("min_ms", -1), ("base", 0), ("exponent", -2), ("limit", -1)],
    )
    def test_rejects_invalid_values(self, field: str, value: float) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            RetryTuning(**{field: value})
        assert info.value.setting_name == f"RETRY_{field.upper()}"

    def test_is_frozen(self) -> None:
        t = RetryTuning()
        with pytest.raises((AttributeError, TypeError)):
            t.limit = 3  # type: ignore[misc]

    def test_loads_from_env(self) -> None:
        env = {
            "RETRY_NAME": "db",
            "RETRY_MIN_MS": "100",
            "RETRY_BASE": "2.5",
            "RETRY_EXPONENT": "8",
            "RETRY_LIMIT": "5",
        }
        t = EnvSettingsLoader(env).load(RetryTuning)
        assert t == RetryTuning(name="db", min_ms=100, base=2.5, exponent=8, limit=5)

    def test_empty_limit_means_unbounded(self) -> None:
        t = EnvSettingsLoader({"RETRY_LIMIT": ""}).load(RetryTuning)
        assert t.limit is None


# ---------------------------------------------------------------------------
# RetryConfig
# ---------------------------------------------------------------------------


class TestRetryConfig:
    def test_default_retry_delay_uses_tuning(self) -> None:
        config = RetryConfig(tuning=RetryTuning(min_ms=5000, base=1.0), **collaborators())
        assert isinstance(config.retry_delay, ExponentialBackoff)
        for failures in (1, 2, 3):
            assert 5000 <= config.retry_delay(failures) < 6000

    def test_custom_retry_delay_kept(self) -> None:
        delay = ConstantBackoff(10)
        config = RetryConfig(retry_delay=delay, **collaborators())
        assert config.retry_delay is delay

    def test_default_logger_is_resolved(self) -> None:
        config = RetryConfig(**collaborators())
        assert config.log is not None
        assert hasattr(config.log, "warning")

    def test_missing_names_every_collaborator(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as info:
            RetryConfig()
        assert info.value.setting_names == ("attempt", "on_success", "on_end")
        assert "'attempt', 'on_success', 'on_end'" in info.value.message

    def test_from_options_routes_tuning_fields(self) -> None:
        config = RetryConfig.from_options(name="cache", limit=2, **collaborators())
        assert config.name == "cache"
        assert config.limit == 2

    def test_from_options_rejects_mixed_tuning(self) -> None:
        with pytest.raises(TypeError):
            RetryConfig.from_options(tuning=RetryTuning(), limit=2, **collaborators())

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRY_NAME", "search")
        monkeypatch.setenv("RETRY_LIMIT", "3")
        config = RetryConfig.from_env(**collaborators())
        assert config.name == "search"
        assert config.limit == 3

    def test_from_env_with_explicit_loader(self) -> None:
        config = RetryConfig.from_env(EnvSettingsLoader({"RETRY_NAME": "x"}), **collaborators())
        assert config.name == "x"


# ---------------------------------------------------------------------------
# RetryConfigBuilder
# ---------------------------------------------------------------------------


class TestRetryConfigBuilder:
    def test_builds_config(self) -> None:
        log = RecordingLogger()
        delay = ConstantBackoff(1)
        setup = Mock()
        config = (
            RetryConfig.builder()
            .with_attempt(AsyncMock())
            .with_on_success(Mock())
            .with_on_end(Mock())
            .with_setup(setup)
            .with_retry_delay(delay)
            .with_log(log)
            .with_tuning(name="db", limit=1)
            .build()
        )
        assert config.name == "db"
        assert config.limit == 1
        assert config.retry_delay is delay
        assert config.log is log
        assert config.setup is setup

    def test_builder_is_immutable(self) -> None:
        base = RetryConfig.builder().with_on_success(Mock()).with_on_end(Mock())
        primary = base.with_attempt(AsyncMock()).with_tuning(name="primary")
        replica = base.with_attempt(AsyncMock()).with_tuning(name="replica")
        assert primary.build().name == "primary"
        assert replica.build().name == "replica"
        with pytest.raises(MissingRequiredSettingError):
            base.build()

    def test_invalid_tuning_surfaces_on_build(self) -> None:
        builder = RetryConfig.builder().with_tuning(base=-1)
        with pytest.raises(InvalidSettingValueError):
            builder.build()
