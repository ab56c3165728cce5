"""Tests for BatchConfig and SourceConfig, including environment overrides."""

from __future__ import annotations

import dataclasses

import pytest

from xml_compare.config import BatchConfig, SourceConfig


class TestBatchConfig:
    def test_defaults(self) -> None:
        config = BatchConfig()
        assert config.max_concurrency == 16
        assert config.item_timeout is None

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            BatchConfig().max_concurrency = 2  # type: ignore[misc]

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_bad_concurrency(self, value: int) -> None:
        with pytest.raises(ValueError, match="max_concurrency"):
            BatchConfig(max_concurrency=value)

    def test_rejects_bad_timeout(self) -> None:
        with pytest.raises(ValueError, match="item_timeout"):
            BatchConfig(item_timeout=0.0)

    def test_from_env(self) -> None:
        config = BatchConfig.from_env(
            {"XML_COMPARE_MAX_CONCURRENCY": "4", "XML_COMPARE_ITEM_TIMEOUT": "2.5"}
        )
        assert config == BatchConfig(max_concurrency=4, item_timeout=2.5)

    def test_from_env_blank_values_use_defaults(self) -> None:
        assert BatchConfig.from_env({"XML_COMPARE_MAX_CONCURRENCY": "  "}) == BatchConfig()

    def test_from_env_malformed(self) -> None:
        with pytest.raises(ValueError, match="XML_COMPARE_MAX_CONCURRENCY must be a number"):
            BatchConfig.from_env({"XML_COMPARE_MAX_CONCURRENCY": "many"})

    def test_from_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XML_COMPARE_MAX_CONCURRENCY", "3")
        assert BatchConfig.from_env().max_concurrency == 3


class TestSourceConfig:
    def test_defaults(self) -> None:
        config = SourceConfig()
        assert config.timeout == 30.0
        assert config.retry_attempts == 1
        assert config.session_ttl == 3600.0
        assert config.sweep_interval == 300.0
        assert config.max_sessions == 1024

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("timeout", 0.0),
            ("retry_attempts", 0),
            ("session_ttl", -1.0),
            ("sweep_interval", 0.0),
            ("max_sessions", 0),
        ],
    )
    def test_rejects_invalid(self, field: str, value: float) -> None:
        with pytest.raises(ValueError, match=field):
            SourceConfig(**{field: value})

    def test_from_env(self) -> None:
        config = SourceConfig.from_env(
            {
                "XML_COMPARE_HTTP_TIMEOUT": "5",
                "XML_COMPARE_RETRY_ATTEMPTS": "3",
                "XML_COMPARE_SESSION_TTL": "60",
                "XML_COMPARE_SWEEP_INTERVAL": "10",
                "XML_COMPARE_MAX_SESSIONS": "8",
            }
        )
        assert config == SourceConfig(
            timeout=5.0,
            retry_attempts=3,
            session_ttl=60.0,
            sweep_interval=10.0,
            max_sessions=8,
        )

    def test_from_env_ignores_unrelated(self) -> None:
        assert SourceConfig.from_env({"PATH": "/bin"}) == SourceConfig()
