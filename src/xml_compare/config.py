"""Runtime configuration for batch runs and document sources.

Both configs are frozen dataclasses that validate themselves in
``__post_init__``.  ``from_env()`` reads ``XML_COMPARE_*`` variables, falling
back to the field defaults for anything unset:

    XML_COMPARE_MAX_CONCURRENCY   BatchConfig.max_concurrency
    XML_COMPARE_ITEM_TIMEOUT      BatchConfig.item_timeout (seconds)
    XML_COMPARE_HTTP_TIMEOUT      SourceConfig.timeout (seconds)
    XML_COMPARE_RETRY_ATTEMPTS    SourceConfig.retry_attempts
    XML_COMPARE_SESSION_TTL       SourceConfig.session_ttl (seconds)
    XML_COMPARE_SWEEP_INTERVAL    SourceConfig.sweep_interval (seconds)
    XML_COMPARE_MAX_SESSIONS      SourceConfig.max_sessions
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

__all__ = ["BatchConfig", "SourceConfig"]

_ENV_PREFIX = "XML_COMPARE_"

T = TypeVar("T")


def _from_env(
    environ: Mapping[str, str],
    name: str,
    parse: Callable[[str], T],
    overrides: dict[str, Any],
    field_name: str,
) -> None:
    raw = environ.get(f"{_ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return
    try:
        overrides[field_name] = parse(raw.strip())
    except ValueError as exc:
        msg = f"{_ENV_PREFIX}{name} must be a number, got {raw!r}"
        raise ValueError(msg) from exc


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """Immutable configuration for the batch orchestrator.

    Attributes:
        max_concurrency: Upper bound on URL items fetched and compared at the
            same time (>= 1).
        item_timeout: Seconds allowed per URL item, including login and both
            fetches.  None disables the timeout.
    """

    max_concurrency: int = 16
    item_timeout: float | None = None

    def __post_init__(self) -> None:
        if self.max_concurrency < 1:
            msg = f"max_concurrency must be >= 1, got {self.max_concurrency}"
            raise ValueError(msg)
        if self.item_timeout is not None and self.item_timeout <= 0.0:
            msg = f"item_timeout must be > 0, got {self.item_timeout}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BatchConfig:
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        _from_env(environ, "MAX_CONCURRENCY", int, overrides, "max_concurrency")
        _from_env(environ, "ITEM_TIMEOUT", float, overrides, "item_timeout")
        return cls(**overrides)


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Immutable configuration for HTTP document sources and sessions.

    Attributes:
        timeout: Per-request HTTP timeout in seconds.
        retry_attempts: Total attempts per request on transport errors.
            1 (the default) disables retrying.
        session_ttl: Lifetime of a login session in seconds.
        sweep_interval: Seconds between expired-session sweeps.
        max_sessions: Capacity of the session store.
    """

    timeout: float = 30.0
    retry_attempts: int = 1
    session_ttl: float = 3600.0
    sweep_interval: float = 300.0
    max_sessions: int = 1024

    def __post_init__(self) -> None:
        if self.timeout <= 0.0:
            msg = f"timeout must be > 0, got {self.timeout}"
            raise ValueError(msg)
        if self.retry_attempts < 1:
            msg = f"retry_attempts must be >= 1, got {self.retry_attempts}"
            raise ValueError(msg)
        if self.session_ttl <= 0.0:
            msg = f"session_ttl must be > 0, got {self.session_ttl}"
            raise ValueError(msg)
        if self.sweep_interval <= 0.0:
            msg = f"sweep_interval must be > 0, got {self.sweep_interval}"
            raise ValueError(msg)
        if self.max_sessions < 1:
            msg = f"max_sessions must be >= 1, got {self.max_sessions}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SourceConfig:
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        _from_env(environ, "HTTP_TIMEOUT", float, overrides, "timeout")
        _from_env(environ, "RETRY_ATTEMPTS", int, overrides, "retry_attempts")
        _from_env(environ, "SESSION_TTL", float, overrides, "session_ttl")
        _from_env(environ, "SWEEP_INTERVAL", float, overrides, "sweep_interval")
        _from_env(environ, "MAX_SESSIONS", int, overrides, "max_sessions")
        return cls(**overrides)
