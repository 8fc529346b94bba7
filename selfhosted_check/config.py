"""Environment-variable configuration loader.

Every setting is read from a ``SELFHOSTED_CHECK_*`` variable; anything unset
falls back to the dataclass defaults in :mod:`selfhosted_check.models.config`.
"""

from __future__ import annotations

import os

from selfhosted_check.models.config import (
    DEFAULT_ANALYZER_NAME,
    LogConfig,
    OperatorLogConfig,
    OutputConfig,
    SelfHostedCheckConfig,
)

_PREFIX = "SELFHOSTED_CHECK_"

_VALID_LOG_LEVELS: frozenset[str] = frozenset({"debug", "info", "warning", "error", "critical"})
_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSY: frozenset[str] = frozenset({"0", "false", "no", "off", ""})

_LOOKBACK_MIN = 1
_LOOKBACK_MAX = 1_000


def load_config() -> SelfHostedCheckConfig:
    """Build a :class:`SelfHostedCheckConfig` from the process environment.

    Raises:
        ValueError: for an unknown log level, a non-boolean flag value or a
            non-integer lookback size.
    """
    level = _env("LOG_LEVEL", "info").strip().lower()
    if level not in _VALID_LOG_LEVELS:
        raise ValueError(f"{_PREFIX}LOG_LEVEL must be one of {sorted(_VALID_LOG_LEVELS)}, got {level!r}")

    operator_defaults = OperatorLogConfig()
    lookback = _clamp(
        _parse_int("LOG_LOOKBACK_LINES", operator_defaults.lookback_lines),
        _LOOKBACK_MIN,
        _LOOKBACK_MAX,
    )

    return SelfHostedCheckConfig(
        log=LogConfig(level=level),
        operator_logs=OperatorLogConfig(
            namespace=_env("OPERATOR_NAMESPACE", operator_defaults.namespace),
            label_selector=_env("OPERATOR_LABEL_SELECTOR", operator_defaults.label_selector),
            lookback_lines=lookback,
        ),
        output=OutputConfig(color=_parse_bool("COLOR", True)),
        custom_resource_api_version=_env("CUSTOM_RESOURCE_API_VERSION", "instana.io/v1beta2"),
        active_filters=_parse_list("ACTIVE_FILTERS", (DEFAULT_ANALYZER_NAME,)),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _env(name: str, default: str) -> str:
    return os.environ.get(_PREFIX + name, default)


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(_PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{_PREFIX}{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, default: int) -> int:
    raw = os.environ.get(_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as err:
        raise ValueError(f"{_PREFIX}{name} must be an integer, got {raw!r}") from err


def _parse_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(_PREFIX + name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
