"""Configuration data structures.

Populated from ``SELFHOSTED_CHECK_*`` environment variables by
:func:`selfhosted_check.config.load_config`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_ANALYZER_NAME = "SelfHostedInstallCheck"


@dataclass(frozen=True)
class LogConfig:
    level: str = "info"


@dataclass(frozen=True)
class OperatorLogConfig:
    """Where operator pods live and how far back to look for warnings."""

    namespace: str = "instana-operator"
    label_selector: str = "app.kubernetes.io/component=operator"
    lookback_lines: int = 10


@dataclass(frozen=True)
class OutputConfig:
    color: bool = True


@dataclass(frozen=True)
class SelfHostedCheckConfig:
    """Top-level configuration."""

    log: LogConfig = field(default_factory=LogConfig)
    operator_logs: OperatorLogConfig = field(default_factory=OperatorLogConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    custom_resource_api_version: str = "instana.io/v1beta2"
    active_filters: tuple[str, ...] = (DEFAULT_ANALYZER_NAME,)
