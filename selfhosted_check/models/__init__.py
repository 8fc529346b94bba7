"""Core data structures for selfhosted-check."""

from selfhosted_check.models.config import (
    LogConfig,
    OperatorLogConfig,
    OutputConfig,
    SelfHostedCheckConfig,
)
from selfhosted_check.models.document import FieldLookup, nested_field, nested_int, nested_str, object_name
from selfhosted_check.models.results import DiagnosticResult, Failure, Sensitive, failure_result

__all__ = [
    "DiagnosticResult",
    "Failure",
    "FieldLookup",
    "LogConfig",
    "OperatorLogConfig",
    "OutputConfig",
    "SelfHostedCheckConfig",
    "Sensitive",
    "failure_result",
    "nested_field",
    "nested_int",
    "nested_str",
    "object_name",
]
