"""EnvGuard - .env validation and secret leak detection."""

__version__ = "0.1.0"
__author__ = "EnvGuard Team"
__email__ = "team@envguard.dev"

from envguard.core.models import (
    Finding,
    HistoryFinding,
    Severity,
    ValidationResult,
    VariableRecord,
)

__all__ = [
    "Finding",
    "HistoryFinding",
    "Severity",
    "ValidationResult",
    "VariableRecord",
    "__version__",
]
