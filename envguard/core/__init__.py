"""Core package for EnvGuard."""

from envguard.core.detector import SecretDetector
from envguard.core.exceptions import EnvGuardError, EnvFileNotFoundError, SchemaLoadError
from envguard.core.history import GitHistoryScanner, scan_history
from envguard.core.models import Finding, HistoryFinding, Severity, ValidationResult, VariableRecord
from envguard.core.parser import parse_env_file, parse_env_text
from envguard.core.signatures import SIGNATURES, Signature, match_signature
from envguard.core.validator import SchemaValidator, validate_env_file

__all__ = [
    "SecretDetector",
    "EnvGuardError",
    "EnvFileNotFoundError",
    "SchemaLoadError",
    "GitHistoryScanner",
    "scan_history",
    "Finding",
    "HistoryFinding",
    "Severity",
    "ValidationResult",
    "VariableRecord",
    "parse_env_file",
    "parse_env_text",
    "SIGNATURES",
    "Signature",
    "match_signature",
    "SchemaValidator",
    "validate_env_file",
]
