"""Core domain models for EnvGuard."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    """Security finding severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


@dataclass(frozen=True)
class VariableRecord:
    """One KEY=VALUE entry declared in an environment file."""

    key: str
    value: str
    source_line: int
    preceding_comment: Optional[str] = None

    @property
    def has_comment(self) -> bool:
        return self.preceding_comment is not None

    @property
    def masked_value(self) -> str:
        """Return the value with everything past the first 4 chars hidden."""
        if len(self.value) <= 4:
            return "***"
        return self.value[:4] + "*" * min(len(self.value) - 4, 20)


@dataclass
class Finding:
    """A suspicion that one variable holds a secret."""

    key: str
    reason: str
    source_line: Optional[int] = None
    severity: Severity = Severity.MEDIUM
    signature: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_signature_match(self) -> bool:
        return self.signature is not None


@dataclass
class HistoryFinding:
    """A signature match on a line added somewhere in git history."""

    commit_id: str
    file_path: str
    matched_line_excerpt: str
    signature: str = ""


@dataclass
class ValidationResult:
    """Outcome of validating an environment file."""

    valid: bool
    variables: List[VariableRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)


@dataclass
class Fix:
    """A single automatic correction applied to a line."""

    line: int
    original: str
    fixed: str
    reason: str
