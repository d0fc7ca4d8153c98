"""Static table of named credential signatures."""

import re
from pathlib import Path
from typing import Optional, Sequence, Tuple

import yaml

from envguard.core.exceptions import ScanError
from envguard.core.models import Severity

DEFAULT_SIGNATURES_FILE = Path(__file__).parent.parent / "config" / "signatures.yaml"


class Signature:
    """Represents a named pattern for a well-known credential format."""

    __slots__ = ("name", "pattern", "severity", "description")

    def __init__(self, name: str, pattern: str, severity: str = "high", description: str = ""):
        """Initialize a signature."""
        self.name = name
        self.pattern = re.compile(pattern)
        self.severity = Severity(severity)
        self.description = description

    def matches(self, value: str) -> bool:
        """True if the pattern occurs anywhere in the value."""
        return self.pattern.search(value) is not None

    def __repr__(self) -> str:
        return f"Signature({self.name!r})"


def load_signatures(signatures_file: Path = DEFAULT_SIGNATURES_FILE) -> Tuple[Signature, ...]:
    """Load the ordered signature table from a YAML file."""
    try:
        with open(signatures_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        return tuple(
            Signature(
                name=entry["name"],
                pattern=entry["pattern"],
                severity=entry.get("severity", "high"),
                description=entry.get("description", ""),
            )
            for entry in config.get("signatures", [])
        )
    except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError, re.error) as e:
        raise ScanError(f"Failed to load signatures file: {e}", details={"path": str(signatures_file)})


# Built once at import and shared by reference; never mutated.
SIGNATURES: Tuple[Signature, ...] = load_signatures()


def match_signature(value: str, signatures: Sequence[Signature] = SIGNATURES) -> Optional[Signature]:
    """Return the first signature, in table order, found anywhere in the value."""
    for signature in signatures:
        if signature.matches(value):
            return signature
    return None


def match(value: str) -> Optional[str]:
    """Return the name of the first matching signature, if any."""
    signature = match_signature(value)
    return signature.name if signature else None
