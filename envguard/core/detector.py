"""Secret detection engine for parsed environment variables."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from envguard.core.entropy import looks_like_secret, shannon_entropy
from envguard.core.models import Finding, Severity, VariableRecord
from envguard.core.parser import parse_env_file
from envguard.core.signatures import SIGNATURES, Signature, match_signature

logger = logging.getLogger(__name__)

HEURISTIC_REASON = "Key name suggests sensitive data with high-entropy value"


class SecretDetector:
    """
    Flags variables whose values look like leaked credentials.

    Each variable yields at most one finding. A known signature wins over
    the keyword heuristic, which only runs when no signature matched.
    """

    def __init__(self, signatures: Optional[Sequence[Signature]] = None):
        """
        Initialize the detector.

        Args:
            signatures: Ordered signature table (defaults to the bundled one)
        """
        self.signatures = SIGNATURES if signatures is None else tuple(signatures)

    def detect(self, variables: Sequence[VariableRecord]) -> List[Finding]:
        """Return findings in the same order as the input variables."""
        findings: List[Finding] = []

        for variable in variables:
            finding = self._inspect(variable)
            if finding is not None:
                findings.append(finding)

        logger.debug("Inspected %d variables, %d findings", len(variables), len(findings))
        return findings

    def _inspect(self, variable: VariableRecord) -> Optional[Finding]:
        signature = match_signature(variable.value, self.signatures)
        if signature is not None:
            return Finding(
                key=variable.key,
                reason=f"Looks like a {signature.name}",
                source_line=variable.source_line,
                severity=signature.severity,
                signature=signature.name,
            )

        if looks_like_secret(variable.key, variable.value):
            return Finding(
                key=variable.key,
                reason=HEURISTIC_REASON,
                source_line=variable.source_line,
                severity=Severity.MEDIUM,
                metadata={"entropy": round(shannon_entropy(variable.value), 2)},
            )

        return None

    def scan_file(self, file_path: Union[str, Path]) -> List[Finding]:
        """Parse an env file and run detection over it."""
        return self.detect(parse_env_file(file_path))


def detect(variables: Sequence[VariableRecord]) -> List[Finding]:
    return SecretDetector().detect(variables)


def check_for_secrets(file_path: Union[str, Path]) -> List[Finding]:
    return SecretDetector().scan_file(file_path)
