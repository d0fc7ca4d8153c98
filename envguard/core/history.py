"""Git history scanner for secrets committed in the past.

Replays the output of `git log -p` and runs every added line through the
signature table. The keyword heuristic is not applied here; across a
whole history its false-positive rate is too high to be useful.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from envguard.core.exceptions import ExternalToolUnavailableError
from envguard.core.models import HistoryFinding
from envguard.core.signatures import SIGNATURES, Signature, match_signature

logger = logging.getLogger(__name__)

COMMIT_PREFIX = "commit "
FILE_PREFIX = "+++ b/"
EXCERPT_LENGTH = 80
ELLIPSIS = "..."

DEFAULT_DEPTH = 100
DEFAULT_MAX_OUTPUT_BYTES = 20 * 1024 * 1024


def excerpt(line: str, length: int = EXCERPT_LENGTH) -> str:
    if len(line) > length:
        return line[:length] + ELLIPSIS
    return line


def scan_history(diff_text: str, signatures: Sequence[Signature] = SIGNATURES) -> List[HistoryFinding]:
    """
    Find signature matches on added lines of a multi-commit diff.

    Args:
        diff_text: Concatenated `git log -p` output
        signatures: Ordered signature table

    Returns:
        One finding per matching added line, in stream order
    """
    findings: List[HistoryFinding] = []
    current_commit = ""
    current_file = ""

    for line in diff_text.split("\n"):
        line = line.rstrip("\r")

        if line.startswith(COMMIT_PREFIX):
            current_commit = line[len(COMMIT_PREFIX):].strip()[:7]
            continue

        if line.startswith(FILE_PREFIX):
            current_file = line[len(FILE_PREFIX):]
            continue

        if not line.startswith("+") or line.startswith("+++"):
            continue

        added = line[1:]
        signature = match_signature(added, signatures)
        if signature is None:
            continue

        findings.append(
            HistoryFinding(
                commit_id=current_commit,
                file_path=current_file,
                matched_line_excerpt=excerpt(added),
                signature=signature.name,
            )
        )

    return findings


class GitHistoryScanner:
    """
    Scans recent git history of a repository for committed secrets.

    History scanning is best effort: when git is missing or the path is
    not a repository, the scan yields no findings instead of failing.
    """

    def __init__(
        self,
        signatures: Optional[Sequence[Signature]] = None,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    ):
        """
        Initialize the history scanner.

        Args:
            signatures: Ordered signature table (defaults to the bundled one)
            max_output_bytes: Upper bound on git output read per scan
        """
        self.signatures = SIGNATURES if signatures is None else tuple(signatures)
        self.max_output_bytes = max_output_bytes

    def scan(self, repo_path: Union[str, Path] = ".", depth: int = DEFAULT_DEPTH) -> List[HistoryFinding]:
        """Scan the last `depth` commits reachable from HEAD."""
        try:
            diff_text = self.read_log(repo_path, depth)
        except ExternalToolUnavailableError as e:
            logger.warning("History scan skipped: %s", e)
            return []

        findings = scan_history(diff_text, self.signatures)
        logger.info("Scanned %d commits in %s, %d findings", depth, repo_path, len(findings))
        return findings

    def read_log(self, repo_path: Union[str, Path], depth: int) -> str:
        """
        Run `git log -p` and return its output, capped at max_output_bytes.

        Raises:
            ExternalToolUnavailableError: If git cannot produce the log
        """
        # Pinned so user config (diff.noprefix, format.pretty) cannot change the layout.
        args = [
            "git", "log", "-p", "--no-color", "--no-ext-diff",
            "--src-prefix=a/", "--dst-prefix=b/", "--pretty=medium",
            "-n", str(depth),
        ]
        try:
            process = subprocess.Popen(
                args,
                cwd=str(repo_path),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise ExternalToolUnavailableError(f"Cannot run git: {e}", details={"path": str(repo_path)})

        with process:
            output = process.stdout.read(self.max_output_bytes)
            truncated = process.stdout.read(1) != b""
            if truncated:
                logger.warning(
                    "git log output exceeded %d bytes, scanning truncated history",
                    self.max_output_bytes,
                )
                process.kill()
            returncode = process.wait()

        if not truncated and returncode != 0:
            raise ExternalToolUnavailableError(
                f"git log exited with status {returncode} (not a git repository?)",
                details={"path": str(repo_path), "returncode": returncode},
            )

        return output.decode("utf-8", errors="replace")


def scan_git_history(depth: int = DEFAULT_DEPTH, repo_path: Union[str, Path] = ".") -> List[HistoryFinding]:
    return GitHistoryScanner().scan(repo_path, depth)
