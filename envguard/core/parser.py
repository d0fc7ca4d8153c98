"""Line-oriented parser for .env files."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from envguard.core.exceptions import EnvFileNotFoundError
from envguard.core.models import VariableRecord

logger = logging.getLogger(__name__)

_RE_ASSIGNMENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$")

COMMON_ENV_FILES = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
    ".env.staging",
)


def unquote(value: str) -> str:
    """Strip one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env_text(text: str) -> List[VariableRecord]:
    """
    Parse raw .env content into variable records.

    A comment attaches to the variable directly below it. Blank lines
    clear the pending comment; lines that are not assignments are
    dropped without touching it.

    Args:
        text: Full file content

    Returns:
        Variable records in file order, duplicates included
    """
    variables: List[VariableRecord] = []
    pending_comment: Optional[str] = None

    for index, line in enumerate(text.split("\n")):
        stripped = line.strip()

        if not stripped:
            pending_comment = None
            continue

        if stripped.startswith("#"):
            pending_comment = stripped[1:].strip() or None
            continue

        match = _RE_ASSIGNMENT.match(stripped)
        if not match:
            logger.debug("Skipping line %d: not a KEY=VALUE assignment", index + 1)
            continue

        key, raw_value = match.groups()
        variables.append(
            VariableRecord(
                key=key,
                value=unquote(raw_value.strip()),
                source_line=index + 1,
                preceding_comment=pending_comment,
            )
        )
        pending_comment = None

    return variables


def parse_env_file(file_path: Union[str, Path]) -> List[VariableRecord]:
    """Read and parse an environment file, failing fast if it is missing."""
    path = Path(file_path)
    if not path.is_file():
        raise EnvFileNotFoundError(f"File not found: {file_path}", details={"path": str(path)})

    content = path.read_text(encoding="utf-8", errors="replace")
    variables = parse_env_text(content)
    logger.debug("Parsed %d variables from %s", len(variables), path)
    return variables


def find_env_files(directory: Union[str, Path] = ".") -> List[Path]:
    """Return the well-known env files that exist in a directory."""
    base = Path(directory)
    return [base / name for name in COMMON_ENV_FILES if (base / name).is_file()]
