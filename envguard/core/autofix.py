"""Automatic correction of common .env formatting problems."""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from envguard.core.exceptions import EnvFileNotFoundError
from envguard.core.models import Fix

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"

_RE_INLINE_COMMENT = re.compile(r"\s+#.*$")
_RE_POSITIVE_INT = re.compile(r"^[1-9]\d*$")

# A rule takes (key, value) and returns the rewritten line or None.
Rule = Callable[[str, str], Optional[str]]


def _is_quoted(value: str) -> bool:
    stripped = value.strip()
    return stripped.startswith('"') or stripped.startswith("'")


def _fix_equals_spacing(key: str, value: str) -> Optional[str]:
    if key != key.strip() or value != value.lstrip():
        return f"{key.strip()}={value.lstrip()}"
    return None


def _fix_inline_comment(key: str, value: str) -> Optional[str]:
    if _is_quoted(value) or not _RE_INLINE_COMMENT.search(value):
        return None
    return f"{key}={_RE_INLINE_COMMENT.sub('', value)}"


def _fix_unquoted_spaces(key: str, value: str) -> Optional[str]:
    stripped = value.strip()
    if _is_quoted(value) or " " not in stripped:
        return None
    return f'{key}="{stripped}"'


def _fix_quoted_number(key: str, value: str) -> Optional[str]:
    stripped = value.strip()
    if len(stripped) < 2 or stripped[0] != stripped[-1] or stripped[0] not in ('"', "'"):
        return None
    inner = stripped[1:-1]
    if _RE_POSITIVE_INT.match(inner):
        return f"{key}={inner}"
    return None


RULES: Tuple[Tuple[Rule, str], ...] = (
    (_fix_equals_spacing, "Removed extra spaces around equals sign"),
    (_fix_inline_comment, "Removed inline comment from value"),
    (_fix_unquoted_spaces, "Added quotes around value with spaces"),
    (_fix_quoted_number, "Removed unnecessary quotes from numeric value"),
)


def fix_line(line: str, line_number: int) -> Tuple[str, List[Fix]]:
    """Apply every rule once, in order, to a single line."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or "=" not in line:
        return line, []

    fixes: List[Fix] = []
    current = line
    for rule, reason in RULES:
        key, value = current.split("=", 1)
        fixed = rule(key, value)
        if fixed is None or fixed == current:
            continue
        fixes.append(Fix(line=line_number, original=current, fixed=fixed, reason=reason))
        current = fixed

    return current, fixes


def fix_text(text: str) -> Tuple[str, List[Fix]]:
    lines = text.split("\n")
    fixes: List[Fix] = []
    for index, line in enumerate(lines):
        lines[index], line_fixes = fix_line(line, index + 1)
        fixes.extend(line_fixes)
    return "\n".join(lines), fixes


def auto_fix(env_path: Union[str, Path], dry_run: bool = False) -> List[Fix]:
    """
    Fix formatting problems in an env file in place.

    The original content is saved to `<env_path>.backup` before the file
    is rewritten. Nothing is written when no fix applies or in dry-run mode.

    Args:
        env_path: File to fix
        dry_run: Only report what would change

    Returns:
        Applied (or, in dry-run mode, proposed) fixes
    """
    path = Path(env_path)
    if not path.is_file():
        raise EnvFileNotFoundError(f"File not found: {env_path}", details={"path": str(path)})

    # Undecodable bytes round-trip unchanged through the rewrite.
    content = path.read_text(encoding="utf-8", errors="surrogateescape")
    fixed_content, fixes = fix_text(content)

    if fixes and not dry_run:
        backup_path = path.with_name(path.name + BACKUP_SUFFIX)
        backup_path.write_text(content, encoding="utf-8", errors="surrogateescape")
        path.write_text(fixed_content, encoding="utf-8", errors="surrogateescape")
        logger.info("Applied %d fixes to %s (backup: %s)", len(fixes), path, backup_path)

    return fixes
