"""Generate a shareable .env.example from a real .env file."""

import re
from pathlib import Path
from typing import List, Sequence, Union

from envguard.core.entropy import looks_like_secret
from envguard.core.models import VariableRecord
from envguard.core.parser import parse_env_file

_RE_NUMERIC = re.compile(r"^\d+$")
_RE_NEEDS_QUOTES = re.compile(r"[\s#]")


def placeholder_for(variable: VariableRecord) -> str:
    """Pick the value written to the example file for one variable."""
    key, value = variable.key, variable.value

    if looks_like_secret(key, value):
        return f"your-{key.lower().replace('_', '-')}-here"
    if _RE_NUMERIC.match(value) or value in ("true", "false"):
        return value
    if "://" in value:
        scheme = value.split("://", 1)[0]
        return f"{scheme}://your-url-here"
    return value


def generate_example(variables: Sequence[VariableRecord], source_name: str = ".env") -> str:
    """
    Render example file content.

    Args:
        variables: Parsed variables of the source file
        source_name: Name shown in the header

    Returns:
        File content ending with a newline
    """
    lines: List[str] = [
        "# Example environment file generated by envguard",
        f"# Source: {source_name}",
        "",
    ]

    for variable in variables:
        if variable.preceding_comment:
            lines.append(f"# {variable.preceding_comment}")
        placeholder = placeholder_for(variable)
        if _RE_NEEDS_QUOTES.search(placeholder):
            placeholder = f'"{placeholder}"'
        lines.append(f"{variable.key}={placeholder}")

    return "\n".join(lines) + "\n"


def write_example(env_path: Union[str, Path], output_path: Union[str, Path] = ".env.example") -> Path:
    """Parse env_path and write its example counterpart to output_path."""
    env_path = Path(env_path)
    content = generate_example(parse_env_file(env_path), env_path.name)

    output = Path(output_path)
    output.write_text(content, encoding="utf-8")
    return output
