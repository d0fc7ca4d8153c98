"""Declarative schema documents for environment files.

Schemas are plain data (YAML or JSON) rather than executable modules:

    required:
      - DATABASE_URL
    variables:
      PORT:
        pattern: '^\\d+$'
      NODE_ENV:
        required: true
        pattern: '^(development|production|test)$'
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Pattern, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from envguard.core.exceptions import SchemaLoadError

logger = logging.getLogger(__name__)


class VariableRule(BaseModel):
    """Per-key expectations."""

    required: bool = False
    pattern: Optional[str] = None
    description: Optional[str] = None

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression: {e}")
        return value


class EnvSchema(BaseModel):
    """A flat required-list plus optional per-key pattern rules."""

    required: List[str] = Field(default_factory=list)
    variables: Dict[str, VariableRule] = Field(default_factory=dict)

    @property
    def required_keys(self) -> List[str]:
        """Keys listed under `required` followed by rules marked required."""
        keys: List[str] = []
        for key in self.required:
            if key not in keys:
                keys.append(key)
        for key, rule in self.variables.items():
            if rule.required and key not in keys:
                keys.append(key)
        return keys

    @property
    def patterns(self) -> Dict[str, Pattern]:
        return {
            key: re.compile(rule.pattern)
            for key, rule in self.variables.items()
            if rule.pattern is not None
        }


def load_schema(schema_path: Union[str, Path]) -> EnvSchema:
    """
    Load and validate a schema document.

    Args:
        schema_path: Path to a .yaml/.yml/.json schema

    Returns:
        Parsed schema

    Raises:
        SchemaLoadError: If the file cannot be read, parsed or validated
    """
    path = Path(schema_path)
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
        schema = EnvSchema.model_validate(data or {})
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError, ValidationError) as e:
        raise SchemaLoadError(f"Failed to load schema {path}: {e}", details={"path": str(path)})

    logger.debug(
        "Loaded schema %s: %d required, %d rules",
        path,
        len(schema.required_keys),
        len(schema.variables),
    )
    return schema
