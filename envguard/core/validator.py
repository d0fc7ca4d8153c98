"""Schema and sanity validation of parsed environment variables."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from envguard.core.exceptions import SchemaLoadError
from envguard.core.models import ValidationResult, VariableRecord
from envguard.core.parser import parse_env_file
from envguard.core.schema import EnvSchema, load_schema

logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Checks variables against an optional schema.

    The empty-value check always runs. Required-key and pattern checks
    run only when a schema is given. Errors accumulate; nothing stops
    validation early.
    """

    def __init__(self, schema: Optional[EnvSchema] = None):
        self.schema = schema

    def validate(self, variables: Sequence[VariableRecord]) -> ValidationResult:
        errors = self.check_empty(variables)
        if self.schema is not None:
            errors.extend(self.check_required(variables))
            errors.extend(self.check_patterns(variables))

        return ValidationResult(valid=not errors, variables=list(variables), errors=errors)

    @staticmethod
    def check_empty(variables: Sequence[VariableRecord]) -> List[str]:
        return [
            f"{variable.key} is empty (line {variable.source_line})"
            for variable in variables
            if variable.value == ""
        ]

    def check_required(self, variables: Sequence[VariableRecord]) -> List[str]:
        present = {variable.key for variable in variables}
        return [
            f"Missing required variable: {key}"
            for key in self.schema.required_keys
            if key not in present
        ]

    def check_patterns(self, variables: Sequence[VariableRecord]) -> List[str]:
        errors: List[str] = []
        for key, pattern in self.schema.patterns.items():
            # Duplicated keys: the first occurrence is the one checked.
            variable = next((v for v in variables if v.key == key), None)
            if variable is not None and not pattern.search(variable.value):
                errors.append(f"{key} does not match expected pattern")
        return errors


def validate(variables: Sequence[VariableRecord], schema: Optional[EnvSchema] = None) -> ValidationResult:
    return SchemaValidator(schema).validate(variables)


def validate_env_file(
    env_path: Union[str, Path],
    schema_path: Optional[Union[str, Path]] = None,
) -> ValidationResult:
    """
    Parse an env file and validate it.

    A missing schema file skips the schema step. A schema that exists but
    fails to load is reported as a single error and the remaining schema
    checks are skipped.

    Raises:
        EnvFileNotFoundError: If the env file does not exist
    """
    variables = parse_env_file(env_path)

    if schema_path is None or not Path(schema_path).exists():
        if schema_path is not None:
            logger.info("Schema %s not found, running basic checks only", schema_path)
        return validate(variables)

    try:
        schema = load_schema(schema_path)
    except SchemaLoadError as e:
        logger.warning("%s", e)
        result = validate(variables)
        result.errors.append(str(e))
        result.valid = False
        return result

    return validate(variables, schema)
