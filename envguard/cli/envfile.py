"""
EnvGuard CLI - Env file commands

Validate, scan for secrets, generate examples and auto-fix .env files.
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click

from envguard.cli.output import fail, get_config, header, success, warning
from envguard.core.autofix import BACKUP_SUFFIX, auto_fix
from envguard.core.detector import SecretDetector
from envguard.core.example import write_example
from envguard.core.exceptions import EnvGuardError
from envguard.core.models import Finding, VariableRecord
from envguard.core.parser import find_env_files, parse_env_file
from envguard.core.validator import validate_env_file


@click.command("validate")
@click.argument("env_file", required=False)
@click.option(
    "--schema", "-s",
    type=click.Path(),
    help="Path to validation schema (YAML or JSON)"
)
@click.pass_context
def validate_cmd(ctx, env_file: Optional[str], schema: Optional[str]):
    """
    Validate a .env file against a schema.

    Empty values are always reported. When the schema file exists, required
    variables and per-variable patterns are checked too.

    Examples:
        envguard validate
        envguard validate .env.production --schema env.schema.yaml
    """
    header("🛡️  EnvGuard - Validation")

    try:
        config = get_config(ctx)
        result = validate_env_file(env_file or config.default_env_file, schema or config.schema_file)
    except EnvGuardError as e:
        fail(ctx, e)
        return

    if result.valid:
        success("Validation passed!")
        click.echo(click.style(f"\n  Found {len(result.variables)} environment variables", fg="bright_black"))
        return

    click.echo(click.style("✗ Validation failed!\n", fg="red"))
    for error in result.errors:
        click.echo(click.style(f"  • {error}", fg="red"))
    ctx.exit(1)


def _format_finding(finding: Finding, variable: Optional[VariableRecord], show_values: bool) -> str:
    line = f"  • {finding.key}: {finding.reason}"
    if finding.source_line:
        line += f" (line {finding.source_line})"
    if show_values and variable is not None:
        line += f" [{variable.masked_value}]"
    return line


@click.command("check-secrets")
@click.argument("env_files", nargs=-1)
@click.option(
    "--show-values",
    is_flag=True,
    help="Show masked values next to each finding"
)
@click.option(
    "--fail-on-findings",
    is_flag=True,
    help="Exit with status 1 when anything is found (for CI gates)"
)
@click.pass_context
def check_secrets_cmd(ctx, env_files: Tuple[str, ...], show_values: bool, fail_on_findings: bool):
    """
    Scan .env files for exposed secrets.

    Without arguments, every well-known env file in the current directory
    is scanned (.env, .env.local, .env.production, ...).

    Examples:
        envguard check-secrets
        envguard check-secrets .env.staging --show-values
    """
    header("🔍 EnvGuard - Secret Scanner")

    detector = SecretDetector()
    results: Dict[str, List[Tuple[Finding, Optional[VariableRecord]]]] = {}

    try:
        paths = list(env_files) or [str(p) for p in find_env_files(".")] or [get_config(ctx).default_env_file]
        for path in paths:
            variables = parse_env_file(path)
            by_line = {v.source_line: v for v in variables}
            results[path] = [(f, by_line.get(f.source_line)) for f in detector.detect(variables)]
    except EnvGuardError as e:
        fail(ctx, e)
        return

    total = sum(len(found) for found in results.values())
    if total == 0:
        success("No exposed secrets detected")
        return

    warning(f"Found {total} potential secret(s):\n")
    for path, found in results.items():
        if not found:
            continue
        if len(results) > 1:
            click.echo(click.style(f"  {path}", fg="cyan"))
        for finding, variable in found:
            click.echo(click.style(_format_finding(finding, variable, show_values), fg="yellow"))

    click.echo(click.style("\n  Tip: Add these to .gitignore and use a secrets manager", fg="bright_black"))
    if fail_on_findings:
        ctx.exit(1)


@click.command("generate-example")
@click.argument("env_file", required=False)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output file (default: .env.example)"
)
@click.pass_context
def generate_example_cmd(ctx, env_file: Optional[str], output: Optional[str]):
    """
    Generate a .env.example from a .env file.

    Secret-looking values become placeholders, URLs keep only their scheme,
    numbers and booleans are kept as they are.
    """
    header("📝 EnvGuard - Example Generator")

    try:
        config = get_config(ctx)
        source = Path(env_file or config.default_env_file)
        target = Path(output or config.example_output)
        if target.resolve() == source.resolve():
            click.echo(click.style("Error: output would overwrite the source file", fg="red"), err=True)
            ctx.exit(1)
        write_example(source, target)
    except EnvGuardError as e:
        fail(ctx, e)
        return

    success(f"Generated {target}")


@click.command("fix")
@click.argument("env_file", required=False)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show fixes without modifying the file"
)
@click.pass_context
def fix_cmd(ctx, env_file: Optional[str], dry_run: bool):
    """
    Auto-fix common formatting problems in a .env file.

    A backup is written to <file>.backup before the file is changed.
    """
    header("🔧 EnvGuard - Auto Fix")

    try:
        path = env_file or get_config(ctx).default_env_file
        fixes = auto_fix(path, dry_run=dry_run)
    except EnvGuardError as e:
        fail(ctx, e)
        return

    if not fixes:
        success("No issues found to auto-fix")
        return

    verb = "Would apply" if dry_run else "Applied"
    warning(f"{verb} {len(fixes)} automatic fix(es):\n")
    for fix in fixes:
        click.echo(click.style(f"  Line {fix.line}:", fg="bright_black"))
        click.echo(click.style(f"  - {fix.original}", fg="red"))
        click.echo(click.style(f"  + {fix.fixed}", fg="green"))
        click.echo(click.style(f"    → {fix.reason}\n", fg="blue"))

    if not dry_run:
        click.echo(click.style(f"  Backup saved to {path}{BACKUP_SUFFIX}", fg="bright_black"))
