"""
EnvGuard CLI - History Command

Scans recent git history for secrets that were committed in the past.
"""
from typing import Optional

import click

from envguard.cli.output import fail, get_config, header, success
from envguard.core.exceptions import EnvGuardError
from envguard.core.history import GitHistoryScanner


@click.command("scan-history")
@click.option(
    "--path", "-p",
    default=".",
    help="Path to git repository"
)
@click.option(
    "--depth", "-d",
    type=click.IntRange(min=1),
    help="Number of commits to scan (default: 100)"
)
@click.pass_context
def scan_history_cmd(ctx, path: str, depth: Optional[int]):
    """
    Scan git history for accidentally committed secrets.

    Every line added in the last DEPTH commits is checked against the known
    credential signatures. If git is unavailable or PATH is not a repository
    the scan reports nothing.

    Examples:
        envguard scan-history
        envguard scan-history --path ../service --depth 500
    """
    try:
        config = get_config(ctx)
    except EnvGuardError as e:
        fail(ctx, e)
        return

    depth = depth or config.history_depth
    header("🔎 EnvGuard - Git History Scanner")
    click.echo(click.style(f"Scanning last {depth} commits...\n", fg="bright_black"))

    scanner = GitHistoryScanner(max_output_bytes=config.max_history_bytes)
    findings = scanner.scan(path, depth)

    if not findings:
        success("No secrets found in git history")
        return

    click.echo(click.style(f"⚠️  Found {len(findings)} potential secret(s) in history:\n", fg="red"))
    for finding in findings:
        click.echo(click.style(f"  Commit: {finding.commit_id}", fg="red"))
        click.echo(click.style(f"  File: {finding.file_path}", fg="yellow"))
        click.echo(click.style(f"  Type: {finding.signature}", fg="magenta"))
        click.echo(click.style(f"  {finding.matched_line_excerpt}\n", fg="bright_black"))

    click.echo(click.style("  ⚠️  These secrets may be compromised. Rotate them immediately!", fg="yellow"))
