"""
EnvGuard CLI - Git Hooks Management

Provides commands for installing and managing a pre-commit hook
that keeps secrets in .env files from being committed.
"""
import os
import stat
import subprocess
from pathlib import Path
from typing import List

import click

from envguard.core.detector import SecretDetector
from envguard.core.exceptions import EnvGuardError

HOOK_MARKER = "EnvGuard"

# Pre-commit hook script template
PRE_COMMIT_HOOK = '''#!/bin/sh
#
# EnvGuard Pre-Commit Hook
# Prevents committing secrets in .env files
#
# To skip this hook (use with caution):
#   git commit --no-verify
#
# To uninstall:
#   envguard hooks uninstall
#

if ! command -v envguard > /dev/null 2>&1; then
    echo "⚠️  EnvGuard not found. Skipping secret scan."
    exit 0
fi

envguard hooks protect
EXIT_CODE=$?

if [ $EXIT_CODE -ne 0 ]; then
    echo ""
    echo "❌ Commit blocked: secrets detected in staged env files!"
    echo "   Unstage the file, or skip with: git commit --no-verify (not recommended)"
    echo ""
    exit 1
fi

exit 0
'''

EXAMPLE_SUFFIXES = (".example", ".sample", ".template")


def is_env_file(path: str) -> bool:
    """True for .env style files that hold real values"""
    name = Path(path).name
    return name.startswith(".env") and not name.endswith(EXAMPLE_SUFFIXES)


def _git_dir(path: str) -> Path:
    repo_path = Path(path).resolve()
    git_dir = repo_path / ".git"
    if not git_dir.exists():
        click.echo(f"❌ Error: {repo_path} is not a git repository")
        raise SystemExit(1)
    return git_dir


@click.group()
def hooks():
    """🪝 Manage the Git pre-commit hook for .env secret detection."""
    pass


@hooks.command("install")
@click.option(
    "--path", "-p",
    type=click.Path(exists=True),
    default=".",
    help="Path to git repository"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing pre-commit hook"
)
def install_hook(path: str, force: bool):
    """
    Install the EnvGuard pre-commit hook.

    Examples:
        envguard hooks install
        envguard hooks install --path /path/to/repo --force
    """
    hooks_dir = _git_dir(path) / "hooks"
    hooks_dir.mkdir(exist_ok=True)
    pre_commit_path = hooks_dir / "pre-commit"

    if pre_commit_path.exists() and not force:
        click.echo(f"⚠️  Pre-commit hook already exists at {pre_commit_path}")
        click.echo("   Use --force to overwrite")
        raise SystemExit(1)

    pre_commit_path.write_text(PRE_COMMIT_HOOK)
    os.chmod(pre_commit_path, os.stat(pre_commit_path).st_mode | stat.S_IEXEC)

    click.echo("✅ Pre-commit hook installed successfully!")
    click.echo(f"   Location: {pre_commit_path}")


@hooks.command("uninstall")
@click.option(
    "--path", "-p",
    type=click.Path(exists=True),
    default=".",
    help="Path to git repository"
)
def uninstall_hook(path: str):
    """Uninstall the EnvGuard pre-commit hook."""
    pre_commit_path = _git_dir(path) / "hooks" / "pre-commit"

    if not pre_commit_path.exists():
        click.echo("ℹ️  No pre-commit hook found. Nothing to uninstall.")
        return

    if HOOK_MARKER not in pre_commit_path.read_text():
        click.echo("⚠️  The existing pre-commit hook is not an EnvGuard hook.")
        if not click.confirm("   Do you still want to remove it?"):
            click.echo("   Aborted.")
            return

    pre_commit_path.unlink()
    click.echo("✅ Pre-commit hook uninstalled successfully!")


@hooks.command("status")
@click.option(
    "--path", "-p",
    type=click.Path(exists=True),
    default=".",
    help="Path to git repository"
)
def hook_status(path: str):
    """Check the status of the EnvGuard pre-commit hook."""
    pre_commit_path = _git_dir(path) / "hooks" / "pre-commit"

    if not pre_commit_path.exists():
        click.echo("❌ Pre-commit hook: NOT INSTALLED")
        click.echo("   Run 'envguard hooks install' to enable secret scanning")
        return

    if HOOK_MARKER not in pre_commit_path.read_text():
        click.echo("⚠️  Pre-commit hook: INSTALLED (Custom/Other)")
        return

    click.echo("✅ Pre-commit hook: INSTALLED (EnvGuard)")
    if not os.access(pre_commit_path, os.X_OK):
        click.echo("⚠️  Hook is NOT executable - fixing...")
        os.chmod(pre_commit_path, os.stat(pre_commit_path).st_mode | stat.S_IEXEC)


def staged_files(repo_path: Path) -> List[str]:
    result = subprocess.run(
        ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR"],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return [f.strip() for f in result.stdout.split("\n") if f.strip()]


@hooks.command("protect")
@click.option(
    "--path", "-p",
    type=click.Path(exists=True),
    default=".",
    help="Path to git repository"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output"
)
def protect(path: str, verbose: bool):
    """
    Scan staged .env files for secrets (used by the pre-commit hook).

    Exit codes:
        0 - No secrets found
        1 - Secrets found (commit should be blocked)
    """
    repo_path = Path(path).resolve()

    try:
        candidates = [f for f in staged_files(repo_path) if is_env_file(f)]
    except (OSError, subprocess.CalledProcessError) as e:
        click.echo(f"⚠️  Error getting staged files: {e}")
        raise SystemExit(0)  # Don't block commit on error

    if not candidates:
        if verbose:
            click.echo("ℹ️  No staged env files to scan.")
        raise SystemExit(0)

    detector = SecretDetector()
    blocked = False

    for relative_path in candidates:
        try:
            findings = detector.scan_file(repo_path / relative_path)
        except EnvGuardError:
            continue
        for finding in findings:
            blocked = True
            click.echo(f"🚨 {relative_path}:{finding.source_line} {finding.key} - {finding.reason}")

    if not blocked and verbose:
        click.echo("✅ No secrets found in staged env files.")
    raise SystemExit(1 if blocked else 0)
