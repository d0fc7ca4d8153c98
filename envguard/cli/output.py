"""
Shared helpers for EnvGuard commands
"""
import click

from envguard.core.exceptions import EnvGuardError
from envguard.utils.config import ConfigManager, EnvGuardConfig


def get_manager(ctx: click.Context) -> ConfigManager:
    """Return the config manager attached to the root context"""
    ctx.ensure_object(dict)
    return ctx.obj.setdefault('config', ConfigManager())


def get_config(ctx: click.Context) -> EnvGuardConfig:
    return get_manager(ctx).load()


def header(title: str) -> None:
    click.echo(click.style(f"\n{title}\n", fg="blue", bold=True))


def success(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg="green"))


def warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def fail(ctx: click.Context, error: EnvGuardError) -> None:
    """Report an error and exit with status 1"""
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    ctx.exit(1)
