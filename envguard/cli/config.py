"""
EnvGuard CLI - Configuration Commands
"""
import click

from envguard.cli.output import fail, get_config, get_manager
from envguard.core.exceptions import EnvGuardError


@click.group("config")
def config():
    """⚙️  Show or change EnvGuard settings."""
    pass


@config.command("show")
@click.pass_context
def show(ctx):
    """Show effective settings (user file, .envguardrc and ENVGUARD_* merged)."""
    try:
        settings = get_config(ctx)
    except EnvGuardError as e:
        fail(ctx, e)
        return

    for key, value in settings.to_dict().items():
        click.echo(f"{click.style(key, fg='cyan')} = {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx, key: str, value: str):
    """Persist a setting in ~/.envguard/config.json."""
    manager = get_manager(ctx)
    try:
        manager.set(key, value)
        click.echo(f"✅ {key} = {manager.get(key)}")
    except EnvGuardError as e:
        fail(ctx, e)
