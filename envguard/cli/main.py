"""
EnvGuard CLI - Main entry point
"""
from typing import Optional

import click

from envguard import __version__
from envguard.cli import config, history, hooks
from envguard.cli.envfile import check_secrets_cmd, fix_cmd, generate_example_cmd, validate_cmd
from envguard.core.exceptions import ConfigurationError
from envguard.utils.config import ConfigManager
from envguard.utils.logger import get_logger


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Diagnostic log level (default from config: WARNING)"
)
@click.pass_context
def cli(ctx, log_level: Optional[str]):
    """
    🛡️  EnvGuard - .env Validation & Secret Leak Detection

    Validate environment files, catch credentials before they are
    committed, and find the ones that already were.

    WORKFLOW:

    1. Validate against a schema:
       envguard validate .env --schema env.schema.yaml

    2. Check for secrets:
       envguard check-secrets

    3. Share a safe template:
       envguard generate-example -o .env.example

    4. Look for leaks in history:
       envguard scan-history --depth 200

    5. Block future leaks:
       envguard hooks install
    """
    ctx.ensure_object(dict)
    manager = ctx.obj.setdefault('config', ConfigManager())

    if log_level is None:
        try:
            log_level = manager.load().log_level
        except ConfigurationError:
            log_level = "WARNING"
    get_logger("envguard", log_level)


# Register subcommands
cli.add_command(validate_cmd)
cli.add_command(check_secrets_cmd)
cli.add_command(generate_example_cmd)
cli.add_command(fix_cmd)
cli.add_command(history.scan_history_cmd)
cli.add_command(hooks.hooks)
cli.add_command(config.config)


if __name__ == '__main__':
    cli()
