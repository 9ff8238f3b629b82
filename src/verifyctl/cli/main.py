"""
verifyctl - manage an IBM Security Verify tenant from the command line.

Log in once with ``verifyctl auth`` and then create, read, replace and delete
tenant resources from YAML or JSON files.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from verifyctl import __version__
from verifyctl.cli.commands.auth import auth
from verifyctl.cli.commands.create import create
from verifyctl.cli.commands.delete import delete
from verifyctl.cli.commands.get import get
from verifyctl.cli.commands.logs import logs
from verifyctl.cli.commands.replace import replace
from verifyctl.cli.commands.set import set_cmd
from verifyctl.config.config import get_settings

console = Console(stderr=True)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    file_level: int = logging.INFO,
) -> None:
    """
    Set up logging with a Rich handler on stderr and an optional trace file.

    Args:
        debug: Show debug messages on the console
        log_file: Trace log written on every invocation
        file_level: Level of the trace log
    """
    console_level = logging.DEBUG if debug else logging.WARNING
    rich_handler = RichHandler(console=console, show_time=False, show_path=False)
    rich_handler.setLevel(console_level)
    handlers = [rich_handler]

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            console.print(f"Unable to open the trace log {log_file}: {e}")
        else:
            file_handler.setLevel(file_level)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            handlers.append(file_handler)

    logging.basicConfig(
        level=min(console_level, file_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    # Suppress noisy third-party loggers unless in debug mode
    if not debug:
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file holding the login sessions (default: $VERIFY_HOME/config)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, "--version", prog_name="verifyctl")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], debug: bool) -> None:
    """
    verifyctl - manage an IBM Security Verify tenant

    Examples:
        verifyctl auth mytenant.verify.ibm.com -f auth.yaml   # Log in
        verifyctl get users --count 10                        # List users
        verifyctl create user --boilerplate > user.yaml       # Start a user file
        verifyctl create -f user.yaml                         # Create it
        verifyctl delete user --userName bob                  # Remove it
    """
    settings = get_settings()
    setup_logging(debug, settings.trace_log_path, settings.trace_log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["config_path"] = config or settings.config_path
    ctx.obj["debug"] = debug

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(auth)
cli.add_command(auth, name="login")
cli.add_command(create)
cli.add_command(get)
cli.add_command(replace)
cli.add_command(delete)
cli.add_command(logs)
cli.add_command(set_cmd, name="set")


def main() -> None:
    cli(prog_name="verifyctl")


if __name__ == "__main__":
    main()
