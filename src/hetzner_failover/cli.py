"""Failover IP CLI.

Command-line interface for Robot failover IPs.
Uses Click for option parsing and Rich for diagnostics on stderr.
Record lines go to stdout as plain tab-separated text.
"""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from hetzner_failover.api.client import RobotClient
from hetzner_failover.config import get_settings
from hetzner_failover.credentials import load_credentials
from hetzner_failover.dispatch import Action, check_status, resolve_action, run
from hetzner_failover.duty import EXIT_FAILURE
from hetzner_failover.errors import ApiError, ConfigError, FailoverError, UsageError

err_console = Console(stderr=True)
logger = logging.getLogger("hetzner_failover")


def setup_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def report_error(error: FailoverError) -> None:
    """Print an error on stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    if error.details:
        err_console.print(f"[dim]Details: {escape(str(error.details))}[/dim]")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="hetzner-failover")
@click.option("--failover-ip", "-f", default=None, help="Failover IP address (default from credentials file)")
@click.option("--active-server-ip", "-s", default=None, help="Route the failover IP to this server")
@click.option("--local-ip", "-l", default=None, help="This server's IP for duty marks (default from credentials file)")
@click.option("--all", "-a", "list_all", is_flag=True, help="List all failover IPs")
@click.option("--check", "-t", is_flag=True, help="Exit 0 if this server is active, 3 if standby")
@click.option("--take", is_flag=True, help="Route the failover IP to this server")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Credentials file (default: ~/.hetzner.rc, then /etc/hetzner-api.conf)",
)
@click.option("--timeout", type=click.FloatRange(min=1), default=None, help="HTTP timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Log requests on stderr")
@click.pass_context
def main(
    ctx: click.Context,
    failover_ip: str | None,
    active_server_ip: str | None,
    local_ip: str | None,
    list_all: bool,
    check: bool,
    take: bool,
    config_file: Path | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Show and switch Hetzner Robot failover IPs.

    Without options all failover IPs are listed. With --failover-ip one
    address is shown; adding --active-server-ip routes it to that server.
    --take routes it to the local IP and --check reports through the exit
    status whether the local IP is the active server.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        err_console.print(f"[bold red]Error:[/bold red] Invalid settings: {escape(str(e))}")
        raise SystemExit(EXIT_FAILURE)

    setup_logging("DEBUG" if verbose else settings.log_level)

    try:
        paths = [config_file] if config_file else settings.credential_paths()
        credentials = load_credentials(paths)
        invocation = resolve_action(
            failover_ip=failover_ip,
            active_server_ip=active_server_ip,
            local_ip=local_ip,
            list_all=list_all,
            check=check,
            take=take,
            defaults=credentials,
        )
    except UsageError as e:
        raise click.UsageError(e.message, ctx=ctx)
    except ConfigError as e:
        report_error(e)
        raise SystemExit(EXIT_FAILURE)

    # Session override from the context object, e.g. a preconfigured requests.Session
    session = (ctx.obj or {}).get("session")
    client = RobotClient(
        credentials,
        base_url=settings.base_url,
        timeout=timeout or settings.timeout,
        session=session,
    )

    with client:
        if invocation.action == Action.CHECK_STATUS:
            try:
                state = check_status(client, invocation.failover_ip, invocation.local_ip)
            except ApiError as e:
                report_error(e)
                raise SystemExit(e.exit_code)
            logger.info(
                "%s is %s for %s", invocation.local_ip, state.value, invocation.failover_ip
            )
            raise SystemExit(state.exit_code)

        try:
            lines = run(client, invocation)
        except FailoverError as e:
            report_error(e)
            raise SystemExit(EXIT_FAILURE)

    for line in lines:
        click.echo(line)


if __name__ == "__main__":
    main()
