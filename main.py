# main.py
"""mender-setup: write mender.conf from flags or an interactive wizard."""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from click.core import ParameterSource

import prompts
from conf.config import load_config
from conf.paths import Paths, check_write_permissions
from errors import SetupError
from finalize import finalize
from logger import log, set_level
from state import FlagSnapshot, WizardState, normalize_flags
from terminal import StdinTerminal
from validators import (
    DEFAULT_INVENTORY_POLL, DEFAULT_RETRY_POLL, DEFAULT_SERVER_URL,
    DEFAULT_UPDATE_POLL,
)
from wizard import SetupWizard

VERSION = "1.0.0"

SNAPSHOT_FLAGS = (
    "device_type", "username", "password", "server_url", "server_ip",
    "server_cert", "tenant_token", "inventory_poll", "retry_poll",
    "update_poll", "hosted_mender", "demo", "demo_server", "demo_polling",
)


def _require_value(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if value == "" or value.startswith("-"):
        raise click.BadParameter(f"--{param.name.replace('_', '-')} requires a non-empty value")
    return value


def _explicit_flags(ctx: click.Context) -> frozenset:
    given = (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT)
    return frozenset(name for name in SNAPSHOT_FLAGS if ctx.get_parameter_source(name) in given)


def run_wizard(state: WizardState, paths: Paths, quiet: bool, plain: bool) -> WizardState:
    if plain or not sys.stdin.isatty():
        return SetupWizard(state, StdinTerminal(), paths, quiet=quiet).run()

    from app import SetupApp
    app = SetupApp(state, paths, quiet=quiet)
    app.run()
    if app.error is not None:
        raise app.error
    if not app.completed:
        raise SetupError("Setup was interrupted.")
    return app.state


@click.command(
    name="mender-setup",
    help="Create a working mender configuration file, either from the "
         "given options or by answering the questions interactively.",
)
@click.option("--config", "-c", "config_path", metavar="PATH", callback=_require_value,
              help="PATH to configuration file.  [default: <conf dir>/mender.conf]")
@click.option("--data", "-d", "data_dir", metavar="DIR", callback=_require_value,
              help="Mender state data DIRECTORY path.  [default: /var/lib/mender]")
@click.option("--device-type", metavar="TYPE", callback=_require_value,
              help="Name of the device type.")
@click.option("--username", metavar="E-MAIL", callback=_require_value,
              help="User E-Mail at hosted.mender.io.")
@click.option("--password", metavar="PASSWORD", callback=_require_value,
              help="User PASSWORD at hosted.mender.io.")
@click.option("--server-url", "--url", "server_url", metavar="URL", default=DEFAULT_SERVER_URL,
              show_default=True, callback=_require_value, help="URL to Mender server.")
@click.option("--server-ip", metavar="IP", callback=_require_value, help="Server ip address.")
@click.option("--server-cert", "-E", metavar="PATH",
              help="PATH to trusted server certificates.")
@click.option("--tenant-token", metavar="TOKEN", callback=_require_value,
              help="Hosted Mender tenant token.")
@click.option("--inventory-poll", type=int, default=DEFAULT_INVENTORY_POLL, show_default=True,
              metavar="SEC", help="Inventory poll interval in seconds.")
@click.option("--retry-poll", type=int, default=DEFAULT_RETRY_POLL, show_default=True,
              metavar="SEC", help="Retry poll interval in seconds.")
@click.option("--update-poll", type=int, default=DEFAULT_UPDATE_POLL, show_default=True,
              metavar="SEC", help="Update poll interval in seconds.")
@click.option("--hosted-mender/--no-hosted-mender", default=False,
              help="Setup device towards Hosted Mender.")
@click.option("--demo", is_flag=True, default=False,
              help="Use demo configuration. DEPRECATED: use --demo-server and/or --demo-polling instead.")
@click.option("--demo-server/--no-demo-server", default=False,
              help="Use demo server configuration.")
@click.option("--demo-polling/--no-demo-polling", default=False,
              help="Use demo polling intervals.")
@click.option("--quiet", is_flag=True, default=False, help="Suppress informative prompts.")
@click.option("--log-level", "-l", default="warning", show_default=True, metavar="LEVEL",
              callback=_require_value, help="Set logging level.")
@click.option("--plain", is_flag=True, default=False,
              help="Ask questions line by line on stdin instead of the full-screen UI.")
@click.argument("ambiguous", nargs=-1, metavar="")
@click.version_option(VERSION, prog_name="mender-setup")
@click.pass_context
def cli(ctx: click.Context, ambiguous: Tuple[str, ...], config_path: Optional[str],
        data_dir: Optional[str], quiet: bool, log_level: str, plain: bool, **flags) -> None:
    if ambiguous:
        raise click.UsageError(f"Ambiguous arguments given: {' '.join(ambiguous)}")
    if quiet:
        set_level("error")
    elif not set_level(log_level):
        log.warning("Failed to parse set log level '%s'.", log_level)

    paths = Paths.from_env()
    if data_dir:
        paths = paths.with_data_store(data_dir)
    config_file = Path(config_path) if config_path else paths.config_file
    log.debug("Using config file %s and data store %s", config_file, paths.data_store)

    snapshot = FlagSnapshot(
        device_type=flags["device_type"] or "",
        username=flags["username"] or "",
        password=flags["password"] or "",
        server_url=flags["server_url"],
        server_ip=flags["server_ip"] or "",
        server_cert=flags["server_cert"] or "",
        tenant_token=flags["tenant_token"] or "",
        inventory_poll=flags["inventory_poll"],
        retry_poll=flags["retry_poll"],
        update_poll=flags["update_poll"],
        hosted_mender=flags["hosted_mender"],
        demo=flags["demo"],
        demo_server=flags["demo_server"],
        demo_polling=flags["demo_polling"],
        explicit=_explicit_flags(ctx),
    )

    try:
        state = normalize_flags(snapshot)
        config = load_config(config_file, paths.fallback_config_file)
        check_write_permissions(config_file.parent)
        check_write_permissions(paths.data_store)
        state = run_wizard(state, paths, quiet=quiet, plain=plain)
        finalize(state, config, config_file, paths)
    except SetupError as e:
        log.error("%s", e)
        raise click.ClickException(str(e)) from e

    if not quiet:
        click.echo(prompts.DONE)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
