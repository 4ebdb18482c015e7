"""
wdmanager command-line entry point.

Usage:
    wdmanager status
    wdmanager update [--ie] [--no-chrome]
    wdmanager start [--port 4445]
"""

import logging
from pathlib import Path
from typing import Optional

import click
import setproctitle

from wdmanager import __version__
from wdmanager.log.setup import setup_logging
from wdmanager.local.config import load_config
from wdmanager.local.errors import PreconditionError
from wdmanager.local.platform_info import detect_platform
from wdmanager.local.console import display_status, display_results
from wdmanager.local.external import Outcome, Reconciler, build_registry, list_output_dir, scan, select_descriptors
from wdmanager.local.supervisor import ServerSupervisor, process_utils

log = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="wdmanager")
@click.option("--out-dir", type=click.Path(file_okay=False), default=None,
              help="Directory the artifacts are stored in.")
@click.option("--proxy", default=None, help="Proxy URL used for all downloads.")
@click.option("--ignore-ssl", is_flag=True, help="Skip TLS certificate validation (insecure).")
@click.option("--standalone-version", default=None, help="Selenium standalone server version.")
@click.option("--chrome-version", default=None, help="chromedriver version.")
@click.option("--ie-version", default=None, help="IEDriverServer version.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="JSON file with setting overrides.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, out_dir: Optional[str], proxy: Optional[str], ignore_ssl: bool,
        standalone_version: Optional[str], chrome_version: Optional[str], ie_version: Optional[str],
        config_path: Optional[str], verbose: bool) -> None:
    """Keeps the Selenium server and browser drivers current and runs the server."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    config = load_config(
        Path(config_path) if config_path else None,
        out_dir=out_dir,
        proxy=proxy,
        ignore_ssl=True if ignore_ssl else None,
        selenium_version=standalone_version,
        chromedriver_version=chrome_version,
        iedriver_version=ie_version,
    )
    platform_info = detect_platform()
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["platform"] = platform_info
    ctx.obj["registry"] = build_registry(config, platform_info)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show which artifacts are installed and which are stale."""
    config = ctx.obj["config"]
    listing = list_output_dir(config.out_dir)
    display_status(scan(listing, ctx.obj["registry"].values()))


@cli.command()
@click.option("--standalone/--no-standalone", default=None, help="Include the Selenium standalone server.")
@click.option("--chrome/--no-chrome", default=None, help="Include chromedriver.")
@click.option("--ie/--no-ie", default=None, help="Include IEDriverServer.")
@click.pass_context
def update(ctx: click.Context, standalone: Optional[bool], chrome: Optional[bool], ie: Optional[bool]) -> None:
    """Download missing or outdated artifacts."""
    descriptors = select_descriptors(ctx.obj["registry"], {"standalone": standalone, "chrome": chrome, "ie": ie})
    reconciler = Reconciler(ctx.obj["config"], ctx.obj["platform"])
    results = reconciler.reconcile(descriptors)
    display_results(results)
    if any(r.outcome is Outcome.FAILED for r in results):
        ctx.exit(1)


@cli.command()
@click.option("--port", type=int, default=None, help="Port the Selenium server listens on.")
@click.pass_context
def start(ctx: click.Context, port: Optional[int]) -> None:
    """Run the Selenium server until it exits, then exit with its code."""
    config = ctx.obj["config"].with_overrides(selenium_port=port)
    setproctitle.setproctitle("wdmanager - Supervisor")
    supervisor = ServerSupervisor(config, ctx.obj["registry"], ctx.obj["platform"])
    try:
        code = supervisor.run()
    except PreconditionError as e:
        log.critical(str(e))
        ctx.exit(1)
    except OSError as e:
        log.critical(f"Failed to start the server process: {e}")
        ctx.exit(1)
    ctx.exit(process_utils.exit_status(code))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
