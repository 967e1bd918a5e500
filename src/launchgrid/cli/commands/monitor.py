"""Key event monitor."""

import logging
import time
from datetime import datetime

import click

from launchgrid.cli.context import cli_errors, connected_launchpad
from launchgrid.protocols import LaunchpadEvent

logger = logging.getLogger(__name__)


@click.command(name="monitor")
@click.option("--duration", type=float, default=None,
              help="Stop after this many seconds (default: run until Ctrl+C)")
@click.option("--device", "-d", "device_index", type=int, default=0, show_default=True,
              help="Index of the Launchpad (see 'launchgrid devices')")
@click.pass_context
@cli_errors
def monitor(ctx: click.Context, duration: float | None, device_index: int):
    """
    Print key events from a Launchpad as they arrive.

    Press Ctrl+C to stop monitoring.
    """
    def make_printer(kind: LaunchpadEvent):
        def printer(event):
            timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
            click.echo(f"[{timestamp}] {kind.value}: {event}")
        return printer

    with connected_launchpad(ctx, device_index) as launchpad:
        for kind in LaunchpadEvent:
            launchpad.add_listener(kind, make_printer(kind))

        click.echo("Monitoring key events, press Ctrl+C to stop\n")
        deadline = None if duration is None else time.monotonic() + duration
        try:
            while deadline is None or time.monotonic() < deadline:
                time.sleep(0.1)
        except KeyboardInterrupt:
            click.echo("\n\nStopping monitor...")
