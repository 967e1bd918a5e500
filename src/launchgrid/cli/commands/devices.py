"""Port and device listing commands."""

import logging

import click

from launchgrid.cli.context import cli_errors, make_controller
from launchgrid.midi import MidoBackend

logger = logging.getLogger(__name__)


@click.command(name="ports")
@click.pass_context
@cli_errors
def list_ports(ctx: click.Context):
    """List raw MIDI input and output ports."""
    backend = ctx.obj.get("backend") or MidoBackend()
    inputs, outputs = backend.list_ports()

    click.echo("MIDI Input Ports:\n")
    if not inputs:
        click.echo("  No MIDI input ports found.")
    else:
        for i, port in enumerate(inputs):
            click.echo(f"  [{i}] {port}")

    click.echo("\nMIDI Output Ports:\n")
    if not outputs:
        click.echo("  No MIDI output ports found.")
    else:
        for i, port in enumerate(outputs):
            click.echo(f"  [{i}] {port}")


@click.command(name="devices")
@click.pass_context
@cli_errors
def list_devices(ctx: click.Context):
    """List detected Launchpads."""
    devices = make_controller(ctx).list_connected_devices()

    if not devices:
        click.echo("No Launchpad found.")
        return

    click.echo("Launchpads:\n")
    for i, device in enumerate(devices):
        click.echo(f"  [{i}] {device.describe()}")
