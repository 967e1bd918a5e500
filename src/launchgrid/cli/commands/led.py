"""Commands that drive the Launchpad's LEDs and modes."""

import logging

import click

from launchgrid.cli.context import cli_errors, connected_launchpad, get_config
from launchgrid.models import LaunchpadMode

logger = logging.getLogger(__name__)

device_option = click.option(
    "--device", "-d", "device_index", type=int, default=0, show_default=True,
    help="Index of the Launchpad (see 'launchgrid devices')",
)


@click.command(name="mode")
@click.argument("mode", type=click.Choice(["live", "programmer"], case_sensitive=False))
@device_option
@click.pass_context
@cli_errors
def set_mode(ctx: click.Context, mode: str, device_index: int):
    """Switch the Launchpad to live or programmer mode."""
    with connected_launchpad(ctx, device_index) as launchpad:
        launchpad.set_mode(LaunchpadMode[mode.upper()])
    click.echo(f"Mode set to {mode.lower()}")


@click.command(name="text")
@click.argument("text")
@click.option("--speed", type=int, default=None, help="Scroll speed (default from config)")
@click.option("--loop/--no-loop", default=False, help="Repeat until 'launchgrid stop-text'")
@click.option("--velocity", type=int, default=21, show_default=True, help="Palette color")
@click.option("--rgb", type=int, nargs=3, default=None, metavar="R G B",
              help="RGB color (0-127 each, Mini MK3 only)")
@device_option
@click.pass_context
@cli_errors
def scroll_text(
    ctx: click.Context,
    text: str,
    speed: int | None,
    loop: bool,
    velocity: int,
    rgb: tuple[int, int, int] | None,
    device_index: int,
):
    """Scroll TEXT across the grid."""
    if speed is None:
        speed = get_config(ctx).text_scroll_speed
    with connected_launchpad(ctx, device_index) as launchpad:
        launchpad.create_text_scroll(text, speed, loop, velocity, rgb=rgb or None)


@click.command(name="stop-text")
@device_option
@click.pass_context
@cli_errors
def stop_text(ctx: click.Context, device_index: int):
    """Stop a looping text scroll."""
    with connected_launchpad(ctx, device_index) as launchpad:
        launchpad.stop_text_scroll()


@click.command(name="clock")
@click.argument("bpm", type=int)
@device_option
@click.pass_context
@cli_errors
def send_clock(ctx: click.Context, bpm: int, device_index: int):
    """Send a burst of clock pulses at BPM (40-240)."""
    with connected_launchpad(ctx, device_index) as launchpad:
        launchpad.set_clock(bpm)


@click.command(name="clear")
@device_option
@click.pass_context
@cli_errors
def clear_leds(ctx: click.Context, device_index: int):
    """Turn off every LED."""
    with connected_launchpad(ctx, device_index) as launchpad:
        if not launchpad.clear_all_leds():
            click.echo("Some LEDs could not be cleared (see log)", err=True)


@click.command(name="fill")
@click.argument("velocity", type=int)
@device_option
@click.pass_context
@cli_errors
def fill_grid(ctx: click.Context, velocity: int, device_index: int):
    """Light the whole grid with palette VELOCITY."""
    with connected_launchpad(ctx, device_index) as launchpad:
        if not launchpad.fill_leds(0, 0, 7, 7, velocity):
            click.echo("Some LEDs could not be set (see log)", err=True)
