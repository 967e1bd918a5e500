"""Shared plumbing for CLI commands: config, device selection, error display."""

import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from pathlib import Path

import click

from launchgrid.devices.launchpad import LaunchpadController
from launchgrid.exceptions import DeviceError, LaunchGridError, format_error_for_display
from launchgrid.models import AppConfig

logger = logging.getLogger(__name__)


def get_config(ctx: click.Context) -> AppConfig:
    """Load the config once per invocation."""
    obj = ctx.ensure_object(dict)
    if obj.get("config") is None:
        obj["config"] = AppConfig.load_or_default(obj.get("config_path"))
    return obj["config"]


def make_controller(ctx: click.Context) -> LaunchpadController:
    config = get_config(ctx)
    return LaunchpadController(backend=ctx.obj.get("backend"), discovery_config=config.discovery)


@contextmanager
def connected_launchpad(ctx: click.Context, device_index: int) -> Iterator[LaunchpadController]:
    """
    Discover, connect and put the selected Launchpad in the configured mode.

    The controller is closed (ports released) on exit.
    """
    config = get_config(ctx)
    with make_controller(ctx) as controller:
        devices = controller.list_connected_devices()
        if not devices:
            raise DeviceError(
                "No Launchpad found.",
                recovery_hint="Plug in a Launchpad, or run 'launchgrid ports' to check port names.",
            )
        if not 0 <= device_index < len(devices):
            raise click.BadParameter(
                f"device index {device_index} out of range (found {len(devices)})",
                param_hint="--device",
            )

        device = devices[device_index]
        if not controller.connect(device):
            raise DeviceError(
                f"Could not open {device.name}.",
                port_name=device.output_port_name,
                recovery_hint="Close other applications using the Launchpad and try again.",
            )

        controller.set_mode(config.default_mode)
        yield controller


def log_path_for(ctx: click.Context) -> Path | None:
    return ctx.ensure_object(dict).get("log_path")


def cli_errors(func: Callable) -> Callable:
    """Render launchgrid errors without a traceback and exit with code 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LaunchGridError as e:
            logger.exception(f"Command failed: {e.technical_message}")

            user_message, recovery_hint = format_error_for_display(e)
            click.echo(f"ERROR: {user_message}", err=True)
            if recovery_hint:
                click.echo(f"\n{recovery_hint}", err=True)

            log_path = log_path_for(click.get_current_context())
            if log_path:
                click.echo(f"\nFor details, check the log file: {log_path}", err=True)
            sys.exit(1)

    return wrapper
