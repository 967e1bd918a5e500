"""Command line interface for launchgrid."""

from .main import cli

__all__ = ["cli"]
