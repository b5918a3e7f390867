"""Utility functions to print formatted CLI messages for progress updates."""

from __future__ import annotations

import click

__all__ = ["echo_section", "echo_step", "echo_success", "echo_hint"]


def echo_section(text: str) -> None:
    """Print a colourful banner announcing a phase of the build.

    Args:
        text: Banner text.
    """
    click.secho(f"\n=== {text} ===", fg="cyan")


def echo_step(text: str) -> None:
    """Echo a bullet for a single step inside the current section."""
    click.secho(f"  -> {text}", fg="magenta")


def echo_success(text: str) -> None:
    """Echo a green success message prefixed with a tick.

    Args:
        text: Message to display.
    """
    click.secho(f"✓ {text}", fg="green")


def echo_hint(title: str, line: str) -> None:
    """Echo a titled, indented hint such as the command to run an image."""
    click.echo(f"\n{title}:")
    click.echo(f"  {line}")
