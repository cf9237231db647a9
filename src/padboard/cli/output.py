"""Shared CLI output helpers."""

import click

from padboard.exceptions import format_error_for_display


def echo_error(error: Exception) -> None:
    """Print a user-friendly error block with its recovery hint to stderr."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)
