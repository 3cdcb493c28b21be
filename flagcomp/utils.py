"""Shared helpers: verbosity-gated logging.

Standard output is reserved for completion lines, so every message here is
written to stderr.
"""

import click

from .config import get_verbosity


def log_info(message: str) -> None:
    """Log at normal verbosity (1+)."""
    if get_verbosity() >= 1:
        click.echo(message, err=True)


def log_verbose(message: str) -> None:
    """Log at verbose verbosity (2+)."""
    if get_verbosity() >= 2:
        click.echo(click.style(message, dim=True), err=True)


def log_debug(message: str) -> None:
    """Log at debug verbosity (3)."""
    if get_verbosity() >= 3:
        click.echo(click.style(f"[debug] {message}", dim=True), err=True)
