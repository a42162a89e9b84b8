"""Subcommand modules for sslctl.

Provides register_commands() which uses deferred imports to keep
``sslctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from sslctl.commands.cert import cert
    from sslctl.commands.products import products

    cli.add_command(products)
    cli.add_command(cert)
