"""Command group: provider product catalog and prices."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sslctl.commands._base import SslGroup

if TYPE_CHECKING:
    from sslctl.commands._context import AppContext


@click.group(
    cls=SslGroup,
    examples="""\
  sslctl products list
  sslctl --json products list
  sslctl products prices""",
)
def products() -> None:
    """Browse the provider's product catalog."""


@products.command(
    "list",
    examples="""\
  sslctl products list
  sslctl --json products list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List products keyed by catalog id (eid)."""
    app.emit(app.tool.list_products())


@products.command(examples="  sslctl products prices")
@click.pass_obj
def prices(app: AppContext) -> None:
    """List product prices."""
    app.emit(app.tool.list_product_prices())
