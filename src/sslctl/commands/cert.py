"""Command group: certificate inspection and ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sslctl.commands._base import SslGroup
from sslctl.commands._context import load_order

if TYPE_CHECKING:
    from sslctl.commands._context import AppContext

_ORDER_HELP = "Path to a JSON order file, or - for stdin."


@click.group(
    cls=SslGroup,
    examples="""\
  sslctl cert status 1234567
  sslctl cert emails example.com
  sslctl cert issue order.json
  cat order.json | sslctl cert renew -""",
)
def cert() -> None:
    """Inspect and order certificates."""


@cert.command(examples="  sslctl cert status 1234567")
@click.argument("remoteid")
@click.pass_obj
def status(app: AppContext, remoteid: str) -> None:
    """Show the provider status of an order."""
    app.emit(app.tool.get_status({"remoteid": remoteid}))


@cert.command(examples="  sslctl cert emails example.com")
@click.argument("fqdn")
@click.pass_obj
def emails(app: AppContext, fqdn: str) -> None:
    """List approver emails accepted for FQDN."""
    app.emit(app.tool.get_domain_emails({"fqdn": fqdn}))


@cert.command(examples="  sslctl cert webservers\n  sslctl cert webservers --type 2")
@click.option("--type", "supplier_type", type=int, default=1, help="Supplier type (1 or 2).")
@click.pass_obj
def webservers(app: AppContext, supplier_type: int) -> None:
    """List webserver types the provider accepts."""
    app.emit(app.tool.get_webservers({"type": supplier_type}))


@cert.command(examples="  sslctl cert csr csr.json")
@click.argument("order_file", metavar="ORDER")
@click.pass_obj
def csr(app: AppContext, order_file: str) -> None:
    """Generate a CSR from the fields in ORDER."""
    app.emit(app.tool.generate_csr(load_order(order_file)))


@cert.command(examples="  sslctl cert issue order.json\n  sslctl --json cert issue -")
@click.argument("order_file", metavar="ORDER")
@click.pass_obj
def issue(app: AppContext, order_file: str) -> None:
    """Place a new certificate order.

    ORDER must carry admin_id, tech_id, org_id, product, csr, and the DCV
    fields.
    """
    app.emit(app.tool.issue(load_order(order_file)))


@cert.command(examples="  sslctl cert renew order.json")
@click.argument("order_file", metavar="ORDER")
@click.pass_obj
def renew(app: AppContext, order_file: str) -> None:
    """Place a renewal order."""
    app.emit(app.tool.renew(load_order(order_file)))


@cert.command(examples="  sslctl cert reissue reissue.json")
@click.argument("order_file", metavar="ORDER")
@click.pass_obj
def reissue(app: AppContext, order_file: str) -> None:
    """Reissue an existing order; ORDER must carry order_id."""
    app.emit(app.tool.reissue(load_order(order_file)))
