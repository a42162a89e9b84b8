"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy tool construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from sslctl.output.formatters import format_result

if TYPE_CHECKING:
    from sslctl.config.settings import SslSettings
    from sslctl.services.result import ServiceResult
    from sslctl.services.tool import CertificateTool


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The tool is built on first use so ``--help`` and ``--version`` never
    open a provider session.
    """

    def __init__(self, settings: SslSettings) -> None:
        self.settings = settings
        self._tool: CertificateTool | None = None

        from sslctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def tool(self) -> CertificateTool:
        """The certificate tool (created lazily on first access)."""
        if self._tool is None:
            from sslctl.services.tool import CertificateTool

            self._tool = CertificateTool.from_settings(self.settings)
        return self._tool

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)


def load_order(source: str) -> dict[str, Any]:
    """Read an order record from a JSON file path, or stdin when *source* is ``-``."""
    if source == "-":
        raw = click.get_text_stream("stdin").read()
    else:
        try:
            raw = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise click.ClickException(f"Cannot read order file {source}: {exc}") from exc
    try:
        order = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in order {source}: {exc}") from exc
    if not isinstance(order, dict):
        raise click.ClickException("Order must be a JSON object")
    return order
