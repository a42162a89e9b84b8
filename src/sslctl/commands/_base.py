"""Click base classes for sslctl commands.

Every command and group accepts ``examples=``; when set, an eager
``--examples`` flag prints them and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._show_examples,
                help="Show usage examples.",
            )
        )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class SslCommand(_ExamplesMixin, click.Command):
    """A sslctl leaf command (``products list``, ``cert issue``, ...)."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class SslGroup(_ExamplesMixin, click.Group):
    """A sslctl command group; its subcommands are :class:`SslCommand`."""

    command_class = SslCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
