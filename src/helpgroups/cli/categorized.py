"""Click commands whose option listing is grouped by category.

``CategorizedGroup`` renders the top-level help through
``HelpTemplate.APP``: every option of the root command is shown under its
group, options no group lists appear under the fallback group, and the
hidden group is left out. Subcommands (``CategorizedCommand`` or nested
``CategorizedGroup``) render through ``HelpTemplate.COMMAND``: their options
are grouped by the first group that lists them and sorted by group name.

Examples
--------
>>> registry = FlagRegistry()
>>> _ = registry.create_group("Networking", ["--port"])
>>> _ = registry.create_group("Misc", ["--help"])
>>> @click.group(cls=CategorizedGroup, registry=registry)
... @click.option("--port", type=int)
... def node(port):
...     '''Run a node.'''
>>> @node.command()
... @click.option("--port", type=int)
... def attach(port):
...     '''Attach to a running node.'''
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import click

from helpgroups.categorize import DEFAULT_CATEGORY
from helpgroups.dispatch import HelpDispatcher, HelpPayload, HelpTemplate
from helpgroups.formatter import ClickHelpRenderer
from helpgroups.identity import Flag
from helpgroups.registry import FlagRegistry


def _build_dispatcher(
    dispatcher: Optional[HelpDispatcher],
    registry: Optional[FlagRegistry],
    hidden_group: Optional[str],
    deprecated: Iterable[Flag],
    default_category: Optional[str],
) -> Optional[HelpDispatcher]:
    if dispatcher is not None or registry is None:
        return dispatcher
    if default_category is None:
        # unmatched command flags share the fallback group's heading
        default_category = (
            registry.fallback_group().name if len(registry) else DEFAULT_CATEGORY
        )
    return HelpDispatcher(
        registry,
        ClickHelpRenderer(),
        hidden_group=hidden_group,
        deprecated=deprecated,
        default_category=default_category,
    )


def write_categorized_options(
    dispatcher: HelpDispatcher,
    template: HelpTemplate,
    command: click.Command,
    ctx: click.Context,
    formatter: click.HelpFormatter,
) -> None:
    """Render ``command``'s options through ``dispatcher`` into ``formatter``."""
    renderer = dispatcher.renderer
    if isinstance(renderer, ClickHelpRenderer):
        dispatcher = dispatcher.with_renderer(
            renderer.bind(ctx, formatter.current_indent)
        )
    payload = HelpPayload(
        name=command.name or ctx.info_name or "",
        flags=list(command.get_params(ctx)),
        source=command,
    )
    text = dispatcher.render(template, payload)
    if text:
        formatter.write_paragraph()
        formatter.write(str(text).lstrip("\n"))


class CategorizedCommand(click.Command):
    """A click command whose options are listed by category.

    Parameters
    ----------
    dispatcher : HelpDispatcher, optional
        Set automatically when the command is added to a
        ``CategorizedGroup``.
    """

    def __init__(
        self,
        *args: Any,
        dispatcher: Optional[HelpDispatcher] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.dispatcher = dispatcher

    def format_options(
        self, ctx: click.Context, formatter: click.HelpFormatter
    ) -> None:
        if self.dispatcher is None:
            super().format_options(ctx, formatter)
            return
        write_categorized_options(
            self.dispatcher, HelpTemplate.COMMAND, self, ctx, formatter
        )


class CategorizedGroup(click.Group):
    """A click group whose options are listed by category.

    Pass either a ready ``dispatcher`` or a ``registry`` together with the
    ``hidden_group``, ``deprecated`` and ``default_category`` options;
    ``default_category`` defaults to the name of the registry's fallback
    group. The dispatcher is shared with every subcommand added afterwards.
    """

    command_class = CategorizedCommand
    group_class = type

    def __init__(
        self,
        *args: Any,
        dispatcher: Optional[HelpDispatcher] = None,
        registry: Optional[FlagRegistry] = None,
        hidden_group: Optional[str] = None,
        deprecated: Iterable[Flag] = (),
        default_category: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.dispatcher = _build_dispatcher(
            dispatcher, registry, hidden_group, deprecated, default_category
        )

    def add_command(self, cmd: click.Command, name: str | None = None) -> None:
        if (
            isinstance(cmd, (CategorizedCommand, CategorizedGroup))
            and cmd.dispatcher is None
        ):
            cmd.dispatcher = self.dispatcher
            if isinstance(cmd, CategorizedGroup):
                for sub_name, sub in list(cmd.commands.items()):
                    cmd.add_command(sub, sub_name)
        super().add_command(cmd, name)

    def format_options(
        self, ctx: click.Context, formatter: click.HelpFormatter
    ) -> None:
        if self.dispatcher is None:
            super().format_options(ctx, formatter)
            return
        template = (
            HelpTemplate.APP if ctx.parent is None else HelpTemplate.COMMAND
        )
        write_categorized_options(
            self.dispatcher, template, self, ctx, formatter
        )
        self.format_commands(ctx, formatter)

