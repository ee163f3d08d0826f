"""Text rendering of grouped help views with ``click.HelpFormatter``."""

from __future__ import annotations

from typing import Any, Iterable, Optional

import click

from helpgroups.dispatch import (
    AppHelpView,
    CommandHelpView,
    HelpPayload,
    HelpTemplate,
)
from helpgroups.identity import Flag, canonical


def section_heading(name: str) -> str:
    return f"{name.upper()} OPTIONS"


def flag_row(flag: Flag, ctx: click.Context) -> Optional[tuple[str, str]]:
    """Return the ``(usage, help)`` row of a flag, or None if it is hidden."""
    if isinstance(flag, click.Parameter):
        return flag.get_help_record(ctx)
    return (str(flag), "")


class ClickHelpRenderer:
    """Render help views into text the way click lays out its options.

    Parameters
    ----------
    ctx : click.Context, optional
        Context used for help records and the formatter width. Defaults to
        the context click is currently processing.
    indent : int, optional
        Initial indentation, useful when the output is written into an
        enclosing formatter.

    Notes
    -----
    In application help, group entries are looked up among the payload's
    flags by canonical string; entries the application does not register
    are not shown. Empty sections are skipped, so a group whose flags are
    all hidden produces no heading.
    """

    def __init__(
        self, ctx: Optional[click.Context] = None, indent: int = 0
    ) -> None:
        self._ctx = ctx
        self.indent = indent

    @property
    def ctx(self) -> click.Context:
        if self._ctx is not None:
            return self._ctx
        return click.get_current_context()

    def bind(self, ctx: click.Context, indent: int = 0) -> ClickHelpRenderer:
        return ClickHelpRenderer(ctx, indent)

    def __call__(self, template: HelpTemplate | str, data: Any) -> str:
        formatter = self.ctx.make_formatter()
        formatter.current_indent = self.indent
        match HelpTemplate.classify(template):
            case HelpTemplate.APP:
                view: AppHelpView = data
                # groups may name flags as strings, show the registered ones
                registered = {canonical(f): f for f in view.payload.flags}
                for group in view.groups:
                    flags = [
                        registered[key]
                        for key in map(canonical, group.flags)
                        if key in registered
                    ]
                    self.write_section(
                        formatter, section_heading(group.name), flags
                    )
            case HelpTemplate.COMMAND:
                command_view: CommandHelpView = data
                for name, flags in command_view.categorized_flags:
                    self.write_section(formatter, section_heading(name), flags)
            case HelpTemplate.OTHER:
                flags = data.flags if isinstance(data, HelpPayload) else data
                self.write_section(formatter, "Options", flags)
        return formatter.getvalue()

    def write_section(
        self,
        formatter: click.HelpFormatter,
        heading: str,
        flags: Iterable[Flag],
    ) -> None:
        rows = [row for row in (flag_row(f, self.ctx) for f in flags) if row]
        if not rows:
            return
        with formatter.section(heading):
            formatter.write_dl(rows)
