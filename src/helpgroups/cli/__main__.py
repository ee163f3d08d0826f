"""Command-line interface for the helpgroups package.

``helpgroups audit`` checks a click application against its flag groups and
``helpgroups show-config`` prints the resolved configuration.

Example::

    helpgroups audit helpgroups.sample:create_app
    helpgroups audit mypkg.cli:main --config helpgroups.yaml --strict
"""

import importlib
import pathlib
from typing import Optional

import click

from helpgroups import __version__
from helpgroups.categorize import uncategorized_flags
from helpgroups.config import HelpGroupsSettings
from helpgroups.identity import Flag, canonical
from helpgroups.loggers import logger
from helpgroups.registry import FlagRegistry

from . import set_log_verbosity
from .categorized import CategorizedCommand, CategorizedGroup


def load_command(target: str) -> click.Command:
    """Import ``module:attr`` and return the click command it names.

    A callable that is not a command (for example an app factory) is called
    without arguments and must return one.
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        msg = f"Expected 'module:attribute', got '{target}'"
        raise click.BadParameter(msg, param_hint="TARGET")
    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        msg = f"Cannot load '{target}': {e}"
        raise click.BadParameter(msg, param_hint="TARGET") from e

    if not isinstance(obj, click.Command) and callable(obj):
        obj = obj()
    if not isinstance(obj, click.Command):
        msg = f"'{target}' is not a click command"
        raise click.BadParameter(msg, param_hint="TARGET")
    return obj


def _tree_flags(command: click.Command, ctx: click.Context) -> list[Flag]:
    flags = list(command.get_params(ctx))
    if isinstance(command, click.Group):
        for name, sub in command.commands.items():
            sub_ctx = click.Context(sub, info_name=name, parent=ctx)
            flags.extend(_tree_flags(sub, sub_ctx))
    return flags


def _resolve(
    command: click.Command, config_path: Optional[pathlib.Path]
) -> tuple[FlagRegistry, list[Flag]]:
    if config_path is not None:
        settings = HelpGroupsSettings.from_user_yaml(config_path)
        return settings.to_registry(), list(settings.deprecated_flags)
    dispatcher = (
        command.dispatcher
        if isinstance(command, (CategorizedCommand, CategorizedGroup))
        else None
    )
    if dispatcher is not None:
        return dispatcher.registry, list(dispatcher.deprecated)
    settings = HelpGroupsSettings()
    return settings.to_registry(), list(settings.deprecated_flags)


@click.group(no_args_is_help=True)
@set_log_verbosity()
@click.version_option(
    version=__version__,
    package_name="helpgroups",
    prog_name="helpgroups",
    message="%(package)s:%(prog)s:%(version)s",
)
@click.help_option("-h", "--help")
def cli(verbose: int, quiet: bool) -> None:
    """Tools for grouping the flags of command-line applications."""
    pass


@cli.command()
@click.argument("target")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(
        exists=True,
        dir_okay=False,
        readable=True,
        path_type=pathlib.Path,
    ),
    help="YAML file with the flag groups. Defaults to the groups the target carries, then to helpgroups.yaml.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 when any flag is uncategorized.",
)
@click.help_option("-h", "--help")
def audit(
    target: str, config_path: Optional[pathlib.Path], strict: bool
) -> None:
    """Report flags of TARGET (module:attribute) that no group lists."""
    from rich.console import Console
    from rich.table import Table

    command = load_command(target)
    logger.debug("Auditing command", target=target, config=config_path)
    try:
        registry, deprecated = _resolve(command, config_path)
    except Exception as e:
        logger.exception("Failed to load flag groups")
        raise click.Abort() from e

    ctx = click.Context(command, info_name=command.name)
    missing = uncategorized_flags(command.get_params(ctx), registry, deprecated)
    registered = {canonical(flag) for flag in _tree_flags(command, ctx)}
    stale = [
        (group.name, key)
        for group in registry
        for key in map(canonical, group.flags)
        if key not in registered
    ]

    console = Console()
    fallback = registry.fallback_group().name if len(registry) else "-"
    if missing:
        table = Table(title=f"Uncategorized flags (shown under '{fallback}')")
        table.add_column("Flag", no_wrap=True)
        table.add_column("Help")
        for flag in missing:
            table.add_row(canonical(flag), getattr(flag, "help", None) or "")
        console.print(table)
    if stale:
        table = Table(title="Group entries with no registered flag")
        table.add_column("Group")
        table.add_column("Flag", no_wrap=True)
        for name, key in stale:
            table.add_row(name, key)
        console.print(table)
    if not missing and not stale:
        console.print("All flags are categorized.")

    if strict and missing:
        raise click.exceptions.Exit(1)


@cli.command(name="show-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(
        exists=True,
        dir_okay=False,
        readable=True,
        path_type=pathlib.Path,
    ),
    help="YAML file to load instead of ./helpgroups.yaml.",
)
@click.help_option("-h", "--help")
def show_config(config_path: Optional[pathlib.Path]) -> None:
    """Print the resolved flag group configuration."""
    from rich import print  # noqa: A004

    settings = (
        HelpGroupsSettings.from_user_yaml(config_path)
        if config_path
        else HelpGroupsSettings()
    )
    print(settings)


if __name__ == "__main__":
    cli()
