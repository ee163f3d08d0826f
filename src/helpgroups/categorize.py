"""
Flag categorization for help screens.

Two views are produced from a ``FlagRegistry``:

App help
    The registry's groups, with every registered flag that no group lists
    staged into the fallback group for the duration of the render, and an
    optional hidden group filtered out. Deprecated flags are never shown.

Command help
    A fresh list of ``(category, flags)`` pairs for a single subcommand,
    where each flag lands in the first group that lists it (or in a default
    bucket), sorted by category name.

Examples
--------
>>> registry = FlagRegistry()
>>> _ = registry.create_group("Net", ["X", "Y"])
>>> _ = registry.create_group("Misc", ["Z"])
>>> render_app_help(["X", "Y", "Z", "W"], registry, None, lambda g: [
...     (group.name, list(group.flags)) for group in g
... ])
[('Net', ['X', 'Y']), ('Misc', ['Z', 'W'])]
>>> registry.get("Misc").flags
['Z']
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from helpgroups.identity import Flag, build_index, canonical
from helpgroups.loggers import logger
from helpgroups.registry import FlagGroup, FlagRegistry

DEFAULT_CATEGORY = "MISC"

Output = TypeVar("Output")
CategorizedFlags = list[tuple[str, list[Flag]]]


def uncategorized_flags(
    registered: Iterable[Flag],
    registry: FlagRegistry,
    deprecated: Iterable[Flag] = (),
) -> list[Flag]:
    """Registered flags that are neither in a group nor deprecated.

    The relative order of ``registered`` is preserved and duplicates are kept
    as given.
    """
    categorized = registry.all_flags()
    hidden = build_index(deprecated)
    return [
        flag
        for flag in registered
        if canonical(flag) not in categorized and canonical(flag) not in hidden
    ]


def _visible_groups(
    registry: FlagRegistry,
    hidden_group: Optional[str],
    deprecated: set[str],
) -> list[FlagGroup]:
    groups = registry.without(hidden_group)
    if not deprecated:
        return groups
    # Declared groups may still list deprecated flags
    return [
        FlagGroup(
            name=group.name,
            flags=[f for f in group.flags if canonical(f) not in deprecated],
            description=group.description,
        )
        if group.key_set() & deprecated
        else group
        for group in groups
    ]


def render_app_help(
    registered: Iterable[Flag],
    registry: FlagRegistry,
    hidden_group: Optional[str],
    render_fn: Callable[[list[FlagGroup]], Output],
    deprecated: Iterable[Flag] = (),
) -> Output:
    """Render the application level help with every flag categorized.

    Parameters
    ----------
    registered : Iterable
        Every flag the application registers, in registration order.
    registry : FlagRegistry
        The groups to render. Its fallback group temporarily absorbs the
        uncategorized flags and is restored before this function returns,
        whether or not ``render_fn`` raises.
    hidden_group : str, optional
        Name of a group left out of this view. The registry itself is not
        modified.
    render_fn : Callable
        Receives the grouped view and returns the rendered output.
    deprecated : Iterable, optional
        Flags that must never be shown.

    Returns
    -------
    Output
        Whatever ``render_fn`` returns.
    """
    registered = list(registered)
    deprecated_keys = build_index(deprecated)

    with registry.lock:
        extra = uncategorized_flags(registered, registry, deprecated)
        if not extra:
            groups = _visible_groups(registry, hidden_group, deprecated_keys)
            return render_fn(groups)

        fallback = registry.fallback_group()
        if fallback.name == hidden_group:
            logger.warning(
                "Fallback group is hidden, uncategorized flags will not be shown",
                group=hidden_group,
            )
        logger.debug(
            "Staging uncategorized flags",
            group=fallback.name,
            flags=[canonical(flag) for flag in extra],
        )
        with registry.staged_fallback(extra):
            groups = _visible_groups(registry, hidden_group, deprecated_keys)
            return render_fn(groups)


def categorize_command_flags(
    command_flags: Iterable[Flag],
    registry: FlagRegistry,
    default_label: str = DEFAULT_CATEGORY,
) -> CategorizedFlags:
    """Bucket a command's flags by category, sorted by category name.

    Each flag goes to the first group listing it, or to ``default_label``.
    Repeated flags (same canonical string) are kept once, at their first
    position.

    Examples
    --------
    >>> registry = FlagRegistry()
    >>> _ = registry.create_group("Networking", ["a", "c"])
    >>> _ = registry.create_group("Account", ["b"])
    >>> categorize_command_flags(["a", "b", "c"], registry)
    [('Account', ['b']), ('Networking', ['a', 'c'])]
    """
    # staged flags of a concurrent app-help render must not leak in
    with registry.lock:
        indexes = [(group.name, group.key_set()) for group in registry]
    seen: set[str] = set()
    buckets: dict[str, list[Flag]] = {}
    for flag in command_flags:
        key = canonical(flag)
        if key in seen:
            continue
        seen.add(key)
        category = next(
            (name for name, keys in indexes if key in keys), default_label
        )
        buckets.setdefault(category, []).append(flag)
    return sorted(buckets.items(), key=lambda item: item[0])


def render_command_help(
    command_flags: Iterable[Flag],
    registry: FlagRegistry,
    default_label: str,
    render_fn: Callable[[CategorizedFlags], Output],
) -> Output:
    """Render a single command's help with its flags grouped and sorted."""
    categorized = categorize_command_flags(
        command_flags, registry, default_label
    )
    logger.debug(
        "Categorized command flags",
        categories=[name for name, _ in categorized],
    )
    return render_fn(categorized)
