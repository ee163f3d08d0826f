"""Registry of named flag groups.

This module holds the data model used to present a large, flat set of
command-line flags grouped by functional area. A registry is an ordered
sequence of ``FlagGroup`` objects; the order of groups and the order of
flags inside each group is the display order.

The last group (or the group named by ``FlagRegistry.fallback``) is the
fallback group: flags that were registered with the application but never
put into a group are staged into it for the duration of a single render.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, Iterable, Iterator, Optional

from helpgroups.exceptions import (
    DuplicateGroupError,
    EmptyRegistryError,
    HelpGroupsError,
    StagingError,
    UnknownGroupError,
)
from helpgroups.identity import Flag, build_index, canonical
from helpgroups.loggers import logger


@dataclass
class FlagGroup:
    """A named, ordered bucket of flags used for display grouping.

    Parameters
    ----------
    name : str
        Human readable category label.
    flags : list
        Flags in display order. Items are click parameters or option strings.
    description : str, optional
        A short description shown next to the heading by some renderers.
    """

    name: str
    flags: list[Flag] = field(default_factory=list)
    description: Optional[str] = None

    def key_set(self) -> set[str]:
        return build_index(self.flags)

    def __contains__(self, flag: object) -> bool:
        return canonical(flag) in self.key_set()


@dataclass(frozen=True)
class StagingToken:
    """Records the length of a group before flags were staged into it."""

    group: str
    length: int


@dataclass
class FlagRegistry:
    """Ordered collection of flag groups.

    Parameters
    ----------
    groups : list[FlagGroup], optional
        Groups in display order.
    fallback : str, optional
        Name of the group that absorbs uncategorized flags. When omitted the
        last group is the fallback.

    Notes
    -----
    Build a registry once at startup:

    ```python
    registry = FlagRegistry()
    registry.create_group("Networking", ["--port", "--maxpeers"])
    registry.create_group("Misc", ["--help"])
    ```

    Then pass it to ``render_app_help`` / ``render_command_help`` or to a
    ``HelpDispatcher``. Renders only change the registry transiently; the
    one permanent mutation, ``exclude_group``, is never called implicitly.
    """

    groups: list[FlagGroup] = field(default_factory=list)
    fallback: Optional[str] = None
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def create_group(
        self,
        name: str,
        flags: Iterable[Flag] = (),
        description: Optional[str] = None,
    ) -> FlagGroup:
        """Append a new group to the registry.

        Parameters
        ----------
        name : str
            The name of the group to create.
        flags : Iterable, optional
            Initial flags of the group, in display order.
        description : str, optional
            A brief description of the group.

        Returns
        -------
        FlagGroup
            The newly created group.

        Raises
        ------
        DuplicateGroupError
            If a group with the given name already exists.

        Examples
        --------
        >>> registry = FlagRegistry()
        >>> registry.create_group("Networking", ["--port"]).name
        'Networking'
        """
        if name in self.names():
            raise DuplicateGroupError(name)
        group = FlagGroup(name=name, flags=list(flags), description=description)
        self.groups.append(group)
        return group

    def add(self, group: str, *flags: Flag) -> None:
        """Append ``flags`` to an existing group.

        Raises
        ------
        UnknownGroupError
            If the specified group does not exist.
        """
        self.get(group).flags.extend(flags)

    def get(self, name: str) -> FlagGroup:
        for group in self.groups:
            if group.name == name:
                return group
        raise UnknownGroupError(name)

    def names(self) -> list[str]:
        return [group.name for group in self.groups]

    def __iter__(self) -> Iterator[FlagGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def fallback_group(self) -> FlagGroup:
        """Return the group that absorbs uncategorized flags.

        Raises
        ------
        EmptyRegistryError
            If no fallback is named and the registry has no groups.
        UnknownGroupError
            If ``fallback`` names a group that does not exist.
        """
        if self.fallback is not None:
            return self.get(self.fallback)
        if not self.groups:
            raise EmptyRegistryError()
        return self.groups[-1]

    def all_flags(self) -> set[str]:
        """Return the canonical strings of every flag in every group."""
        keys: set[str] = set()
        for group in self.groups:
            keys |= group.key_set()
        return keys

    def stage_fallback(self, extra: Iterable[Flag]) -> StagingToken:
        """Append ``extra`` to the fallback group.

        Parameters
        ----------
        extra : Iterable
            Flags to append. May be empty, in which case the group is left
            untouched and a valid token is still returned.

        Returns
        -------
        StagingToken
            Token to pass to ``unstage_fallback``.
        """
        group = self.fallback_group()
        token = StagingToken(group=group.name, length=len(group.flags))
        group.flags.extend(extra)
        return token

    def unstage_fallback(self, token: StagingToken) -> None:
        """Truncate the staged group back to the length in ``token``.

        Raises
        ------
        StagingError
            If the group is now shorter than the recorded length.
        """
        group = self.get(token.group)
        if len(group.flags) < token.length:
            msg = (
                f"Group '{token.group}' has {len(group.flags)} flags, "
                f"cannot restore it to {token.length}"
            )
            raise StagingError(msg)
        del group.flags[token.length :]

    @contextmanager
    def staged_fallback(
        self, extra: Iterable[Flag]
    ) -> Generator[StagingToken, None, None]:
        """Stage ``extra`` into the fallback group for the body of a block.

        Examples
        --------
        >>> with registry.staged_fallback(["--rogue"]):
        ...     render(registry.groups)
        """
        token = self.stage_fallback(extra)
        try:
            yield token
        except BaseException:
            try:
                self.unstage_fallback(token)
            except HelpGroupsError as e:
                # keep the error raised inside the block
                logger.warning("Could not restore staged group", error=str(e))
            raise
        self.unstage_fallback(token)

    def exclude_group(self, name: str) -> bool:
        """Permanently remove the first group named ``name``.

        Returns
        -------
        bool
            Whether a group was found and removed.
        """
        for index, group in enumerate(self.groups):
            if group.name == name:
                del self.groups[index]
                return True
        return False

    def without(self, *names: Optional[str]) -> list[FlagGroup]:
        """Return the groups minus those named, leaving the registry as is."""
        hidden = {name for name in names if name is not None}
        return [group for group in self.groups if group.name not in hidden]

    def category_of(self, flag: Flag, default: str) -> str:
        """Name of the first group containing ``flag``, else ``default``."""
        key = canonical(flag)
        for group in self.groups:
            if key in group.key_set():
                return group.name
        return default

    def snapshot(self) -> list[tuple[str, list[str]]]:
        """Canonical dump of the registry, group by group."""
        return [
            (group.name, [canonical(flag) for flag in group.flags])
            for group in self.groups
        ]
