"""
Flag identity.

Two flags are the same for categorization purposes if and only if their
canonical strings are equal. Registries may therefore mix ``click``
parameters with plain option strings such as ``"--datadir"``.

Examples
--------
>>> canonical("--datadir")
'--datadir'
>>> sorted(build_index(["--datadir", "--port", "--datadir"]))
['--datadir', '--port']
"""

from typing import Any, Iterable

import click

Flag = Any


def canonical(flag: Flag) -> str:
    """Return the canonical string identity of a flag.

    Parameters
    ----------
    flag : click.Parameter | str | object
        A click parameter, a string naming one, or any object whose ``str``
        form identifies it.

    Returns
    -------
    str
        The long option strings of a click option joined by ``/`` (for
        example ``--color/--no-color``; ``-d, --datadir`` becomes
        ``--datadir``), the name of any other click parameter, the string
        itself, or ``str(flag)``.
    """
    if isinstance(flag, str):
        return flag
    if isinstance(flag, click.Option):
        opts = [*flag.opts, *flag.secondary_opts]
        long_opts = [opt for opt in opts if opt.startswith("--")]
        return "/".join(long_opts or opts[:1])
    if isinstance(flag, click.Parameter):
        return flag.name or ""
    return str(flag)


def build_index(flags: Iterable[Flag]) -> set[str]:
    """Collect the canonical strings of ``flags`` into a set."""
    return {canonical(flag) for flag in flags}
