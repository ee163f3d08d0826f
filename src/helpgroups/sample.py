"""A node-style demo application with a large, flat set of flags.

The registry below mirrors how a node client groups its options. Two
registered flags are left out of every group on purpose (they show up under
``Misc``), two are deprecated (never shown), and the account plugin group is
only visible in the help of the ``account`` subcommands. Subcommand flags
that no group lists are shown under ``Misc`` as well.

Run ``helpgroups-demo --help`` or ``helpgroups-demo account new --help``.
"""

from __future__ import annotations

from typing import Any

import click

from helpgroups.cli.categorized import CategorizedGroup
from helpgroups.registry import FlagRegistry

ACCOUNT_PLUGIN_GROUP = "Account Plugin"
DEPRECATED_FLAGS = ["--lightserv", "--minerthreads"]


def _opt(*decls: str, **kwargs: Any) -> click.Option:
    # dotted names such as --http.port are not identifiers
    dest = decls[0].lstrip("-").replace(".", "_").replace("-", "_")
    return click.Option([*decls, dest], **kwargs)


def node_options() -> list[click.Option]:
    return [
        _opt("--config", type=click.Path(dir_okay=False), help="TOML configuration file"),
        _opt("--datadir", type=click.Path(file_okay=False), help="Data directory for the databases and keystore"),
        _opt("--keystore", type=click.Path(file_okay=False), help="Directory for the keystore"),
        _opt("--networkid", type=int, default=1, show_default=True, help="Network identifier"),
        _opt("--syncmode", type=click.Choice(["snap", "full", "light"]), default="snap", show_default=True, help="Blockchain sync mode"),
        _opt("--gcmode", type=click.Choice(["full", "archive"]), default="full", show_default=True, help="Blockchain garbage collection mode"),
        _opt("--identity", help="Custom node name"),
        _opt("--light.serve", type=int, default=0, help="Maximum percentage of time allowed for serving light server requests"),
        _opt("--light.maxpeers", type=int, default=100, help="Maximum number of light clients to serve"),
        _opt("--txpool.locals", help="Comma separated accounts to treat as locals"),
        _opt("--txpool.nolocals", is_flag=True, help="Disables price exemptions for locally submitted transactions"),
        _opt("--txpool.pricelimit", type=int, default=1, help="Minimum gas price limit to enforce for acceptance into the pool"),
        _opt("--unlock", help="Comma separated list of accounts to unlock"),
        _opt("--password", type=click.Path(dir_okay=False), help="Password file to use for non-interactive password input"),
        _opt("--signer", help="External signer (url or path to ipc file)"),
        _opt("--http", is_flag=True, help="Enable the HTTP-RPC server"),
        _opt("--http.addr", default="localhost", help="HTTP-RPC server listening interface"),
        _opt("--http.port", type=int, default=8545, help="HTTP-RPC server listening port"),
        _opt("--ws", is_flag=True, help="Enable the WS-RPC server"),
        _opt("--ipcpath", help="Filename for IPC socket/pipe within the datadir"),
        _opt("--bootnodes", help="Comma separated enode URLs for P2P discovery bootstrap"),
        _opt("--port", type=int, default=30303, show_default=True, help="Network listening port"),
        _opt("--maxpeers", type=int, default=50, show_default=True, help="Maximum number of network peers"),
        _opt("--nat", default="any", help="NAT port mapping mechanism (any|none|upnp|pmp|extip:<IP>)"),
        _opt("--nodiscover", is_flag=True, help="Disables the peer discovery mechanism"),
        _opt("--verbosity", type=int, default=3, help="Logging verbosity: 0=silent, 1=error, 2=warn, 3=info, 4=debug, 5=detail"),
        _opt("--vmodule", help="Per-module verbosity: comma-separated list of <pattern>=<level>"),
        _opt("--pprof", is_flag=True, help="Enable the pprof HTTP server"),
        _opt("--nousb", is_flag=True, help="Disables monitoring for and managing USB hardware wallets (deprecated)"),
        _opt("--rpc", is_flag=True, help="Enable the HTTP-RPC server (deprecated, use --http)"),
        _opt("--plugins.account.config", help="Settings for the account plugin"),
        _opt("--snapshot", is_flag=True, default=True, help="Enables snapshot-database mode"),
        # not listed in any group
        _opt("--bloomfilter.size", type=int, default=2048, help="Megabytes of memory allocated to bloom-filter for pruning"),
        _opt("--override.berlin", type=int, help="Manually specify Berlin fork-block, overriding the bundled setting"),
        # deprecated
        _opt("--lightserv", type=int, help="Maximum percentage of time allowed for serving LES requests (deprecated)"),
        _opt("--minerthreads", type=int, help="Number of CPU threads to use for mining (deprecated)"),
    ]


def build_registry() -> FlagRegistry:
    """Return a fresh registry of the demo node's flag groups."""
    registry = FlagRegistry()
    registry.create_group(
        "Ethereum",
        ["--config", "--datadir", "--keystore", "--networkid", "--syncmode", "--gcmode", "--identity"],
    )
    registry.create_group("Light Client", ["--light.serve", "--light.maxpeers"])
    registry.create_group(
        "Transaction Pool",
        ["--txpool.locals", "--txpool.nolocals", "--txpool.pricelimit"],
    )
    registry.create_group("Account", ["--unlock", "--password", "--signer"])
    registry.create_group(
        "API and Console",
        ["--http", "--http.addr", "--http.port", "--ws", "--ipcpath", "--exec", "--preload", "--jspath"],
    )
    registry.create_group(
        "Networking",
        ["--bootnodes", "--port", "--maxpeers", "--nat", "--nodiscover"],
    )
    registry.create_group("Logging and Debugging", ["--verbosity", "--vmodule", "--pprof"])
    registry.create_group("Aliased (deprecated)", ["--nousb", "--rpc"])
    registry.create_group(ACCOUNT_PLUGIN_GROUP, ["--plugins.account.config"])
    registry.create_group("Misc", ["--snapshot", "--help"])
    return registry


def create_app(registry: FlagRegistry | None = None) -> CategorizedGroup:
    """Build the demo command tree around ``registry``."""

    def run_node(**options: Any) -> None:
        if click.get_current_context().invoked_subcommand is not None:
            return
        click.echo(f"node would start with datadir={options.get('datadir')}")

    node = CategorizedGroup(
        name="node",
        help="Command line interface of a demo blockchain node.",
        params=node_options(),
        callback=run_node,
        invoke_without_command=True,
        registry=registry if registry is not None else build_registry(),
        hidden_group=ACCOUNT_PLUGIN_GROUP,
        deprecated=DEPRECATED_FLAGS,
        default_category="Misc",
        context_settings={"help_option_names": ["-h", "--help"]},
    )

    @node.group()
    def account() -> None:
        """Manage accounts."""

    account_options = [
        click.option("--datadir", type=click.Path(file_okay=False), help="Data directory for the databases and keystore"),
        click.option("--keystore", type=click.Path(file_okay=False), help="Directory for the keystore"),
        click.option("--password", type=click.Path(dir_okay=False), help="Password file to use for non-interactive password input"),
        click.option("--plugins.account.config", "plugin_config", help="Settings for the account plugin"),
        click.option("--lightkdf", is_flag=True, help="Reduce key-derivation RAM and CPU usage"),
    ]

    def with_account_options(func: Any) -> Any:
        for option in reversed(account_options):
            func = option(func)
        return func

    @account.command(name="new")
    @with_account_options
    def account_new(**options: Any) -> None:
        """Create a new account."""
        click.echo("new account")

    @account.command(name="list")
    @with_account_options
    def account_list(**options: Any) -> None:
        """Print summary of existing accounts."""
        click.echo("no accounts")

    @node.command()
    @click.option("--datadir", type=click.Path(file_okay=False), help="Data directory for the databases and keystore")
    @click.option("--exec", "exec_", help="Execute JavaScript statement")
    @click.option("--preload", help="Comma separated list of JavaScript files to preload into the console")
    @click.option("--jspath", default=".", help="JavaScript root path for loadScript")
    @click.argument("endpoint", required=False)
    def attach(endpoint: str | None, **options: Any) -> None:
        """Start an interactive JavaScript environment (connect to node)."""
        click.echo(f"attaching to {endpoint or 'local node'}")

    @node.command()
    def version() -> None:
        """Print version numbers."""
        from helpgroups import __version__

        click.echo(__version__)

    return node


def main() -> None:
    create_app()()


if __name__ == "__main__":
    main()
