import click
from click.testing import CliRunner

from helpgroups.cli import CategorizedCommand, CategorizedGroup
from helpgroups.dispatch import HelpDispatcher, HelpTemplate
from helpgroups.registry import FlagRegistry


def make_node(**group_kwargs) -> click.Group:
    @click.group(cls=CategorizedGroup, **group_kwargs)
    @click.option("--port", type=int, help="Network listening port")
    @click.option("--maxpeers", type=int, help="Maximum number of peers")
    @click.option("--cache", type=int, help="Megabytes of memory for caching")
    def node(port, maxpeers, cache):
        """Run a node."""

    @node.command()
    @click.option("--cache", type=int, help="Megabytes of memory for caching")
    @click.option("--port", type=int, help="Network listening port")
    def attach(cache, port):
        """Attach to a running node."""

    return node


def make_registry() -> FlagRegistry:
    registry = FlagRegistry()
    registry.create_group("Networking", ["--port", "--maxpeers"])
    registry.create_group("Misc", ["--help"])
    return registry


def test_uncategorized_root_option_lands_in_fallback() -> None:
    node = make_node(registry=make_registry())
    output = CliRunner().invoke(node, ["--help"]).output

    assert output.index("NETWORKING OPTIONS:") < output.index("--port")
    assert output.index("MISC OPTIONS:") < output.index("--cache")
    assert "Commands:" in output
    assert "Options:" not in output


def test_subcommand_inherits_dispatcher() -> None:
    node = make_node(registry=make_registry())
    attach = node.commands["attach"]

    assert isinstance(attach, CategorizedCommand)
    assert attach.dispatcher is node.dispatcher

    output = CliRunner().invoke(node, ["attach", "--help"]).output
    assert output.index("MISC OPTIONS:") < output.index("--cache")
    assert output.index("--cache") < output.index("NETWORKING OPTIONS:")
    assert output.index("NETWORKING OPTIONS:") < output.index("--port")


def test_without_registry_click_layout_is_kept() -> None:
    node = make_node()
    assert node.dispatcher is None

    output = CliRunner().invoke(node, ["attach", "--help"]).output
    assert "Options:" in output
    assert "OPTIONS:" not in output


def test_custom_renderer() -> None:
    calls = []

    def renderer(template, data):
        calls.append(template)
        return "custom help\n"

    node = make_node(dispatcher=HelpDispatcher(make_registry(), renderer))
    output = CliRunner().invoke(node, ["--help"]).output

    assert "custom help" in output
    assert calls == [HelpTemplate.APP]


def test_default_category_follows_fallback_group() -> None:
    node = make_node(registry=make_registry())
    assert node.dispatcher.default_category == "Misc"

    node = make_node(registry=make_registry(), default_category="Other")
    assert node.dispatcher.default_category == "Other"

    output = CliRunner().invoke(node, ["attach", "--help"]).output
    assert output.index("OTHER OPTIONS:") < output.index("--cache")
