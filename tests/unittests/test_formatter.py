import click
import pytest

from helpgroups.dispatch import (
    AppHelpView,
    CommandHelpView,
    HelpPayload,
    HelpTemplate,
)
from helpgroups.formatter import ClickHelpRenderer, flag_row, section_heading
from helpgroups.registry import FlagGroup


@pytest.fixture
def options() -> dict[str, click.Option]:
    return {
        "port": click.Option(["--port"], type=int, help="Network listening port"),
        "maxpeers": click.Option(["--maxpeers"], type=int, help="Maximum number of peers"),
        "secret": click.Option(["--secret"], hidden=True, help="Not shown"),
        "cache": click.Option(["--cache"], type=int, help="Megabytes for caching"),
    }


@pytest.fixture
def ctx() -> click.Context:
    return click.Context(click.Command("node"), info_name="node")


def test_section_heading() -> None:
    assert section_heading("Networking") == "NETWORKING OPTIONS"


def test_flag_row(options, ctx) -> None:
    usage, help_text = flag_row(options["port"], ctx)
    assert usage.startswith("--port")
    assert help_text == "Network listening port"
    assert flag_row(options["secret"], ctx) is None
    assert flag_row("--plain", ctx) == ("--plain", "")


def test_app_view(options, ctx) -> None:
    payload = HelpPayload(name="node", flags=list(options.values()))
    view = AppHelpView(
        payload=payload,
        groups=[
            FlagGroup("Networking", ["--port", "--maxpeers", "--unregistered"]),
            FlagGroup("Empty", ["--secret"]),
            FlagGroup("Misc", [options["cache"]]),
        ],
    )

    text = ClickHelpRenderer(ctx)(HelpTemplate.APP, view)

    assert "NETWORKING OPTIONS:" in text
    assert "MISC OPTIONS:" in text
    assert "Network listening port" in text
    assert "--unregistered" not in text
    assert "EMPTY OPTIONS" not in text
    assert text.index("--maxpeers") < text.index("MISC OPTIONS:") < text.index("--cache")


def test_command_view(options, ctx) -> None:
    view = CommandHelpView(
        payload=HelpPayload(name="attach"),
        categorized_flags=[
            ("Account", [options["cache"]]),
            ("Networking", [options["port"]]),
        ],
    )

    text = ClickHelpRenderer(ctx)(HelpTemplate.COMMAND, view)

    assert text.index("ACCOUNT OPTIONS:") < text.index("--cache")
    assert text.index("--cache") < text.index("NETWORKING OPTIONS:")
    assert text.index("NETWORKING OPTIONS:") < text.index("--port")


def test_other_template_lists_flags(options, ctx) -> None:
    payload = HelpPayload(name="node", flags=[options["port"], options["cache"]])
    text = ClickHelpRenderer(ctx)("subcommand-help", payload)
    assert text.startswith("Options:")
    assert "--port" in text and "--cache" in text


def test_indent(options, ctx) -> None:
    view = CommandHelpView(
        payload=HelpPayload(name="attach"),
        categorized_flags=[("Networking", [options["port"]])],
    )
    text = ClickHelpRenderer(ctx, indent=4)(HelpTemplate.COMMAND, view)
    assert text.startswith("    NETWORKING OPTIONS:")


def test_uses_current_context(options) -> None:
    payload = HelpPayload(name="node", flags=[options["port"]])
    with click.Context(click.Command("node")):
        text = ClickHelpRenderer()(HelpTemplate.OTHER, payload)
    assert "--port" in text


def test_bind(ctx) -> None:
    bound = ClickHelpRenderer().bind(ctx, 2)
    assert bound.ctx is ctx
    assert bound.indent == 2
