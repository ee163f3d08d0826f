import pytest
from click.testing import CliRunner

from helpgroups.sample import build_registry, create_app


@pytest.fixture
def app():
    return create_app()


def sections(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip().endswith("OPTIONS:")]


def test_app_help_groups_every_flag(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, result.output

    assert sections(result.output) == [
        "ETHEREUM OPTIONS:",
        "LIGHT CLIENT OPTIONS:",
        "TRANSACTION POOL OPTIONS:",
        "ACCOUNT OPTIONS:",
        "API AND CONSOLE OPTIONS:",
        "NETWORKING OPTIONS:",
        "LOGGING AND DEBUGGING OPTIONS:",
        "ALIASED (DEPRECATED) OPTIONS:",
        "MISC OPTIONS:",
    ]
    misc = result.output.index("MISC OPTIONS:")
    assert result.output.index("--bloomfilter.size") > misc
    assert result.output.index("--override.berlin") > misc
    assert result.output.index("--http.port") < misc
    assert "Commands:" in result.output
    assert "account" in result.output


def test_app_help_hides_deprecated_and_plugin_flags(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["-h"])
    assert result.exit_code == 0, result.output
    assert "--lightserv" not in result.output
    assert "--minerthreads" not in result.output
    assert "--plugins.account.config" not in result.output
    assert "ACCOUNT PLUGIN OPTIONS" not in result.output


def test_app_help_is_repeatable(runner: CliRunner) -> None:
    registry = build_registry()
    app = create_app(registry)
    before = registry.snapshot()

    first = runner.invoke(app, ["--help"])
    second = runner.invoke(app, ["--help"])

    assert first.output == second.output
    assert registry.snapshot() == before


def test_each_flag_listed_once(runner: CliRunner, app) -> None:
    output = runner.invoke(app, ["--help"]).output
    for flag in ["--datadir", "--port", "--snapshot", "--bloomfilter.size", "--rpc"]:
        assert output.count(f"  {flag} ") == 1, flag


def test_account_command_shows_plugin_group(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["account", "new", "--help"])
    assert result.exit_code == 0, result.output

    assert sections(result.output) == [
        "ACCOUNT OPTIONS:",
        "ACCOUNT PLUGIN OPTIONS:",
        "ETHEREUM OPTIONS:",
        "MISC OPTIONS:",
    ]
    plugin = result.output.index("ACCOUNT PLUGIN OPTIONS:")
    assert result.output.index("--plugins.account.config") > plugin
    misc = result.output.index("MISC OPTIONS:")
    assert result.output.index("--lightkdf") > misc


def test_attach_command_help(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["attach", "--help"])
    assert result.exit_code == 0, result.output
    assert sections(result.output) == [
        "API AND CONSOLE OPTIONS:",
        "ETHEREUM OPTIONS:",
        "MISC OPTIONS:",
    ]
    assert "ENDPOINT" in result.output


def test_nested_group_help(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["account", "--help"])
    assert result.exit_code == 0, result.output
    assert sections(result.output) == ["MISC OPTIONS:"]
    assert "new" in result.output and "list" in result.output


def test_commands_still_run(runner: CliRunner, app) -> None:
    result = runner.invoke(app, ["--datadir", "/tmp/node"])
    assert result.exit_code == 0, result.output
    assert "datadir=/tmp/node" in result.output

    result = runner.invoke(app, ["attach", "ipc:/tmp/node.ipc"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "attaching to ipc:/tmp/node.ipc"
