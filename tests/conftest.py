import pytest
from click.testing import CliRunner

from helpgroups.registry import FlagRegistry


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unittests: fast tests without I/O")


@pytest.fixture
def registry() -> FlagRegistry:
    """Groups `Net = [X, Y]` followed by the fallback `Misc = [Z]`."""
    reg = FlagRegistry()
    reg.create_group("Net", ["X", "Y"])
    reg.create_group("Misc", ["Z"])
    return reg


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
