import click
import pytest

from helpgroups.identity import build_index, canonical


class NamedFlag:
    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return f"--{self.name}"


@pytest.mark.parametrize(
    "flag, expected",
    [
        ("--datadir", "--datadir"),
        (click.Option(["-d", "--datadir"]), "--datadir"),
        (click.Option(["--color/--no-color"]), "--color/--no-color"),
        (click.Option(["-v"]), "-v"),
        (click.Option(["--http.port", "http_port"]), "--http.port"),
        (click.Argument(["source"]), "source"),
        (NamedFlag("port"), "--port"),
    ],
)
def test_canonical(flag, expected) -> None:
    assert canonical(flag) == expected


def test_option_matches_its_string_name() -> None:
    option = click.Option(["-p", "--port"], type=int)
    assert canonical(option) == canonical("--port")


def test_build_index_collects_unique_keys() -> None:
    flags = ["--datadir", click.Option(["--datadir"]), "--port"]
    assert build_index(flags) == {"--datadir", "--port"}


def test_build_index_empty() -> None:
    assert build_index([]) == set()
