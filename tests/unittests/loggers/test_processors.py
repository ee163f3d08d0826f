from pathlib import Path

import pytest

from helpgroups.loggers.processors import CallPrettifier, PathPrettifier, TimeStamper


def test_path_prettifier(tmp_path: Path) -> None:
    processor = PathPrettifier(base_dir=tmp_path)
    event = processor(None, None, {"config": tmp_path / "helpgroups.yaml", "other": Path("/elsewhere")})
    assert event["config"] == "helpgroups.yaml"
    assert event["other"] == Path("/elsewhere")


def test_call_prettifier() -> None:
    event = {"module": "categorize", "func_name": "render_app_help", "lineno": 42}
    assert CallPrettifier()(None, None, dict(event))["call"] == "categorize.render_app_help:42"
    assert CallPrettifier(concise=False)(None, None, dict(event))["call"] == event


def test_time_stamper() -> None:
    event = TimeStamper(fmt="%Y", tz="UTC")(None, None, {})
    assert event["timestamp"].isdigit()


@pytest.mark.parametrize("processor", [PathPrettifier(), CallPrettifier(), TimeStamper()])
def test_processors_require_dict(processor) -> None:
    with pytest.raises(TypeError):
        processor(None, None, ["not", "a", "dict"])
