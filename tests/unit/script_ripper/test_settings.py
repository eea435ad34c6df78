from pathlib import Path

import pytest
from structlog.testing import capture_logs

from script_ripper.settings import HostSettings, RipperSettings, SectionPosition, resolve_settings


def _meta(**options: object) -> dict[str, object]:
    return {"title": "Doc", "extensions": {"ripper": options}}


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = resolve_settings({})

    assert settings == RipperSettings()
    assert settings.include_yaml is True
    assert settings.script_links_position is SectionPosition.BOTTOM
    assert settings.output_name is None
    assert settings.debug is False


@pytest.mark.unit
def test_explicit_false_overrides_default() -> None:
    settings = resolve_settings(_meta(**{"include-yaml": False}))

    assert settings.include_yaml is False


@pytest.mark.unit
def test_none_values_count_as_absent() -> None:
    settings = resolve_settings(_meta(**{"include-yaml": None, "output-name": None}))

    assert settings.include_yaml is True
    assert settings.output_name is None


@pytest.mark.unit
def test_all_options_are_read() -> None:
    settings = resolve_settings(
        _meta(**{"script-links-position": " Custom ", "output-name": 42, "debug": True, "unknown": "x"}),
    )

    assert settings.script_links_position is SectionPosition.CUSTOM
    assert settings.output_name == "42"
    assert settings.debug is True


@pytest.mark.unit
def test_top_level_ripper_block_is_accepted() -> None:
    settings = resolve_settings({"ripper": {"script-links-position": "none"}})

    assert settings.script_links_position is SectionPosition.NONE


@pytest.mark.unit
def test_invalid_value_falls_back_to_default_with_warning() -> None:
    with capture_logs() as logs:
        settings = resolve_settings(_meta(**{"script-links-position": "sideways", "include-yaml": False}))

    assert settings.script_links_position is SectionPosition.BOTTOM
    assert settings.include_yaml is False
    assert [log["event"] for log in logs] == ["invalid_setting"]
    assert logs[0]["key"] == "script-links-position"


@pytest.mark.unit
def test_resolve_does_not_mutate_metadata() -> None:
    meta = _meta(**{"script-links-position": "bogus", "debug": None})

    resolve_settings(meta)

    assert meta == _meta(**{"script-links-position": "bogus", "debug": None})


@pytest.mark.unit
def test_host_settings_from_environment() -> None:
    host = HostSettings.from_env({"SCRIPT_RIPPER_OUTPUT_FILE": "out/doc.html", "SCRIPT_RIPPER_LOG_FILE": ""})

    assert host.output_file == Path("out/doc.html")
    assert host.log_file is None


@pytest.mark.unit
def test_empty_output_name_falls_back_with_warning() -> None:
    with capture_logs() as logs:
        settings = resolve_settings(_meta(**{"output-name": ""}))

    assert settings.output_name is None
    assert [log["key"] for log in logs if log["event"] == "invalid_setting"] == ["output-name"]
