import json
import logging

import pytest

from treeviz.settings import THEMES, Settings


def test_defaults_without_file(isolated_settings):
    s = Settings()
    assert s.path == str(isolated_settings)
    assert (s.theme, s.speed, s.custom_colors) == ("dark", 1.0, {})
    assert s.get("CANVAS_BG") == THEMES["dark"]["CANVAS_BG"]


def test_save_and_reload(tmp_path):
    path = tmp_path / "prefs.json"
    s = Settings(path=str(path))
    s.update(theme="light", speed=1.5, custom_colors={"EDGE": "#112233"})
    s.save()

    assert json.loads(path.read_text()) == {
        "theme": "light", "speed": 1.5, "custom_colors": {"EDGE": "#112233"}}
    again = Settings(path=str(path))
    assert again.theme == "light"
    assert again.speed == 1.5
    assert again.get("EDGE") == "#112233"
    assert again.get("FG") == THEMES["light"]["FG"]


def test_unknown_colour_key_is_white():
    assert Settings(load=False).get("NO_SUCH_KEY") == "#ffffff"


@pytest.mark.parametrize("kwargs", [
    {"theme": "solarized"},
    {"speed": 0},
    {"speed": -2},
    {"speed": "fast"},
    {"speed": True},
    {"custom_colors": {"FG": "red"}},
    {"custom_colors": {"FG": "#12345g"}},
    {"custom_colors": ["#123456"]},
])
def test_invalid_updates_change_nothing(kwargs):
    s = Settings(load=False)
    with pytest.raises(ValueError):
        s.update(**{"theme": "light", "speed": 2.0, **kwargs})
    assert (s.theme, s.speed, s.custom_colors) == ("dark", 1.0, {})


def test_scaled_duration():
    s = Settings(load=False)
    s.update(speed=4)
    assert s.speed == 4.0
    assert s.scaled_duration(1000) == 250


@pytest.mark.parametrize("content", [
    "{not json",
    "[1, 2, 3]",
    '{"theme": "neon"}',
    '{"speed": -1}',
])
def test_corrupt_file_keeps_defaults(tmp_path, caplog, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with caplog.at_level(logging.WARNING, logger="treeviz.settings"):
        s = Settings(path=str(path))
    assert (s.theme, s.speed, s.custom_colors) == ("dark", 1.0, {})
    assert "ignoring settings file" in caplog.text


def test_save_errors_propagate(tmp_path):
    s = Settings(path=str(tmp_path / "missing-dir" / "prefs.json"),
                 load=False)
    with pytest.raises(OSError):
        s.save()
