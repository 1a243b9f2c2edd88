import json

import pytest

from frogger.config import ConfigError, GameConfig, load_config, parse_int
from frogger.storage import SettingsStore
from frogger.utils import hash_code


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3), (3.9, 3), ("12", 12), ("12px", 12), (" -4 ", -4), ("+7", 7)],
)
def test_parse_int_like_parse_int(value, expected):
    assert parse_int("lives", value) == expected


@pytest.mark.parametrize("value", ["abc", "", None, True, float("nan"), [1]])
def test_parse_int_rejects_non_numbers(value):
    with pytest.raises(ConfigError):
        parse_int("lives", value)


def test_defaults_fill_missing_keys():
    config = GameConfig.from_dict({"settings": {"lives": "5"}})
    settings = config.validate()
    assert settings.lives == 5
    assert settings.wins == 3
    assert config.images["enemyImage"]
    assert config.name == "Frogger"


def test_non_numeric_setting_is_a_config_error():
    config = GameConfig.from_dict({"settings": {"enemyMaxSpeed": "fast"}})
    with pytest.raises(ConfigError):
        config.validate()


def test_spawn_rate_must_be_positive():
    config = GameConfig.from_dict({"settings": {"enemySpawnRate": 0}})
    with pytest.raises(ConfigError):
        config.validate()


def test_scope_must_be_mapping():
    with pytest.raises(ConfigError):
        GameConfig.from_dict({"images": "nope"})


def test_updated_returns_copy():
    config = GameConfig.from_dict()
    changed = config.updated("settings", "lives", 9)
    assert changed.settings["lives"] == 9
    assert config.settings["lives"] == 3

    with pytest.raises(ConfigError):
        config.updated("bogus", "lives", 1)


def test_load_config_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"settings": {"name": "Road", "wins": 2}}))
    config = load_config(path)
    assert config.name == "Road"
    assert config.to_dict()["settings"]["wins"] == 2


def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_hash_code_matches_java_string_hash():
    assert hash_code("") == 0
    assert hash_code("a") == 97
    assert hash_code("hello") == 99162322
    assert hash_code("Frogger game name") < 2**31


def test_hash_code_uses_utf16_code_units():
    # U+1F600 is the surrogate pair D83D DE00
    assert hash_code("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_store_round_trip(tmp_path):
    store = SettingsStore(tmp_path / "nested" / "settings.json")
    assert store.get("x") is None
    assert store.get_bool("x") is False

    store.set("x", True)
    assert store.get_bool("x") is True
    assert SettingsStore(tmp_path / "nested" / "settings.json").get("x") is True


def test_store_treats_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    store = SettingsStore(path)
    assert store.get("muted") is None
    store.set("muted", False)
    assert store.get("muted") is False
