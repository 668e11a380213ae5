import json

import pytest

from sysprobe.config import ConfigManager, SamplerConfig, parse_duration
from sysprobe.errors import ConfigError


@pytest.mark.parametrize("text,seconds", [
    ("0", 0.0),
    ("1.5", 1.5),
    ("500ms", 0.5),
    ("2s", 2.0),
    ("1m30s", 90.0),
    ("1h", 3600.0),
    ("1.5s", 1.5),
    ("250us", 0.00025),
    (" 3s ", 3.0),
    (2, 2.0),
])
def test_parse_duration(text, seconds):
    assert parse_duration(text) == pytest.approx(seconds)


@pytest.mark.parametrize("text", ["", "abc", "5x", "s", "1s junk", "-1s", "-2", "inf", True])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_defaults():
    config = SamplerConfig()
    assert config.interval == 0.0
    assert config.count == 0
    assert config.json_output is False
    assert config.cpu_interval == 0.2
    assert config.disk_path is None
    assert not config.streaming


def test_merge_skips_none():
    config = SamplerConfig(interval=5.0, count=3).merge({"interval": None, "count": 7, "json_output": True})

    assert config.interval == 5.0
    assert config.count == 7
    assert config.json_output is True
    assert config.streaming


def test_load(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"interval": "2s", "count": "4", "json_output": True, "disk_path": "/data"}))

    config = ConfigManager(str(path)).load()

    assert config == SamplerConfig(interval=2.0, count=4, json_output=True, disk_path="/data")


def test_save_and_load(tmp_path):
    manager = ConfigManager(str(tmp_path / "sub" / "config.json"))
    assert not manager.exists()

    manager.save(SamplerConfig(interval=1.0, count=2))

    assert manager.exists()
    assert manager.load() == SamplerConfig(interval=1.0, count=2)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigManager(str(tmp_path / "missing.json")).load()


def test_load_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load()


def test_load_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"interval": 1, "api_url": "http://example"}))

    with pytest.raises(ConfigError, match="api_url"):
        ConfigManager(str(path)).load()


def test_load_rejects_bad_interval(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"interval": "soon"}))

    with pytest.raises(ConfigError, match="invalid duration"):
        ConfigManager(str(path)).load()


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")

    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load()


@pytest.mark.parametrize("data,message", [
    ({"json_output": "false"}, "json_output"),
    ({"json_output": 1}, "json_output"),
    ({"count": 2.9}, "count"),
    ({"count": True}, "count"),
    ({"count": "2.5"}, "count"),
    ({"disk_path": 5}, "disk_path"),
])
def test_load_rejects_wrong_types(tmp_path, data, message):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))

    with pytest.raises(ConfigError, match=message):
        ConfigManager(str(path)).load()


def test_load_accepts_typed_values(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"json_output": False, "count": -1, "disk_path": None}))

    config = ConfigManager(str(path)).load()

    assert config.json_output is False
    assert config.count == -1
    assert config.disk_path is None
