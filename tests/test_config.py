"""Configuration: file + environment merge and validation."""

import json

import pytest

from walter_ai.config import WalterConfig, load_config, read_config_file, save_config
from walter_ai.errors import ConfigError
from walter_ai.transport.http import DEFAULT_BASE_URL


def test_defaults_url():
    cfg = WalterConfig(token="  tok  ")
    assert cfg.token == "tok"
    assert cfg.url == DEFAULT_BASE_URL


def test_url_trailing_slash_removed():
    assert WalterConfig(token="t", url="http://localhost:8080/").url == "http://localhost:8080"


@pytest.mark.parametrize("url", ["ftp://walter.test", "walterops.com", "https://"])
def test_rejects_non_http_urls(tmp_path, url):
    with pytest.raises(ConfigError, match="url"):
        load_config(tmp_path / "missing.json", env={"WALTER_TOKEN": "t", "WALTER_URL": url})


def test_missing_token(tmp_path):
    with pytest.raises(ConfigError, match="WALTER_TOKEN"):
        load_config(tmp_path / "missing.json", env={})


def test_blank_token_in_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"token": "   "}))
    with pytest.raises(ConfigError, match="token"):
        load_config(path, env={})


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    save_config({"token": "from-file", "url": "https://file.example"}, path)

    assert load_config(path, env={}).token == "from-file"
    cfg = load_config(path, env={"WALTER_TOKEN": "from-env", "WALTER_URL": "http://env.example/"})
    assert cfg.token == "from-env"
    assert cfg.url == "http://env.example"


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / ".walter" / "config.json"
    save_config({"token": "abc"}, path)
    assert read_config_file(path) == {"token": "abc"}


def test_missing_file_reads_empty(tmp_path):
    assert read_config_file(tmp_path / "nope.json") == {}


def test_corrupt_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="Cannot read Walter config"):
        read_config_file(path)


def test_non_object_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        read_config_file(path)


def test_default_path_is_resolved_at_call_time(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr("walter_ai.config.CONFIG_FILE", path)
    save_config({"token": "patched"})
    assert load_config(env={}).token == "patched"
