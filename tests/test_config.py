"""Tests for configuration loading."""

import pytest

from config import load_config_model
from config_models import FactsConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("FACTS_STORE_URL", "FACTS_STORE_KEY", "FACTS_LOG_LEVEL", "FACTS_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


def test_defaults(tmp_path):
    config = load_config_model(tmp_path / "missing.yaml")
    assert config.store.table == "facts"
    assert config.store.row_limit == 1500
    assert config.store.timeout == 10.0
    assert config.logging.level == "INFO"
    assert config.web.session_cookie == "facts_session"


def test_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "store:\n"
        "  url: https://abc.supabase.co/\n"
        "  api_key: anon\n"
        "  timeout: 3\n"
        "logging:\n"
        "  level: debug\n"
    )
    config = load_config_model(path)
    assert config.store.url == "https://abc.supabase.co"
    assert config.store.api_key == "anon"
    assert config.store.timeout == 3.0
    assert config.logging.level == "DEBUG"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("store:\n  url: https://file.example.co\n")
    monkeypatch.setenv("FACTS_STORE_URL", "https://env.example.co")
    monkeypatch.setenv("FACTS_STORE_KEY", "secret")
    monkeypatch.setenv("FACTS_LOG_JSON", "true")

    config = load_config_model(path)
    assert config.store.url == "https://env.example.co"
    assert config.store.api_key == "secret"
    assert config.logging.json_mode is True


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("store: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config_model(path)


def test_invalid_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("store:\n  url: ftp://nope\n")
    with pytest.raises(ValueError, match="Config validation failed"):
        load_config_model(path)


def test_bad_log_level():
    with pytest.raises(ValueError):
        FactsConfig.from_dict({"logging": {"level": "LOUD"}})


def test_empty_dict_gives_defaults():
    config = FactsConfig.from_dict({})
    assert config == FactsConfig()
    assert config.store.row_limit == 1500
    assert config.web.session_cookie == "facts_session"
