import os
from pathlib import Path

import pytest

from dbhub.db import ConfigError, DEFAULT_SERVER, connection_from_config
from dbhub.utils import load_dbhub_config, load_env, load_yaml


def test_connection_from_config(monkeypatch):
    monkeypatch.setenv("TEST_DBHUB_KEY", "abc123")
    conn = connection_from_config({"api": {"key_env_var": "TEST_DBHUB_KEY", "server": "http://localhost:9444/", "timeout": 10}})
    assert conn.api_key == "abc123"
    assert conn.server == "http://localhost:9444"
    assert conn.timeout == 10.0


def test_connection_from_config_defaults(monkeypatch):
    monkeypatch.setenv("TEST_DBHUB_KEY", "abc123")
    conn = connection_from_config({"api": {"key_env_var": "TEST_DBHUB_KEY"}})
    assert conn.server == DEFAULT_SERVER
    assert conn.timeout == 60.0


def test_missing_key_env_var_field():
    with pytest.raises(ConfigError):
        connection_from_config({"api": {}})


def test_unset_api_key(monkeypatch):
    monkeypatch.delenv("TEST_DBHUB_KEY", raising=False)
    with pytest.raises(ConfigError):
        connection_from_config({"api": {"key_env_var": "TEST_DBHUB_KEY"}})


def test_bad_timeout(monkeypatch):
    monkeypatch.setenv("TEST_DBHUB_KEY", "abc123")
    with pytest.raises(ConfigError):
        connection_from_config({"api": {"key_env_var": "TEST_DBHUB_KEY", "timeout": "soon"}})


def test_load_dbhub_config(tmp_path):
    path = tmp_path / "dbhub.yaml"
    path.write_text("database:\n  owner: alice\n  name: db.sqlite\n", encoding="utf-8")
    cfg = load_dbhub_config(path)
    assert cfg["database"]["owner"] == "alice"


def test_load_dbhub_config_requires_database(tmp_path):
    path = tmp_path / "dbhub.yaml"
    path.write_text("api:\n  key_env_var: X\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_dbhub_config(path)


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "nope.yaml")


def test_bundled_config_loads(monkeypatch):
    monkeypatch.chdir(Path(__file__).resolve().parent.parent)
    cfg = load_dbhub_config()
    assert cfg["api"]["key_env_var"] == "DBHUB_API_KEY"


def test_load_env(tmp_path, monkeypatch):
    monkeypatch.delenv("TEST_DOTENV_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("TEST_DOTENV_KEY=from-dotenv\n", encoding="utf-8")
    assert load_env(env_file) == env_file
    assert os.environ["TEST_DOTENV_KEY"] == "from-dotenv"


def test_load_env_missing_file(tmp_path):
    assert load_env(tmp_path / "missing.env") is None


def test_default_config_is_relative_to_cwd(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "dbhub.yaml").write_text(
        "database:\n  owner: bob\n  name: other.sqlite\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert load_dbhub_config()["database"]["owner"] == "bob"


def test_default_config_missing_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_dbhub_config()


def test_load_env_searches_upward_from_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv("TEST_DOTENV_UPWARD", raising=False)
    (tmp_path / ".env").write_text("TEST_DOTENV_UPWARD=found\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert load_env().resolve() == (tmp_path / ".env").resolve()
    assert os.environ["TEST_DOTENV_UPWARD"] == "found"
