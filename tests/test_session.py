"""Token storage, sessions and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from earnlearn.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ClientConfig
from earnlearn.exceptions import MissingTokenError
from earnlearn.session import FileTokenStore, MemoryTokenStore, Session
from earnlearn.types import ReconcilePolicy


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    session = Session(FileTokenStore(path))
    assert not session.is_authenticated

    session.login("abc")
    assert Session(FileTokenStore(path)).token == "abc"
    assert session.auth_headers() == {"Authorization": "Bearer abc"}

    session.logout()
    assert Session(FileTokenStore(path)).token is None


def test_file_store_keeps_other_keys(tmp_path):
    store = FileTokenStore(tmp_path / "storage.json")
    store.set("theme", "dark")
    store.set("token", "t")
    store.remove("token")
    assert store.get("theme") == "dark"


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    assert FileTokenStore(path).get("token") is None


def test_auth_headers_without_token():
    with pytest.raises(MissingTokenError):
        Session(MemoryTokenStore()).auth_headers()


def test_sessions_are_independent():
    alice = Session.with_token("alice")
    bob = Session.with_token("bob")
    assert alice.token == "alice"
    assert bob.token == "bob"


def test_session_from_config(tmp_path):
    config = ClientConfig(token_file=tmp_path / "storage.json")
    Session.from_config(config).login("persisted")
    assert Session.from_config(config).token == "persisted"


def test_config_defaults():
    config = ClientConfig()
    assert config.api_url == DEFAULT_API_URL
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.reconcile is ReconcilePolicy.RELOAD
    assert config.endpoint("/wallet/escrow") == "http://localhost:8080/api/wallet/escrow"


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("EARNLEARN_API_URL", "https://earn.example.edu/api/")
    monkeypatch.setenv("EARNLEARN_TIMEOUT", "none")
    monkeypatch.setenv("EARNLEARN_TOKEN_FILE", str(tmp_path / "t.json"))
    monkeypatch.setenv("EARNLEARN_RECONCILE", "PATCH")

    config = ClientConfig.from_env()

    assert config.api_url == "https://earn.example.edu/api"
    assert config.timeout is None
    assert config.token_file == Path(tmp_path / "t.json")
    assert config.reconcile is ReconcilePolicy.PATCH


def test_config_from_env_numeric_timeout(monkeypatch):
    monkeypatch.setenv("EARNLEARN_TIMEOUT", "5")
    monkeypatch.delenv("EARNLEARN_RECONCILE", raising=False)
    assert ClientConfig.from_env().timeout == 5.0


def test_zero_timeout_is_not_disabled(monkeypatch):
    monkeypatch.setenv("EARNLEARN_TIMEOUT", "0")
    assert ClientConfig.from_env().timeout == 0.0

    monkeypatch.setenv("EARNLEARN_TIMEOUT", "")
    assert ClientConfig.from_env().timeout is None
