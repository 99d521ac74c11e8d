import json
import stat
from pathlib import Path

from turnover.credential_store import CredentialStore


def test_load_missing_file_returns_none(tmp_path):
    store = CredentialStore(path=tmp_path / "nonexistent.json")
    assert store.load() is None


def test_load_corrupt_file_returns_none(tmp_path):
    """Corrupt JSON is logged and treated as no credential."""
    p = tmp_path / "bad.json"
    p.write_text("{not valid json")
    assert CredentialStore(path=p).load() is None


def test_load_ignores_wrong_shape(tmp_path):
    p = tmp_path / "cred.json"
    p.write_text(json.dumps({"api_key": 42}))
    assert CredentialStore(path=p).load() is None
    p.write_text(json.dumps(["sk-test"]))
    assert CredentialStore(path=p).load() is None


def test_save_then_load(tmp_path):
    p = tmp_path / "nested" / "cred.json"
    CredentialStore(path=p).save("sk-test")

    assert CredentialStore(path=p).load() == "sk-test"
    assert json.loads(p.read_text()) == {"api_key": "sk-test"}


def test_save_restricts_permissions(tmp_path):
    p = tmp_path / "cred.json"
    CredentialStore(path=p).save("sk-test")
    assert stat.S_IMODE(p.stat().st_mode) == 0o600


def test_clear_removes_file(tmp_path):
    p = tmp_path / "cred.json"
    store = CredentialStore(path=p)
    store.save("sk-test")

    store.clear()
    store.clear()

    assert not p.exists()
    assert store.load() is None


def test_default_path():
    assert CredentialStore().path == Path(".turnover_credential.json")
