"""Tests for the pairing key store."""

from __future__ import annotations

import json
from pathlib import Path

from lgtv_remote.credentials import DEFAULT_CREDENTIALS_PATH, CredentialStore


def test_default_path():
    """Test the store defaults to a file in the home directory."""
    assert CredentialStore().path == DEFAULT_CREDENTIALS_PATH
    assert DEFAULT_CREDENTIALS_PATH.name == ".lgtv-remote.json"


def test_missing_file(store: CredentialStore):
    """Test a missing file means no key, not an error."""
    assert store.load() is None


def test_save_and_load(store: CredentialStore, credentials_path: Path):
    """Test the key round-trips through the documented file shape."""
    assert store.save("abc123") is True

    assert json.loads(credentials_path.read_text()) == {"clientKey": "abc123"}
    assert store.load() == "abc123"


def test_save_overwrites(store: CredentialStore):
    store.save("old")
    store.save("new")
    assert store.load() == "new"


def test_save_creates_parent_directory(tmp_path: Path):
    store = CredentialStore(tmp_path / "nested" / "dir" / "tv.json")
    assert store.save("abc123") is True
    assert store.load() == "abc123"


def test_invalid_json(store: CredentialStore, credentials_path: Path):
    """Test a corrupt file is ignored."""
    credentials_path.write_text("{not json")
    assert store.load() is None


def test_non_object_json(store: CredentialStore, credentials_path: Path):
    credentials_path.write_text('["abc123"]')
    assert store.load() is None


def test_missing_key_field(store: CredentialStore, credentials_path: Path):
    credentials_path.write_text('{"clientKey": null}')
    assert store.load() is None


def test_save_failure_returns_false(tmp_path: Path):
    """Test an unwritable path is reported, not raised."""
    target = tmp_path / "is-a-directory"
    target.mkdir()
    assert CredentialStore(target).save("abc123") is False


def test_accepts_string_path(tmp_path: Path):
    store = CredentialStore(str(tmp_path / "tv.json"))
    assert isinstance(store.path, Path)
