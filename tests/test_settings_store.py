from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest

import turborepo_config
from turborepo_config.errors import ConfigIOError, ParseError, PathResolutionError
from turborepo_config.settings import ConfigStore, SettingsRecord, read_record, write_record


def _full_record():
    return SettingsRecord(
        token="tok_123456789",
        team_id="team_abc",
        api_url="https://api.example.com",
        login_url="https://example.com",
        team_slug="acme",
    )


def test_settings_roundtrip_write_read(tmp_path: Path):
    p = tmp_path / "config.json"
    record = _full_record()
    write_record(p, record)

    loaded, err = read_record(p)
    assert err is None
    assert loaded == record


def test_settings_partial_file_gets_url_defaults(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"token":"abc"}', encoding="utf-8")

    loaded, err = read_record(p)
    assert err is None
    assert loaded == SettingsRecord(
        token="abc",
        api_url="https://api.vercel.com",
        login_url="https://vercel.com",
    )


def test_settings_present_empty_string_overrides_default(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"apiUrl":"","teamSlug":"acme","unknown":1}', encoding="utf-8")

    loaded, err = read_record(p)
    assert err is None
    assert loaded.api_url == ""
    assert loaded.login_url == "https://vercel.com"
    assert loaded.team_slug == "acme"


def test_settings_null_field_keeps_default_and_other_fields(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"token":"abc","teamId":null,"apiUrl":null}', encoding="utf-8")

    loaded, err = read_record(p)
    assert err is None
    assert loaded.token == "abc"
    assert loaded.team_id == ""
    assert loaded.api_url == "https://api.vercel.com"


def test_settings_invalid_utf8_is_replaced_not_rejected(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_bytes(b'{"token":"abc","teamSlug":"ac\xffme"}')

    loaded, err = read_record(p)
    assert err is None
    assert loaded.token == "abc"
    assert loaded.team_slug == "ac\ufffdme"


def test_settings_missing_file_returns_defaults_and_io_error(tmp_path: Path):
    loaded, err = read_record(tmp_path / "nope.json")
    assert loaded == SettingsRecord.defaults()
    assert isinstance(err, ConfigIOError)
    assert isinstance(err, OSError)
    assert isinstance(err.__cause__, FileNotFoundError)


@pytest.mark.parametrize("payload", ["not json", "[1, 2]", '{"token": 5}'])
def test_settings_malformed_file_returns_defaults_and_parse_error(tmp_path: Path, payload):
    p = tmp_path / "config.json"
    p.write_text(payload, encoding="utf-8")

    loaded, err = read_record(p)
    assert loaded == SettingsRecord.defaults()
    assert isinstance(err, ParseError)
    assert err.path == p


def test_settings_empty_fields_are_omitted_on_write(tmp_path: Path):
    p = tmp_path / "config.json"
    write_record(p, SettingsRecord(token="abc", team_id=""))

    assert p.read_text(encoding="utf-8") == '{"token":"abc"}'
    assert "teamId" not in json.loads(p.read_text(encoding="utf-8"))


def test_settings_write_is_idempotent(tmp_path: Path):
    p = tmp_path / "config.json"
    write_record(p, _full_record())
    first = p.read_bytes()
    write_record(p, _full_record())
    assert p.read_bytes() == first


def test_settings_write_truncates_previous_content(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"token":"a-much-longer-previous-token","teamId":"x"}', encoding="utf-8")
    write_record(p, SettingsRecord(token="t"))
    assert p.read_text(encoding="utf-8") == '{"token":"t"}'


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_settings_file_is_owner_only(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text("{}", encoding="utf-8")
    os.chmod(p, 0o644)

    write_record(p, _full_record())
    assert stat.S_IMODE(p.stat().st_mode) == 0o600


def test_settings_write_into_missing_directory_raises_io_error(tmp_path: Path):
    with pytest.raises(ConfigIOError):
        write_record(tmp_path / "missing" / "config.json", _full_record())


def test_settings_user_record_roundtrip(store):
    store.write_user_record(_full_record())

    loaded, err = store.read_user_record()
    assert err is None
    assert loaded == _full_record()
    assert store.path().name == "config.json"
    assert store.path().parent.name == "turborepo"


def test_settings_reset_then_read_restores_defaults(store):
    store.write_user_record(_full_record())
    store.reset_user_record()

    assert store.path().read_text(encoding="utf-8") == "{}"
    loaded, err = store.read_user_record()
    assert err is None
    assert loaded == SettingsRecord.defaults()
    assert not loaded.is_logged_in


def test_settings_path_failure_returns_defaults(tmp_path: Path):
    class Broken:
        def resolve(self, namespace, filename):
            raise PermissionError("read-only home")

    store = ConfigStore(resolver=Broken())
    loaded, err = store.read_user_record()
    assert loaded == SettingsRecord.defaults()
    assert isinstance(err, PathResolutionError)

    with pytest.raises(PathResolutionError):
        store.write_user_record(_full_record())


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG_CONFIG_HOME only applies on Linux")
def test_settings_default_user_functions_use_platform_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    turborepo_config.write_user_record(_full_record())
    p = tmp_path / "turborepo" / "config.json"
    assert json.loads(p.read_text(encoding="utf-8"))["teamSlug"] == "acme"

    loaded, err = turborepo_config.read_user_record()
    assert err is None
    assert loaded == _full_record()

    turborepo_config.reset_user_record()
    assert p.read_text(encoding="utf-8") == "{}"
    loaded, err = turborepo_config.read_user_record()
    assert err is None
    assert loaded == SettingsRecord.defaults()
