"""
CLI Tests
---------
Argument handling and exit codes for shopsense_cli. ShopsenseClient is
swapped for one bound to a FakeSession.
"""

import json

import pytest

import shopsense_cli
from conftest import FakeSession
from shopsense.client import ShopsenseClient
from shopsense.config import Operation


@pytest.fixture
def fake_session(monkeypatch, tmp_path):
    session = FakeSession(body='{"products": []}')

    def _client(cfg):
        return ShopsenseClient(cfg, session=session)

    monkeypatch.setattr(shopsense_cli, "ShopsenseClient", _client)
    monkeypatch.chdir(tmp_path)
    for var in ("SHOPSENSE_API_URL", "SHOPSENSE_PARTNER_ID", "SHOPSENSE_SITE",
                "SHOPSENSE_FORMAT", "SHOPSENSE_TIMEOUT", "SHOPSENSE_PATHS_FILE"):
        monkeypatch.delenv(var, raising=False)
    return session


@pytest.fixture
def paths_file(tmp_path):
    p = tmp_path / "paths.json"
    p.write_text(json.dumps({op.value: f"/{op.value}" for op in Operation}))
    return p


def base_args(paths_file):
    return ["--api-url", "http://h", "--partner-id", "p1", "--site", "s1", "--paths-file", str(paths_file)]


def test_search_prints_body(fake_session, paths_file, capsys):
    rc = shopsense_cli.main(base_args(paths_file) + ["search", "red dress", "--limit", "3"])
    assert rc == 0
    assert capsys.readouterr().out == '{"products": []}\n'
    url = fake_session.calls[0]["url"]
    assert url.startswith("http://h/search?fts=red+dress&offset=0&limit=3&pid=p1")


def test_looks_uses_type_min_count(fake_session, paths_file):
    rc = shopsense_cli.main(base_args(paths_file) + ["looks", "Featured", "--offset", "4"])
    assert rc == 0
    assert "type=Featured&min=4&count=10" in fake_session.calls[0]["url"]


def test_invalid_look_type_exits_1(fake_session, paths_file, capsys):
    rc = shopsense_cli.main(base_args(paths_file) + ["looks", "Unknown"])
    assert rc == 1
    assert capsys.readouterr().err.startswith("Error: invalid look type")
    assert fake_session.calls == []


def test_visit_retailer_exits_1(fake_session, paths_file, capsys):
    rc = shopsense_cli.main(base_args(paths_file) + ["visit-retailer", "42"])
    assert rc == 1
    assert "not implemented" in capsys.readouterr().err


def test_missing_config_exits_1(fake_session, capsys):
    rc = shopsense_cli.main(["brands"])
    assert rc == 1
    assert "SHOPSENSE_API_URL" in capsys.readouterr().err


def test_env_file_supplies_config(fake_session, paths_file, tmp_path, monkeypatch):
    env_file = tmp_path / "shopsense.env"
    env_file.write_text(
        "SHOPSENSE_API_URL=http://from-env\n"
        "SHOPSENSE_PARTNER_ID=envpid\n"
        f"SHOPSENSE_PATHS_FILE={paths_file}\n"
        "SHOPSENSE_FORMAT=xml\n"
    )
    try:
        rc = shopsense_cli.main(["--env-file", str(env_file), "retailers"])
    finally:
        for var in ("SHOPSENSE_API_URL", "SHOPSENSE_PARTNER_ID", "SHOPSENSE_PATHS_FILE", "SHOPSENSE_FORMAT"):
            monkeypatch.delenv(var, raising=False)
    assert rc == 0
    assert fake_session.calls[0]["url"] == "http://from-env/get_retailers?pid=envpid&format=xml&site="


def test_operation_path_variable_beats_paths_file(fake_session, paths_file, monkeypatch):
    monkeypatch.setenv("SHOPSENSE_GET_BRANDS_PATH", "/from-override")
    rc = shopsense_cli.main(base_args(paths_file) + ["brands"])
    assert rc == 0
    assert fake_session.calls[0]["url"].startswith("http://h/from-override?")


def test_paths_file_flag_beats_paths_file_variable(fake_session, paths_file, tmp_path, monkeypatch):
    other = tmp_path / "other.json"
    other.write_text(json.dumps({"get_brands": "/from-env-file"}))
    monkeypatch.setenv("SHOPSENSE_PATHS_FILE", str(other))
    shopsense_cli.main(base_args(paths_file) + ["brands"])
    assert fake_session.calls[0]["url"].startswith("http://h/get_brands?")


def test_timeout_flag(fake_session, paths_file):
    shopsense_cli.main(base_args(paths_file) + ["--timeout", "3", "brands"])
    assert fake_session.calls[0]["timeout"] == 3.0


def test_transport_error_exits_1(fake_session, paths_file, capsys):
    fake_session.status = 503
    rc = shopsense_cli.main(base_args(paths_file) + ["trends", "--category", "bags"])
    assert rc == 1
    assert "get_trends request failed" in capsys.readouterr().err


def test_unknown_filter_type_rejected(fake_session, paths_file):
    assert shopsense_cli.main(base_args(paths_file) + ["filter-histogram", "Material", "silk"]) == 1
    assert shopsense_cli.main(base_args(paths_file) + ["filter-histogram", "Color", "silk"]) == 0
