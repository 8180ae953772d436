import json

import pytest
from click.testing import CliRunner

from remotefonts.cli import main
from remotefonts.util.hashing import sha256_hex

URL = "https://cdn.test/a.ttf"


@pytest.fixture
def runner(monkeypatch, http, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("FONT_CACHE_DIR", "PARALLEL", "ALLOW_ERROR_STATUS", "OUT_DIR", "LOGS_DIR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("remotefonts.pipeline.create_session", lambda *args, **kwargs: http())
    monkeypatch.setattr("remotefonts.cli.setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr("remotefonts.pipeline.setup_logging", lambda *args, **kwargs: None)
    return CliRunner()


def test_fetch_writes_output_and_cache(runner, http, tmp_path):
    http.serve(URL, b"font")
    digest = sha256_hex(b"font")
    result = runner.invoke(
        main,
        ["fetch", URL, "--sha256", digest, "--cache-dir", str(tmp_path / "cache"), "-o", str(tmp_path / "a.ttf")],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["bytes"] == 4
    assert payload["sha256"] == digest
    assert (tmp_path / "a.ttf").read_bytes() == b"font"
    assert (tmp_path / "cache" / f"{digest}.ttf").exists()


def test_fetch_rejects_cache_dir_without_hash(runner, http, tmp_path):
    result = runner.invoke(main, ["fetch", URL, "--cache-dir", str(tmp_path / "cache")])
    assert result.exit_code != 0
    assert "no sha256" in result.output
    assert http.calls == []


def test_load_runs_manifest(runner, http, tmp_path):
    http.serve(URL, b"font")
    manifest = tmp_path / "fonts.json"
    manifest.write_text(json.dumps({"fonts": [{"family": "A", "assets": [{"url": URL}]}]}))
    result = runner.invoke(main, ["load", str(manifest), "--out", str(tmp_path / "out"), "--parallel"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["families"] == ["A"]
    assert payload["parallel"] is True
    assert (tmp_path / "out" / "a" / "a.ttf").read_bytes() == b"font"


def test_load_reports_network_failure(runner, http, tmp_path):
    manifest = tmp_path / "fonts.json"
    manifest.write_text(json.dumps({"fonts": [{"family": "A", "assets": [{"url": URL}]}]}))
    result = runner.invoke(main, ["load", str(manifest), "--out", str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "GET https://cdn.test/a.ttf failed" in result.output


def test_load_reports_install_failure(runner, http, tmp_path):
    http.serve(URL, b"font")
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    manifest = tmp_path / "fonts.json"
    manifest.write_text(json.dumps({"fonts": [{"family": "A", "assets": [{"url": URL}]}]}))
    result = runner.invoke(main, ["load", str(manifest), "--out", str(blocker)])
    assert result.exit_code == 1
    assert "Unable to install A" in result.output
    assert not isinstance(result.exception, OSError)
