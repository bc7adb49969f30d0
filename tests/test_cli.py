"""CLI parse command."""

import json
import logging

import pytest
import structlog
from typer.testing import CliRunner

from nostrlisting.api import main as api_main
from nostrlisting.cli.app import app
from nostrlisting.cli.parse import load_events

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # parsed JSON goes to stdout; no log lines, and no loggers cached on the runner's streams
    monkeypatch.setattr("nostrlisting.cli.app.configure_logging", lambda settings: None)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / "config"
    d.mkdir()
    (d / "default.toml").write_text('[parser]\nstrict_numbers = false\n\n[logging]\nlevel = "ERROR"\n')
    (d / "dev.toml").write_text("[parser]\nstrict_numbers = true\n")
    return d


def test_load_events_shapes():
    one = {"id": "a"}
    assert load_events(json.dumps(one)) == [one]
    assert load_events(json.dumps([one, one])) == [one, one]
    assert load_events('{"id": "a"}\n\n{"id": "b"}\n') == [{"id": "a"}, {"id": "b"}]
    assert load_events("  ") == []


def test_parse_single_event(tmp_path, config_dir, base_event):
    base_event["tags"] = [["title", "Lamp"], ["price", "19.99", "USD"], ["unknown", "x"]]
    path = tmp_path / "event.json"
    path.write_text(json.dumps(base_event))
    result = runner.invoke(app, ["--config-dir", str(config_dir), "parse", str(path)])
    assert result.exit_code == 0, result.output
    doc = json.loads(result.stdout)
    assert doc["title"] == "Lamp"
    assert doc["price"] == 19.99
    assert doc["createdAt"] == 1672531200
    assert doc["totalCost"] == 19.99
    assert "unknown" not in doc


def test_parse_jsonl_compact_with_untagged(tmp_path, config_dir, base_event):
    untagged = dict(base_event)
    untagged.pop("tags")
    lines = [json.dumps(dict(base_event, tags=[["t", "books"]])), json.dumps(untagged)]
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join(lines))
    result = runner.invoke(app, ["--config-dir", str(config_dir), "parse", "--compact", str(path)])
    assert result.exit_code == 0, result.output
    out = result.stdout.strip().splitlines()
    assert json.loads(out[0])["categories"] == ["books"]
    assert out[1] == "null"


def test_parse_stdin(config_dir, base_event):
    base_event["tags"] = [["shipping", "Free"]]
    result = runner.invoke(
        app, ["--config-dir", str(config_dir), "parse", "-"], input=json.dumps(base_event)
    )
    assert result.exit_code == 0, result.output
    doc = json.loads(result.stdout)
    assert doc["shippingType"] == "Free"
    assert doc["shippingCost"] == 0


def test_strict_from_profile_fails_on_malformed(tmp_path, config_dir, base_event):
    base_event["tags"] = [["price", "cheap", "USD"]]
    path = tmp_path / "event.json"
    path.write_text(json.dumps(base_event))
    result = runner.invoke(app, ["--config-dir", str(config_dir), "--profile", "dev", "parse", str(path)])
    assert result.exit_code == 1


def test_lenient_malformed_price_serializes_as_null(tmp_path, config_dir, base_event):
    base_event["tags"] = [["price", "cheap", "USD"]]
    path = tmp_path / "event.json"
    path.write_text(json.dumps(base_event))
    result = runner.invoke(app, ["--config-dir", str(config_dir), "parse", "--lenient", str(path)])
    assert result.exit_code == 0, result.output
    doc = json.loads(result.stdout)
    assert doc["price"] is None
    assert doc["currency"] == "USD"


def test_invalid_json_exits_nonzero(tmp_path, config_dir):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    result = runner.invoke(app, ["--config-dir", str(config_dir), "parse", str(path)])
    assert result.exit_code == 1


def test_api_server_reads_config_dir(tmp_path, monkeypatch):
    d = tmp_path / "server-config"
    d.mkdir()
    (d / "default.toml").write_text(
        '[parser]\nstrict_numbers = true\n\n[api]\nhost = "0.0.0.0"\nport = 9123\n'
    )
    monkeypatch.setattr(api_main, "_config_profile", None)
    monkeypatch.setattr(api_main, "_config_dir", None)
    started = {}

    def fake_run(target, host, port, reload):
        started.update(host=host, port=port, strict=api_main._strict())

    monkeypatch.setattr("uvicorn.run", fake_run)
    result = runner.invoke(app, ["--config-dir", str(d), "api"])
    assert result.exit_code == 0, result.output
    assert started == {"host": "0.0.0.0", "port": 9123, "strict": True}
