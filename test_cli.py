"""
CLI Tests
=========

End-to-end runs of the antaria command against a temporary store.

Usage:
    pytest test_cli.py
"""

import logging
import uuid
from pathlib import Path

import pytest

from antaria_cli.cli import load_trace_script, main

TRACE_SCRIPT = Path(__file__).parent / "config" / "traces" / "tokyo_station.yaml"


def run(capsys, *argv):
    main(list(argv))
    return capsys.readouterr().out


def saved_ids(store_dir: Path):
    return sorted(p.stem for p in store_dir.glob("*.json"))


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """JSON log handlers hold the stream captured during the test; drop them after."""
    yield
    for name in ("antaria.library", "antaria.codec"):
        logging.getLogger(name).handlers.clear()


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "regions"


def test_trace_script_saves_region(capsys, store_dir):
    out = run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))

    ids = saved_ids(store_dir)
    assert len(ids) == 1
    assert f"Saved {ids[0]}" in out
    assert "5 points" in out


def test_list_and_show(capsys, store_dir):
    run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))
    region_id = saved_ids(store_dir)[0]

    out = run(capsys, "--store-dir", str(store_dir), "list")
    assert region_id in out

    out = run(capsys, "--store-dir", str(store_dir), "show", region_id)
    assert region_id in out
    assert "35.683" in out
    assert len(out.strip().splitlines()) == 1 + 5


def test_list_empty_store(capsys, store_dir):
    assert "No saved regions" in run(capsys, "--store-dir", str(store_dir), "list")


def test_delete(capsys, store_dir):
    run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))
    region_id = saved_ids(store_dir)[0]

    out = run(capsys, "--store-dir", str(store_dir), "delete", region_id)
    assert f"Deleted {region_id}" in out
    assert saved_ids(store_dir) == []


def test_delete_all_with_yes(capsys, store_dir):
    run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))
    run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))
    assert len(saved_ids(store_dir)) == 2

    out = run(capsys, "--store-dir", str(store_dir), "delete-all", "--yes")
    assert "Deleted 2 regions" in out
    assert saved_ids(store_dir) == []


def test_delete_all_cancelled(capsys, monkeypatch, store_dir):
    run(capsys, "--store-dir", str(store_dir), "trace", str(TRACE_SCRIPT))
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    out = run(capsys, "--store-dir", str(store_dir), "delete-all")
    assert "Cancelled" in out
    assert len(saved_ids(store_dir)) == 1


@pytest.mark.parametrize("region_id", ["not-a-uuid", str(uuid.uuid4())])
def test_unknown_region_exits_with_error(capsys, store_dir, region_id):
    with pytest.raises(SystemExit) as excinfo:
        main(["--store-dir", str(store_dir), "show", region_id])

    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_trace_without_save_reports_shape(capsys, tmp_path, store_dir):
    script = tmp_path / "partial.yaml"
    script.write_text(
        "events:\n"
        "  - start\n"
        "  - {event: tap, lat: 35.0, lon: 139.0}\n"
        "  - {event: tap, lat: 35.001, lon: 139.0}\n"
    )
    out = run(capsys, "--store-dir", str(store_dir), "trace", str(script))
    assert "No region saved (2 points in trace, shape: polyline)" in out


def test_trace_save_too_early_fails(capsys, tmp_path, store_dir):
    script = tmp_path / "short.yaml"
    script.write_text(
        "events:\n"
        "  - start\n"
        "  - {event: tap, lat: 35.0, lon: 139.0}\n"
        "  - save\n"
    )
    with pytest.raises(SystemExit):
        main(["--store-dir", str(store_dir), "trace", str(script)])
    assert saved_ids(store_dir) == []


def test_load_trace_script_parses_events():
    events = load_trace_script(str(TRACE_SCRIPT))
    assert events[0] == ("start", None)
    assert events[-1] == ("save", None)
    name, point = events[1]
    assert name == "tap"
    assert point.latitude == 35.6830


@pytest.mark.parametrize("content", [
    "nothing: here\n",
    "events:\n  - {event: tap, lat: 35.0}\n",
    "events:\n  - {event: tap, lat: 95.0, lon: 0.0}\n",
    "events:\n  - 42\n",
])
def test_load_trace_script_rejects_bad_scripts(tmp_path, content):
    script = tmp_path / "bad.yaml"
    script.write_text(content)
    with pytest.raises(ValueError):
        load_trace_script(str(script))


def test_load_trace_script_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trace_script(str(tmp_path / "missing.yaml"))
