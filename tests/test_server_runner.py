"""Tests for the uvicorn launcher and default locations."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI

from frob_tracker import paths, server_runner


class RecordingServer:
    """Stands in for ``uvicorn.Server``; remembers its config instead of serving."""

    instances: list = []

    def __init__(self, config) -> None:
        self.config = config
        self.ran = False
        RecordingServer.instances.append(self)

    def run(self) -> None:
        self.ran = True
        logging.getLogger("frob_tracker.test").warning("request handled")


def test_resolve_document_path_expands_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert paths.resolve_document_path(Path("~/notes.txt")) == tmp_path / "notes.txt"


def test_resolve_document_path_defaults(monkeypatch, tmp_path):
    monkeypatch.setattr(paths, "get_default_document_path", lambda: tmp_path / "frobs.txt")
    assert paths.resolve_document_path(None) == tmp_path / "frobs.txt"


def test_serve_document_runs_uvicorn_and_detaches_log(monkeypatch, tmp_path, settings):
    log_path = tmp_path / "server.log"
    document_path = tmp_path / "tasks.txt"
    document_path.write_text("[0:00:10] a\n", encoding="utf-8")
    RecordingServer.instances = []
    monkeypatch.setattr(server_runner.uvicorn, "Server", RecordingServer)
    monkeypatch.setattr(server_runner, "get_log_path", lambda: log_path)
    root_handlers = list(logging.getLogger().handlers)

    server_runner.serve_document(
        document_path, settings=settings, host="0.0.0.0", port=9000, open_browser=False
    )

    [server] = RecordingServer.instances
    assert server.ran
    assert isinstance(server.config.app, FastAPI)
    assert server.config.app.state.document_path == document_path
    assert (server.config.host, server.config.port) == ("0.0.0.0", 9000)
    assert logging.getLogger().handlers == root_handlers
    assert "request handled" in log_path.read_text(encoding="utf-8")


def test_serve_document_schedules_browser(monkeypatch, tmp_path, settings):
    opened = []
    monkeypatch.setattr(server_runner.uvicorn, "Server", RecordingServer)
    monkeypatch.setattr(server_runner, "get_log_path", lambda: tmp_path / "server.log")
    monkeypatch.setattr(
        server_runner.threading,
        "Timer",
        lambda delay, function, args: _ImmediateTimer(function, args),
    )
    monkeypatch.setattr(server_runner.webbrowser, "open", lambda url: opened.append(url) or True)

    server_runner.serve_document(tmp_path / "tasks.txt", settings=settings, port=8123)

    assert opened == ["http://127.0.0.1:8123/docs"]


class _ImmediateTimer:
    def __init__(self, function, args) -> None:
        self.function = function
        self.args = args
        self.daemon = False

    def start(self) -> None:
        assert self.daemon
        self.function(*self.args)
