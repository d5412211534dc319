"""Serve one frob document over HTTP with uvicorn."""

from __future__ import annotations

import logging
import threading
import webbrowser
from pathlib import Path
from typing import Optional

import uvicorn

from .config import TrackerSettings
from .paths import get_log_path, resolve_document_path
from .webapp import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def attach_log_file(path: Path) -> logging.Handler:
    """Copy root log records into ``path`` while the server runs."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def serve_document(
    document_path: Optional[Path] = None,
    *,
    settings: Optional[TrackerSettings] = None,
    host: str = "127.0.0.1",
    port: int = 8765,
    open_browser: bool = True,
    log_level: str = "info",
) -> None:
    """Run the JSON API for ``document_path`` until uvicorn exits."""
    path = resolve_document_path(document_path)
    app = create_app(document_path=path, settings=settings or TrackerSettings())
    handler = attach_log_file(get_log_path())
    logger.info("Serving %s on http://%s:%d", path, host, port)

    if open_browser:
        opener = threading.Timer(1.0, _open_docs, args=(f"http://{host}:{port}/docs",))
        opener.daemon = True
        opener.start()

    try:
        uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level=log_level)).run()
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()


def _open_docs(url: str) -> None:
    if not webbrowser.open(url):
        logger.warning("No browser available to open %s", url)
