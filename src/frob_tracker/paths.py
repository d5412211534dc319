"""Where frob documents and logs live when the user does not say."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from platformdirs import user_data_path, user_log_path

APP_NAME = "frob-tracker"


def get_data_dir() -> Path:
    return user_data_path(APP_NAME, appauthor=False, ensure_exists=True)


def get_log_dir() -> Path:
    return user_log_path(APP_NAME, appauthor=False, ensure_exists=True)


def get_default_document_path() -> Path:
    return get_data_dir() / "frobs.txt"


def get_log_path() -> Path:
    return get_log_dir() / f"{APP_NAME}.log"


def resolve_document_path(path: Optional[Path]) -> Path:
    """Expand a user-supplied document path, or fall back to the default one."""
    if path is None:
        return get_default_document_path()
    return Path(path).expanduser()
