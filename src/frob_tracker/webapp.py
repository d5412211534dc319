"""FastAPI application that exposes a JSON API over a frob document."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from .config import TrackerSettings
from .document import TextDocument
from .errors import MalformedFrob, NoFrobFound
from .models import Frob
from .paths import resolve_document_path
from .ranges import SCOPES
from .timecodec import format_duration
from .tracker import FrobTracker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentSession:
    """Serialize access to one document file and keep its hints in memory."""

    def __init__(self, path: Path, settings: TrackerSettings) -> None:
        self.path = Path(path)
        self.settings = settings
        self._lock = threading.Lock()
        self._tracker: Optional[FrobTracker] = None

    def load(self) -> int:
        with self._lock:
            return len(self._load_locked().active_frobs())

    def _load_locked(self) -> FrobTracker:
        document = (
            TextDocument.from_path(self.path) if self.path.exists() else TextDocument()
        )
        tracker = FrobTracker(document, self.settings)
        active = tracker.reconcile()
        logger.info("Loaded %s with %d active frob(s).", self.path, active)
        self._tracker = tracker
        return tracker

    def read(self, operation: Callable[[FrobTracker], T]) -> T:
        with self._lock:
            return operation(self._ensure_tracker())

    def mutate(self, operation: Callable[[FrobTracker], T]) -> T:
        with self._lock:
            tracker = self._ensure_tracker()
            result = operation(tracker)
            if tracker.document.modified:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tracker.document.save(self.path)
            return result

    def _ensure_tracker(self) -> FrobTracker:
        if self._tracker is None:
            return self._load_locked()
        return self._tracker


class TogglePayload(BaseModel):
    position: int = Field(ge=0)
    exclusive: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")


class InsertPayload(BaseModel):
    position: int = Field(ge=0)

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    document_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_path = resolve_document_path(document_path)
    resolved_settings = settings or TrackerSettings()
    session = DocumentSession(resolved_path, resolved_settings)

    app = FastAPI(title="Frob Tracker", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.document_path = resolved_path
    app.state.session = session

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        session.load()

    @app.get("/api/status")
    def status() -> Dict[str, Any]:
        def _status(tracker: FrobTracker) -> Dict[str, Any]:
            frobs = tracker.frobs()
            return {
                "document_path": str(session.path),
                "exclusive": resolved_settings.exclusive,
                "frob_count": len(frobs),
                "active_count": sum(1 for frob in frobs if frob.is_active),
            }

        return session.read(_status)

    @app.get("/api/document")
    def document() -> Dict[str, Any]:
        def _document(tracker: FrobTracker) -> Dict[str, Any]:
            now = tracker.now()
            return {
                "text": tracker.document.text,
                "hints": [
                    {
                        "start": hint.span.start,
                        "end": hint.span.end,
                        "kind": hint.kind.value,
                    }
                    for hint in tracker.document.hints
                ],
                "frobs": [_frob_payload(frob, now) for frob in tracker.frobs()],
            }

        return session.read(_document)

    @app.get("/api/totals")
    def totals(
        scope: str = Query(
            default="document",
            description=f"Range to total: {', '.join(SCOPES)}.",
        ),
        position: int = Query(
            default=0, ge=0, description="Offset selecting the page or section."
        ),
        start: Optional[int] = Query(default=None, ge=0, description="Region start."),
        end: Optional[int] = Query(default=None, ge=0, description="Region end."),
    ) -> Dict[str, Any]:
        def _totals(tracker: FrobTracker) -> Dict[str, Any]:
            span = tracker.range_for(scope, position, start, end)
            result = tracker.totals(span)
            return {
                "start": span.start,
                "end": span.end,
                "frob_total_seconds": result.frob_total_seconds,
                "estimates": [
                    {"category": category, "seconds": seconds}
                    for category, seconds in result.estimates_by_category.items()
                ],
                "summary": tracker.describe_totals(span),
            }

        try:
            return session.read(_totals)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/api/toggle")
    def toggle(payload: TogglePayload) -> Dict[str, Any]:
        def _toggle(tracker: FrobTracker) -> Dict[str, Any]:
            frob = tracker.toggle(payload.position, payload.exclusive)
            return _frob_payload(frob, tracker.now(), tracker.document.text)

        return _run_mutation(session, _toggle)

    @app.post("/api/frobs")
    def insert(payload: InsertPayload) -> Dict[str, Any]:
        def _insert(tracker: FrobTracker) -> Dict[str, Any]:
            if payload.position > len(tracker.document.text):
                raise ValueError(
                    f"Position {payload.position} is past the end of the document"
                )
            frob = tracker.insert(payload.position)
            return _frob_payload(frob, tracker.now(), tracker.document.text)

        return _run_mutation(session, _insert)

    @app.post("/api/reload")
    def reload() -> Dict[str, Any]:
        active = session.load()
        return {"active_count": active}

    return app


def _run_mutation(
    session: DocumentSession, operation: Callable[[FrobTracker], Dict[str, Any]]
) -> Dict[str, Any]:
    try:
        return session.mutate(operation)
    except NoFrobFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except MalformedFrob as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _frob_payload(frob: Frob, now: float, text: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "start": frob.span.start,
        "end": frob.span.end,
        "accumulated_seconds": frob.accumulated_seconds,
        "active_since": frob.active_since,
        "is_active": frob.is_active,
        "elapsed": format_duration(frob.elapsed(now)),
    }
    if text is not None:
        payload["text"] = text[frob.span.start:frob.span.end]
    return payload
