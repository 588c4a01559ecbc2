"""Webhook receiving chat message events, plus a read-only tag API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException

from helperbot.config import HelperConfig
from helperbot.connectors.base import IssueLookupClient
from helperbot.connectors.delivery import CollectingDelivery
from helperbot.models import MessageEvent
from helperbot.pipeline import ReferenceContext, ReferenceEngine
from helperbot.storage import SQLiteTagStorage
from helperbot.storage.base import TagStorage
from helperbot.tags import TagError, TagNotFoundError, TagService

logger = logging.getLogger(__name__)


def create_app(
    config: HelperConfig,
    lookup: IssueLookupClient | None = None,
    storage: TagStorage | None = None,
) -> FastAPI:
    # Fails fast when the target repository is not configured.
    engine = ReferenceEngine(ReferenceContext.from_config(config, lookup=lookup))
    tags = TagService(storage or SQLiteTagStorage(config.storage.sqlite_path))
    app = FastAPI(title="helperbot")

    def _tag_or_error(name: str) -> Any:
        try:
            return tags.get(name)
        except TagNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except TagError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok", "repository": f"{engine.context.owner}/{engine.context.repo}"}

    @app.post("/events/message")
    def message_event(event: MessageEvent) -> dict[str, Any]:
        delivery = CollectingDelivery()
        message = engine.handle_event(event, delivery)
        if message is not None:
            logger.debug("Replying to message %s in channel %s", event.message_id, event.channel_id)
        return {"message": message.model_dump(mode="json") if message else None}

    @app.get("/api/tags")
    def list_tags() -> dict[str, list[str]]:
        return {"tags": tags.list_names()}

    @app.get("/api/tags/{name}")
    def get_tag(name: str) -> dict[str, Any]:
        tag = _tag_or_error(name)
        return {
            "name": tag.name,
            "content": tag.content,
            "aliases": tag.aliases,
            "versions": len(tag.history),
            "updated_at": tag.current.timestamp.isoformat(),
        }

    @app.get("/api/tags/{name}/history")
    def tag_history(name: str) -> dict[str, Any]:
        tag = _tag_or_error(name)
        return {"name": tag.name, "history": [entry.model_dump(mode="json") for entry in tag.history]}

    return app
