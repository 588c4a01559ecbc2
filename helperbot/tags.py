"""Tag use-cases: create, edit, look up, list and delete predefined messages."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import ValidationError

from helperbot.models import Tag, TagHistory
from helperbot.storage.base import TagStorage, TagStorageConflictError

_TAG_NAME_RE = re.compile(r"^\S{1,32}$")
logger = logging.getLogger(__name__)


class TagError(ValueError):
    pass


class TagNotFoundError(TagError):
    pass


class TagConflictError(TagError):
    pass


def normalize_tag_name(name: str) -> str:
    normalized = name.strip().lower()
    if not _TAG_NAME_RE.match(normalized):
        raise TagError(f"Invalid tag name {name!r}: use 1-32 characters without spaces")
    return normalized


def _new_entry(content: str, aliases: list[str], author_id: int) -> TagHistory:
    try:
        return TagHistory(content=content, aliases=aliases, author_id=author_id, timestamp=datetime.now(UTC))
    except ValidationError as exc:
        raise TagError("Tag content must not be empty") from exc


def _normalize_aliases(name: str, aliases: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for alias in aliases:
        normalized = normalize_tag_name(alias)
        if normalized != name and normalized not in seen:
            seen.append(normalized)
    return seen


class TagService:
    def __init__(self, storage: TagStorage) -> None:
        self.storage = storage

    def get(self, name_or_alias: str) -> Tag:
        key = normalize_tag_name(name_or_alias)
        name = self.storage.resolve_name(key)
        tag = self.storage.load_tag(name) if name else None
        if tag is None:
            raise TagNotFoundError(f"Tag {key!r} does not exist")
        return tag

    def list_names(self) -> list[str]:
        return self.storage.list_tag_names()

    def history(self, name_or_alias: str) -> list[TagHistory]:
        return self.get(name_or_alias).history

    def create(self, name: str, content: str, *, author_id: int, aliases: Iterable[str] = ()) -> Tag:
        key = normalize_tag_name(name)
        alias_list = _normalize_aliases(key, aliases)
        self._ensure_available([key, *alias_list], owner=None)

        entry = _new_entry(content, alias_list, author_id)
        self._save(key, entry, create=True)
        logger.info("Created tag %s (aliases=%s) by %s", key, alias_list, author_id)
        return self.get(key)

    def edit(
        self,
        name_or_alias: str,
        *,
        author_id: int,
        content: str | None = None,
        aliases: Iterable[str] | None = None,
    ) -> Tag:
        current = self.get(name_or_alias)
        alias_list = current.aliases if aliases is None else _normalize_aliases(current.name, aliases)
        self._ensure_available(alias_list, owner=current.name)

        entry = _new_entry(current.content if content is None else content, alias_list, author_id)
        self._save(current.name, entry, create=False)
        logger.info("Edited tag %s (version %s) by %s", current.name, len(current.history) + 1, author_id)
        return self.get(current.name)

    def delete(self, name_or_alias: str) -> None:
        tag = self.get(name_or_alias)
        self.storage.delete_tag(tag.name)
        logger.info("Deleted tag %s", tag.name)

    def _ensure_available(self, names: list[str], *, owner: str | None) -> None:
        for candidate in names:
            existing = self.storage.resolve_name(candidate)
            if existing is not None and existing != owner:
                raise TagConflictError(f"{candidate!r} is already used by tag {existing!r}")

    def _save(self, name: str, entry: TagHistory, *, create: bool) -> None:
        try:
            self.storage.save_tag_version(name, entry, create=create)
        except TagStorageConflictError as exc:
            raise TagConflictError(f"Tag {name!r} conflicts with an existing tag or alias") from exc
