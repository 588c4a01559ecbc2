"""Storage backend interface for tag persistence."""

from __future__ import annotations

from typing import Protocol

from helperbot.models import Tag, TagHistory


class TagStorageConflictError(RuntimeError):
    """A tag name or alias is already taken in the backing store."""


class TagStorage(Protocol):
    def init_schema(self) -> None: ...

    def resolve_name(self, name_or_alias: str) -> str | None: ...

    def load_tag(self, name: str) -> Tag | None: ...

    def list_tag_names(self) -> list[str]: ...

    def save_tag_version(self, name: str, entry: TagHistory, *, create: bool = False) -> None: ...

    def delete_tag(self, name: str) -> bool: ...
