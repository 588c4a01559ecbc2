"""Service interfaces used by command/runtime orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from helperbot.connectors.base import IssueLookupClient, MessageDelivery
from helperbot.storage.base import TagStorage


class LookupClientFactory(Protocol):
    def __call__(self, *, gh_bin: str = "gh") -> IssueLookupClient: ...


class TagStorageFactory(Protocol):
    def __call__(self, db_path: str | Path) -> TagStorage: ...


class DeliveryFactory(Protocol):
    def __call__(self) -> MessageDelivery: ...
