"""Typed command runtime dependency container."""

from __future__ import annotations

from dataclasses import dataclass

from helperbot.connectors.delivery import ConsoleDelivery
from helperbot.connectors.github_gh import GithubGhLookupClient
from helperbot.services.interfaces import DeliveryFactory, LookupClientFactory, TagStorageFactory
from helperbot.storage.sqlite import SQLiteTagStorage


@dataclass(frozen=True)
class CommandRuntime:
    lookup_client_cls: LookupClientFactory
    storage_cls: TagStorageFactory
    delivery_cls: DeliveryFactory


def default_runtime() -> CommandRuntime:
    return CommandRuntime(
        lookup_client_cls=GithubGhLookupClient,
        storage_cls=SQLiteTagStorage,
        delivery_cls=ConsoleDelivery,
    )
