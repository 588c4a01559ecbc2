"""Connector interfaces for the issue tracker and the chat platform."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from helperbot.models import IssueDetails, MessageEvent, OutgoingMessage, PullRequestDetails


class IssueLookupError(RuntimeError):
    """Lookup failed for a reason other than a missing item or a rate limit."""


class IssueNotFoundError(IssueLookupError):
    pass


class RateLimitError(IssueLookupError):
    def __init__(self, message: str, *, reset_at: datetime | None = None) -> None:
        super().__init__(message)
        self.reset_at = reset_at


class IssueLookupClient(Protocol):
    def get_issue(self, owner: str, repo: str, number: int) -> IssueDetails: ...

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails: ...


class MessageDelivery(Protocol):
    def respond(self, event: MessageEvent, message: OutgoingMessage) -> None: ...
