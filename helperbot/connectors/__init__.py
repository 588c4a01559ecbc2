"""Connector interfaces and implementations."""

from .base import IssueLookupClient, IssueLookupError, IssueNotFoundError, MessageDelivery, RateLimitError
from .delivery import CollectingDelivery, ConsoleDelivery
from .github_gh import GithubGhLookupClient

__all__ = [
    "CollectingDelivery",
    "ConsoleDelivery",
    "GithubGhLookupClient",
    "IssueLookupClient",
    "IssueLookupError",
    "IssueNotFoundError",
    "MessageDelivery",
    "RateLimitError",
]
