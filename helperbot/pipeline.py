"""Reference expansion pipeline: scan, resolve, format and reply."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from helperbot.config import HelperConfig
from helperbot.connectors.base import IssueLookupClient, MessageDelivery
from helperbot.connectors.github_gh import GithubGhLookupClient
from helperbot.formatter import format_summary
from helperbot.models import DESCRIPTION_LIMIT, MAX_REFERENCES, MessageEvent, OutgoingMessage
from helperbot.resolver import ReferenceResolver
from helperbot.responses import build_aggregate_response, rate_limit_notice, to_outgoing_message
from helperbot.scanner import scan_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceContext:
    """Everything one reference lookup needs, built once at startup."""

    lookup: IssueLookupClient
    owner: str
    repo: str
    max_references: int = MAX_REFERENCES
    description_limit: int = DESCRIPTION_LIMIT

    @classmethod
    def from_config(cls, config: HelperConfig, lookup: IssueLookupClient | None = None) -> ReferenceContext:
        owner, repo = config.github.require_repository()
        return cls(
            lookup=lookup or GithubGhLookupClient(gh_bin=config.github.gh_bin),
            owner=owner,
            repo=repo,
            max_references=config.references.max_references,
            description_limit=config.references.description_limit,
        )


class ReferenceEngine:
    def __init__(self, context: ReferenceContext) -> None:
        self.context = context
        self.resolver = ReferenceResolver(context.lookup, context.owner, context.repo)

    def process_text(self, text: str) -> OutgoingMessage | None:
        candidates = scan_references(text, limit=self.context.max_references)
        if not candidates:
            return None

        logger.debug("Resolving %s reference(s) in %s/%s", len(candidates), self.context.owner, self.context.repo)
        result = self.resolver.resolve(candidates)
        if result.rate_limited is not None:
            return rate_limit_notice(result.rate_limited.reset_at)

        summaries = [format_summary(item, description_limit=self.context.description_limit) for item in result.found_items]
        response = build_aggregate_response(summaries, result.missing_numbers)
        if response.is_empty:
            return None
        return to_outgoing_message(response)

    def handle_event(self, event: MessageEvent, delivery: MessageDelivery) -> OutgoingMessage | None:
        message = self.process_text(event.content)
        if message is not None:
            delivery.respond(event, message)
        return message
