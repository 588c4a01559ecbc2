"""Resolution of scanned references against the issue tracker."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from helperbot.connectors.base import IssueLookupClient, IssueLookupError, IssueNotFoundError, RateLimitError
from helperbot.models import ReferenceCandidate, ResolutionOutcome, ResolutionResult, ResolvedItem

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Looks up each candidate as an issue and as a pull request, in scan order.

    A rate limit on either lookup ends the batch: no later candidate is
    requested and the result carries only the rate-limit outcome for callers
    to act on.
    """

    def __init__(self, lookup: IssueLookupClient, owner: str, repo: str) -> None:
        self.lookup = lookup
        self.owner = owner
        self.repo = repo

    def resolve(self, candidates: Iterable[ReferenceCandidate]) -> ResolutionResult:
        result = ResolutionResult()
        for candidate in candidates:
            try:
                outcome = self.resolve_item(candidate.number)
            except RateLimitError as exc:
                _log_rate_limit(exc)
                result.rate_limited = ResolutionOutcome.rate_limited(candidate.number, exc.reset_at)
                return result
            result.outcomes.append(outcome)
        return result

    def resolve_item(self, number: int) -> ResolutionOutcome:
        """Resolve one number; raises ``RateLimitError`` instead of classifying it."""
        try:
            issue = self.lookup.get_issue(self.owner, self.repo, number)
        except RateLimitError:
            raise
        except IssueNotFoundError:
            # Every pull request is also an issue, so the PR view cannot exist either.
            return ResolutionOutcome.missing(number)
        except IssueLookupError:
            logger.exception("Error while fetching issue #%s", number)
            return ResolutionOutcome.errored(number)

        try:
            pull_request = self.lookup.get_pull_request(self.owner, self.repo, number)
        except RateLimitError:
            raise
        except IssueNotFoundError:
            pull_request = None
        except IssueLookupError:
            logger.exception("Error while fetching pull request #%s; showing it as an issue", number)
            pull_request = None

        return ResolutionOutcome.found(ResolvedItem(issue=issue, pull_request=pull_request))


def _log_rate_limit(exc: RateLimitError) -> None:
    if exc.reset_at is None:
        logger.warning("Rate limit reached. No reset time provided.")
        return
    remaining = exc.reset_at - datetime.now(UTC)
    logger.warning("Rate limit reached. Reset in %s", remaining)
