from datetime import UTC, datetime

from helperbot.connectors.base import IssueLookupError, IssueNotFoundError, RateLimitError
from helperbot.models import IssueDetails, ItemKind, OutcomeKind, PullRequestDetails, ReferenceCandidate
from helperbot.resolver import ReferenceResolver

RESET_AT = datetime(2026, 10, 19, 15, 0, tzinfo=UTC)


def _issue(number: int) -> IssueDetails:
    return IssueDetails(
        number=number,
        title=f"Item {number}",
        author="alice",
        html_url=f"https://github.com/acme/bot/issues/{number}",
        created_at=datetime(2026, 10, 1, tzinfo=UTC),
    )


class FakeLookup:
    """Answers from dicts; an exception instance as a value is raised instead."""

    def __init__(self, issues: dict[int, object], pulls: dict[int, object] | None = None) -> None:
        self.issues = issues
        self.pulls = pulls or {}
        self.calls: list[tuple[str, int]] = []

    def _answer(self, table: dict[int, object], number: int):
        value = table.get(number, IssueNotFoundError(f"#{number}"))
        if isinstance(value, Exception):
            raise value
        return value

    def get_issue(self, owner: str, repo: str, number: int) -> IssueDetails:
        assert (owner, repo) == ("acme", "bot")
        self.calls.append(("issue", number))
        return self._answer(self.issues, number)

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        self.calls.append(("pull", number))
        return self._answer(self.pulls, number)


def _candidates(*numbers: int) -> list[ReferenceCandidate]:
    return [ReferenceCandidate(number=n, position=i) for i, n in enumerate(numbers)]


def test_resolver_merges_issue_and_pull_request_views() -> None:
    lookup = FakeLookup({1: _issue(1), 2: _issue(2)}, {2: PullRequestDetails(merged=True, commits=4)})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(1, 2))

    assert result.rate_limited is None
    kinds = [item.kind for item in result.found_items]
    assert kinds == [ItemKind.ISSUE, ItemKind.PULL_REQUEST]
    assert result.found_items[1].pull_request.commits == 4
    assert lookup.calls == [("issue", 1), ("pull", 1), ("issue", 2), ("pull", 2)]


def test_resolver_reports_missing_without_pull_request_lookup() -> None:
    lookup = FakeLookup({})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(9))

    assert result.missing_numbers == [9]
    assert result.found_items == []
    assert lookup.calls == [("issue", 9)]


def test_resolver_drops_transient_issue_failures_and_continues() -> None:
    lookup = FakeLookup({3: IssueLookupError("boom"), 4: _issue(4)})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(3, 4))

    assert [o.kind for o in result.outcomes] == [OutcomeKind.ERRORED, OutcomeKind.FOUND]
    assert result.missing_numbers == []
    assert [item.number for item in result.found_items] == [4]


def test_resolver_falls_back_to_issue_when_pull_request_view_errors() -> None:
    lookup = FakeLookup({5: _issue(5)}, {5: IssueLookupError("server error")})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(5))

    assert result.found_items[0].kind == ItemKind.ISSUE


def test_resolver_aborts_batch_on_issue_rate_limit() -> None:
    lookup = FakeLookup({1: _issue(1), 2: RateLimitError("limited", reset_at=RESET_AT), 3: _issue(3)})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(1, 2, 3, 4, 5))

    assert result.rate_limited is not None
    assert result.rate_limited.kind == OutcomeKind.RATE_LIMITED
    assert result.rate_limited.reset_at == RESET_AT
    assert lookup.calls == [("issue", 1), ("pull", 1), ("issue", 2)]


def test_resolver_aborts_batch_on_pull_request_rate_limit() -> None:
    lookup = FakeLookup({1: _issue(1), 2: _issue(2)}, {1: RateLimitError("limited")})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(1, 2))

    assert result.rate_limited is not None
    assert result.rate_limited.reset_at is None
    assert ("issue", 2) not in lookup.calls


def test_resolver_resolves_duplicates_independently() -> None:
    lookup = FakeLookup({7: _issue(7)})
    result = ReferenceResolver(lookup, "acme", "bot").resolve(_candidates(7, 7))

    assert [item.number for item in result.found_items] == [7, 7]
    assert lookup.calls.count(("issue", 7)) == 2
