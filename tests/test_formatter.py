from datetime import UTC, datetime

import pytest

from helperbot.formatter import (
    NO_DESCRIPTION,
    StateColor,
    build_footer,
    format_summary,
    pluralize,
    shorten_description,
    state_color,
    state_label,
)
from helperbot.models import IssueDetails, PullRequestDetails, ResolvedItem


def _issue(**overrides) -> IssueDetails:
    payload = {
        "number": 42,
        "title": "Crash when reconnecting",
        "author": "alice",
        "avatar_url": "https://avatars.example/alice.png",
        "html_url": "https://github.com/acme/bot/issues/42",
        "created_at": datetime(2026, 10, 1, 12, 0, tzinfo=UTC),
        "body": "Steps\n\nTL;DR: reconnect loop crashes",
        "state": "open",
    }
    payload.update(overrides)
    return IssueDetails.model_validate(payload)


def _pull(**overrides) -> PullRequestDetails:
    payload = {"merged": False, "draft": False, "commits": 3, "changed_files": 2, "additions": 10, "deletions": 1}
    payload.update(overrides)
    return PullRequestDetails.model_validate(payload)


def test_description_uses_last_non_empty_line() -> None:
    assert shorten_description("first\n\n  last line  \n\n") == "last line"
    assert shorten_description("a\r\nb\r\n") == "b"


def test_description_placeholder_when_body_missing() -> None:
    assert shorten_description(None) == NO_DESCRIPTION
    assert shorten_description("\n   \n") == NO_DESCRIPTION


def test_description_hard_cut_at_200() -> None:
    body = "intro\n" + ("word " * 50)
    description = shorten_description(body)

    assert len(("word " * 50).strip()) > 200
    assert len(description) == 200
    assert description == ("word " * 50).strip()[:200]


def test_description_truncates_code_points() -> None:
    body = "é" * 150 + "😀" * 100

    description = shorten_description(body)

    assert len(description) == 200
    assert description.endswith("😀" * 50)


@pytest.mark.parametrize(
    ("state", "merged", "draft", "color", "label"),
    [
        ("closed", True, False, StateColor.MERGED, "Merged"),
        ("closed", True, True, StateColor.MERGED, "Merged"),
        ("closed", False, False, StateColor.CLOSED, "Closed"),
        ("open", False, True, StateColor.DRAFT, "Draft"),
        ("open", False, False, StateColor.OPEN, "Open"),
        ("weird", False, False, StateColor.FALLBACK, "weird"),
    ],
)
def test_pull_request_color_and_label(state: str, merged: bool, draft: bool, color: StateColor, label: str) -> None:
    item = ResolvedItem(issue=_issue(state=state), pull_request=_pull(merged=merged, draft=draft))

    assert state_color(item) == color
    assert state_label(item) == label


@pytest.mark.parametrize(
    ("state", "reason", "color", "label"),
    [
        ("closed", "completed", StateColor.MERGED, "Closed as Completed"),
        ("closed", "not_planned", StateColor.DRAFT, "Closed as Not Planned"),
        ("closed", None, StateColor.DRAFT, "Closed"),
        ("open", None, StateColor.OPEN, "Open"),
        ("unknown", None, StateColor.FALLBACK, "unknown"),
    ],
)
def test_issue_color_and_label(state: str, reason: str | None, color: StateColor, label: str) -> None:
    item = ResolvedItem(issue=_issue(state=state, state_reason=reason))

    assert state_color(item) == color
    assert state_label(item) == label


def test_pluralize_agreement() -> None:
    assert pluralize(0, "comment") == "0 comments"
    assert pluralize(1, "comment") == "1 comment"
    assert pluralize(2, "comment") == "2 comments"
    assert pluralize(1234, "commit") == "1,234 commits"


def test_pull_request_footer() -> None:
    item = ResolvedItem(
        issue=_issue(state="closed", comment_count=1),
        pull_request=_pull(merged=True, commits=1, changed_files=4, additions=120, deletions=1),
    )

    assert build_footer(item) == (
        "Pull Request #42, Merged, 1 comment, 1 commit, 4 files changed, 120 additions, 1 deletion"
    )


def test_issue_footer_with_closer_and_lock() -> None:
    item = ResolvedItem(
        issue=_issue(
            state="closed",
            state_reason="completed",
            comment_count=0,
            reaction_count=1,
            closed_by="bob",
            locked=True,
            lock_reason="resolved",
        )
    )

    assert build_footer(item) == "Issue #42, Closed as Completed, 0 comments, 1 reaction, Closed by @bob, Locked as resolved"


def test_open_issue_footer_omits_closer() -> None:
    item = ResolvedItem(issue=_issue(comment_count=5, reaction_count=2, closed_by="bob", locked=True))

    assert build_footer(item) == "Issue #42, Open, 5 comments, 2 reactions, Locked"


def test_format_summary_projects_issue_fields() -> None:
    issue = _issue()
    summary = format_summary(ResolvedItem(issue=issue))

    assert summary.title == "Crash when reconnecting"
    assert summary.author_name == "alice"
    assert summary.author_icon_url == issue.avatar_url
    assert summary.author_url == issue.avatar_url
    assert summary.url == issue.html_url
    assert summary.timestamp == issue.created_at
    assert summary.description == "TL;DR: reconnect loop crashes"
    assert summary.color == StateColor.OPEN.value
    assert summary.footer.startswith("Issue #42, Open")


def test_format_summary_respects_description_limit() -> None:
    summary = format_summary(ResolvedItem(issue=_issue(body="x" * 50)), description_limit=10)

    assert summary.description == "x" * 10
