"""Rich summary formatting for resolved issues and pull requests."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from helperbot.models import DESCRIPTION_LIMIT, ItemKind, ResolvedItem, Summary

NO_DESCRIPTION = "*No description provided.*"


class StateColor(IntEnum):
    OPEN = 0x238636
    CLOSED = 0xDA3633
    MERGED = 0x8957E5
    DRAFT = 0x6E7681
    FALLBACK = 0xF1C40F


Predicate = Callable[[ResolvedItem], bool]


def _is_open(item: ResolvedItem) -> bool:
    return item.issue.state == "open"


def _is_closed(item: ResolvedItem) -> bool:
    return item.issue.state == "closed"


def _is_merged(item: ResolvedItem) -> bool:
    return item.pull_request is not None and item.pull_request.merged


def _is_draft(item: ResolvedItem) -> bool:
    return item.pull_request is not None and item.pull_request.draft


def _closed_as(reason: str) -> Predicate:
    return lambda item: _is_closed(item) and item.issue.state_reason == reason


# Evaluated top to bottom, first match wins.
_PULL_REQUEST_RULES: list[tuple[Predicate, StateColor, str]] = [
    (lambda item: _is_closed(item) and _is_merged(item), StateColor.MERGED, "Merged"),
    (_is_closed, StateColor.CLOSED, "Closed"),
    (lambda item: _is_open(item) and _is_draft(item), StateColor.DRAFT, "Draft"),
    (_is_open, StateColor.OPEN, "Open"),
]

_ISSUE_COLOR_RULES: list[tuple[Predicate, StateColor]] = [
    (_closed_as("completed"), StateColor.MERGED),
    (_is_closed, StateColor.DRAFT),
    (_is_open, StateColor.OPEN),
]

_ISSUE_LABEL_RULES: list[tuple[Predicate, str]] = [
    (_closed_as("completed"), "Closed as Completed"),
    (_closed_as("not_planned"), "Closed as Not Planned"),
    (_is_closed, "Closed"),
    (_is_open, "Open"),
]


def state_color(item: ResolvedItem) -> StateColor:
    if item.kind == ItemKind.PULL_REQUEST:
        rules = [(predicate, color) for predicate, color, _ in _PULL_REQUEST_RULES]
    else:
        rules = _ISSUE_COLOR_RULES
    for predicate, color in rules:
        if predicate(item):
            return color
    return StateColor.FALLBACK


def state_label(item: ResolvedItem) -> str:
    if item.kind == ItemKind.PULL_REQUEST:
        rules = [(predicate, label) for predicate, _, label in _PULL_REQUEST_RULES]
    else:
        rules = _ISSUE_LABEL_RULES
    for predicate, label in rules:
        if predicate(item):
            return label
    return item.issue.state


def pluralize(count: int, noun: str, plural: str | None = None) -> str:
    word = noun if count == 1 else (plural or f"{noun}s")
    return f"{count:,} {word}"


def shorten_description(body: str | None, limit: int = DESCRIPTION_LIMIT) -> str:
    """Last non-blank line of the body, hard-cut to ``limit`` code points."""
    lines = [line for line in (body or "").splitlines() if line.strip()]
    description = lines[-1].strip() if lines else NO_DESCRIPTION
    return description[:limit]


def build_footer(item: ResolvedItem) -> str:
    issue = item.issue
    pull = item.pull_request
    if pull is not None:
        parts = [
            f"Pull Request #{issue.number}",
            state_label(item),
            pluralize(issue.comment_count, "comment"),
            pluralize(pull.commits, "commit"),
            pluralize(pull.changed_files, "file") + " changed",
            pluralize(pull.additions, "addition"),
            pluralize(pull.deletions, "deletion"),
        ]
        return ", ".join(parts)

    parts = [
        f"Issue #{issue.number}",
        state_label(item),
        pluralize(issue.comment_count, "comment"),
        pluralize(issue.reaction_count, "reaction"),
    ]
    if _is_closed(item) and issue.closed_by:
        parts.append(f"Closed by @{issue.closed_by}")
    if issue.locked:
        parts.append(f"Locked as {issue.lock_reason}" if issue.lock_reason else "Locked")
    return ", ".join(parts)


def format_summary(item: ResolvedItem, *, description_limit: int = DESCRIPTION_LIMIT) -> Summary:
    issue = item.issue
    return Summary(
        title=issue.title,
        author_name=issue.author,
        author_icon_url=issue.avatar_url,
        author_url=issue.avatar_url,
        color=int(state_color(item)),
        description=shorten_description(issue.body, description_limit),
        timestamp=issue.created_at,
        url=issue.html_url,
        footer=build_footer(item),
    )
