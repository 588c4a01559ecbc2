"""Core Pydantic domain models for the helper bot."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_REFERENCES = 5
DESCRIPTION_LIMIT = 200


class ItemKind(str, Enum):
    ISSUE = "issue"
    PULL_REQUEST = "pull_request"


class OutcomeKind(str, Enum):
    FOUND = "found"
    MISSING = "missing"
    ERRORED = "errored"
    RATE_LIMITED = "rate_limited"


class ReferenceCandidate(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    number: int = Field(ge=0, le=9_999_999_999)
    position: int = Field(ge=0)


class IssueDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")

    number: int
    title: str
    author: str
    avatar_url: str | None = None
    html_url: str
    created_at: datetime
    body: str | None = None
    state: str = "open"
    state_reason: str | None = None
    comment_count: int = 0
    reaction_count: int = 0
    locked: bool = False
    lock_reason: str | None = None
    closed_by: str | None = None


class PullRequestDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")

    merged: bool = False
    draft: bool = False
    commits: int = 0
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0


class ResolvedItem(BaseModel):
    """An issue, optionally extended with the pull request view of the same number."""

    model_config = ConfigDict(extra="forbid")

    issue: IssueDetails
    pull_request: PullRequestDetails | None = None

    @property
    def kind(self) -> ItemKind:
        if self.pull_request is None:
            return ItemKind.ISSUE
        return ItemKind.PULL_REQUEST

    @property
    def number(self) -> int:
        return self.issue.number


class ResolutionOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: OutcomeKind
    number: int | None = None
    item: ResolvedItem | None = None
    reset_at: datetime | None = None

    @classmethod
    def found(cls, item: ResolvedItem) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.FOUND, number=item.number, item=item)

    @classmethod
    def missing(cls, number: int) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.MISSING, number=number)

    @classmethod
    def errored(cls, number: int) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.ERRORED, number=number)

    @classmethod
    def rate_limited(cls, number: int, reset_at: datetime | None) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.RATE_LIMITED, number=number, reset_at=reset_at)


class ResolutionResult(BaseModel):
    """Outcomes in candidate order; when ``rate_limited`` is set the batch was aborted."""

    model_config = ConfigDict(extra="forbid")

    outcomes: list[ResolutionOutcome] = Field(default_factory=list)
    rate_limited: ResolutionOutcome | None = None

    @property
    def found_items(self) -> list[ResolvedItem]:
        return [o.item for o in self.outcomes if o.kind == OutcomeKind.FOUND and o.item is not None]

    @property
    def missing_numbers(self) -> list[int]:
        return [o.number for o in self.outcomes if o.kind == OutcomeKind.MISSING and o.number is not None]


class Summary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    author_name: str
    author_icon_url: str | None = None
    author_url: str | None = None
    color: int
    description: str
    timestamp: datetime
    url: str
    footer: str


class AggregateResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    summaries: list[Summary] = Field(default_factory=list, max_length=MAX_REFERENCES)
    missing_text: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.summaries and not self.missing_text


class OutgoingMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str | None = None
    embeds: list[Summary] = Field(default_factory=list)
    suppress_mentions: bool = True


class MessageEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    channel_id: str
    message_id: str
    author_id: str | None = None
    content: str = ""


class TagHistory(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str
    aliases: list[str] = Field(default_factory=list)
    author_id: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("content")
    @classmethod
    def _content_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("tag content must not be empty")
        return value


class Tag(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    history: list[TagHistory] = Field(default_factory=list, min_length=1)

    @property
    def current(self) -> TagHistory:
        return self.history[-1]

    @property
    def content(self) -> str:
        return self.current.content

    @property
    def aliases(self) -> list[str]:
        return self.current.aliases
