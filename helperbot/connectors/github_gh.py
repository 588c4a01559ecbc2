"""GitHub issue lookups backed by the gh CLI."""

from __future__ import annotations

import json
import logging
import re
import subprocess
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from helperbot.connectors.base import IssueLookupClient, IssueLookupError, IssueNotFoundError, RateLimitError
from helperbot.models import IssueDetails, PullRequestDetails

_RATE_LIMIT_RE = re.compile(r"(?:api|secondary) rate limit|HTTP 429", re.IGNORECASE)
_NOT_FOUND_RE = re.compile(r"HTTP 404|Not Found", re.IGNORECASE)
logger = logging.getLogger(__name__)


class GithubUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str
    avatar_url: str | None = None


class GithubReactions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0


class GithubIssue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    number: int
    title: str
    body: str | None = None
    user: GithubUser
    html_url: str
    created_at: datetime
    state: str = "open"
    state_reason: str | None = None
    comments: int = 0
    reactions: GithubReactions = Field(default_factory=GithubReactions)
    locked: bool = False
    active_lock_reason: str | None = None
    closed_by: GithubUser | None = None


class GithubPull(BaseModel):
    model_config = ConfigDict(extra="ignore")

    merged: bool = False
    draft: bool = False
    commits: int = 0
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0


class GithubGhClient:
    """Thin wrapper over ``gh api`` that classifies failures."""

    def __init__(self, gh_bin: str = "gh") -> None:
        self.gh_bin = gh_bin

    def api_json(self, endpoint: str) -> Any:
        cmd = [self.gh_bin, "api", endpoint.lstrip("/"), "-X", "GET", "-H", "Accept: application/vnd.github+json"]
        try:
            proc = subprocess.run(cmd, text=True, capture_output=True, check=False)
        except OSError as exc:
            raise IssueLookupError(f"unable to run {self.gh_bin}: {exc}") from exc

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            if _RATE_LIMIT_RE.search(stderr):
                raise RateLimitError(f"gh api rate limited: {endpoint}\n{stderr}", reset_at=self.get_rate_limit_reset_at())
            if _NOT_FOUND_RE.search(stderr):
                raise IssueNotFoundError(f"gh api not found: {endpoint}")
            raise IssueLookupError(f"gh api failed: {' '.join(cmd)}\n{stderr}")

        output = proc.stdout.strip()
        if not output:
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise IssueLookupError(f"gh api returned invalid JSON for {endpoint}") from exc

    def get_rate_limit_reset_at(self) -> datetime | None:
        cmd = [self.gh_bin, "api", "rate_limit", "-X", "GET", "-H", "Accept: application/vnd.github+json"]
        try:
            proc = subprocess.run(cmd, text=True, capture_output=True, check=False)
        except OSError:
            return None
        if proc.returncode != 0:
            return None
        payload = proc.stdout.strip()
        if not payload:
            return None
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            return None

        reset_epochs: list[int] = []
        resources = data.get("resources")
        if isinstance(resources, dict):
            for resource in resources.values():
                if not isinstance(resource, dict):
                    continue
                remaining = resource.get("remaining")
                reset = resource.get("reset")
                if isinstance(remaining, int) and remaining <= 0 and isinstance(reset, int):
                    reset_epochs.append(reset)
        rate = data.get("rate")
        if isinstance(rate, dict):
            remaining = rate.get("remaining")
            reset = rate.get("reset")
            if isinstance(remaining, int) and remaining <= 0 and isinstance(reset, int):
                reset_epochs.append(reset)
        if not reset_epochs:
            return None
        return datetime.fromtimestamp(max(reset_epochs), UTC)


class GithubGhLookupClient(IssueLookupClient):
    def __init__(self, gh_bin: str = "gh") -> None:
        self.client = GithubGhClient(gh_bin=gh_bin)

    def get_issue(self, owner: str, repo: str, number: int) -> IssueDetails:
        payload = self.client.api_json(f"repos/{owner}/{repo}/issues/{number}")
        logger.debug("Fetched issue %s/%s#%s", owner, repo, number)
        issue = _validate(GithubIssue, payload, f"issue #{number}")
        return IssueDetails(
            number=issue.number,
            title=issue.title,
            author=issue.user.login,
            avatar_url=issue.user.avatar_url,
            html_url=issue.html_url,
            created_at=issue.created_at,
            body=issue.body,
            state=issue.state,
            state_reason=issue.state_reason,
            comment_count=issue.comments,
            reaction_count=issue.reactions.total_count,
            locked=issue.locked,
            lock_reason=issue.active_lock_reason,
            closed_by=issue.closed_by.login if issue.closed_by else None,
        )

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        payload = self.client.api_json(f"repos/{owner}/{repo}/pulls/{number}")
        logger.debug("Fetched pull request %s/%s#%s", owner, repo, number)
        pull = _validate(GithubPull, payload, f"pull request #{number}")
        return PullRequestDetails(
            merged=pull.merged,
            draft=pull.draft,
            commits=pull.commits,
            changed_files=pull.changed_files,
            additions=pull.additions,
            deletions=pull.deletions,
        )


def _validate(model: type[BaseModel], payload: Any, label: str) -> Any:
    if not isinstance(payload, dict):
        raise IssueLookupError(f"unexpected payload for {label}")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise IssueLookupError(f"malformed payload for {label}: {exc.error_count()} errors") from exc
