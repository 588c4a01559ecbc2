"""Assembly of the single reply sent for one message."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from helperbot.models import MAX_REFERENCES, AggregateResponse, OutgoingMessage, Summary


def missing_items_text(numbers: Sequence[int]) -> str | None:
    refs = [f"#{number}" for number in numbers]
    if not refs:
        return None
    if len(refs) == 1:
        return f"Issue {refs[0]} was not found."
    if len(refs) == 2:
        return f"Issues {refs[0]} and {refs[1]} were not found."
    return f"Issues {', '.join(refs[:-1])}, and {refs[-1]} were not found."


def build_aggregate_response(summaries: Sequence[Summary], missing: Sequence[int]) -> AggregateResponse:
    return AggregateResponse(
        summaries=list(summaries)[:MAX_REFERENCES],
        missing_text=missing_items_text(missing),
    )


def to_outgoing_message(response: AggregateResponse) -> OutgoingMessage:
    return OutgoingMessage(
        content=response.missing_text,
        embeds=list(response.summaries),
        suppress_mentions=True,
    )


def rate_limit_notice(reset_at: datetime | None) -> OutgoingMessage:
    if reset_at is None:
        return OutgoingMessage(content="Rate limit reached. No reset time provided.")
    if reset_at.tzinfo is not None:
        reset_at = reset_at.astimezone(UTC)
    return OutgoingMessage(content=f"Rate limit reached. Resets at {reset_at:%Y-%m-%d %H:%M:%S} UTC.")
