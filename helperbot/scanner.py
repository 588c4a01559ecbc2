"""Extraction of ``##<number>`` references from chat message text."""

from __future__ import annotations

import re

from helperbot.models import MAX_REFERENCES, ReferenceCandidate

# ASCII digits only; a run longer than 10 digits is not a reference at all.
_REFERENCE_RE = re.compile(r"##([0-9]{1,10})(?![0-9])")


def scan_references(text: str, limit: int = MAX_REFERENCES) -> list[ReferenceCandidate]:
    """Return the first ``limit`` references in document order; ``limit`` is capped at five."""
    limit = min(limit, MAX_REFERENCES)
    if not text or limit <= 0:
        return []

    candidates: list[ReferenceCandidate] = []
    for match in _REFERENCE_RE.finditer(text):
        candidates.append(ReferenceCandidate(number=int(match.group(1)), position=len(candidates)))
        if len(candidates) >= limit:
            break
    return candidates
