"""
Error taxonomy.

- `MalformedCandidate`: a candidate profile could not be validated; skipped per candidate.
- `LedgerUnavailable`: the preference ledger could not be read or written; always propagated.
- `ProfileNotFound`: the viewer id is unknown to the profile store.

An empty ranking (viewer without tags) is not an error, and an out-of-range score is
clamped and logged rather than raised.
"""

from __future__ import annotations


class InnoMatchError(Exception):
    """Base class for errors raised by the matching engine and its collaborators."""


class MalformedCandidate(InnoMatchError, ValueError):
    def __init__(self, candidate_id: str | None, reason: str):
        self.candidate_id = candidate_id
        self.reason = reason
        super().__init__(f"Malformed candidate {candidate_id or '<unknown>'}: {reason}")


class LedgerUnavailable(InnoMatchError):
    """Raised when dispositions cannot be determined or stored. Safe to retry."""

    retryable = True

    def __init__(self, viewer_id: str, operation: str, detail: str = ""):
        self.viewer_id = viewer_id
        self.operation = operation
        msg = f"Preference ledger {operation} failed for viewer {viewer_id}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(f"{msg} (retryable)")


class ProfileNotFound(InnoMatchError, LookupError):
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Profile '{profile_id}' not found")
