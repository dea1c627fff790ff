"""
Preference ledger contract.

A ledger stores one disposition (`like` / `dislike`) per (viewer_id, target_id) key.
Writes are upserts: the last write for a key wins and nothing is ever deleted.
Absent keys mean "neutral" to the ranker; a failed read must raise
`LedgerUnavailable` instead of returning an empty mapping.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Protocol

from innomatch.domain.models import DISPOSITIONS, Disposition, DispositionRecord

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PreferenceLedger(Protocol):
    def save(self, viewer_id: str, target_id: str, disposition: Disposition) -> DispositionRecord: ...

    def query(self, viewer_id: str) -> dict[str, Disposition]: ...

    def history(self, viewer_id: str) -> list[DispositionRecord]: ...


def validate_disposition_key(viewer_id: str, target_id: str, disposition: str) -> None:
    """Reject invalid writes before they reach storage."""
    if not viewer_id or not target_id:
        raise ValueError("viewer_id and target_id are required")
    if viewer_id == target_id:
        raise ValueError("A viewer cannot record a disposition about themselves")
    if disposition not in DISPOSITIONS:
        raise ValueError(f"Invalid disposition '{disposition}'; expected one of {', '.join(DISPOSITIONS)}")


def upsert_record(
    existing: DispositionRecord | None,
    viewer_id: str,
    target_id: str,
    disposition: Disposition,
    now: datetime,
) -> DispositionRecord:
    if existing is None:
        return DispositionRecord(
            viewer_id=viewer_id,
            target_id=target_id,
            disposition=disposition,
            created_at=now,
            updated_at=now,
        )
    return existing.model_copy(update={"disposition": disposition, "updated_at": max(now, existing.created_at)})


def newest_first(records: list[DispositionRecord]) -> list[DispositionRecord]:
    return sorted(records, key=lambda r: (r.updated_at, r.created_at), reverse=True)
