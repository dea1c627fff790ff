"""
On-disk JSON preference ledger.

One file per (viewer_id, target_id) key under the configured directory
(`.cache/innomatch/ledger/` by default):
- Paths are hashed (SHA-256) ids to avoid filesystem path issues:
  `<dir>/<sha(viewer)>/<sha(target)>.json`.
- Writes to different keys touch different files, so they never interfere, even
  across ledger instances or processes.
- Every write goes through its own temporary file + atomic replace; concurrent writes
  to the same key resolve as last-write-wins.
- A missing file means "no disposition recorded"; an unreadable or corrupt file raises
  `LedgerUnavailable` (it is never silently treated as neutral).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from hashlib import sha256
from pathlib import Path

from pydantic import ValidationError

from innomatch.domain.errors import LedgerUnavailable
from innomatch.domain.models import Disposition, DispositionRecord
from innomatch.ledger.base import Clock, newest_first, upsert_record, utc_now, validate_disposition_key

logger = logging.getLogger(__name__)


def _digest(value: str) -> str:
    return sha256(value.encode("utf-8")).hexdigest()


class JsonFilePreferenceLedger:
    """A filesystem-backed ledger keyed by (viewer_id, target_id)."""

    def __init__(self, base_dir: Path, *, clock: Clock = utc_now):
        self._base_dir = Path(base_dir)
        self._clock = clock

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _viewer_dir(self, viewer_id: str) -> Path:
        return self._base_dir / _digest(viewer_id)

    def _record_path(self, viewer_id: str, target_id: str) -> Path:
        return self._viewer_dir(viewer_id) / f"{_digest(target_id)}.json"

    def _read_record(self, path: Path, viewer_id: str, operation: str) -> DispositionRecord | None:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return DispositionRecord.model_validate({**raw, "viewer_id": viewer_id})
        except FileNotFoundError:
            return None
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.error("Ledger file %s unreadable for viewer %s: %s", path, viewer_id, e)
            raise LedgerUnavailable(viewer_id, operation, str(e)) from e

    def _read_all(self, viewer_id: str, operation: str) -> list[DispositionRecord]:
        viewer_dir = self._viewer_dir(viewer_id)
        try:
            paths = sorted(viewer_dir.glob("*.json")) if viewer_dir.is_dir() else []
        except OSError as e:
            raise LedgerUnavailable(viewer_id, operation, str(e)) from e
        records = [self._read_record(p, viewer_id, operation) for p in paths]
        return [r for r in records if r is not None]

    def _write_record(self, path: Path, record: DispositionRecord) -> None:
        payload = record.model_dump(mode="json", exclude={"viewer_id"})
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                json.dump(payload, tmp, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("Ledger write to %s failed for viewer %s: %s", path, record.viewer_id, e)
            raise LedgerUnavailable(record.viewer_id, "save", str(e)) from e

    def save(self, viewer_id: str, target_id: str, disposition: Disposition) -> DispositionRecord:
        """Upsert a disposition; repeating the same call is harmless."""
        validate_disposition_key(viewer_id, target_id, disposition)
        path = self._record_path(viewer_id, target_id)
        existing = self._read_record(path, viewer_id, "save")
        record = upsert_record(existing, viewer_id, target_id, disposition, self._clock())
        self._write_record(path, record)
        logger.info("Recorded %s: %s -> %s", disposition, viewer_id, target_id)
        return record

    def query(self, viewer_id: str) -> dict[str, Disposition]:
        return {r.target_id: r.disposition for r in self._read_all(viewer_id, "query")}

    def history(self, viewer_id: str) -> list[DispositionRecord]:
        return newest_first(self._read_all(viewer_id, "history"))
