"""In-process preference ledger (tests, demos, single-process callers)."""

from __future__ import annotations

import logging
import threading

from innomatch.domain.models import Disposition, DispositionRecord
from innomatch.ledger.base import Clock, newest_first, upsert_record, utc_now, validate_disposition_key

logger = logging.getLogger(__name__)


class InMemoryPreferenceLedger:
    def __init__(self, *, clock: Clock = utc_now):
        self._clock = clock
        self._records: dict[tuple[str, str], DispositionRecord] = {}
        self._lock = threading.Lock()

    def save(self, viewer_id: str, target_id: str, disposition: Disposition) -> DispositionRecord:
        validate_disposition_key(viewer_id, target_id, disposition)
        with self._lock:
            key = (viewer_id, target_id)
            record = upsert_record(self._records.get(key), viewer_id, target_id, disposition, self._clock())
            self._records[key] = record
        logger.info("Recorded %s: %s -> %s", disposition, viewer_id, target_id)
        return record

    def query(self, viewer_id: str) -> dict[str, Disposition]:
        with self._lock:
            return {t: r.disposition for (v, t), r in self._records.items() if v == viewer_id}

    def history(self, viewer_id: str) -> list[DispositionRecord]:
        with self._lock:
            records = [r for (v, _), r in self._records.items() if v == viewer_id]
        return newest_first(records)
