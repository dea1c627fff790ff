"""
Profile catalog loader.

The catalog is a local JSON file (default: `data/catalogs/profiles.json`) containing a
list of innovator profiles. It stands in for the external profile store: the ranking
pipeline only needs `get_profile` (the viewer) and `get_candidate_pool` (everyone else).

Candidate records are returned as raw mappings on purpose: a single malformed record
must not break the whole pool, so validation happens per candidate in the ranker via
`coerce_profile`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from innomatch.core.env import resolve_project_path
from innomatch.domain.errors import MalformedCandidate, ProfileNotFound
from innomatch.domain.models import Profile

logger = logging.getLogger(__name__)

CandidateRecord = Profile | Mapping[str, Any]


class ProfileStore(Protocol):
    def get_profile(self, profile_id: str) -> Profile: ...

    def get_candidate_pool(self, viewer_id: str) -> list[CandidateRecord]: ...


def _record_id(record: Any) -> str | None:
    if isinstance(record, Mapping):
        value = record.get("id")
        return str(value) if value is not None else None
    return getattr(record, "id", None)


def coerce_profile(record: CandidateRecord) -> Profile:
    """Validate one raw record into a `Profile` (raises `MalformedCandidate`)."""
    if isinstance(record, Profile):
        return record
    if not isinstance(record, Mapping):
        raise MalformedCandidate(None, f"expected a mapping, got {type(record).__name__}")
    try:
        return Profile.model_validate(dict(record))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise MalformedCandidate(_record_id(record), problems) from e


def load_profile_records(path: str | Path) -> list[dict[str, Any]]:
    """Load the raw profile records from a catalog JSON file (a list of objects)."""
    resolved = resolve_project_path(path)
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Profile catalog {resolved} could not be read: {e.strerror or e}") from e
    payload = json.loads(text)
    if isinstance(payload, Mapping):
        payload = payload.get("profiles", [])
    if not isinstance(payload, list):
        raise ValueError(f"Invalid profile catalog {resolved}; expected a list of profiles.")
    records = [r for r in payload if isinstance(r, dict)]
    if len(records) != len(payload):
        logger.warning("Ignored %d non-object entries in %s", len(payload) - len(records), resolved)
    return records


class JsonProfileStore:
    """Read-only profile store backed by a JSON catalog file."""

    def __init__(self, path: str | Path):
        self._path = resolve_project_path(path)
        self._records: list[dict[str, Any]] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[dict[str, Any]]:
        if self._records is None:
            self._records = load_profile_records(self._path)
        return self._records

    def get_profile(self, profile_id: str) -> Profile:
        for record in self._load():
            if _record_id(record) == profile_id:
                return coerce_profile(record)
        raise ProfileNotFound(profile_id)

    def get_candidate_pool(self, viewer_id: str) -> list[CandidateRecord]:
        """All profiles other than the viewer (unvalidated)."""
        return [r for r in self._load() if _record_id(r) != viewer_id]
