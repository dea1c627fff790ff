from __future__ import annotations

# This module is the "orchestrator" for the matching pipeline.
# It wires together:
# - domain input (viewer Profile + candidate pool + dispositions)
# - per-candidate scoring (similarity score, shared tags, highlight)
# - preference merge (drop dislikes, promote likes)
# - final ranking (RankingResult)
#
# `rank` is pure: no I/O, no hidden state. `recommend` performs the two external reads
# (profile store, preference ledger) once per call and delegates to `rank`.

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from innomatch.catalog.loader import CandidateRecord, JsonProfileStore, ProfileStore, coerce_profile
from innomatch.config.settings import Settings, get_settings
from innomatch.core.env import resolve_project_path
from innomatch.domain.errors import LedgerUnavailable, MalformedCandidate
from innomatch.domain.models import Disposition, MatchResult, Profile, RankingResult
from innomatch.features.tags import normalize_tags
from innomatch.ledger.base import PreferenceLedger
from innomatch.ledger.file import JsonFilePreferenceLedger
from innomatch.ledger.memory import InMemoryPreferenceLedger
from innomatch.scoring.highlight import generate_highlight
from innomatch.scoring.similarity import score_similarity

logger = logging.getLogger(__name__)


@dataclass
class RankingStats:
    """Counters for one ranking run (reported in `RankingResult.meta`)."""

    candidates_seen: int = 0
    self_matches_skipped: int = 0
    malformed_skipped: int = 0
    scored: int = 0
    below_min_score: int = 0
    disliked_excluded: int = 0
    liked: int = 0
    returned: int = 0
    empty_viewer_tags: bool = False

    def as_dict(self) -> dict[str, int | bool]:
        return asdict(self)


def build_store(settings: Settings) -> ProfileStore:
    return JsonProfileStore(resolve_project_path(settings.catalog.path))


def build_ledger(settings: Settings) -> PreferenceLedger:
    if settings.ledger.backend == "memory":
        return InMemoryPreferenceLedger()
    return JsonFilePreferenceLedger(resolve_project_path(settings.ledger.dir))


def _scored_candidates(
    viewer: Profile,
    candidates: Iterable[CandidateRecord],
    *,
    settings: Settings,
    stats: RankingStats,
) -> list[MatchResult]:
    results: list[MatchResult] = []
    for record in candidates:
        stats.candidates_seen += 1
        try:
            candidate = coerce_profile(record)
        except MalformedCandidate as e:
            # One bad record must not abort the rest of the pool.
            stats.malformed_skipped += 1
            logger.warning("Skipping candidate for viewer %s: %s", viewer.id, e)
            continue
        if candidate.id == viewer.id:
            stats.self_matches_skipped += 1
            continue

        score, shared_tags = score_similarity(viewer, candidate, settings=settings)
        stats.scored += 1
        if score <= settings.scoring.min_score:
            stats.below_min_score += 1
            continue

        results.append(
            MatchResult(
                profile=candidate,
                score=score,
                shared_tags=shared_tags,
                highlight=generate_highlight(viewer, candidate, shared_tags),
            )
        )
    return results


def rank(
    viewer: Profile,
    candidates: Iterable[CandidateRecord],
    preferences: Mapping[str, Disposition] | None = None,
    *,
    settings: Settings | None = None,
    stats: RankingStats | None = None,
) -> list[MatchResult]:
    """Score, filter and order candidates for `viewer`; returns at most `ranking.top_n` matches.

    Order: liked candidates first, then neutral ones, each by descending score with
    ties kept in input order. Disliked candidates never appear.
    """
    settings = settings or get_settings()
    stats = stats if stats is not None else RankingStats()
    preferences = preferences or {}

    # A viewer without tags gets no matches (explicit product policy, not an error).
    if not normalize_tags(viewer.tags):
        stats.empty_viewer_tags = True
        logger.debug("Viewer %s has no tags; returning no matches", viewer.id)
        return []

    scored = _scored_candidates(viewer, candidates, settings=settings, stats=stats)

    liked: list[MatchResult] = []
    neutral: list[MatchResult] = []
    for match in scored:
        disposition = preferences.get(match.profile.id)
        if disposition == "dislike":
            stats.disliked_excluded += 1
        elif disposition == "like":
            liked.append(match.model_copy(update={"liked": True}))
        else:
            neutral.append(match)
    stats.liked = len(liked)

    # `sorted` is stable, so equal scores keep their input order.
    ordered = sorted(liked, key=lambda m: m.score, reverse=True) + sorted(
        neutral, key=lambda m: m.score, reverse=True
    )
    top = ordered[: settings.ranking.top_n]
    stats.returned = len(top)
    return top


def recommend(
    viewer_id: str,
    *,
    store: ProfileStore | None = None,
    ledger: PreferenceLedger | None = None,
    settings: Settings | None = None,
) -> RankingResult:
    """Fetch the viewer, pool and dispositions once each, then rank.

    Raises `ProfileNotFound` for unknown viewers and `LedgerUnavailable` when the
    dispositions cannot be read (the ranking is never computed on a guessed "neutral").
    """
    t0 = time.monotonic()
    timings_ms: dict[str, int] = {}

    settings = settings or get_settings()
    store = store or build_store(settings)
    ledger = ledger or build_ledger(settings)

    viewer = store.get_profile(viewer_id)
    pool = store.get_candidate_pool(viewer_id)
    timings_ms["load_pool"] = int((time.monotonic() - t0) * 1000)

    t_ledger = time.monotonic()
    try:
        preferences = ledger.query(viewer_id)
    except LedgerUnavailable:
        raise
    except Exception as e:
        raise LedgerUnavailable(viewer_id, "query", str(e)) from e
    timings_ms["ledger_query"] = int((time.monotonic() - t_ledger) * 1000)

    t_rank = time.monotonic()
    stats = RankingStats()
    results = rank(viewer, pool, preferences, settings=settings, stats=stats)
    timings_ms["rank"] = int((time.monotonic() - t_rank) * 1000)

    logger.info(
        "Ranked %d/%d candidates for %s (%d liked, %d disliked, %d malformed)",
        stats.returned,
        stats.candidates_seen,
        viewer_id,
        stats.liked,
        stats.disliked_excluded,
        stats.malformed_skipped,
    )

    return RankingResult(
        generated_at=datetime.now(ZoneInfo(settings.app.timezone)),
        viewer_id=viewer_id,
        results=results,
        meta={
            "stats": stats.as_dict(),
            "top_n": settings.ranking.top_n,
            "dispositions_known": len(preferences),
            "timings_ms": timings_ms,
        },
    )
