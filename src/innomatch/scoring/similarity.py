# src/innomatch/scoring/similarity.py
"""
Pairwise similarity score (viewer vs. candidate).

The score is a fixed, human-auditable weighted sum of three signals:
- tag overlap: |shared| / max(|viewer tags|, |candidate tags|)
- type: same profile type or not
- location: same location (case-insensitive, both present) or not

    score = round(100 * (tag_similarity * w_tags + type_score * w_type + location_score * w_location))

Weights and sub-scores come from `Settings.scoring` (defaults: 0.5/0.3/0.2, type 1.0/0.5,
location 1.0/0.3). No randomness, no I/O.
"""

from __future__ import annotations

from innomatch.config.settings import ScoringSettings, Settings, get_settings
from innomatch.domain.models import Profile
from innomatch.features.tags import TagSet
from innomatch.scoring.composite import clamp01, clamp_score, round_half_up


def same_location(a: str | None, b: str | None) -> bool:
    """True when both locations are present and equal ignoring case and outer whitespace."""
    if not a or not b:
        return False
    left, right = a.strip().lower(), b.strip().lower()
    return bool(left) and left == right


def tag_similarity(viewer_tags: TagSet, candidate_tags: TagSet) -> float:
    denominator = max(len(viewer_tags), len(candidate_tags))
    if denominator <= 0:
        return 0.0
    return len(viewer_tags.keys & candidate_tags.keys) / denominator


def raw_score(viewer: Profile, candidate: Profile, scoring: ScoringSettings) -> tuple[float, list[str]]:
    """Unrounded 0..100 score plus shared tags (candidate spelling, candidate order)."""
    viewer_tags = TagSet(viewer.tags)
    candidate_tags = TagSet(candidate.tags)
    shared = candidate_tags.intersection_originals(viewer_tags)

    tags_component = clamp01(tag_similarity(viewer_tags, candidate_tags))
    type_component = scoring.type_score.same if viewer.type == candidate.type else scoring.type_score.different
    location_component = (
        scoring.location_score.same
        if same_location(viewer.location, candidate.location)
        else scoring.location_score.different
    )

    weights = scoring.weights
    total = (
        tags_component * weights.tags
        + type_component * weights.type
        + location_component * weights.location
    )
    return 100 * total, shared


def score_similarity(
    viewer: Profile, candidate: Profile, *, settings: Settings | None = None
) -> tuple[int, list[str]]:
    """Return `(score, shared_tags)` for a viewer/candidate pair; score is an int in [0, 100]."""
    settings = settings or get_settings()
    raw, shared = raw_score(viewer, candidate, settings.scoring)
    score = clamp_score(round_half_up(raw), context=f"{viewer.id}->{candidate.id}")
    return score, shared
