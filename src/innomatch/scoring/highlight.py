# src/innomatch/scoring/highlight.py
"""
Match highlight sentences.

A highlight is one human-readable sentence explaining why a candidate was
suggested. Rules are evaluated top-to-bottom and the first matching rule wins,
so the precedence is exactly the order of `HIGHLIGHT_RULES`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from innomatch.domain.models import Profile
from innomatch.scoring.similarity import same_location

STRONG_MATCH_MIN_SHARED = 3


def list_to_string(items: Sequence[str]) -> str:
    """Render a natural-language list: "", "A", "A and B", "A, B, and C"."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


@dataclass(frozen=True)
class HighlightContext:
    viewer: Profile
    candidate: Profile
    shared_tags: list[str]

    @property
    def same_type(self) -> bool:
        return self.viewer.type == self.candidate.type

    @property
    def same_location(self) -> bool:
        return same_location(self.viewer.location, self.candidate.location)

    @property
    def shared(self) -> str:
        return list_to_string(self.shared_tags)


@dataclass(frozen=True)
class HighlightRule:
    name: str
    applies: Callable[[HighlightContext], bool]
    render: Callable[[HighlightContext], str]


HIGHLIGHT_RULES: tuple[HighlightRule, ...] = (
    HighlightRule(
        "same_type_shared_tags",
        lambda c: c.same_type and bool(c.shared_tags),
        lambda c: f"Both {c.viewer.type}s with shared interests in {c.shared}.",
    ),
    HighlightRule(
        "same_type",
        lambda c: c.same_type,
        lambda c: f"Fellow {c.viewer.type} in {c.candidate.display_organization}.",
    ),
    HighlightRule(
        "strong_match",
        lambda c: len(c.shared_tags) >= STRONG_MATCH_MIN_SHARED,
        lambda c: f"Strong match with {c.candidate.display_name} across multiple areas: {c.shared}.",
    ),
    HighlightRule(
        "same_location_shared_tags",
        lambda c: c.same_location and bool(c.shared_tags),
        lambda c: f"Based in {c.candidate.location} with shared interests in {c.shared}.",
    ),
    HighlightRule(
        "same_location",
        lambda c: c.same_location,
        lambda c: f"Located in {c.candidate.location} with complementary expertise.",
    ),
    HighlightRule(
        "shared_tags",
        lambda c: bool(c.shared_tags),
        lambda c: f"{c.candidate.display_name} shares your passion for {c.shared}.",
    ),
    HighlightRule(
        "default",
        lambda c: True,
        lambda c: f"{c.candidate.display_name} works in {c.candidate.display_organization} "
        "with complementary expertise.",
    ),
)


def matching_rule(ctx: HighlightContext) -> HighlightRule:
    """Return the first rule that applies (the last rule always does)."""
    return next(rule for rule in HIGHLIGHT_RULES if rule.applies(ctx))


def generate_highlight(viewer: Profile, candidate: Profile, shared_tags: Sequence[str]) -> str:
    ctx = HighlightContext(viewer=viewer, candidate=candidate, shared_tags=list(shared_tags))
    return matching_rule(ctx).render(ctx)
