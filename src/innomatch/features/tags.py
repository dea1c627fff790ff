# src/innomatch/features/tags.py
"""
Tag normalization.

Profiles carry free-text tags ("AI", "ai ", "Health"). Comparison is case-insensitive,
but the original spelling is kept for display. `TagSet` stores one entry per
normalized key (lower-cased, stripped) with the first original spelling as payload,
in the order the tags were given.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def normalize_tag(tag: str) -> str:
    """Return the comparison key for a single tag."""
    return tag.strip().lower()


def normalize_tags(tags: Iterable[str] | None) -> frozenset[str]:
    """Fold a raw tag collection into a case-insensitive, duplicate-free set.

    Blank tags are dropped. Normalizing an already-normalized set returns an equal set.
    """
    return frozenset(key for key in (normalize_tag(t) for t in (tags or ())) if key)


class TagSet:
    """A case-insensitive tag set that remembers the original spelling of each tag."""

    __slots__ = ("_originals",)

    def __init__(self, tags: Iterable[str] | None = None):
        self._originals: dict[str, str] = {}
        for tag in tags or ():
            key = normalize_tag(tag)
            if key and key not in self._originals:
                self._originals[key] = tag

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self._originals)

    @property
    def originals(self) -> list[str]:
        return list(self._originals.values())

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalize_tag(tag) in self._originals

    def __len__(self) -> int:
        return len(self._originals)

    def __iter__(self) -> Iterator[str]:
        return iter(self._originals.values())

    def __bool__(self) -> bool:
        return bool(self._originals)

    def __repr__(self) -> str:
        return f"TagSet({self.originals!r})"

    def intersection_originals(self, other: "TagSet") -> list[str]:
        """Tags of `self` also present in `other`, in `self`'s spelling and order."""
        return [original for key, original in self._originals.items() if key in other._originals]
