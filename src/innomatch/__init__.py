"""InnoMatch: deterministic compatibility scoring and ranking for innovator profiles."""

__version__ = "0.1.0"
