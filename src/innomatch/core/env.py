"""
Environment + project-root helpers.

The CLI and tests may start from any working directory, so relative settings paths
(`data/catalogs/profiles.json`, `.cache/innomatch/ledger`) are resolved against the
project root rather than the CWD. The root is `INNOMATCH_PROJECT_ROOT` when set,
otherwise the nearest parent holding a `.env`, a `.git`, or the `src/innomatch` + `data`
pair. A `.env` found there is loaded once without overriding real env vars.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ROOT_ENV_VAR = "INNOMATCH_PROJECT_ROOT"


def _is_project_root(path: Path) -> bool:
    return (
        (path / ".env").is_file()
        or (path / ".git").exists()
        or ((path / "src" / "innomatch").is_dir() and (path / "data").is_dir())
    )


def find_project_root(start: Path) -> Path | None:
    """Nearest directory at or above `start` that looks like the repo root."""
    start = start.resolve()
    return next((p for p in (start, *start.parents) if _is_project_root(p)), None)


@lru_cache
def get_project_root() -> Path:
    """Return the project root directory (cached)."""
    override = os.getenv(ROOT_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    # Fall back to this file's checkout when launched from outside the repo.
    return find_project_root(Path.cwd()) or find_project_root(Path(__file__).parent) or Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the root `.env` once; returns its path, or None when there is none."""
    env_path = get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a possibly-relative path against the project root."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
