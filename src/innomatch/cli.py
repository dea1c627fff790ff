"""
InnoMatch CLI entrypoint.

This CLI is intended for quick local demos and debugging against the JSON profile
catalog and the configured preference ledger. It delegates all matching logic to
`innomatch.recommender.rank.recommend`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from innomatch.config.settings import get_settings
from innomatch.core.logging import configure_logging
from innomatch.domain.errors import InnoMatchError
from innomatch.recommender.rank import build_ledger, build_store, recommend


def _cmd_matches(args: argparse.Namespace) -> int:
    """Handle the `matches` subcommand."""
    settings = get_settings()
    if args.top_n is not None:
        ranking = settings.ranking.model_copy(update={"top_n": int(args.top_n)})
        settings = settings.model_copy(update={"ranking": ranking})

    result = recommend(args.viewer_id, store=build_store(settings), ledger=build_ledger(settings), settings=settings)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    if not result.results:
        print("No matches found.")
        return 0

    print(f"Generated at: {result.generated_at.isoformat()}")
    print(f"Top matches for {result.viewer_id}:")
    for i, match in enumerate(result.results, start=1):
        profile = match.profile
        marker = " [liked]" if match.liked else ""
        print(f"{i:>2}. {profile.display_name} ({profile.type}) score={match.score}{marker}")
        print(f"    {match.highlight}")
        if match.shared_tags:
            print(f"    shared: {', '.join(match.shared_tags)}")
    return 0


def _cmd_disposition(args: argparse.Namespace) -> int:
    settings = get_settings()
    record = build_ledger(settings).save(args.viewer_id, args.target_id, args.disposition)
    print(f"{record.viewer_id} {record.disposition}s {record.target_id}")
    return 0


def _cmd_history(args: argparse.Namespace) -> int:
    settings = get_settings()
    records = build_ledger(settings).history(args.viewer_id)
    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in records], ensure_ascii=False, indent=2))
        return 0
    if not records:
        print("No dispositions recorded.")
        return 0
    for r in records:
        print(f"{r.updated_at.isoformat()}  {r.disposition:<7}  {r.target_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the InnoMatch CLI."""
    parser = argparse.ArgumentParser(prog="innomatch")
    sub = parser.add_subparsers(dest="command", required=True)

    m = sub.add_parser("matches", help="Rank potential matches for a viewer.")
    m.add_argument("viewer_id")
    m.add_argument("--top-n", type=int, default=None, choices=range(1, 11), metavar="{1..10}")
    m.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    m.set_defaults(func=_cmd_matches)

    for disposition in ("like", "dislike"):
        d = sub.add_parser(disposition, help=f"Record that VIEWER_ID {disposition}s TARGET_ID.")
        d.add_argument("viewer_id")
        d.add_argument("target_id")
        d.set_defaults(func=_cmd_disposition, disposition=disposition)

    h = sub.add_parser("history", help="List a viewer's recorded dispositions, newest first.")
    h.add_argument("viewer_id")
    h.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    h.set_defaults(func=_cmd_history)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m innomatch.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (InnoMatchError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
