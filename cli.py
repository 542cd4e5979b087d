"""Print the tier list leaderboard, tier info, or test history from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import os

from history import build_history_rows
from ranker import leaderboard_payload, rank_players, score_players
from render import history_markdown, leaderboard_markdown, tier_info_markdown
from tier_schemes import DEFAULT_SCHEME, FILTERS, OVERALL, TIER_SCHEMES, get_scheme
from tierlist_client import TierListAPIError, TierListClient

LOGGER = logging.getLogger("tierlist.cli")


def _add_store_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-url",
        default=os.getenv("SUPABASE_URL", "http://localhost:54321"),
        help="Supabase project URL.",
    )
    parser.add_argument(
        "--api-key",
        default=os.getenv("SUPABASE_ANON_KEY", ""),
        help="Supabase anon key.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=int(os.getenv("TIERLIST_TIMEOUT_SECONDS", "30")),
        help="HTTP timeout in seconds.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PvP tier list viewer.")
    parser.add_argument("--verbose", action="store_true", help="Log store requests.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    leaderboard = subparsers.add_parser("leaderboard", help="Show the ranked tier list.")
    _add_store_args(leaderboard)
    leaderboard.add_argument("--filter", default=OVERALL, choices=FILTERS, help="overall or a mode key.")
    leaderboard.add_argument(
        "--scheme",
        default=os.getenv("TIERLIST_SCHEME", DEFAULT_SCHEME),
        choices=sorted(TIER_SCHEMES),
        help="Point scheme used for totals.",
    )
    leaderboard.add_argument("--top", type=int, default=None, help="Only show the first N rows.")
    leaderboard.add_argument("--json", action="store_true", help="Emit JSON instead of a table.")

    history = subparsers.add_parser("history", help="Show the tier test history.")
    _add_store_args(history)
    history.add_argument("--limit", type=int, default=25, help="Number of tests to show.")

    tiers = subparsers.add_parser("tiers", help="Show points per tier.")
    tiers.add_argument(
        "--scheme",
        default=os.getenv("TIERLIST_SCHEME", DEFAULT_SCHEME),
        choices=sorted(TIER_SCHEMES),
    )
    return parser


def _client(args: argparse.Namespace) -> TierListClient:
    return TierListClient(base_url=args.base_url, api_key=args.api_key, timeout_seconds=args.timeout)


def run(args: argparse.Namespace) -> str:
    if args.command == "tiers":
        return tier_info_markdown(get_scheme(args.scheme))

    client = _client(args)
    if args.command == "history":
        rows = build_history_rows(client.fetch_history(), client.fetch_players())
        return history_markdown(rows, limit=args.limit)

    scheme = get_scheme(args.scheme)
    entries = rank_players(score_players(client.fetch_players(), scheme), args.filter)
    if args.json:
        payload = leaderboard_payload(entries, filter_mode=args.filter, scheme=scheme, top_n=args.top)
        return json.dumps(payload, ensure_ascii=True, indent=2)
    shown = entries if args.top is None else entries[: max(0, args.top)]
    return leaderboard_markdown(shown, filter_mode=args.filter)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        print(run(args))
    except TierListAPIError as err:
        LOGGER.error("Tier list store error: %s", err)
        print(f"Error: {err}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
