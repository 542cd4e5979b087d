"""Smoke test: verify both store tables load and rank without errors."""

from __future__ import annotations

import argparse
import logging
import os
import time

from history import build_history_rows
from ranker import rank_players, score_players
from tier_schemes import DEFAULT_SCHEME, FILTERS, get_scheme
from tierlist_client import TierListAPIError, TierListClient


def run_players_check(client: TierListClient, scheme_name: str) -> None:
    start = time.perf_counter()
    players = client.fetch_players()
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    print(f"[PASS] Fetched {len(players)} players in {elapsed_ms} ms")

    scored = score_players(players, get_scheme(scheme_name))
    for filter_mode in FILTERS:
        entries = rank_players(scored, filter_mode)
        leader = entries[0].player.username if entries else "-"
        print(f"[PASS] Ranked filter={filter_mode} count={len(entries)} leader={leader}")


def run_history_check(client: TierListClient) -> None:
    start = time.perf_counter()
    entries = client.fetch_history()
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    rows = build_history_rows(entries, [])
    high = sum(1 for row in rows if row.high)
    print(f"[PASS] Fetched {len(entries)} history entries in {elapsed_ms} ms, high tests={high}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Tier list store smoke checks.")
    parser.add_argument("--base-url", default=os.getenv("SUPABASE_URL", "http://localhost:54321"))
    parser.add_argument("--api-key", default=os.getenv("SUPABASE_ANON_KEY", ""))
    parser.add_argument("--scheme", default=os.getenv("TIERLIST_SCHEME", DEFAULT_SCHEME))
    parser.add_argument("--skip-history", action="store_true", help="Only check the tiers table.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    client = TierListClient(base_url=args.base_url, api_key=args.api_key)

    try:
        run_players_check(client, args.scheme)
        if not args.skip_history:
            run_history_check(client)
    except TierListAPIError as err:
        print(f"[FAIL] Tier list store error: {err}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
