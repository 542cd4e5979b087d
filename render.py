"""Markdown rendering shared by the chainlit UI and the CLI."""

from __future__ import annotations

from history import HistoryRow, format_timestamp
from models import FightResult
from ranker import RankedEntry
from tier_schemes import MODES, OVERALL, UNRANKED, TierScheme, tier_info
from transitions import Delta, rows_moved


def _tier_cell(tier: str) -> str:
    return "·" if tier == UNRANKED else tier


def _movement(delta: Delta | None, pitch: float) -> str:
    if delta is None:
        return ""
    moved = rows_moved(delta, pitch)
    if moved > 0:
        return f"▲{moved}"
    if moved < 0:
        return f"▼{-moved}"
    return ""


def leaderboard_markdown(
    entries: list[RankedEntry],
    *,
    filter_mode: str,
    deltas: dict[str, Delta] | None = None,
    pitch: float = 1.0,
) -> str:
    title = "Overall" if filter_mode == OVERALL else filter_mode.upper()
    if not entries:
        return f"### Tier List · {title}\n\nNo players yet."

    deltas = deltas or {}
    show_moves = bool(deltas)
    header = ["#", "Player", "Points", *(mode for mode in MODES)]
    if show_moves:
        header.append("Move")
    lines = [
        f"### Tier List · {title}",
        "",
        "| " + " | ".join(header) + " |",
        "|" + "---|" * len(header),
    ]
    for entry in entries:
        player = entry.player
        name = player.username or player.uuid
        cells = [
            f"#{entry.rank}",
            f"**{name}**" if filter_mode != OVERALL and player.tier(filter_mode) != UNRANKED else name,
            str(player.points),
            *(_tier_cell(player.tier(mode)) for mode in MODES),
        ]
        if show_moves:
            cells.append(_movement(deltas.get(player.row_key), pitch))
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def tier_info_markdown(scheme: TierScheme) -> str:
    lines = [
        f"### Tiers Info · {scheme.label}",
        "",
        scheme.description,
        "",
        "| Tier | Score |",
        "|---|---|",
    ]
    lines.extend(f"| {row['tier']} | {row['label']} |" for row in tier_info(scheme))
    lines.append("")
    lines.append(f"Unranked modes score {scheme.points_for(None)}.")
    return "\n".join(lines)


def _held(name: str, tier: str | None) -> str:
    if not tier or not tier.strip() or tier.strip().upper() == UNRANKED:
        return name
    return f"{name} ({tier.strip().upper()})"


def _fight_line(index: int, fight: FightResult) -> str:
    return (
        f"  - #{index} {_held(fight.player1, fight.tier1)} "
        f"{fight.score1} — {fight.score2} {_held(fight.player2, fight.tier2)}"
    )


def _history_lines(row: HistoryRow) -> list[str]:
    entry = row.entry
    change = f"{entry.old_tier.upper()} → {entry.new_tier.upper()}" if entry.old_tier.strip() else f"set to {entry.new_tier.upper()}"
    when = format_timestamp(entry.time)
    tested = f"[**{entry.tested}**]({row.tested_avatar})"
    if row.high:
        status = "✓ SUCCESS" if row.success else "✗ FAILED"
        lines = [f"- ★ {tested} · {entry.mode.upper()} · {change} · {status} · {len(entry.fights)} fights · {when}"]
        lines.extend(_fight_line(index, fight) for index, fight in enumerate(entry.fights, start=1))
        return lines

    # Normal tests carry one fight: tester is player1, tested is player2.
    first = entry.fights[0] if entry.fights else None
    tester = f"[{entry.tester}]({row.tester_avatar})"
    if first is not None:
        tested = _held(tested, first.tier2)
        tester = _held(tester, first.tier1)
    line = f"- {row.keyword}: {tested} tested by {tester} · {entry.mode.upper()} · {change}"
    if first is not None:
        line += f" · {first.player1} {first.score1} — {first.score2} {first.player2}"
    return [f"{line} · {when}"]


def history_markdown(rows: list[HistoryRow], *, limit: int | None = None) -> str:
    if not rows:
        return "### Test History\n\nNo tests recorded."
    shown = rows if limit is None else rows[: max(0, limit)]
    lines = ["### Test History", ""]
    for row in shown:
        lines.extend(_history_lines(row))
    if len(shown) < len(rows):
        lines.append("")
        lines.append(f"_{len(rows) - len(shown)} older tests not shown._")
    return "\n".join(lines)
