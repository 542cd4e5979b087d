"""Chainlit web UI for the PvP tier list."""

from __future__ import annotations

import os

import chainlit as cl

from controller import TierListController
from history import build_history_rows
from render import history_markdown, leaderboard_markdown, tier_info_markdown
from tier_schemes import DEFAULT_SCHEME, FILTERS, get_scheme
from tierlist_client import TierListAPIError, TierListClient
from transitions import TableLayout


def _build_client() -> TierListClient:
    return TierListClient(
        base_url=os.getenv("SUPABASE_URL", "http://localhost:54321"),
        api_key=os.getenv("SUPABASE_ANON_KEY", ""),
        timeout_seconds=int(os.getenv("TIERLIST_TIMEOUT_SECONDS", "30")),
    )


def _history_limit() -> int:
    return int(os.getenv("TIERLIST_HISTORY_LIMIT", "25"))


def _actions(selected: str) -> list[cl.Action]:
    actions = [
        cl.Action(
            name="filter",
            payload={"filter": mode},
            label=f"[{mode.upper()}]" if mode == selected else mode.upper(),
        )
        for mode in FILTERS
    ]
    actions.append(cl.Action(name="tiers_info", payload={}, label="Tiers info"))
    actions.append(cl.Action(name="history", payload={}, label="Testing history"))
    return actions


async def _send_leaderboard(controller: TierListController, layout: TableLayout) -> None:
    if controller.state == "error":
        await cl.Message(content=f"Error: {controller.error}").send()
        return
    entries = controller.entries
    layout.commit(entry.player.row_key for entry in entries)
    message = cl.Message(
        content=leaderboard_markdown(entries, filter_mode=controller.filter),
        actions=_actions(controller.filter),
    )
    await message.send()
    cl.user_session.set("leaderboard_message", message)


@cl.on_chat_start
async def on_chat_start() -> None:
    scheme = get_scheme(os.getenv("TIERLIST_SCHEME", DEFAULT_SCHEME))
    client = _build_client()
    layout = TableLayout()
    controller = TierListController(scheme, layout)
    controller.mount()
    cl.user_session.set("client", client)
    cl.user_session.set("layout", layout)
    cl.user_session.set("controller", controller)

    await cl.Message(content="Loading...").send()
    await cl.make_async(controller.load)(client.fetch_players)
    await _send_leaderboard(controller, layout)


@cl.action_callback("filter")
async def on_filter(action: cl.Action) -> None:
    controller: TierListController | None = cl.user_session.get("controller")
    layout: TableLayout | None = cl.user_session.get("layout")
    if controller is None or layout is None or controller.state != "ready":
        await cl.Message(content="The tier list is not loaded yet.").send()
        return

    generation = controller.request_filter(action.payload["filter"])
    entries = controller.entries
    layout.commit(entry.player.row_key for entry in entries)
    deltas = controller.layout_committed(generation)

    content = leaderboard_markdown(
        entries,
        filter_mode=controller.filter,
        deltas=deltas,
        pitch=layout.pitch,
    )
    message: cl.Message | None = cl.user_session.get("leaderboard_message")
    if message is None:
        message = cl.Message(content=content, actions=_actions(controller.filter))
        await message.send()
        cl.user_session.set("leaderboard_message", message)
        return
    message.content = content
    message.actions = _actions(controller.filter)
    await message.update()


@cl.action_callback("tiers_info")
async def on_tiers_info(action: cl.Action) -> None:
    controller: TierListController | None = cl.user_session.get("controller")
    scheme = controller.scheme if controller else get_scheme(DEFAULT_SCHEME)
    await cl.Message(content=tier_info_markdown(scheme)).send()


@cl.action_callback("history")
async def on_history(action: cl.Action) -> None:
    client: TierListClient | None = cl.user_session.get("client")
    if client is None:
        client = _build_client()
    try:
        entries = await cl.make_async(client.fetch_history)()
        players = await cl.make_async(client.fetch_players)()
    except TierListAPIError as exc:
        await cl.Message(content=f"Error: {exc}").send()
        return
    rows = build_history_rows(entries, players)
    await cl.Message(content=history_markdown(rows, limit=_history_limit())).send()


@cl.on_chat_end
async def on_chat_end() -> None:
    controller: TierListController | None = cl.user_session.get("controller")
    if controller is not None:
        controller.unmount()
    layout: TableLayout | None = cl.user_session.get("layout")
    if layout is not None:
        layout.clear()
