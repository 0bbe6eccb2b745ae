"""
Flight Tracker - live flight status from the inflight WiFi portal.

Connect to the airline's onboard WiFi, pick the airline and the page polls
its portal API. Falls back to cached data, then demo data.

Run with: uv run streamlit run streamlit/flight_tracker.py
"""

import asyncio
import time
from typing import Optional

import streamlit as st

from inflight.reference import all_providers, get_provider, list_provider_ids
from inflight.tracker import (
    CacheStore,
    ConnectivitySignal,
    FetchOrchestrator,
    FlightStatus,
    JsonFileStorage,
    MemoryStorage,
    RefreshResult,
    TrackerConfig,
    TrackerSession,
)

_STATUS_LABELS = {
    "connected": ("Connected", "success"),
    "demo": ("Demo Mode", "info"),
    "cached": ("Cached", "warning"),
    "offline": ("Offline Mode", "warning"),
    "error": ("Not Connected", "error"),
}


class StreamlitRenderer:
    """Draws a refresh result into the current Streamlit run."""

    def render(self, result: RefreshResult, last_good: Optional[FlightStatus]) -> None:
        if result.marker == "loading":
            return
        provider = get_provider(result.provider_id)
        label, kind = _STATUS_LABELS.get(result.marker, (result.marker, "info"))
        st.subheader(f"{provider.logo} · {label}")
        if result.message:
            getattr(st, kind)(result.message)

        flight = result.flight or last_good
        if flight is None:
            return
        shown = flight.display()
        col1, col2, col3 = st.columns(3)
        col1.metric("Flight", shown["flight_number"])
        col2.metric("From", shown["origin"])
        col3.metric("To", shown["destination"])
        col4, col5, col6 = st.columns(3)
        col4.metric("Altitude", shown["altitude"])
        col5.metric("Speed", shown["speed"])
        col6.metric("Time remaining", shown["time_remaining"])
        st.progress(int(round(flight.progress_percent)), text=f"Flight progress {shown['progress']}")
        st.caption(f"Last updated: {result.fetched_at.astimezone():%H:%M:%S}")

    def notice(self, message: str, level: str) -> None:
        st.toast(message)


def get_session(config: TrackerConfig, provider_id: str, online: bool) -> TrackerSession:
    """One TrackerSession per browser session, kept across reruns."""
    session: Optional[TrackerSession] = st.session_state.get("tracker")
    if session is None:
        storage = JsonFileStorage(config.cache_path) if config.cache_path else MemoryStorage()
        orchestrator = FetchOrchestrator(
            cache=CacheStore(storage),
            connectivity=ConnectivitySignal(online=online),
            timeout=config.timeout,
            development_mode=config.is_development_mode(),
        )
        session = TrackerSession(
            orchestrator,
            renderer=StreamlitRenderer(),
            provider_id=provider_id,
            interval=config.interval,
        )
        st.session_state["tracker"] = session
    return session


def main() -> None:
    st.set_page_config(
        page_title="Flight Tracker",
        page_icon="✈️",
        layout="centered",
    )
    st.title("✈️ Inflight Flight Tracker")

    try:
        config = TrackerConfig.from_env()
    except ValueError as e:
        st.error(str(e))
        st.stop()

    ids = list(list_provider_ids())
    names = {p.id: p.display_name for p in all_providers()}

    with st.sidebar:
        st.header("Settings")
        provider_id = st.selectbox(
            "Airline",
            options=ids,
            index=ids.index(config.provider_id) if config.provider_id in ids else 0,
            format_func=lambda pid: names[pid],
        )
        online = st.checkbox("Network available", value=True)
        auto_refresh = st.checkbox(
            "Auto refresh",
            value=True,
            help=f"Refresh every {config.interval:g} seconds",
        )
        refresh_clicked = st.button("Refresh now")

    session = get_session(config, provider_id, online)

    if provider_id != session.provider.id:
        asyncio.run(session.select_provider(provider_id))
    elif session.orchestrator.connectivity.online != online:
        asyncio.run(session.set_online(online))
    else:
        asyncio.run(session.refresh("manual" if refresh_clicked else "timer"))

    history = session.history
    if len(history):
        with st.expander("Refresh history", expanded=False):
            st.dataframe(history.to_dataframe(), use_container_width=True)
            stats = history.summary()
            st.caption(f"{stats.total_cycles} refreshes, {stats.live_ratio:.0%} live")

    if auto_refresh:
        time.sleep(config.interval)
        st.rerun()


main()
