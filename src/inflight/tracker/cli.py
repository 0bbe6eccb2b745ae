"""CLI for the inflight flight tracker."""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from inflight.reference.providers import UnknownProvider, all_providers, get_provider
from inflight.tracker.cache import CacheStore, JsonFileStorage, MemoryStorage
from inflight.tracker.config import TrackerConfig
from inflight.tracker.connectivity import ConnectivitySignal
from inflight.tracker.models import FlightStatus, RefreshResult
from inflight.tracker.orchestrator import FetchOrchestrator
from inflight.tracker.session import TrackerSession

_STATUS_LABELS = {
    "connected": "Connected",
    "loading": "Updating...",
    "demo": "Demo Mode",
    "cached": "Cached",
    "offline": "Offline Mode",
    "error": "Not Connected",
}


class TerminalRenderer:
    """Prints each result as a small status block."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def render(self, result: RefreshResult, last_good: Optional[FlightStatus]) -> None:
        if result.marker == "loading":
            return
        out = self.stream
        label = _STATUS_LABELS.get(result.marker, result.marker)
        name = get_provider(result.provider_id).display_name
        print(f"\n[{label}] {name}", file=out)
        if result.message:
            print(f"  ! {result.message}", file=out)
        flight = result.flight or last_good
        if flight is not None:
            shown = flight.display()
            print(f"  Flight:         {shown['flight_number']}", file=out)
            print(f"  Route:          {shown['origin']} -> {shown['destination']}", file=out)
            print(f"  Altitude:       {shown['altitude']}", file=out)
            print(f"  Speed:          {shown['speed']}", file=out)
            print(f"  Time remaining: {shown['time_remaining']}", file=out)
            print(f"  Progress:       {_progress_bar(flight.progress_percent)} {shown['progress']}", file=out)
        print(f"  Last updated: {result.fetched_at.astimezone():%H:%M:%S}", file=out)

    def notice(self, message: str, level: str) -> None:
        print(f"* {message}", file=self.stream)


def _progress_bar(percent: float, width: int = 20) -> str:
    filled = int(round(percent / 100 * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Track your flight through the airline's inflight WiFi portal"
    )
    parser.add_argument(
        "--provider",
        "-p",
        help="Provider id (see --list). Default: $INFLIGHT_PROVIDER or spirit",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List known providers and exit",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Refresh once and exit",
    )
    parser.add_argument(
        "--interval",
        "-i",
        type=float,
        help="Seconds between refreshes in watch mode (default 30)",
    )
    parser.add_argument(
        "--cycles",
        "-n",
        type=int,
        help="Stop after N refreshes in watch mode",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-endpoint timeout in seconds (default 8)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the network and show cached or demo data",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Allow demo data when no portal answers (development mode)",
    )
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--cache-file",
        help="Path of the JSON cache file",
    )
    cache_group.add_argument(
        "--no-cache",
        action="store_true",
        help="Keep the cache in memory only",
    )
    parser.add_argument(
        "--stats",
        "-s",
        action="store_true",
        help="Print a summary of all refreshes at the end",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write refresh history to CSV file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every endpoint attempt",
    )
    return parser.parse_args(argv)


def build_session(args, config: TrackerConfig, renderer=None) -> TrackerSession:
    if args.no_cache or not (args.cache_file or config.cache_path):
        storage = MemoryStorage()
    else:
        storage = JsonFileStorage(args.cache_file or config.cache_path)

    orchestrator = FetchOrchestrator(
        cache=CacheStore(storage),
        connectivity=ConnectivitySignal(online=not args.offline),
        timeout=args.timeout or config.timeout,
        development_mode=args.demo or config.is_development_mode(),
    )
    return TrackerSession(
        orchestrator,
        renderer=renderer or TerminalRenderer(),
        provider_id=args.provider or config.provider_id,
        interval=args.interval or config.interval,
    )


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        for p in all_providers():
            print(f"{p.id:10} {p.display_name}  ({p.base_address}, {len(p.endpoint_paths)} endpoint(s))")
        return

    try:
        config = TrackerConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        session = build_session(args, config)
    except UnknownProvider as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(session.run(cycles=1 if args.once else args.cycles))
    except KeyboardInterrupt:
        print("\nStopped.", file=sys.stderr)

    if args.stats:
        stats = session.history.summary()
        print(f"\nTotal refreshes: {stats.total_cycles}")
        if stats.by_marker:
            print("\nBy status:")
            for marker, count in sorted(stats.by_marker.items(), key=lambda x: -x[1]):
                print(f"  {marker}: {count}")
        if stats.by_source:
            print("\nLive endpoints:")
            for url, count in sorted(stats.by_source.items()):
                print(f"  {url}: {count}")
        print(f"\nLive ratio: {stats.live_ratio:.0%}")

    if args.output:
        df = session.history.to_dataframe()
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)

    last = session.history.results[-1] if len(session.history) else None
    if last is not None and last.marker == "error":
        sys.exit(2)


if __name__ == "__main__":
    main()
