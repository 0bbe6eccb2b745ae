#!/usr/bin/env python3
"""
Fetch every candidate endpoint of a provider and print the raw response
structure, plus what the extractor makes of it. Use this on board to find
new alias paths for a portal.

Usage:
    uv run python scripts/dump_portal_payload.py --provider american
    uv run python scripts/dump_portal_payload.py -p spirit --save payloads/
"""

import argparse
import json
import sys
from pathlib import Path

import requests

from inflight.reference.providers import UnknownProvider, get_provider
from inflight.tracker.extractor import extract_flight_status


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump raw inflight portal responses")
    parser.add_argument("--provider", "-p", required=True, help="Provider id")
    parser.add_argument("--timeout", type=float, default=8.0, help="Per-request timeout in seconds")
    parser.add_argument("--save", type=str, default=None, help="Directory to save JSON bodies into")
    args = parser.parse_args()

    try:
        provider = get_provider(args.provider)
    except UnknownProvider as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    save_dir = Path(args.save) if args.save else None
    if save_dir:
        save_dir.mkdir(parents=True, exist_ok=True)

    for i, url in enumerate(provider.endpoint_urls()):
        print(f"\n=== {url} ===", file=sys.stderr)
        try:
            resp = requests.get(url, headers={"Accept": "application/json"}, timeout=args.timeout)
        except requests.RequestException as e:
            print(f"Request failed: {e}", file=sys.stderr)
            continue
        print(f"HTTP {resp.status_code} ({resp.headers.get('Content-Type', 'no content type')})", file=sys.stderr)
        try:
            data = resp.json()
        except ValueError:
            print("Body is not JSON:", resp.text[:500], file=sys.stderr)
            continue

        print(f"Response type: {type(data).__name__}", file=sys.stderr)
        if isinstance(data, dict):
            print(f"Top-level keys: {list(data.keys())}", file=sys.stderr)
        print(json.dumps(data, indent=2, default=str)[:3000])

        status = extract_flight_status(data)
        print(f"Extracted: {status.display()}", file=sys.stderr)

        if save_dir:
            out = save_dir / f"{provider.id}_{i}.json"
            out.write_text(json.dumps(data, indent=2))
            print(f"Saved to {out}", file=sys.stderr)


if __name__ == "__main__":
    main()
