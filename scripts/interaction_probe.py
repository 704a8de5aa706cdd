#!/usr/bin/env python3
"""Smoke-check a running medication service: suggestions, rxcui lookup and an interaction check."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List

import httpx


def _get(client: httpx.Client, url: str, params: Dict[str, Any]) -> Any:
    resp = client.get(url, params=params)
    resp.raise_for_status()
    return resp.json()


def run(args: argparse.Namespace) -> Dict[str, Any]:
    base = f"{args.base_url.rstrip('/')}{args.api_prefix}/medications"
    names: List[str] = [n.strip() for n in args.names.split(",") if n.strip()]
    report: Dict[str, Any] = {"base": base, "names": names}

    with httpx.Client(timeout=args.timeout) as client:
        if args.suggest:
            report["suggestions"] = _get(client, f"{base}/suggestions", {"name": args.suggest})

        report["resolved"] = {
            name: _get(client, f"{base}/rxcui", {"name": name}) for name in names
        }

        resp = client.post(f"{base}/interactions", json={"medicationNames": names})
        resp.raise_for_status()
        report["interactions"] = resp.json()

    return report


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--api-prefix", default="/api")
    parser.add_argument("--names", default="warfarin,aspirin,ibuprofen", help="comma separated medication names")
    parser.add_argument("--suggest", default="", help="partial name to autocomplete")
    parser.add_argument("--timeout", type=float, default=30.0)
    args = parser.parse_args()

    try:
        report = run(args)
    except httpx.HTTPError as exc:
        print(f"probe failed: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(report, ensure_ascii=False, indent=2))
    interactions = report["interactions"]
    return 0 if interactions.get("success") else 2


if __name__ == "__main__":
    sys.exit(main())
