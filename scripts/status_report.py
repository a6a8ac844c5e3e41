"""Manual live check against a running permit administration API.

Run from the repository root with:
  PYTHONPATH=src PARKPERMITS_BASE_URL=... PARKPERMITS_COOKIE=... \
  python scripts/status_report.py [--date YYYY-MM-DD] [--debug]

Optional environment variables:
  PARKPERMITS_API_URI

Prints derived application statuses, monthly revenue and, when --date is
given, blackout conflicts for every park on that date.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from parkpermits import Client
from parkpermits.aggregation import count_by_status, dashboard_stats, revenue_by_month
from parkpermits.availability import find_conflicts_for_park
from parkpermits.models import Snapshot
from parkpermits.status import paid_amount, resolve_all, status_label

_LOGGER = logging.getLogger(__name__)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        print(f"Missing required environment variable: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--date", help="Check blackout conflicts for this date.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def _print_report(snapshot: Snapshot, candidate: str | None) -> None:
    resolved = resolve_all(snapshot.applications, snapshot.invoices)
    print(f"Applications: {len(resolved)}")
    for application, status in resolved:
        title = application.event_title or "-"
        print(f"- {application.id} | {title} | {status_label(status)} | paid {paid_amount(application)}")
    print("By status:")
    for bucket in count_by_status(snapshot.applications, snapshot.invoices):
        print(f"  {bucket.name}: {bucket.value}")
    print("Revenue by month:")
    for bucket in revenue_by_month(snapshot.invoices):
        print(f"  {bucket.name}: {bucket.value}")
    print(f"Dashboard: {dashboard_stats(snapshot.permits, snapshot.invoices)}")
    if candidate is None:
        return
    print(f"Conflicts on {candidate}:")
    for park in snapshot.parks:
        result = find_conflicts_for_park(candidate, park, snapshot.templates)
        if result.is_clear:
            continue
        for conflict in result.conflicts:
            print(f"  {park.name} / {conflict.location_name}: {conflict.reason or '-'}")


async def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    base_url = _require_env("PARKPERMITS_BASE_URL")
    cookie = _require_env("PARKPERMITS_COOKIE")
    api_uri = os.getenv("PARKPERMITS_API_URI", "/api")

    try:
        async with Client(base_url=base_url, api_uri=api_uri, headers={"Cookie": cookie}) as client:
            snapshot = await client.load_snapshot()
        _print_report(snapshot, args.date)
    except Exception as exc:
        _LOGGER.debug("Report failed", exc_info=True)
        print(f"Error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
