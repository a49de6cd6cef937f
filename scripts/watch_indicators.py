#!/usr/bin/env python
"""
Watch Economic Indicators

Polls the dashboard API on a fixed interval and logs the overall risk alert
and each indicator's tier. Each refresh replaces the previous result.

Usage:
    python scripts/watch_indicators.py --base-url http://127.0.0.1:8000
    python scripts/watch_indicators.py --once

Environment:
    REFRESH_INTERVAL_MINUTES (default 30)
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import load_settings
from app.dashboard_client import DEFAULT_BASE_URL, DashboardApiClient, DashboardApiError
from app.utils import setup_logging

logger = setup_logging()


def refresh(client: DashboardApiClient) -> bool:
    """Fetch and log one snapshot. Returns False if the API call failed."""
    try:
        alert = client.get_alert()
        indicators = client.get_indicators()
    except DashboardApiError as e:
        logger.error("Refresh failed: %s", e)
        return False

    logger.info("%s: %s", alert["title"], alert["message"])
    for item in indicators:
        if item.get("error"):
            logger.warning("  %-9s unavailable (%s)", item["indicator"], item["error"])
            continue
        value = item["value"]
        suffix = "%" if item["unit"] == "%" else ""
        shown = "n/a" if value is None else f"{value:g}{suffix}"
        logger.info(
            "  %-9s %-10s %-8s as of %s",
            item["indicator"], shown, item["riskLevel"], item["date"] or "-",
        )
    return True


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Poll economic indicator risk levels")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Dashboard API base URL")
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.server.refresh_interval_minutes,
        help="Minutes between refreshes",
    )
    parser.add_argument("--once", action="store_true", help="Refresh once and exit")
    args = parser.parse_args()

    client = DashboardApiClient(args.base_url)

    if args.once:
        sys.exit(0 if refresh(client) else 1)

    logger.info("Refreshing every %d minute(s) from %s", args.interval, args.base_url)
    try:
        while True:
            refresh(client)
            time.sleep(args.interval * 60)
    except KeyboardInterrupt:
        logger.info("Stopped")


if __name__ == "__main__":
    main()
