"""CLI to trigger a monitoring run on a running service.

Usage:
  check-alerts
  check-alerts --base-url https://alerts.example.com --secret "$CRON_SECRET"
  check-alerts health
"""
import argparse
import json
import os
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_run(client: httpx.Client, args: argparse.Namespace) -> int:
    headers = {"Authorization": f"Bearer {args.secret}"} if args.secret else {}
    r = client.get("/api/notifications/check-alerts", headers=headers)
    try:
        print_json(r.json())
    except ValueError:
        print(r.text)
    r.raise_for_status()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Trigger a price alert check")
    parser.add_argument(
        "--base-url",
        default=os.getenv("ALERT_MONITOR_URL", "http://127.0.0.1:8000"),
        help="Service base URL (default: $ALERT_MONITOR_URL or http://127.0.0.1:8000)",
    )
    parser.add_argument(
        "--secret",
        default=os.getenv("CRON_SECRET", ""),
        help="Bearer secret (default: $CRON_SECRET)",
    )
    parser.add_argument("--timeout", type=float, default=60.0, help="Request timeout (s)")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="Run one alert check (default)")
    sub.add_parser("health", help="Health check")
    args = parser.parse_args()

    commands = {"run": cmd_run, "health": cmd_health}
    handler = commands[args.command or "run"]
    try:
        with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP {e.response.status_code} from {e.request.url}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
