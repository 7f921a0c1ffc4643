from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from typing import Any

import requests
from dotenv import load_dotenv

from hrm_ui.constants import LOGIN_PATH
from hrm_ui.logging_config import setup_logging

logger = logging.getLogger("hrm_ui.site_monitor")

# Class name present in the server-rendered login template
LOGIN_MARKER = "orangehrm-login"


def _now_ms() -> int:
    return int(time.time() * 1000)


def perform_check(base_url: str, path: str, max_latency_ms: int) -> tuple[bool, dict[str, Any]]:
    t0 = _now_ms()
    url = f"{base_url.rstrip('/')}{path}"
    try:
        resp = requests.get(url, timeout=10)
    except requests.RequestException as e:
        return False, {"path": path, "error": str(e), "latency_ms": _now_ms() - t0}

    latency_ms = _now_ms() - t0
    payload: dict[str, Any] = {"path": path, "status": resp.status_code, "latency_ms": latency_ms}
    if resp.status_code != 200:
        payload["error"] = f"HTTP {resp.status_code}"
        return False, payload
    # Protected paths redirect anonymous visitors to the login form
    if LOGIN_MARKER not in resp.text:
        payload["error"] = "Login form marker missing"
        return False, payload
    if latency_ms > max_latency_ms:
        payload["error"] = f"Latency {latency_ms}ms exceeds {max_latency_ms}ms"
        return False, payload
    return True, payload


def post_webhook(webhook_url: str, event_type: str, payload: dict[str, Any]) -> None:
    headers = {"Content-Type": "application/json"}
    body = json.dumps({"type": event_type, "payload": payload})
    try:
        requests.post(webhook_url, data=body, headers=headers, timeout=5)
    except requests.RequestException as e:
        logger.warning("alert webhook failed: %s", e)


def run_once(
    base_url: str, paths: list[str], max_latency_ms: int, webhook_url: str | None
) -> int:
    results: list[dict[str, Any]] = []
    for path in paths:
        ok, payload = perform_check(base_url, path, max_latency_ms)
        results.append({"ok": ok, **payload})
    failures = [r for r in results if not r["ok"]]

    if failures and webhook_url:
        summary = {
            "base_url": base_url,
            "total_checks": len(results),
            "failures": failures,
            "ok_count": len(results) - len(failures),
            "ts": int(time.time()),
        }
        post_webhook(webhook_url, "site_monitor_failure", summary)

    # Concise output for logs/cron
    for r in results:
        status = "OK" if r["ok"] else "FAIL"
        msg = f"[{status}] path='{r['path']}' http={r.get('status', '?')} latency_ms={r.get('latency_ms', '?')}"
        if not r["ok"]:
            msg += f" reason={r.get('error', 'unknown')}"
        print(msg)
    return 0 if not failures else 2


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Availability monitor for the OrangeHRM login page")
    parser.add_argument(
        "--base-url",
        default=os.environ.get(
            "MONITOR_BASE_URL",
            os.environ.get("BASE_URL", "https://opensource-demo.orangehrmlive.com"),
        ),
    )
    parser.add_argument(
        "--paths",
        default=os.environ.get("MONITOR_PATHS", LOGIN_PATH),
        help="Comma-separated list of paths to check",
    )
    parser.add_argument(
        "--max-latency-ms",
        type=int,
        default=int(os.environ.get("MONITOR_MAX_LATENCY_MS", 5000)),
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=int(os.environ.get("MONITOR_INTERVAL", 0)),
        help="Seconds between runs; 0 runs once and exits",
    )
    parser.add_argument(
        "--webhook-url",
        default=os.environ.get("ALERT_WEBHOOK_URL", ""),
        help="Override alert webhook URL (defaults to ALERT_WEBHOOK_URL env)",
    )
    args = parser.parse_args(argv)
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))

    paths = [p.strip() for p in str(args.paths).split(",") if p.strip()]
    webhook_url = args.webhook_url.strip() or None

    if args.interval <= 0:
        return run_once(args.base_url, paths, args.max_latency_ms, webhook_url)

    # Daemon mode
    exit_code = 0
    try:
        while True:
            code = run_once(args.base_url, paths, args.max_latency_ms, webhook_url)
            exit_code = code if code != 0 else exit_code
            time.sleep(args.interval)
    except KeyboardInterrupt:
        logger.info("monitor stopped")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
