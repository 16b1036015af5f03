#!/usr/bin/env python3
"""Smoke test against a running admin API.

Checks the status codes clients depend on: disabled auth, database probe,
inbox stubs and method rejection.

Usage:
    uvicorn storefront.api.app:app --port 8000 &
    python scripts/smoke_api.py [base_url]

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import json
import sys
import urllib.error
import urllib.request

DEFAULT_BASE_URL = "http://127.0.0.1:8000"

# (method, path, expected status)
CHECKS = [
    ("GET", "/api/health", 200),
    ("GET", "/api/test-db", 200),
    ("GET", "/api/auth/session", 501),
    ("POST", "/api/auth/signout", 501),
    ("GET", "/api/auth/signout", 405),
    ("POST", "/api/messages/bulk", 501),
    ("GET", "/api/messages/realtime", 501),
    ("PUT", "/api/messages/labels", 405),
    ("GET", "/api/admin/message-integration", 200),
]


def request(base_url: str, method: str, path: str) -> tuple[int, dict | None]:
    """Send a request and return (status, JSON body or None)."""
    data = None if method == "GET" else b""
    req = urllib.request.Request(f"{base_url}{path}", method=method, data=data)
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            status, raw = resp.status, resp.read()
    except urllib.error.HTTPError as e:
        status, raw = e.code, e.read()

    try:
        body = json.loads(raw) if raw else None
    except json.JSONDecodeError:
        body = None
    return status, body


def run_check(base_url: str, method: str, path: str, expected: int) -> bool:
    """Run one check and print its outcome."""
    try:
        status, body = request(base_url, method, path)
    except urllib.error.URLError as e:
        print(f"FAIL: {method} {path} - {e.reason}")
        return False

    if status != expected:
        print(f"FAIL: {method} {path} - expected {expected}, got {status}")
        if body:
            print(f"         Body: {body}")
        return False

    print(f"OK: {method} {path} -> {status}")
    return True


def main() -> int:
    """Run all smoke checks."""
    base_url = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else DEFAULT_BASE_URL

    print("=" * 60)
    print(f"Admin API smoke test: {base_url}")
    print("=" * 60)

    results = [run_check(base_url, *check) for check in CHECKS]
    checks_passed = results.count(True)
    checks_failed = results.count(False)

    # Summary
    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0
    else:
        print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
        print("=" * 60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
