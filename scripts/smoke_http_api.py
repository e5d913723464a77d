"""
Manual smoke runner for GymOS Django adapter endpoints.

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, request


DEV_ADMIN_TOKEN = "dev-admin-token"
DEV_MANAGER_TOKEN = "dev-manager-token"
DEV_STAFF_TOKEN = "dev-staff-token"
DEV_ANNEX_BRANCH_ID = "33333333-3333-3333-3333-333333333333"


def _call(
    *,
    method: str,
    url: str,
    token: str | None = None,
    body: dict | None = None,
) -> tuple[int, dict]:
    encoded = None
    req_headers = {}
    if token is not None:
        req_headers["Authorization"] = f"Bearer {token}"
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            return response.status, json.loads(response.read().decode("utf-8"))
    except error.HTTPError as exc:
        return exc.code, json.loads(exc.read().decode("utf-8"))


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/v1"

    status, payload = _call(method="GET", url=f"{api}/access/me")
    _print_case("missing-token", status, payload)

    status, payload = _call(method="GET", url=f"{api}/access/me", token="forged")
    _print_case("unknown-token", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/access/navigation",
        token=DEV_STAFF_TOKEN,
    )
    _print_case("staff-navigation", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/admin/branches",
        token=DEV_MANAGER_TOKEN,
    )
    _print_case("manager-branches-scoped", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/admin/permissions",
        token=DEV_MANAGER_TOKEN,
    )
    _print_case("manager-catalog-denied", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/admin/roles/assign",
        token=DEV_ADMIN_TOKEN,
        body={
            "user_id": "live-member-user",
            "role_name": "staff",
            "branch_id": DEV_ANNEX_BRANCH_ID,
        },
    )
    _print_case("admin-assign-role", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/admin/users/live-member-user/access",
        token=DEV_ADMIN_TOKEN,
    )
    _print_case("member-access-after-assign", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
