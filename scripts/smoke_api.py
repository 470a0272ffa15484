#!/usr/bin/env python3
"""Smoke checks against a running estimator API."""

import json
import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"


def check_estimate() -> bool:
    print("=" * 60)
    print("POST /api/estimate")
    print("=" * 60)

    payload = {
        "selected_services": ["new_ghl_setup", "fix_optimize"],
        "service_configs": {
            "new_ghl_setup": {"service_level": "premium", "addons": ["rush_delivery"]},
        },
        "common_config": {"industry": "medical_aesthetics", "scale": "growing"},
    }

    try:
        response = httpx.post(f"{BASE_URL}/api/estimate", json=payload, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False

    data = response.json()
    print(f"✅ Total: {data['final_total_display']} ({data['final_total_range_display']})")
    print(f"   Typical agency: {data['anchor_range_display']}")
    print(f"   Delivery: {data['timeline_days']} days, by {data['estimated_delivery']}")
    for line in data["quote"]["services"]:
        print(f"   - {line['service_name']}: {line['subtotal']}")
    return True


def check_ghl_health() -> bool:
    print("\n" + "=" * 60)
    print("GET /api/ghl-health")
    print("=" * 60)

    try:
        response = httpx.get(f"{BASE_URL}/api/ghl-health", timeout=15.0)
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False

    marker = "✅" if response.status_code == 200 else "⚠️ "
    print(f"{marker} {response.status_code}")
    print(json.dumps(response.json(), indent=2))
    return response.status_code == 200


def main():
    print("\n🚀 Estimator API smoke test\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0).raise_for_status()
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn estimator.main:app --reload --port 8001")
        sys.exit(1)

    ok = check_estimate()
    check_ghl_health()

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!" if ok else "❌ Estimate check failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
