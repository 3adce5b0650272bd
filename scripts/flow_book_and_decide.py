#!/usr/bin/env python3
"""
Booking request and owner decision flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_book_and_decide.py --venue-id <UUID> --date 2026-11-02
    python scripts/flow_book_and_decide.py --venue-id <UUID> --date 2026-11-02 --reject

Flow:
    1. Fetch available slots for the day
    2. Request the first free slot as a guest
    3. Request the same slot again (expect 409)
    4. Login as owner
    5. Confirm (or reject) the booking
    6. Fetch the day's slots again
"""

import argparse
import json
import sys

import httpx

BASE_URL = "http://localhost:8000"

# Test credentials
OWNER_EMAIL = "owner@slotbook.io"
OWNER_PASSWORD = "Test@1234"


def login(email: str, password: str) -> str:
    """Login and return token."""
    response = httpx.post(
        f"{BASE_URL}/api/v1/auth/login",
        json={"email": email, "password": password},
        timeout=10.0,
    )
    if response.status_code != 200:
        print(f"ERROR: Login failed for {email}: {response.status_code}")
        print(response.text)
        sys.exit(1)

    return response.json()["access_token"]


def api_request(token: str | None, method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make an API request, authenticated when a token is given."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    url = f"{BASE_URL}{endpoint}"

    if method == "GET":
        response = httpx.get(url, headers=headers, timeout=10.0, follow_redirects=True)
    elif method == "POST":
        response = httpx.post(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    elif method == "PATCH":
        response = httpx.patch(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    if fields:
        filtered = {k: result["data"].get(k) for k in fields if k in result["data"]}
        print(json.dumps(filtered, indent=2))
    else:
        print(json.dumps(result["data"], indent=2))
    return True


def print_slots(result: dict):
    for slot in result["data"].get("slots", []):
        print(f"  {slot['start']} - {slot['end']}  {slot['status']}")


def main():
    parser = argparse.ArgumentParser(description="Booking request and owner decision flow")
    parser.add_argument("--venue-id", required=True, help="Venue UUID")
    parser.add_argument("--date", required=True, help="Local calendar day (YYYY-MM-DD)")
    parser.add_argument("--guest-name", default="Test Guest")
    parser.add_argument("--guest-phone", default="01712345678")
    parser.add_argument("--reject", action="store_true", help="Reject instead of confirming")
    args = parser.parse_args()

    availability_path = f"/api/v1/venues/{args.venue_id}/availability?date={args.date}"

    # Step 1: Available slots
    print_step(1, "Fetch available slots")
    slots_result = api_request(None, "GET", f"{availability_path}&only_available=true")
    if not print_result(slots_result, ["date", "timezone", "slot_duration_minutes"]):
        sys.exit(1)
    slots = slots_result["data"]["slots"]
    if not slots:
        print("ERROR: No free slots on that day")
        sys.exit(1)
    slot = slots[0]
    print(f"\nPicked slot {slot['start']} - {slot['end']}")

    # Step 2: Guest booking request
    print_step(2, "Request slot as guest")
    booking_data = {
        "venue_id": args.venue_id,
        "start": slot["start"],
        "end": slot["end"],
        "guest_name": args.guest_name,
        "guest_phone": args.guest_phone,
        "note": "Created by flow script",
    }
    booking_result = api_request(None, "POST", "/api/v1/bookings", booking_data)
    if not print_result(booking_result, ["id", "booking_number", "status"]):
        sys.exit(1)
    booking_id = booking_result["data"]["id"]

    # Step 3: Duplicate request
    print_step(3, "Request the same slot again (expect 409)")
    duplicate_result = api_request(None, "POST", "/api/v1/bookings", booking_data)
    print_result(duplicate_result)
    if duplicate_result["status"] != 409:
        print("WARNING: duplicate request was not rejected")

    # Step 4: Owner login
    print_step(4, "Login as owner")
    owner_token = login(OWNER_EMAIL, OWNER_PASSWORD)
    print(f"Logged in as {OWNER_EMAIL}")

    # Step 5: Decision
    decision = "REJECTED" if args.reject else "CONFIRMED"
    print_step(5, f"Owner decision: {decision}")
    decision_result = api_request(
        owner_token,
        "PATCH",
        f"/api/v1/owner/bookings/{booking_id}/decision",
        {"status": decision, "owner_note": "Decided by flow script"},
    )
    if not print_result(decision_result):
        sys.exit(1)

    # Step 6: Slots after decision
    print_step(6, "Fetch slots after decision")
    after_result = api_request(None, "GET", availability_path)
    if not print_result(after_result, ["date", "timezone"]):
        sys.exit(1)
    print_slots(after_result)

    print("\n" + "="*60)
    print("FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
