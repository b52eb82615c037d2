"""
Manual end-to-end check against a running server

Walks through request -> verify -> reset with a real phone number.
The SMS really goes out through Twilio, so use your own number.

Usage: python scripts/smoke_test.py [base_url]
"""

import json
import os
import sys

import httpx
from dotenv import load_dotenv

# Load environment variables (CLIENT_SECRET)
load_dotenv()

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else f"http://localhost:{os.getenv('PORT', '3000')}"


def print_section(title):
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_response(response):
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text[:200])


def main():
    client_secret = os.getenv("CLIENT_SECRET")
    if not client_secret:
        print("❌ CLIENT_SECRET is not set in the environment or .env file")
        sys.exit(1)

    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        print_section("Configuration")
        print_response(client.get("/config"))

        phone = input("\nEnter your phone number (E.164, e.g. +15551234567): ").strip()

        print_section("STEP 1: Request code")
        print_response(client.post("/api/request", json={"client_secret": client_secret, "phone": phone}))

        sms_message = input("\nPaste the SMS you received (or just the code): ").strip()

        print_section("STEP 2: Verify")
        response = client.post(
            "/api/verify",
            json={"client_secret": client_secret, "phone": phone, "sms_message": sms_message}
        )
        print_response(response)
        print("\n✅ Verified!" if response.json().get("success") else "\n❌ Verification failed")

        print_section("STEP 3: Reset")
        print_response(client.post("/api/reset", json={"client_secret": client_secret, "phone": phone}))


if __name__ == "__main__":
    main()
