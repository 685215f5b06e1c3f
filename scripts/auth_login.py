#!/usr/bin/env python3
"""
Login to the hostel portal and store the session token.

Usage:
    python scripts/auth_login.py
    python scripts/auth_login.py --email admin@hostel.edu --password Admin@123
"""

import argparse
import sys
from pathlib import Path

import httpx

BASE_URL = "http://localhost:8000"
TOKEN_FILE = Path(__file__).parent.parent / ".token"


def login(email: str, password: str) -> str:
    """Authenticate and return the bearer token."""
    response = httpx.post(
        f"{BASE_URL}/api/v1/auth/login",
        json={"email": email, "password": password},
        timeout=30.0,
    )

    body = response.json()
    if response.status_code != 200:
        print(f"ERROR: Login failed with status {response.status_code}")
        print(body.get("message", response.text))
        sys.exit(1)

    session = body["data"]
    token = session["token"]

    TOKEN_FILE.write_text(token)

    print(f"Logged in as {session['user']['email']} ({session['role']})")
    print(f"Home: {session['homePath']}")
    print(f"Permissions: {len(session['permissions'])}")

    return token


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Login to the hostel portal")
    parser.add_argument("--email", default="student@hostel.edu")
    parser.add_argument("--password", default="Test@1234")
    args = parser.parse_args()

    login(args.email, args.password)
