"""Walk a running server through the visitor journey.

    python scripts/simulate_user_flow.py --base http://127.0.0.1:3000

Each run uses a fresh random suffix so it can be repeated against the same
database.  Mail is really sent, so point it at a sandbox provider.
"""

import argparse
import random
import string

import requests


def _suffix() -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=8))


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base", default="http://127.0.0.1:3000")
    ap.add_argument("--domain", default="example.com", help="domain for generated e-mail addresses")
    args = ap.parse_args()

    base = args.base.rstrip("/")
    tag = _suffix()
    email = f"smoke+{tag}@{args.domain}"
    s = requests.Session()

    r = s.get(f"{base}/", timeout=10)
    print("GET /", r.status_code, r.text[:80])
    if r.status_code != 200:
        return 2

    r = s.post(f"{base}/subscribe", json={"email": email}, timeout=30)
    print("POST /subscribe", r.status_code, r.text[:200])
    if r.status_code != 200:
        return 3
    r = s.post(f"{base}/subscribe", json={"email": email}, timeout=30)
    print("POST /subscribe (again)", r.status_code)
    if r.status_code != 409:
        return 3

    r = s.post(
        f"{base}/signup",
        json={"username": f"smoke_{tag}", "email": email, "password": tag},
        timeout=10,
    )
    print("POST /signup", r.status_code, r.text[:200])
    if r.status_code != 200:
        return 4

    r = s.post(f"{base}/login", json={"identifier": f"smoke_{tag}", "password": tag}, timeout=10)
    print("POST /login", r.status_code, r.text[:200])
    if r.status_code != 200:
        return 4
    r = s.post(f"{base}/login", json={"identifier": email, "password": "wrong"}, timeout=10)
    print("POST /login (bad password)", r.status_code)
    if r.status_code != 401:
        return 4

    r = s.post(
        f"{base}/register",
        json={
            "name": "Smoke Test",
            "email": email,
            "phone": "000",
            "gender": "other",
            "destination": "Nowhere",
            "package": "basic",
            "date": "2030-01-01",
        },
        timeout=30,
    )
    print("POST /register", r.status_code, r.text[:200])
    if r.status_code != 200:
        return 5

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
