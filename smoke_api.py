#!/usr/bin/env python3
"""
Smoke check for a running Task Keeper server
Run this after starting the backend server; needs the "smoke" extra (pip install -e .[smoke])
"""

import os
import uuid

import requests

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")


def check(label, response, expected):
    mark = "✓" if response.status_code == expected else "✗"
    print(f"{mark} {label}: {response.status_code} (expected {expected})")
    return response.status_code == expected


def run_smoke():
    """Walk one user through register, tasks CRUD and logout"""

    print("Checking Task Keeper API endpoints...")
    print("=" * 50)

    session = requests.Session()
    email = f"smoke-{uuid.uuid4().hex[:8]}@example.com"
    ok = True

    ok &= check("Health", session.get(f"{BASE_URL}/health"), 200)
    ok &= check("Register", session.post(f"{BASE_URL}/api/register", json={
        "name": "Smoke Test",
        "email": email,
        "password": "password123",
    }), 201)
    ok &= check("Current user", session.get(f"{BASE_URL}/api/user"), 200)

    response = session.post(f"{BASE_URL}/api/tasks", json={"title": "Smoke task"})
    ok &= check("Create task", response, 201)
    task_id = response.json().get("id") if response.ok else None

    if task_id is not None:
        ok &= check("Complete task", session.put(f"{BASE_URL}/api/tasks/{task_id}", json={"status": "completed"}), 200)
        ok &= check("Filter completed", session.get(f"{BASE_URL}/api/tasks", params={"status": "completed"}), 200)
        ok &= check("Delete task", session.delete(f"{BASE_URL}/api/tasks/{task_id}"), 204)
        ok &= check("Task gone", session.get(f"{BASE_URL}/api/tasks/{task_id}"), 404)

    ok &= check("Logout", session.post(f"{BASE_URL}/api/logout"), 200)
    ok &= check("Logged out", session.get(f"{BASE_URL}/api/user"), 401)

    print("\n" + "=" * 50)
    print("Smoke check passed" if ok else "Smoke check FAILED")
    return ok


if __name__ == "__main__":
    raise SystemExit(0 if run_smoke() else 1)
