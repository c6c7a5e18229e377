# tests/helpers.py

from fastapi.testclient import TestClient

PASSWORD = "password123"


def register(client: TestClient, name: str = "Ann", email: str = "ann@x.com", password: str = PASSWORD):
    return client.post("/api/register", json={"name": name, "email": email, "password": password})


def login(client: TestClient, email: str = "ann@x.com", password: str = PASSWORD):
    return client.post("/api/login", json={"email": email, "password": password})


def create_task(client: TestClient, **payload):
    payload.setdefault("title", "Write report")
    return client.post("/api/tasks", json=payload)
