import threading

import pytest

from stores import credentials
from utils.jwt import verify_jwt


def test_register_creates_account(client):
    response = client.post("/register", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 201
    assert response.json() == {"message": "Registration successful!"}


def test_register_same_username_twice_is_rejected(client):
    first = client.post("/register", json={"username": "alice", "password": "secret123"})
    second = client.post("/register", json={"username": "alice", "password": "other-pass"})

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {"error": "Username already exists"}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"username": "alice"},
        {"password": "secret123"},
        {"username": "", "password": "secret123"},
        {"username": "alice", "password": None},
    ],
)
@pytest.mark.parametrize("path", ["/register", "/login"])
def test_missing_credentials_are_rejected(client, path, body):
    response = client.post(path, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Please provide both username and password"}


def test_non_json_body_is_rejected_with_error_body(client):
    response = client.post(
        "/register", content="username=alice", headers={"Content-Type": "text/plain"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_login_returns_token_for_registered_user(client, settings):
    client.post("/register", json={"username": "alice", "password": "secret123"})

    response = client.post("/login", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    token = response.json()["token"]
    assert verify_jwt(token, settings.jwt_secret)


def test_wrong_password_and_unknown_user_look_the_same(client):
    client.post("/register", json={"username": "alice", "password": "secret123"})

    wrong_password = client.post("/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/login", json={"username": "mallory", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid username or password"}


def test_each_user_gets_own_identity(login_as, settings):
    alice = login_as("alice")
    bob = login_as("bob")

    alice_id = verify_jwt(alice["Authorization"].split()[1], settings.jwt_secret)
    bob_id = verify_jwt(bob["Authorization"].split()[1], settings.jwt_secret)

    assert alice_id != bob_id


def test_root_and_health_need_no_token(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_route_returns_json_error(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.parametrize("path", ["/register", "/login"])
def test_missing_body_names_credentials(client, path):
    response = client.post(path)

    assert response.status_code == 400
    assert response.json() == {"error": "Please provide both username and password"}


def test_numeric_credentials_are_taken_as_strings(client):
    registered = client.post("/register", json={"username": 12345, "password": 678})
    logged_in = client.post("/login", json={"username": "12345", "password": "678"})

    assert registered.status_code == 201
    assert logged_in.status_code == 200


def test_health_is_served_while_login_checks_password(client, monkeypatch):
    client.post("/register", json={"username": "alice", "password": "secret123"})

    checking = threading.Event()
    release = threading.Event()
    login_finished = threading.Event()
    results = {}
    real_verify = credentials.verify_password

    def slow_verify(password_hash, password):
        checking.set()
        release.wait(timeout=5)
        return real_verify(password_hash, password)

    monkeypatch.setattr(credentials, "verify_password", slow_verify)

    def do_login():
        results["login"] = client.post("/login", json={"username": "alice", "password": "secret123"})
        login_finished.set()

    worker = threading.Thread(target=do_login)
    worker.start()
    assert checking.wait(timeout=5)

    health = client.get("/health")
    served_during_login = not login_finished.is_set()
    release.set()
    worker.join(timeout=10)

    assert health.status_code == 200
    assert served_during_login
    assert results["login"].status_code == 200
