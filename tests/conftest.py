"""
Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database and a fresh app built on it.
"""
import pytest

from api import create_app
from models.db_storage import DBStorage


@pytest.fixture
def storage():
    db = DBStorage("sqlite://")
    db.reload()
    yield db
    db.close()
    db.drop_all()


@pytest.fixture
def app(storage):
    return create_app("testing", storage=storage)


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def services(app):
    return app.extensions["matchmaker"]


class Account:
    def __init__(self, user_id, token, email):
        self.id = user_id
        self.token = token
        self.email = email

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.token}"}


def register(client, email, password="pw", first_name=None, last_name=None) -> Account:
    """Helper to register through the API and capture the issued token."""
    body = {"email": email, "password": password}
    if first_name is not None:
        body["first_name"] = first_name
    if last_name is not None:
        body["last_name"] = last_name
    response = client.post("/auth/register", json=body)
    assert response.status_code == 200, response.get_json()
    token = response.headers["Authorization"].split(" ", 1)[1]
    return Account(response.get_json()["data"]["id"], token, email)


def swipe(client, actor: Account, target: Account, direction="R"):
    return client.post("/swipes", json={"swipee_id": target.id, "direction": direction}, headers=actor.headers)


def make_match(client, a: Account, b: Account) -> str:
    """Mutual Right swipes; returns the resulting match id."""
    assert swipe(client, a, b).status_code == 201
    response = swipe(client, b, a)
    assert response.status_code == 201
    return response.get_json()["match"]["id"]


def open_conversation(client, a: Account, b: Account) -> str:
    match_id = make_match(client, a, b)
    response = client.post("/conversations", json={"match_id": match_id}, headers=a.headers)
    assert response.status_code == 201
    return response.get_json()["data"]["id"]


@pytest.fixture
def alice(client):
    return register(client, "alice@x.com", "pw1", "Alice", "Liddell")


@pytest.fixture
def bob(client):
    return register(client, "bob@x.com", "pw2", "Bob")


@pytest.fixture
def carol(client):
    return register(client, "carol@x.com", "pw3", "Carol")
