import pytest

from gamehub.entrypoints.flask_app import create_app
from tests.fakes import FakeEmailAdapter


@pytest.fixture
def email_adapter():
    return FakeEmailAdapter()


@pytest.fixture
def app(sqlite_session_factory, email_adapter):
    """Create test Flask application on an in-memory database."""
    return create_app("testing", session_factory=sqlite_session_factory, email_adapter=email_adapter)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def register_and_confirm(client, email_adapter):
    """Register an account, confirm it through its emailed link, and return its player id."""

    def _register_and_confirm(username="alice", email="alice@example.com", password="hunter2"):  # noqa: S107
        response = client.post("/register", json={"username": username, "password": password, "email": email})
        assert response.status_code == 201, response.get_json()
        token = email_adapter.tokens_sent()[-1]
        assert client.get(f"/confirm?token={token}").status_code == 200
        return response.get_json()["userId"]

    return _register_and_confirm
