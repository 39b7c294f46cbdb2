"""Helpers shared by the API tests."""

from notekeep.config import Settings

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
STRONG_PASSWORD = "Sup3r$ecretPw"


def make_settings(**overrides) -> Settings:
    """Settings for tests: in-memory SQLite, cheap bcrypt, no log files."""
    values = dict(
        database_url=TEST_DB_URL,
        environment="testing",
        access_token_secret="test-access-secret",
        refresh_token_secret="test-refresh-secret",
        password_hash_rounds=10,
        auth_rate_limit_requests=1000,
        note_rate_limit_requests=1000,
        rate_limit_backend="memory",
        log_dir=None,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def api(path: str) -> str:
    return f"/api/v1{path}"


def signup(client, email: str, password: str = STRONG_PASSWORD):
    return client.post(api("/auth/signup"), json={"email": email, "password": password})


def signin(client, email: str, password: str = STRONG_PASSWORD):
    return client.post(api("/auth/signin"), json={"email": email, "password": password})


def register_and_login(client, email: str, password: str = STRONG_PASSWORD) -> dict:
    """Create a user and return bearer headers for it.

    Cookies are dropped so later requests authenticate with the header only.
    """
    assert signup(client, email, password).status_code == 201
    response = signin(client, email, password)
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def set_cookie_headers(response, name: str) -> list:
    return [h for h in response.headers.get_list("set-cookie") if h.startswith(f"{name}=")]


def cookie_attributes(header: str) -> list:
    """Lowercased attributes of a Set-Cookie header, without the name=value pair."""
    return [part.strip().lower() for part in header.split(";")[1:]]
