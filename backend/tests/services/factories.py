"""Test factories — explicit Settings for route tests (no .env, no env mutation)."""

from relay.config import Settings

ADMIN_TOKEN = "test-admin-token"


def make_settings(**overrides) -> Settings:
    values = {
        "client_id": "test-client-id",
        "consumer_secret": "test-consumer-secret",
        "admin_token": ADMIN_TOKEN,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)
