"""Pytest configuration and shared fixtures for keycloak-admin-core tests."""

import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear KEYCLOAK_* environment variables before each test.

    This prevents a developer's own Keycloak settings from leaking into
    configuration tests.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("KEYCLOAK_"):
            monkeypatch.delenv(key, raising=False)

    yield
