"""Tests for immutable client configuration."""

import dataclasses

import pytest

from keycloak_admin_core.auth import CredentialResolver
from keycloak_admin_core.auth.exceptions import CredentialNotFoundError
from keycloak_admin_core.auth.models import (
    ClientSecretCredentials,
    PasswordCredentials,
    TokenProviderCredentials,
)
from keycloak_admin_core.config import ClientConfig, validate_serializer
from keycloak_admin_core.errors.exceptions import ConfigurationError
from keycloak_admin_core.serialization import JsonSerializer

BASE_URL = "https://idp.example.com"


class TestCreate:
    """Keyword construction selects exactly one credential variant."""

    @pytest.mark.unit
    def test_password_mode(self):
        config = ClientConfig.create(BASE_URL, username="admin", password="secret")

        assert config.credentials == PasswordCredentials("admin", "secret")
        assert config.include_auth_segment is True
        assert config.authentication_realm is None
        assert config.client_id == "admin-cli"
        assert isinstance(config.serializer, JsonSerializer)

    @pytest.mark.unit
    def test_client_secret_mode(self):
        config = ClientConfig.create(
            BASE_URL, client_secret="s3cr3t", include_auth_segment=False, authentication_realm="master"
        )

        assert config.credentials == ClientSecretCredentials("s3cr3t")
        assert config.include_auth_segment is False
        assert config.authentication_realm == "master"

    @pytest.mark.unit
    def test_token_provider_mode(self):
        def provider():
            return "token"

        config = ClientConfig.create(BASE_URL, token_provider=provider)

        assert config.credentials == TokenProviderCredentials(provider)

    @pytest.mark.unit
    def test_no_credentials_raises(self):
        with pytest.raises(ConfigurationError, match="No credentials"):
            ClientConfig.create(BASE_URL)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"username": "admin", "password": "secret", "client_secret": "s3cr3t"},
            {"client_secret": "s3cr3t", "token_provider": lambda: "t"},
            {"username": "admin", "password": "secret", "token_provider": lambda: "t"},
        ],
    )
    def test_ambiguous_credentials_raise(self, kwargs):
        with pytest.raises(ConfigurationError, match="Ambiguous"):
            ClientConfig.create(BASE_URL, **kwargs)

    @pytest.mark.unit
    @pytest.mark.parametrize("kwargs", [{"username": "admin"}, {"password": "secret"}, {"username": "", "password": "x"}])
    def test_incomplete_password_credentials_raise(self, kwargs):
        with pytest.raises(ConfigurationError, match="username and password"):
            ClientConfig.create(BASE_URL, **kwargs)

    @pytest.mark.unit
    def test_empty_client_secret_raises(self):
        with pytest.raises(ConfigurationError):
            ClientConfig.create(BASE_URL, client_secret="")

    @pytest.mark.unit
    def test_non_callable_token_provider_raises(self):
        with pytest.raises(ConfigurationError, match="callable"):
            ClientConfig.create(BASE_URL, token_provider="not-callable")

    @pytest.mark.unit
    @pytest.mark.parametrize("base_url", ["", "idp.example.com", "ftp://idp.example.com", "https://"])
    def test_invalid_base_url_raises(self, base_url):
        with pytest.raises(ConfigurationError, match="base URL"):
            ClientConfig.create(base_url, client_secret="s3cr3t")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "base_url", ["https://idp.example.com/?kc_idp_hint=google", "https://idp.example.com#admin"]
    )
    def test_base_url_with_query_or_fragment_raises(self, base_url):
        with pytest.raises(ConfigurationError, match="query or fragment"):
            ClientConfig.create(base_url, client_secret="s3cr3t")

    @pytest.mark.unit
    def test_empty_client_id_raises(self):
        with pytest.raises(ConfigurationError, match="client_id"):
            ClientConfig.create(BASE_URL, client_secret="s3cr3t", client_id="")

    @pytest.mark.unit
    def test_invalid_serializer_raises(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(BASE_URL, ClientSecretCredentials("s3cr3t"), serializer=object())

    @pytest.mark.unit
    def test_unsupported_credentials_raise(self):
        with pytest.raises(ConfigurationError, match="Unsupported"):
            ClientConfig(BASE_URL, credentials=("admin", "secret"))


class TestImmutability:
    @pytest.mark.unit
    def test_config_is_frozen(self):
        config = ClientConfig.create(BASE_URL, client_secret="s3cr3t")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.authentication_realm = "master"

    @pytest.mark.unit
    def test_repr_hides_secrets(self):
        config = ClientConfig.create(BASE_URL, username="admin", password="hunter2")

        assert "hunter2" not in repr(config)
        assert "admin" in repr(config)


class TestValidateSerializer:
    @pytest.mark.unit
    def test_none_raises(self):
        with pytest.raises(ConfigurationError, match="None"):
            validate_serializer(None)

    @pytest.mark.unit
    def test_missing_methods_raise(self):
        class OnlySerialize:
            def serialize(self, obj):
                return ""

        with pytest.raises(ConfigurationError, match="OnlySerialize"):
            validate_serializer(OnlySerialize())

    @pytest.mark.unit
    def test_valid_serializer_is_returned(self):
        serializer = JsonSerializer()
        assert validate_serializer(serializer) is serializer


class TestFromEnv:
    """Configuration from KEYCLOAK_* environment variables."""

    @pytest.fixture
    def resolver(self):
        return CredentialResolver(load_dotenv=False)

    @pytest.mark.unit
    def test_password_from_env(self, monkeypatch, resolver):
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)
        monkeypatch.setenv("KEYCLOAK_USERNAME", "admin")
        monkeypatch.setenv("KEYCLOAK_PASSWORD", "secret")
        monkeypatch.setenv("KEYCLOAK_INCLUDE_AUTH_SEGMENT", "false")
        monkeypatch.setenv("KEYCLOAK_AUTH_REALM", "master")

        config = ClientConfig.from_env(resolver)

        assert config.base_url == BASE_URL
        assert config.credentials == PasswordCredentials("admin", "secret")
        assert config.include_auth_segment is False
        assert config.authentication_realm == "master"
        assert config.client_id == "admin-cli"

    @pytest.mark.unit
    def test_client_secret_from_file(self, monkeypatch, resolver, tmp_path):
        secret_file = tmp_path / "client_secret"
        secret_file.write_text("file-secret\n")
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET_FILE", str(secret_file))
        monkeypatch.setenv("KEYCLOAK_CLIENT_ID", "automation-cli")

        config = ClientConfig.from_env(resolver)

        assert config.credentials == ClientSecretCredentials("file-secret")
        assert config.client_id == "automation-cli"
        assert config.include_auth_segment is True

    @pytest.mark.unit
    def test_client_secret_env_wins_over_file(self, monkeypatch, resolver, tmp_path):
        secret_file = tmp_path / "client_secret"
        secret_file.write_text("file-secret")
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET_FILE", str(secret_file))

        config = ClientConfig.from_env(resolver)

        assert config.credentials == ClientSecretCredentials("env-secret")

    @pytest.mark.unit
    def test_token_provider_with_env_url(self, monkeypatch, resolver):
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)

        config = ClientConfig.from_env(resolver, token_provider=lambda: "t")

        assert isinstance(config.credentials, TokenProviderCredentials)

    @pytest.mark.unit
    def test_custom_prefix(self, monkeypatch, resolver):
        monkeypatch.setenv("IDP_URL", BASE_URL)
        monkeypatch.setenv("IDP_CLIENT_SECRET", "s3cr3t")

        config = ClientConfig.from_env(resolver, prefix="IDP_")

        assert config.credentials == ClientSecretCredentials("s3cr3t")

    @pytest.mark.unit
    def test_missing_url_raises(self, monkeypatch, resolver):
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET", "s3cr3t")

        with pytest.raises(CredentialNotFoundError) as exc_info:
            ClientConfig.from_env(resolver)

        assert exc_info.value.env_var_name == "KEYCLOAK_URL"

    @pytest.mark.unit
    def test_ambiguous_env_raises(self, monkeypatch, resolver):
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)
        monkeypatch.setenv("KEYCLOAK_USERNAME", "admin")
        monkeypatch.setenv("KEYCLOAK_PASSWORD", "secret")
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET", "s3cr3t")

        with pytest.raises(ConfigurationError, match="Ambiguous"):
            ClientConfig.from_env(resolver)

    @pytest.mark.unit
    def test_empty_auth_realm_means_no_override(self, monkeypatch, resolver):
        monkeypatch.setenv("KEYCLOAK_URL", BASE_URL)
        monkeypatch.setenv("KEYCLOAK_CLIENT_SECRET", "s3cr3t")
        monkeypatch.setenv("KEYCLOAK_AUTH_REALM", "")

        assert ClientConfig.from_env(resolver).authentication_realm is None
