"""Multi-source resolution of Keycloak connection settings and secrets.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

Example:
    ```python
    from keycloak_admin_core.auth import CredentialResolver

    resolver = CredentialResolver()
    server_url = resolver.resolve(env_var_name="KEYCLOAK_URL", required=True)
    client_secret = resolver.resolve_from_file(env_var_name="KEYCLOAK_CLIENT_SECRET_FILE")
    include_auth = resolver.resolve_bool(env_var_name="KEYCLOAK_INCLUDE_AUTH_SEGMENT", default=True)
    ```

Security Considerations:
    - Secrets are never logged (masked with ***)
    - Only the source (env var name, file path) is logged
    - File-based secrets have whitespace stripped
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from keycloak_admin_core.auth.exceptions import CredentialFileError, CredentialNotFoundError
from keycloak_admin_core.errors.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])
_FALSE_VALUES = frozenset(["0", "false", "no", "off"])


class CredentialResolver:
    """Resolve settings from explicit values, the environment, .env and defaults.

    Args:
        dotenv_path: Path to .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load the .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for Keycloak settings")
            except Exception as e:
                # A broken .env must not prevent explicit or environment values
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a setting from multiple sources (first match wins).

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable to check.
            default: Value used when no other source provides one.
            required: Raise CredentialNotFoundError instead of returning None.
            mask_in_logs: Mask the value in log messages. Disable only for
                non-secret settings such as the server URL.

        Returns:
            Resolved value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required and not found in any source.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved setting from {source}: {shown}")

        if required and result is None:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_bool(
        self,
        *,
        value: bool | None = None,
        env_var_name: str | None = None,
        default: bool = False,
    ) -> bool:
        """Resolve a boolean flag such as ``KEYCLOAK_INCLUDE_AUTH_SEGMENT``.

        Accepts 1/0, true/false, yes/no and on/off (case-insensitive).

        Raises:
            ConfigurationError: If the environment holds any other value.
        """
        if value is not None:
            return value

        raw = self.resolve(env_var_name=env_var_name, mask_in_logs=False)
        if raw is None or not raw.strip():
            return default

        normalized = raw.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid boolean value {raw!r} for {env_var_name}")

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a secret (e.g. a mounted client secret) from a file.

        The path may come from ``file_path`` or from the environment variable
        ``env_var_name`` and supports ``~`` and ``$VAR`` expansion.

        Returns:
            File contents stripped of whitespace, or None if unavailable and
            not required.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_from_env = self.resolve(env_var_name=env_var_name, mask_in_logs=False)
            if path_from_env:
                path_to_use = path_from_env

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for secret resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
            logger.debug(f"Resolved secret from file: {path_obj} (***)")
            return content

        except FileNotFoundError:
            error_msg = f"Secret file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None

        except PermissionError:
            error_msg = f"Permission denied reading secret file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None

        except OSError as e:
            error_msg = f"Error reading secret file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None
