"""Resolution of client settings from explicit values, the environment and ``.env`` files.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, merged into the environment on first use)
4. Default value

Example:
    ```python
    from aiven_rest import AivenClient, with_api_url, with_token_auth
    from aiven_rest.auth import CredentialResolver, resolve_api_url

    resolver = CredentialResolver()
    token = resolver.resolve(env_var_name="AIVEN_TOKEN", required=True)

    client = AivenClient(with_token_auth(token), with_api_url(resolve_api_url(resolver=resolver)))
    ```

Values are never logged in full; only the source they came from.
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

from aiven_rest.auth.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.aiven.io"

API_URL_ENV_VAR = "AIVEN_WEB_URL"


class CredentialResolver:
    """Resolve settings and credentials from several sources.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            upwards from the working directory.
        load_dotenv: Whether to read a .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once per resolver, thread-safe."""
        if self._dotenv_loaded or not self._load_dotenv_enabled:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                # Existing environment variables win over .env entries
                load_dotenv(dotenv_path=self._dotenv_path, override=False)
                logger.debug("Loaded .env file for setting resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a value, first match wins.

        Args:
            value: Explicitly provided value. When set, nothing else is consulted.
            env_var_name: Environment variable (or .env entry) to look up.
            default: Fallback when no other source has a value.
            required: Raise instead of returning None when nothing is found.
            mask_in_logs: Log ``***`` instead of the value.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: ``required`` is set and nothing was found.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name:
            self._ensure_dotenv_loaded()
            if env_var_name in os.environ:
                result = os.environ[env_var_name]
                source = f"environment variable '{env_var_name}'"

        if result is None and default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if mask_in_logs else result
            logger.debug(f"Resolved setting from {source}: {shown}")

        if required and result is None:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result


def resolve_api_url(value: str | None = None, resolver: CredentialResolver | None = None) -> str:
    """Return the API base URL: explicit value, then ``AIVEN_WEB_URL``, then production.

    An empty ``AIVEN_WEB_URL`` counts as unset.
    """
    if resolver is None:
        resolver = CredentialResolver(load_dotenv=False)

    url = resolver.resolve(
        value=value,
        env_var_name=API_URL_ENV_VAR,
        default=DEFAULT_API_URL,
        mask_in_logs=False,
    )
    return url or DEFAULT_API_URL
