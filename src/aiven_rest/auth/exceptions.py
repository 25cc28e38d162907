"""Exceptions raised while resolving configuration values.

Example:
    ```python
    from aiven_rest.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("API token not found", env_var_name="AIVEN_TOKEN")
    ```
"""

from aiven_rest.errors.exceptions import ConfigurationError


class CredentialError(ConfigurationError):
    """Base exception for credential and setting resolution errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required value cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name
