"""Authentication for the Aiven API client.

- Auth methods: a static API token, or email/password (optionally with a
  one-time password) exchanged for a token when the client is built
- Setting resolution (value → env → .env → default) for tokens and the API URL

Example:
    ```python
    from aiven_rest import AivenClient, with_token_auth
    from aiven_rest.auth import CredentialResolver

    resolver = CredentialResolver()
    client = AivenClient(with_token_auth(resolver.resolve(env_var_name="AIVEN_TOKEN", required=True)))
    ```
"""

from aiven_rest.auth.credentials import (
    API_URL_ENV_VAR,
    DEFAULT_API_URL,
    CredentialResolver,
    resolve_api_url,
)
from aiven_rest.auth.exceptions import CredentialError, CredentialNotFoundError
from aiven_rest.auth.methods import AuthMethod, TokenAuth, UserAuth

__all__ = [
    "API_URL_ENV_VAR",
    "DEFAULT_API_URL",
    "AuthMethod",
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "TokenAuth",
    "UserAuth",
    "resolve_api_url",
]
