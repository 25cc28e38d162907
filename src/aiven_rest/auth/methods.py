"""Ways of obtaining the API token a client presents on every request.

An :class:`AuthMethod` is handed the client under construction, because
exchanging a user's credentials for a token is itself an API call.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aiven_rest.errors.exceptions import AivenError, AuthenticationError
from aiven_rest.response import APIResponse, check_api_response

if TYPE_CHECKING:
    from aiven_rest.client import AivenClient

logger = logging.getLogger(__name__)

USER_AUTH_PATH = "/userauth"


class AuthMethod(ABC):
    """Produces the API token for a client."""

    @abstractmethod
    def token(self, client: "AivenClient") -> str:
        """Return the token ``client`` should authorize with.

        Raises:
            AuthenticationError: The token could not be obtained.
        """


class TokenAuth(AuthMethod):
    """A pre-issued API token. No request is made."""

    def __init__(self, token: str):
        self._token = token

    def token(self, client: "AivenClient") -> str:
        return self._token

    def __repr__(self) -> str:
        return "TokenAuth(token='***')"


@dataclass
class AuthRequest:
    email: str
    otp: str
    password: str


@dataclass
class AuthResponse(APIResponse):
    token: str = ""
    state: str | None = None
    user_email: str | None = None


class UserAuth(AuthMethod):
    """Email and password, plus a one-time password for MFA accounts.

    The token is obtained with ``POST /v1/userauth`` while the client has no
    token yet, so that request carries no Authorization header.
    """

    def __init__(self, email: str, password: str, otp: str = ""):
        self._email = email
        self._password = password
        self._otp = otp

    def token(self, client: "AivenClient") -> str:
        logger.debug(f"Requesting API token for {self._email}")
        try:
            body = client.post(USER_AUTH_PATH, AuthRequest(email=self._email, otp=self._otp, password=self._password))
        except AivenError as e:
            raise AuthenticationError(f"unable to perform {USER_AUTH_PATH} request: {e}") from e

        try:
            rsp = check_api_response(body, AuthResponse)
        except AivenError as e:
            raise AuthenticationError(f"bad API response: {e}") from e

        return rsp.token

    def __repr__(self) -> str:
        mfa = ", otp='***'" if self._otp else ""
        return f"UserAuth(email={self._email!r}, password='***'{mfa})"
