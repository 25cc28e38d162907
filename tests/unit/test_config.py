"""Tests for client options."""

import httpx
import pytest

from aiven_rest.auth.methods import TokenAuth, UserAuth
from aiven_rest.config import (
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ClientOptions,
    apply_options,
    with_api_url,
    with_mfa_auth,
    with_retries,
    with_timeout,
    with_token_auth,
    with_transport,
    with_user_agent,
    with_user_auth,
)
from aiven_rest.errors.exceptions import ConfigurationError


@pytest.mark.unit
def test_defaults():
    params = apply_options()

    assert params == ClientOptions()
    assert params.api_url == "https://api.aiven.io"
    assert params.user_agent == DEFAULT_USER_AGENT
    assert params.auth_method is None
    assert params.retry_count == DEFAULT_RETRY_COUNT == 2
    assert params.retry_backoff == DEFAULT_RETRY_BACKOFF == 1.0
    assert params.transport is None
    assert params.timeout == DEFAULT_TIMEOUT


@pytest.mark.unit
def test_each_option_sets_its_field():
    transport = httpx.MockTransport(lambda r: httpx.Response(200))

    params = apply_options(
        with_transport(transport),
        with_api_url("https://api.example.test"),
        with_user_agent("tool/2.0"),
        with_retries(4, 0.5),
        with_timeout(5.0),
    )

    assert params.transport is transport
    assert params.api_url == "https://api.example.test"
    assert params.user_agent == "tool/2.0"
    assert params.retry_count == 4
    assert params.retry_backoff == 0.5
    assert params.timeout == 5.0


@pytest.mark.unit
def test_last_option_wins():
    params = apply_options(with_api_url("https://one"), with_api_url("https://two"), with_retries(1, 1), with_retries(3, 0))

    assert params.api_url == "https://two"
    assert (params.retry_count, params.retry_backoff) == (3, 0)


@pytest.mark.unit
def test_auth_options_replace_each_other():
    assert isinstance(apply_options(with_user_auth("a@b.c", "pw"), with_token_auth("t")).auth_method, TokenAuth)
    assert isinstance(apply_options(with_token_auth("t"), with_mfa_auth("a@b.c", "pw", "1")).auth_method, UserAuth)
    assert isinstance(apply_options(with_mfa_auth("a@b.c", "pw", "1"), with_user_auth("a@b.c", "pw")).auth_method, UserAuth)


@pytest.mark.unit
@pytest.mark.parametrize(("count", "backoff"), [(-1, 1.0), (2, -0.1)])
def test_negative_retry_settings_are_rejected(count, backoff):
    with pytest.raises(ConfigurationError):
        with_retries(count, backoff)


@pytest.mark.unit
@pytest.mark.parametrize(
    "factory",
    [
        with_transport,
        with_api_url,
        with_token_auth,
        with_user_auth,
        with_mfa_auth,
        with_user_agent,
        with_retries,
        with_timeout,
    ],
)
def test_every_option_is_documented(factory):
    assert factory.__doc__ and factory.__doc__.strip()


@pytest.mark.unit
def test_options_do_not_share_state():
    first = apply_options(with_api_url("https://one"))
    second = apply_options()

    assert first.api_url != second.api_url
