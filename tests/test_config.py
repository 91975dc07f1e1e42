from __future__ import annotations

import pytest

from zanalytics.config import (
    Credentials,
    accounts_token_url,
    analytics_base_url,
    debug_enabled,
    initial_access_token,
    load_credentials,
)
from zanalytics.errors import ConfigError

ENV = {
    "ZOHO_CLIENT_ID": "cid",
    "ZOHO_CLIENT_SECRET": "csecret",
    "ZOHO_REFRESH_TOKEN": "rtok",
}


def test_load_credentials_reads_environment() -> None:
    creds = load_credentials(ENV)
    assert creds == Credentials(client_id="cid", client_secret="csecret", refresh_token="rtok")


def test_load_credentials_lists_missing_variables() -> None:
    with pytest.raises(ConfigError) as exc_info:
        load_credentials({"ZOHO_CLIENT_ID": "cid", "ZOHO_CLIENT_SECRET": "  "})

    message = str(exc_info.value)
    assert "ZOHO_REFRESH_TOKEN" in message
    assert "ZOHO_CLIENT_SECRET" in message
    assert "ZOHO_CLIENT_ID" not in message


def test_credentials_repr_masks_secrets() -> None:
    text = repr(load_credentials(ENV))
    assert "csecret" not in text
    assert "rtok" not in text


def test_hosts_default_and_override() -> None:
    assert analytics_base_url({}) == "https://analyticsapi.zoho.com"
    assert accounts_token_url({}) == "https://accounts.zoho.com/oauth/v2/token"
    assert analytics_base_url({"ZOHO_ANALYTICS_HOST": "analyticsapi.zoho.eu"}) == (
        "https://analyticsapi.zoho.eu"
    )
    assert accounts_token_url({"ZOHO_ACCOUNTS_HOST": "http://localhost:9000/"}) == (
        "http://localhost:9000/oauth/v2/token"
    )


def test_initial_access_token_and_debug_flag() -> None:
    assert initial_access_token({}) is None
    assert initial_access_token({"ZOHO_ACCESS_TOKEN": " seed "}) == "seed"
    assert debug_enabled({"ZANALYTICS_DEBUG": "1"})
    assert not debug_enabled({"ZANALYTICS_DEBUG": "false"})
    assert not debug_enabled({})
