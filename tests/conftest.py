from __future__ import annotations

import sys
from pathlib import Path

import pytest
import respx
from typer.testing import CliRunner


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package. Pytest executes from the repository root where the
# ``src`` layout is not on ``sys.path`` by default, so the zanalytics package would
# otherwise be missing.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

API = "https://analyticsapi.zoho.com"
TOKEN_URL = "https://accounts.zoho.com/oauth/v2/token"


class StubTokenProvider:
    """Token provider that hands out a scripted sequence of tokens."""

    def __init__(self, token: str = "tokOld", refreshed: list[str] | None = None) -> None:
        self.token = token
        self.refreshed = list(refreshed if refreshed is not None else ["tokNew"])
        self.get_calls = 0
        self.refresh_calls = 0

    def get_token(self) -> str:
        self.get_calls += 1
        return self.token

    def force_refresh(self) -> str:
        self.refresh_calls += 1
        self.token = self.refreshed.pop(0)
        return self.token

    def close(self) -> None:
        pass


@pytest.fixture
def zoho_env(monkeypatch):
    monkeypatch.setenv("ZOHO_CLIENT_ID", "cid")
    monkeypatch.setenv("ZOHO_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("ZOHO_REFRESH_TOKEN", "rtok")
    for name in ("ZOHO_ACCESS_TOKEN", "ZOHO_ANALYTICS_HOST", "ZOHO_ACCOUNTS_HOST"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def token_provider():
    return StubTokenProvider()


@pytest.fixture
def http(token_provider):
    from zanalytics.http_client import AnalyticsHttpClient

    client = AnalyticsHttpClient(token_provider, base_url=API)
    yield client
    client.close()


@pytest.fixture
def respx_mock():
    with respx.mock(assert_all_called=False) as respx_mgr:
        yield respx_mgr


@pytest.fixture
def cli_runner(zoho_env):
    """Provide a CLI runner with dummy OAuth credentials in the environment."""

    return CliRunner()
