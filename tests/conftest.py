import pytest

ENV_VARS = [
    "FETCH_REQUEST_DISABLE_URL_ENCODING",
    "FETCH_REQUEST_DEFAULT_URL",
    "PROXY_URL",
    "HTTPS_PROXY",
    "HTTP_PROXY",
    "NO_PROXY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of config and proxy resolution."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
