from unittest.mock import MagicMock

import pytest

from bistbot.config import Config, Credentials

CREDENTIAL_VALUES = {
    "CONSUMERKEY": "ck",
    "CONSUMERSECRET": "cs",
    "ACCESSTOKEN": "at",
    "ACCESSSECRET": "as",
}


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # A developer's local .env must not leak into tests.
    monkeypatch.setattr("bistbot.config.load_dotenv", lambda *a, **k: False)
    for name in (
        "QUOTE_URL",
        "TWITTER_API_URL",
        "INDEX_NAME",
        "TIMEZONE",
        "TRIGGER_HOUR",
        "POLL_INTERVAL_SECONDS",
        "REQUEST_TIMEOUT",
        "DRY_RUN",
        "LOG_LEVEL",
        *CREDENTIAL_VALUES,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def creds_env(monkeypatch):
    for name, value in CREDENTIAL_VALUES.items():
        monkeypatch.setenv(name, value)


@pytest.fixture
def cfg():
    return Config(credentials=Credentials("ck", "cs", "at", "as"))


def make_response(status_code=200, payload=None, text="", json_error=None):
    r = MagicMock()
    r.status_code = status_code
    r.text = text
    if json_error is not None:
        r.json.side_effect = json_error
    else:
        r.json.return_value = payload
    return r


@pytest.fixture
def session():
    return MagicMock()
