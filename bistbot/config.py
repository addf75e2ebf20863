"""Configuration helpers for bistbot (env/.env + defaults)."""

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_QUOTE_URL = "https://www.doviz.com/api/v1/indexes/XU100/latest"
DEFAULT_TWEET_URL = "https://api.twitter.com/2/tweets"
DEFAULT_INDEX_NAME = "BIST100"
DEFAULT_TIMEZONE = "Europe/Istanbul"
# Borsa Istanbul closes in the late afternoon.
DEFAULT_TRIGGER_HOUR = 17
DEFAULT_POLL_INTERVAL_SECONDS = 3600.0
DEFAULT_REQUEST_TIMEOUT = 10.0

CREDENTIAL_ENV_VARS = ("CONSUMERKEY", "CONSUMERSECRET", "ACCESSTOKEN", "ACCESSSECRET")


@dataclass(frozen=True)
class Credentials:
    """OAuth1 user-context secrets for the posting account."""

    consumer_key: str
    consumer_secret: str
    access_token: str
    access_secret: str

    def __repr__(self) -> str:
        return "Credentials(<redacted>)"

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read all four secrets; raise ConfigError listing any that are missing."""
        values = {name: (os.getenv(name) or "").strip() for name in CREDENTIAL_ENV_VARS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigError(
                "missing required environment variable(s): " + ", ".join(missing)
            )
        return cls(
            consumer_key=values["CONSUMERKEY"],
            consumer_secret=values["CONSUMERSECRET"],
            access_token=values["ACCESSTOKEN"],
            access_secret=values["ACCESSSECRET"],
        )


@dataclass(frozen=True)
class Config:
    """Runtime settings passed explicitly to the fetcher, publisher and scheduler."""

    credentials: Optional[Credentials] = None
    quote_url: str = DEFAULT_QUOTE_URL
    tweet_url: str = DEFAULT_TWEET_URL
    index_name: str = DEFAULT_INDEX_NAME
    timezone: str = DEFAULT_TIMEZONE
    trigger_hour: int = DEFAULT_TRIGGER_HOUR
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    dry_run: bool = False

    def __post_init__(self):
        if not 0 <= self.trigger_hour <= 23:
            raise ConfigError(f"trigger hour must be between 0 and 23, got {self.trigger_hour}")
        if not math.isfinite(self.poll_interval_seconds) or self.poll_interval_seconds <= 0:
            raise ConfigError(
                f"poll interval must be a positive number, got {self.poll_interval_seconds}"
            )
        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            raise ConfigError(f"request timeout must be a positive number, got {self.request_timeout}")

    @classmethod
    def from_env(cls, require_credentials: bool = True) -> "Config":
        """
        Load config from .env/environment and fall back to defaults.
        Without require_credentials, incomplete credentials leave the field empty.
        """
        load_env()

        if require_credentials:
            credentials = Credentials.from_env()
        else:
            try:
                credentials = Credentials.from_env()
            except ConfigError:
                credentials = None

        # DRY_RUN=true means compose and log, never post.
        dry_run_raw = os.getenv("DRY_RUN", "false").lower().strip()
        dry_run = dry_run_raw in {"1", "true", "yes", "y"}

        return cls(
            credentials=credentials,
            # Blank values (e.g. "TIMEZONE=" in .env) keep the defaults.
            quote_url=os.getenv("QUOTE_URL") or DEFAULT_QUOTE_URL,
            tweet_url=os.getenv("TWITTER_API_URL") or DEFAULT_TWEET_URL,
            index_name=os.getenv("INDEX_NAME") or DEFAULT_INDEX_NAME,
            timezone=os.getenv("TIMEZONE") or DEFAULT_TIMEZONE,
            trigger_hour=_env_number("TRIGGER_HOUR", DEFAULT_TRIGGER_HOUR, int),
            poll_interval_seconds=_env_number(
                "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS, float
            ),
            request_timeout=_env_number("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, float),
            dry_run=dry_run,
        )


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def load_env() -> None:
    """Load a .env from the working directory (or a parent) without overriding the environment."""
    load_dotenv(find_dotenv(usecwd=True))


def setup_logging() -> None:
    """Configure standard console logging for the app."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(level)
