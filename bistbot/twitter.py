"""Twitter/X status posting helper."""

import logging
from dataclasses import dataclass

import requests
from requests_oauthlib import OAuth1

from .config import Config, Credentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostResult:
    """Outcome of one status POST."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_auth(credentials: Credentials) -> OAuth1:
    """Sign requests as the posting account (OAuth1 user context)."""
    return OAuth1(
        credentials.consumer_key,
        client_secret=credentials.consumer_secret,
        resource_owner_key=credentials.access_token,
        resource_owner_secret=credentials.access_secret,
    )


def post_status(text: str, cfg: Config, session=None) -> PostResult | None:
    """
    Post a status unless dry-run is enabled.
    Returns None when nothing reached the API (dry run or transport error).
    """
    if cfg.dry_run or cfg.credentials is None:
        logger.info("Twitter dry run or missing credentials. Status:\n%s", text)
        return None

    http = session or requests
    logger.info("Posting status to %s", cfg.tweet_url)
    try:
        r = http.post(
            cfg.tweet_url,
            json={"text": text},
            auth=build_auth(cfg.credentials),
            timeout=cfg.request_timeout,
        )
    except requests.RequestException as exc:
        logger.error("Posting status failed: %s", exc)
        return None

    result = PostResult(status_code=r.status_code, body=r.text)
    if not result.ok:
        logger.error("Twitter returned %d - %s", result.status_code, result.body)
    else:
        logger.info("Status posted (HTTP %d)", result.status_code)
    return result
