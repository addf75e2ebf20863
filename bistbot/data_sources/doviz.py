"""doviz.com index quote source."""

import logging

import requests

from ..config import Config
from ..errors import QuoteError
from ..quote import QuoteSnapshot

logger = logging.getLogger(__name__)


def fetch_quote(cfg: Config, session=None) -> QuoteSnapshot:
    """Download the latest index quote and decode it into a snapshot."""
    http = session or requests
    logger.info("Fetching %s quote from %s", cfg.index_name, cfg.quote_url)
    try:
        r = http.get(cfg.quote_url, timeout=cfg.request_timeout)
        r.raise_for_status()
    except requests.RequestException as exc:
        raise QuoteError(f"quote request failed: {exc}") from exc

    try:
        payload = r.json()
    except ValueError as exc:
        raise QuoteError(f"quote payload is not valid JSON: {exc}") from exc

    snapshot = QuoteSnapshot.from_payload(payload)
    logger.debug("Decoded quote: %s", snapshot)
    return snapshot
