"""Hourly wake-up loop that posts the index close once per trading day."""

import datetime as dt
import logging
import threading
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import Config
from .data_sources.doviz import fetch_quote
from .errors import QuoteError
from .message import compose_status
from .twitter import post_status

logger = logging.getLogger(__name__)


def is_weekday(moment: dt.datetime) -> bool:
    """True Monday through Friday."""
    return moment.weekday() < 5


def should_post(moment: dt.datetime, trigger_hour: int) -> bool:
    """Trigger condition: the configured hour on a weekday, in the moment's own zone."""
    return moment.hour == trigger_hour and is_weekday(moment)


def resolve_timezone(name: str) -> dt.tzinfo:
    """Look up a named zone, falling back to UTC if its data is unavailable."""
    # Directory-like keys such as "Europe" surface as OSError from the zone loader.
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        logger.warning("Time zone %r unavailable (%s); falling back to UTC", name, exc)
        return dt.timezone.utc


def run_cycle(cfg: Config, session=None):
    """
    Fetch the quote, compose the status and publish it.
    Returns the publish result, or None when the fetch failed and nothing was posted.
    """
    try:
        snapshot = fetch_quote(cfg, session=session)
    except QuoteError as exc:
        logger.warning("Skipping post, quote unavailable: %s", exc)
        return None

    status = compose_status(snapshot, cfg.index_name)
    logger.info("Composed status:\n%s", status)
    return post_status(status, cfg, session=session)


def _wall_clock(tz: dt.tzinfo) -> dt.datetime:
    return dt.datetime.now(tz)


class DailyPostScheduler:
    """Wake every poll interval and run the action when the trigger condition holds."""

    def __init__(self, cfg: Config, action=None, clock=None, stop_event=None):
        self.cfg = cfg
        self.tz = resolve_timezone(cfg.timezone)
        self._action = action or (lambda: run_cycle(cfg))
        self._clock = clock or _wall_clock
        self._stop = stop_event or threading.Event()

    def tick(self) -> bool:
        """Evaluate the trigger once; returns True if the action ran."""
        now = self._clock(self.tz)
        if not should_post(now, self.cfg.trigger_hour):
            logger.debug("No post at %s", now.isoformat())
            return False
        logger.info("Trigger matched at %s", now.isoformat())
        self._action()
        return True

    def run_forever(self) -> None:
        logger.info(
            "Scheduler started (tz=%s, hour=%d, every %.0fs)",
            self.tz,
            self.cfg.trigger_hour,
            self.cfg.poll_interval_seconds,
        )
        # Event.wait returns True once stop() is called.
        while not self._stop.wait(self.cfg.poll_interval_seconds):
            try:
                self.tick()
            except Exception:
                logger.exception("Cycle failed; waiting for the next tick")
        logger.info("Scheduler stopped.")

    def stop(self) -> None:
        self._stop.set()
