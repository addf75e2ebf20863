"""Command-line interface for running the scheduler or a single post."""

import argparse
import dataclasses
import logging
import sys

from .config import Config, load_env, setup_logging
from .data_sources.doviz import fetch_quote
from .errors import ConfigError, QuoteError
from .message import compose_status
from .scheduler import DailyPostScheduler, run_cycle

logger = logging.getLogger(__name__)


def build_cfg_from_args(args) -> Config:
    # Start from environment/.env defaults; preview never posts, so it needs no secrets.
    cfg = Config.from_env(require_credentials=args.cmd != "preview")

    # Override defaults with CLI flags if they were provided.
    overrides = {}
    if getattr(args, "timezone", None):
        overrides["timezone"] = args.timezone
    if getattr(args, "hour", None) is not None:
        overrides["trigger_hour"] = args.hour
    if getattr(args, "interval", None) is not None:
        overrides["poll_interval_seconds"] = args.interval
    if getattr(args, "dry_run", None):
        overrides["dry_run"] = True

    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def main(argv=None):
    # Load .env first so LOG_LEVEL from it applies, then enable console logging.
    load_env()
    setup_logging()
    p = argparse.ArgumentParser(description="Daily BIST100 close poster")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Run command: wake every interval and post at the trigger hour.
    run = sub.add_parser("run")
    run.add_argument("--timezone")
    run.add_argument("--hour", type=int)
    run.add_argument("--interval", type=float)
    run.add_argument("--dry-run", action="store_true")

    # Post-now command: one fetch/compose/publish cycle, ignoring the schedule.
    post_now = sub.add_parser("post-now")
    post_now.add_argument("--dry-run", action="store_true")

    # Preview command: print the status that would be posted.
    sub.add_parser("preview")

    args = p.parse_args(argv)
    try:
        cfg = build_cfg_from_args(args)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(2)

    if args.cmd == "run":
        scheduler = DailyPostScheduler(cfg)
        try:
            scheduler.run_forever()
        except KeyboardInterrupt:
            scheduler.stop()
            logger.info("Interrupted, exiting.")
    elif args.cmd == "post-now":
        result = run_cycle(cfg)
        if result is not None and not result.ok:
            sys.exit(1)
    elif args.cmd == "preview":
        try:
            snapshot = fetch_quote(cfg)
        except QuoteError as exc:
            logger.error("Quote unavailable: %s", exc)
            sys.exit(1)
        print(compose_status(snapshot, cfg.index_name))
