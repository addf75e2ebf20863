import dataclasses
import datetime as dt
import logging
from unittest.mock import MagicMock, patch
from zoneinfo import ZoneInfo

import pytest
import requests

from bistbot.scheduler import (
    DailyPostScheduler,
    is_weekday,
    resolve_timezone,
    run_cycle,
    should_post,
)
from bistbot.twitter import PostResult
from conftest import make_response

IST = ZoneInfo("Europe/Istanbul")
# 2024-03-04 is a Monday.
MONDAY = dt.date(2024, 3, 4)


def _at(day_offset, hour, tz=IST):
    d = MONDAY + dt.timedelta(days=day_offset)
    return dt.datetime(d.year, d.month, d.day, hour, 30, tzinfo=tz)


@pytest.mark.parametrize("day_offset", range(5))
def test_weekdays_at_trigger_hour_post(day_offset):
    moment = _at(day_offset, 17)
    assert is_weekday(moment)
    assert should_post(moment, 17)


@pytest.mark.parametrize("day_offset", [5, 6])
@pytest.mark.parametrize("hour", range(24))
def test_weekends_never_post(day_offset, hour):
    assert not should_post(_at(day_offset, hour), hour)


@pytest.mark.parametrize("hour", [0, 9, 16, 18, 23])
def test_other_hours_do_not_post(hour):
    assert not should_post(_at(0, hour), 17)


def test_trigger_is_evaluated_in_configured_zone(cfg):
    # 14:30 UTC is 17:30 in Istanbul.
    utc_moment = dt.datetime(2024, 3, 4, 14, 30, tzinfo=dt.timezone.utc)
    seen = []

    def clock(tz):
        seen.append(tz)
        return utc_moment.astimezone(tz)

    action = MagicMock()
    scheduler = DailyPostScheduler(cfg, action=action, clock=clock)
    assert scheduler.tick() is True
    assert seen == [IST]
    action.assert_called_once_with()


def test_resolve_timezone_known_zone():
    assert resolve_timezone("Europe/Istanbul") == IST


@pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "../etc/passwd", "Europe", "America"])
def test_resolve_timezone_falls_back_to_utc(name, caplog):
    with caplog.at_level(logging.WARNING, logger="bistbot.scheduler"):
        assert resolve_timezone(name) is dt.timezone.utc
    assert "falling back to UTC" in caplog.text


class FakeStop:
    """Lets the loop run a fixed number of ticks without sleeping."""

    def __init__(self, ticks):
        self.ticks = ticks
        self.waits = []

    def wait(self, timeout):
        self.waits.append(timeout)
        if self.ticks == 0:
            return True
        self.ticks -= 1
        return False

    def set(self):
        self.ticks = 0


def test_run_forever_ticks_until_stopped(cfg):
    cfg = dataclasses.replace(cfg, poll_interval_seconds=60)
    moments = iter([_at(0, 16), _at(0, 17), _at(0, 18)])
    action = MagicMock()
    stop = FakeStop(ticks=3)

    DailyPostScheduler(
        cfg, action=action, clock=lambda tz: next(moments), stop_event=stop
    ).run_forever()

    action.assert_called_once_with()
    assert stop.waits == [60, 60, 60, 60]


def test_run_forever_survives_failing_action(cfg, caplog):
    action = MagicMock(side_effect=[RuntimeError("boom"), None])
    stop = FakeStop(ticks=2)
    scheduler = DailyPostScheduler(
        cfg, action=action, clock=lambda tz: _at(0, 17), stop_event=stop
    )
    with caplog.at_level(logging.ERROR, logger="bistbot.scheduler"):
        scheduler.run_forever()
    assert action.call_count == 2
    assert "boom" in caplog.text


def test_stop_ends_loop(cfg):
    scheduler = DailyPostScheduler(cfg, action=MagicMock())
    scheduler.stop()
    scheduler.run_forever()


def test_run_cycle_posts_composed_status(cfg, session):
    session.get.return_value = make_response(
        payload={"previous_closing": 100.0, "latest": 105.0, "change_rate": 5.0}
    )
    session.post.return_value = make_response(status_code=201)

    result = run_cycle(cfg, session=session)

    assert result == PostResult(status_code=201, body="")
    text = session.post.call_args.kwargs["json"]["text"]
    assert "artışla" in text
    assert "105.000" in text


def test_run_cycle_malformed_json_skips_publish(cfg, session):
    session.get.return_value = make_response(
        json_error=requests.exceptions.JSONDecodeError("Expecting value", "nope", 0)
    )
    with patch("bistbot.scheduler.post_status") as post:
        assert run_cycle(cfg, session=session) is None
    post.assert_not_called()
    session.post.assert_not_called()
