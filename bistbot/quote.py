"""Quote snapshot decoded from the index endpoint."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import QuoteError


@dataclass(frozen=True)
class QuoteSnapshot:
    previous_close: float
    latest: float
    change_percent: float

    @property
    def is_increase(self) -> bool:
        return self.latest > self.previous_close

    @classmethod
    def from_payload(cls, payload) -> "QuoteSnapshot":
        """
        Build a snapshot from the decoded JSON body.
        Uses change_rate when the endpoint sends it, otherwise derives it.
        """
        if not isinstance(payload, dict):
            raise QuoteError(f"expected a JSON object, got {type(payload).__name__}")

        previous = _number(payload, "previous_closing")
        latest = _number(payload, "latest")

        if payload.get("change_rate") is not None:
            change = _number(payload, "change_rate")
        else:
            if previous == 0:
                raise QuoteError("previous_closing is zero; cannot compute change")
            change = (latest - previous) / previous * 100

        return cls(previous_close=previous, latest=latest, change_percent=change)


def _number(payload: dict, key: str) -> float:
    if key not in payload:
        raise QuoteError(f"payload is missing {key!r}")
    value = payload[key]
    # bool is an int subclass; the endpoint never sends flags for these fields.
    if isinstance(value, bool):
        raise QuoteError(f"{key!r} is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise QuoteError(f"{key!r} is not numeric: {value!r}") from exc
    if not math.isfinite(number):
        raise QuoteError(f"{key!r} is not finite: {value!r}")
    return number
