"""Scheduling port definitions (recurrence rule, config, envelope)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from spota.ports.http import RequestPayload

__all__ = ["RULE_WIRE_NAMES", "RecurrenceRule", "Rule", "ScheduleConfig", "SchedulingEnvelope"]

# Attribute name -> name understood by the scheduler service
RULE_WIRE_NAMES: dict[str, str] = {
    "year": "year",
    "month": "month",
    "date": "date",
    "day_of_week": "dayOfWeek",
    "hour": "hour",
    "minute": "minute",
    "second": "second",
    "tz": "tz",
}


@dataclass
class RecurrenceRule:
    """Structured recurrence: a set of optional calendar constraints.

    A field left as None is unconstrained ("any"), as in cron.

    Attributes:
        year: Calendar year.
        month: Month number.
        date: Day of month.
        day_of_week: Day of week, or a list of days.
        hour: Hour of day.
        minute: Minute of hour.
        second: Second of minute.
        tz: Timezone name.
    """

    year: int | None = None
    month: int | None = None
    date: int | None = None
    day_of_week: int | list[int] | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    tz: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the set fields, keyed by their wire names."""
        return {
            RULE_WIRE_NAMES[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


Rule = str | RecurrenceRule


@dataclass
class ScheduleConfig:
    """Options for SpotaRequest.schedule().

    Attributes:
        rule: Cron-like string or RecurrenceRule. Falsy means run now.
        callback_url: Where the scheduler should report results.
    """

    rule: Rule | None = None
    callback_url: str | None = None

    @classmethod
    def coerce(cls, value: ScheduleConfig | Mapping[str, Any] | None) -> ScheduleConfig:
        """Build a config from None, an existing config, or a plain mapping.

        Mappings may spell the callback as "callbackUrl" or "callback_url".
        """
        if value is None:
            return cls()
        if isinstance(value, ScheduleConfig):
            return value
        return cls(
            rule=value.get("rule"),
            callback_url=value.get("callbackUrl", value.get("callback_url")),
        )


@dataclass(slots=True, frozen=True)
class SchedulingEnvelope:
    """Message POSTed to the scheduler service.

    Attributes:
        rule: When to run the request.
        request: The request to run.
        callback_url: Optional completion callback.
    """

    rule: Rule
    request: RequestPayload
    callback_url: str | None = None

    def to_json(self) -> dict[str, Any]:
        """Return the JSON body for the scheduler endpoint.

        "callbackUrl" is left out when no callback was given.
        """
        body: dict[str, Any] = {
            "rule": self.rule.to_dict() if isinstance(self.rule, RecurrenceRule) else self.rule,
            "request": self.request.to_dict(),
        }
        if self.callback_url is not None:
            body["callbackUrl"] = self.callback_url
        return body
