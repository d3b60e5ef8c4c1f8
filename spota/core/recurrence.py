"""Normalization of recurrence specifications."""

import logging
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from spota.ports.schedule import RULE_WIRE_NAMES, RecurrenceRule, Rule

__all__ = ["normalize_rule"]

logger = logging.getLogger(__name__)

# Accepted input spellings -> RecurrenceRule attribute
_FIELD_ALIASES: dict[str, str] = {
    **{name: name for name in RULE_WIRE_NAMES},
    **{wire: name for name, wire in RULE_WIRE_NAMES.items()},
    "timezone": "tz",
}


def _read_fields(rule_info: Mapping[str, Any] | RecurrenceRule) -> dict[str, Any]:
    """Map the input onto RecurrenceRule attribute names."""
    if isinstance(rule_info, RecurrenceRule):
        return {k: v for k, v in asdict(rule_info).items() if v is not None}

    values: dict[str, Any] = {}
    for key, value in rule_info.items():
        name = _FIELD_ALIASES.get(key)
        if name is None:
            logger.debug(f"Ignoring unknown recurrence field {key!r}")
            continue
        values[name] = value
    return values


def normalize_rule(
    rule_info: str | Mapping[str, Any] | RecurrenceRule,
    *,
    keep_zero: bool = False,
) -> Rule:
    """Turn a recurrence specification into the form the scheduler expects.

    Strings are cron-like expressions and are returned untouched; the
    scheduler validates them. Structured input is copied into a new
    RecurrenceRule, field by field, without any bounds checking.

    By default only truthy values are copied, so a legitimate 0 (midnight,
    minute 0, second 0) ends up unset, i.e. "any". Each dropped zero is
    logged as a warning. Pass keep_zero=True to copy every value that is
    not None instead.

    Args:
        rule_info: Cron string, mapping of calendar fields, or RecurrenceRule.
        keep_zero: Use presence checks instead of truthiness.

    Returns:
        The string unchanged, or a new RecurrenceRule.
    """
    if isinstance(rule_info, str):
        return rule_info

    rule = RecurrenceRule()
    for name, value in _read_fields(rule_info).items():
        if value is None:
            continue
        if not value and not keep_zero:
            logger.warning(
                f"Recurrence field {name!r}={value!r} is falsy and was left unset; "
                "pass keep_zero=True to keep it"
            )
            continue
        setattr(rule, name, value)
    return rule
