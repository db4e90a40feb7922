"""Field validators and a rule-based checker that raises bad-request errors."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from englishapp.errors import bad_request

_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")

ACCOUNT_TYPES = frozenset({"admin", "siswa", "pakar"})
ALARM_STATUSES = frozenset({"1", "0"})


def validate_date(value: Any) -> bool:
    """True when ``value`` is a string holding a date as YYYY-MM-DD."""
    if not isinstance(value, str) or not _DATE_SHAPE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def validate_account_type(value: Any) -> bool:
    """True when ``value`` names a known account type."""
    return isinstance(value, str) and value in ACCOUNT_TYPES


def validate_status_alarm(value: Any) -> bool:
    """True when ``value`` is the string "1" or "0"."""
    return isinstance(value, str) and value in ALARM_STATUSES


_CUSTOM_RULES: dict[str, Callable[[Any], bool]] = {
    "jenisAkunValidator": validate_account_type,
    "date": validate_date,
    "statusAlarm": validate_status_alarm,
}


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value is False


def check_fields(values: Mapping[str, Any], rules: Mapping[str, str | Iterable[str]]) -> None:
    """Check ``values`` against ``rules`` and raise a bad-request error on failure.

    ``rules`` maps field names to a rule name or several: "required", "date",
    "jenisAkunValidator" or "statusAlarm". Empty fields pass every rule but
    "required". All failures are reported together, separated by ";".
    """
    problems: list[str] = []
    for field, field_rules in rules.items():
        names = [field_rules] if isinstance(field_rules, str) else list(field_rules)
        value = values.get(field)
        for name in names:
            if name == "required":
                if _is_empty(value):
                    problems.append(f"{field}: non zero value required")
                continue
            try:
                check = _CUSTOM_RULES[name]
            except KeyError:
                raise ValueError(f"unknown validation rule {name!r} for field {field}") from None
            if _is_empty(value):
                continue
            if not check(value):
                problems.append(f"{field}: {value} does not validate as {name}")
    if problems:
        raise bad_request(";".join(problems))