"""
Declarative input validation for mutations and the login query.

Each rule set is an ordered tuple of rules. `validate` runs every rule and
returns one violation per failing rule, in declaration order. An empty list
means the input is valid.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from ..dbmodels import GENDERS, MIN_SALARY


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def not_empty(value: Any) -> bool:
    return _as_text(value) != ""


def min_length(length: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return len(_as_text(value)) >= length

    return check


def is_email(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_in(choices: tuple[str, ...]) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return value in choices

    return check


def is_float(minimum: float) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        if isinstance(value, bool) or value is None:
            return False
        try:
            number = float(value)
        except (TypeError, ValueError):
            return False
        return number == number and number >= minimum  # NaN fails

    return check


SIGNUP_RULES = (
    Rule("username", min_length(3), "username must be at least 3 characters"),
    Rule("email", is_email, "invalid email"),
    Rule("password", min_length(6), "password must be at least 6 characters"),
)

LOGIN_RULES = (
    Rule("usernameOrEmail", not_empty, "usernameOrEmail is required"),
    Rule("password", not_empty, "password is required"),
)

EMPLOYEE_RULES = (
    Rule("first_name", not_empty, "first_name is required"),
    Rule("last_name", not_empty, "last_name is required"),
    Rule("email", is_email, "invalid email"),
    Rule("gender", is_in(GENDERS), "gender must be Male/Female/Other"),
    Rule("designation", not_empty, "designation is required"),
    Rule("salary", is_float(MIN_SALARY), f"salary must be >= {MIN_SALARY}"),
    Rule("date_of_joining", not_empty, "date_of_joining is required (YYYY-MM-DD)"),
    Rule("department", not_empty, "department is required"),
)

RULE_SETS: dict[str, tuple[Rule, ...]] = {
    "signup": SIGNUP_RULES,
    "login": LOGIN_RULES,
    "employee": EMPLOYEE_RULES,
}


def run_rules(rules: tuple[Rule, ...], data: Mapping[str, Any]) -> list[FieldViolation]:
    return [
        FieldViolation(field=rule.field, message=rule.message)
        for rule in rules
        if not rule.check(data.get(rule.field))
    ]


def validate(rule_set: str, data: Mapping[str, Any]) -> list[FieldViolation]:
    """Validate `data` against a named rule set ('signup', 'login' or 'employee')."""
    try:
        rules = RULE_SETS[rule_set]
    except KeyError:
        raise ValueError(f"Unknown rule set: {rule_set}") from None
    return run_rules(rules, data)


def validate_supplied(rule_set: str, data: Mapping[str, Any]) -> list[FieldViolation]:
    """Like `validate`, but only fields present in `data` with a non-null value are checked."""
    supplied = {name: value for name, value in data.items() if value is not None}
    try:
        rules = RULE_SETS[rule_set]
    except KeyError:
        raise ValueError(f"Unknown rule set: {rule_set}") from None
    return run_rules(tuple(rule for rule in rules if rule.field in supplied), supplied)
