"""Declarative order field table for the GoGetSSL order endpoints.

Each provider field maps to either a dotted lookup into the order context
(:class:`PathRule`) or a function of the whole context
(:class:`ComputedRule`). :func:`assemble` walks the table once, in order,
to produce the flat payload sent to ``add_ssl_order`` and
``add_ssl_renew_order``.

Lookups that miss yield ``None`` rather than failing: the provider
validates the payload and reports what is missing. A value present but
unusable (a non-numeric ``amount``) raises :class:`InvalidFieldError`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_CONTACT_TITLE = "Mr."
DEFAULT_WEBSERVER_TYPE = "nginx"
DEFAULT_SERVER_COUNT = -1
MONTHS_PER_YEAR = 12

_NON_DIGITS = re.compile(r"[^0-9]")


class InvalidFieldError(ValueError):
    """An order value that no rule can turn into a provider field."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"invalid value for {field}: {value!r}")
        self.field = field
        self.value = value


@dataclass(frozen=True)
class PathRule:
    """Copy the value found at a dotted *path* in the order context."""

    path: str


@dataclass(frozen=True)
class ComputedRule:
    """Derive a value from the whole order context."""

    fn: Callable[[Mapping[str, Any]], Any]


FieldRule = PathRule | ComputedRule


def dot_get(data: Any, path: str) -> Any:
    """Resolve ``"admin.first_name"`` style paths; any miss yields None."""
    current = data
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def contact_title(contact: Mapping[str, Any] | None) -> str:
    """Contact's own title, or ``"Mr."`` when it has none."""
    title = (contact or {}).get("title")
    return title if title else DEFAULT_CONTACT_TITLE


def contact_phone(phone: Any) -> str:
    """Strip everything but digits: ``"+1 (555) 000-1111"`` -> ``"15550001111"``."""
    if phone is None:
        return ""
    return _NON_DIGITS.sub("", str(phone))


def is_blank(value: Any) -> bool:
    """True for values an order treats as not given: None, ``""``, ``0``, ``"0"``."""
    if value is None:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def _period(order: Mapping[str, Any]) -> int | float:
    amount = order.get("amount")
    if is_blank(amount):
        return MONTHS_PER_YEAR
    try:
        years = float(amount)
    except (TypeError, ValueError):
        raise InvalidFieldError("amount", amount) from None
    if not math.isfinite(years):
        raise InvalidFieldError("amount", amount)
    months = MONTHS_PER_YEAR * years
    return int(months) if months.is_integer() else months


def _server_count(order: Mapping[str, Any]) -> Any:
    value = order.get("server_count")
    return DEFAULT_SERVER_COUNT if is_blank(value) else value


def _webserver_type(order: Mapping[str, Any]) -> Any:
    value = order.get("webserver_type")
    return DEFAULT_WEBSERVER_TYPE if is_blank(value) else value


def _title_of(contact_type: str) -> ComputedRule:
    return ComputedRule(lambda order: contact_title(order.get(contact_type)))


def _phone_of(contact_type: str) -> ComputedRule:
    return ComputedRule(lambda order: contact_phone(dot_get(order, f"{contact_type}.phone")))


# Order matters: the payload is built in this sequence.
ORDER_FIELDS: dict[str, FieldRule] = {
    "product_id": PathRule("product.id"),
    "period": ComputedRule(_period),
    "dcv_method": PathRule("dcv_method"),
    "approver_email": PathRule("approver_email"),
    "server_count": ComputedRule(_server_count),
    "webserver_type": ComputedRule(_webserver_type),
    "csr": PathRule("csr"),
    "admin_firstname": PathRule("admin.first_name"),
    "admin_lastname": PathRule("admin.last_name"),
    "admin_email": PathRule("admin.email"),
    "admin_title": _title_of("admin"),
    "admin_phone": _phone_of("admin"),
    "tech_firstname": PathRule("tech.first_name"),
    "tech_lastname": PathRule("tech.last_name"),
    "tech_email": PathRule("tech.email"),
    "tech_title": _title_of("tech"),
    "tech_phone": _phone_of("tech"),
}


def apply_rule(rule: FieldRule, context: Mapping[str, Any]) -> Any:
    """Evaluate a single field rule against *context*."""
    if isinstance(rule, ComputedRule):
        return rule.fn(context)
    return dot_get(context, rule.path)


def assemble(
    context: Mapping[str, Any],
    fields: Mapping[str, FieldRule] = ORDER_FIELDS,
) -> dict[str, Any]:
    """Build the flat provider payload by applying every rule in table order."""
    return {target: apply_rule(rule, context) for target, rule in fields.items()}
