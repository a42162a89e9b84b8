"""Tests for the declarative order field table."""

from __future__ import annotations

from typing import Any

import pytest

from sslctl.domain.fields import (
    ORDER_FIELDS,
    ComputedRule,
    PathRule,
    apply_rule,
    assemble,
    contact_phone,
    contact_title,
    InvalidFieldError,
    dot_get,
    is_blank,
)

EXPECTED_ORDER = [
    "product_id",
    "period",
    "dcv_method",
    "approver_email",
    "server_count",
    "webserver_type",
    "csr",
    "admin_firstname",
    "admin_lastname",
    "admin_email",
    "admin_title",
    "admin_phone",
    "tech_firstname",
    "tech_lastname",
    "tech_email",
    "tech_title",
    "tech_phone",
]


def _context(**overrides: Any) -> dict[str, Any]:
    ctx: dict[str, Any] = {
        "product": {"id": 42, "name": "EV SSL Pro"},
        "amount": 2,
        "dcv_method": "dns",
        "approver_email": "admin@example.com",
        "csr": "CSR",
        "admin": {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "title": "Dr.",
            "phone": "+1 (555) 000-1111",
        },
        "tech": {
            "first_name": "Alan",
            "last_name": "Turing",
            "email": "alan@example.com",
            "phone": "+44 20 7946 0000",
        },
    }
    ctx.update(overrides)
    return ctx


class TestDotGet:
    def test_nested(self) -> None:
        assert dot_get({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_top_level(self) -> None:
        assert dot_get({"csr": "x"}, "csr") == "x"

    def test_missing_key(self) -> None:
        assert dot_get({"a": {}}, "a.b") is None

    def test_none_intermediate(self) -> None:
        assert dot_get({"product": None}, "product.id") is None

    def test_non_mapping_intermediate(self) -> None:
        assert dot_get({"product": "ev_ssl"}, "product.id") is None

    def test_falsy_leaf_preserved(self) -> None:
        assert dot_get({"a": {"b": 0}}, "a.b") == 0


class TestContactHelpers:
    def test_title_kept(self) -> None:
        assert contact_title({"title": "Dr."}) == "Dr."

    @pytest.mark.parametrize("contact", [{}, {"title": ""}, {"title": None}, None])
    def test_title_default(self, contact: Any) -> None:
        assert contact_title(contact) == "Mr."

    def test_phone_digits_only(self) -> None:
        assert contact_phone("+1 (555) 000-1111") == "15550001111"

    def test_phone_none(self) -> None:
        assert contact_phone(None) == ""

    def test_phone_numeric(self) -> None:
        assert contact_phone(5550100) == "5550100"


class TestOrderFields:
    def test_table_order(self) -> None:
        assert list(ORDER_FIELDS) == EXPECTED_ORDER

    def test_rule_variants(self) -> None:
        assert ORDER_FIELDS["product_id"] == PathRule("product.id")
        assert isinstance(ORDER_FIELDS["period"], ComputedRule)

    def test_apply_path_rule(self) -> None:
        assert apply_rule(PathRule("admin.email"), _context()) == "ada@example.com"

    def test_apply_computed_rule(self) -> None:
        rule = ComputedRule(lambda ctx: ctx["amount"] * 10)
        assert apply_rule(rule, _context()) == 20


class TestAssemble:
    def test_full_payload(self) -> None:
        payload = assemble(_context())
        assert list(payload) == EXPECTED_ORDER
        assert payload["product_id"] == 42
        assert payload["period"] == 24
        assert payload["dcv_method"] == "dns"
        assert payload["approver_email"] == "admin@example.com"
        assert payload["server_count"] == -1
        assert payload["webserver_type"] == "nginx"
        assert payload["csr"] == "CSR"
        assert payload["admin_firstname"] == "Ada"
        assert payload["admin_lastname"] == "Lovelace"
        assert payload["admin_email"] == "ada@example.com"
        assert payload["admin_title"] == "Dr."
        assert payload["admin_phone"] == "15550001111"
        assert payload["tech_firstname"] == "Alan"
        assert payload["tech_title"] == "Mr."
        assert payload["tech_phone"] == "442079460000"

    @pytest.mark.parametrize("amount", [None, 0, "", "0"])
    def test_period_defaults_to_one_year(self, amount: Any) -> None:
        assert assemble(_context(amount=amount))["period"] == 12

    def test_period_from_string_amount(self) -> None:
        assert assemble(_context(amount="3"))["period"] == 36

    @pytest.mark.parametrize(("amount", "months"), [(1.5, 18), ("0.5", 6), (0.25, 3)])
    def test_period_fractional_amount(self, amount: Any, months: int) -> None:
        period = assemble(_context(amount=amount))["period"]
        assert period == months
        assert isinstance(period, int)

    @pytest.mark.parametrize("amount", ["two", "nan", "inf", [1], {"years": 1}])
    def test_period_rejects_unusable_amount(self, amount: Any) -> None:
        with pytest.raises(InvalidFieldError) as excinfo:
            assemble(_context(amount=amount))
        assert excinfo.value.field == "amount"
        assert excinfo.value.value == amount

    @pytest.mark.parametrize("value", [None, 0, "", "0"])
    def test_blank_server_count_and_webserver_use_defaults(self, value: Any) -> None:
        payload = assemble(_context(server_count=value, webserver_type=value))
        assert payload["server_count"] == -1
        assert payload["webserver_type"] == "nginx"

    def test_explicit_server_count_and_webserver(self) -> None:
        payload = assemble(_context(server_count=5, webserver_type="apache2"))
        assert payload["server_count"] == 5
        assert payload["webserver_type"] == "apache2"

    def test_missing_product_yields_none(self) -> None:
        """A catalog miss leaves product_id empty; the provider reports it."""
        assert assemble(_context(product=None))["product_id"] is None

    def test_missing_contacts_yield_empty_values(self) -> None:
        ctx = _context()
        del ctx["admin"]
        del ctx["tech"]
        payload = assemble(ctx)
        assert payload["admin_firstname"] is None
        assert payload["admin_title"] == "Mr."
        assert payload["admin_phone"] == ""
        assert payload["tech_email"] is None

    def test_custom_table(self) -> None:
        fields = {"name": PathRule("admin.first_name"), "fixed": ComputedRule(lambda _: 1)}
        assert assemble(_context(), fields) == {"name": "Ada", "fixed": 1}


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "0", 0, 0.0, False])
    def test_blank(self, value: Any) -> None:
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["00", " ", "1", 1, -1, 0.5, True, [], {}])
    def test_not_blank(self, value: Any) -> None:
        assert is_blank(value) is False
