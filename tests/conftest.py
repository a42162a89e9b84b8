"""Shared pytest fixtures and test fakes for sslctl tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from click.testing import CliRunner

from sslctl.services.result import TaggedError
from sslctl.services.tool import CertificateTool

AUTH_OK: dict[str, Any] = {"key": "sess-key", "success": True}

CATALOG: dict[str, Any] = {
    "products": [
        {"id": 42, "name": "EV SSL Pro", "brand": "sectigo"},
        {"id": 7, "name": "Domain SSL", "brand": "sectigo"},
    ],
    "success": True,
}

CONTACTS: dict[Any, dict[str, Any]] = {
    1: {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "title": "Dr.",
        "phone": "+1 (555) 000-1111",
    },
    2: {
        "first_name": "Alan",
        "last_name": "Turing",
        "email": "alan@example.com",
        "title": "",
        "phone": "+44 20 7946 0000",
    },
    3: {
        "first_name": "Org",
        "last_name": "Contact",
        "email": "org@example.com",
        "title": "Ms.",
        "phone": "555-0100",
    },
}


class FakeTransport:
    """In-memory transport recording every call.

    Responses are looked up by method name in *responses*; a callable value
    is invoked with the call's arguments.
    """

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = {
            "auth": AUTH_OK,
            "get_all_products": CATALOG,
            **(responses or {}),
        }
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _answer(self, name: str, *args: Any) -> Any:
        self.calls.append((name, args))
        response = self.responses.get(name, {"success": True})
        if callable(response):
            return response(*args)
        return response

    def called(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def auth(self, login: str, password: str) -> Any:
        return self._answer("auth", login, password)

    def get_all_products(self) -> Any:
        return self._answer("get_all_products")

    def get_all_product_prices(self) -> Any:
        return self._answer("get_all_product_prices")

    def get_order_status(self, order_id: Any) -> Any:
        return self._answer("get_order_status", order_id)

    def generate_csr(self, csr_data: Any, params: Any) -> Any:
        return self._answer("generate_csr", csr_data, params)

    def get_domain_emails(self, data: Any) -> Any:
        return self._answer("get_domain_emails", data)

    def get_webservers(self, supplier_type: Any) -> Any:
        return self._answer("get_webservers", supplier_type)

    def add_ssl_order(self, payload: Any) -> Any:
        return self._answer("add_ssl_order", payload)

    def add_ssl_renew_order(self, payload: Any) -> Any:
        return self._answer("add_ssl_renew_order", payload)

    def reissue_order(self, order_id: Any, data: Any) -> Any:
        return self._answer("reissue_order", order_id, data)


class FakeContactStore:
    """Contact store over a dict; ``error`` makes every search fail."""

    def __init__(
        self,
        contacts: Mapping[Any, Any] | None = None,
        error: TaggedError | None = None,
    ) -> None:
        self.contacts = dict(CONTACTS if contacts is None else contacts)
        self.error = error
        self.queries: list[dict[str, Any]] = []

    def search(self, query: Mapping[str, Any]) -> Any:
        self.queries.append(dict(query))
        if self.error is not None:
            return self.error
        return {i: self.contacts[i] for i in query["ids"] if i in self.contacts}


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def contact_store() -> FakeContactStore:
    return FakeContactStore()


@pytest.fixture
def tool(transport: FakeTransport, contact_store: FakeContactStore) -> CertificateTool:
    """CertificateTool wired to in-memory fakes."""
    return CertificateTool(transport, contact_store, login="reseller", password="secret")


@pytest.fixture
def order() -> dict[str, Any]:
    """A complete issue/renew order referencing the CONTACTS fixtures."""
    return {
        "admin_id": 1,
        "tech_id": 2,
        "org_id": 3,
        "product": "ev_ssl_pro",
        "amount": 2,
        "csr": "-----BEGIN CERTIFICATE REQUEST-----",
        "dcv_method": "email",
        "approver_email": "admin@example.com",
    }


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_tool(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Any,
    transport: FakeTransport,
    contact_store: FakeContactStore,
) -> FakeTransport:
    """Route the CLI's tool construction to the fakes; returns the transport.

    Also isolates config discovery by running from an empty temp directory.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SSLCTL_CONFIG", raising=False)

    def _from_settings(cls: type[CertificateTool], settings: Any) -> CertificateTool:
        return cls(
            transport,
            contact_store,
            login=settings.provider.login,
            password=settings.provider.password.get_secret_value(),
            strict_product=settings.orders.strict_product,
        )

    monkeypatch.setattr(CertificateTool, "from_settings", classmethod(_from_settings))
    return transport
