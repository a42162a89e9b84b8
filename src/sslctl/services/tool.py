"""CertificateTool — certificate lifecycle operations against GoGetSSL.

Pipeline for issue/renew: CONTACTS → PRODUCT → FIELDS → REQUEST → RESPOND.
Reissue skips the first three stages and forwards the caller's record.

INVARIANT: Every provider call goes through :meth:`CertificateTool.request`,
which ensures the session and normalizes the response via
:func:`~sslctl.services.classify.to_result`.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from sslctl.domain.catalog import build_catalog
from sslctl.domain.fields import InvalidFieldError, assemble
from sslctl.services.classify import is_error_response, to_result
from sslctl.services.contacts import resolve_contacts
from sslctl.services.result import (
    CATALOG_LOOKUP_MISS,
    CONTACT_STORE_ERROR,
    INVALID_FIELD,
    Result,
    ServiceResult,
    TaggedError,
    make_error,
)
from sslctl.services.session import SessionManager, SessionState

if TYPE_CHECKING:
    from sslctl.config.settings import SslSettings
    from sslctl.infrastructure.client import Transport
    from sslctl.infrastructure.contacts import ContactStore

logger = structlog.get_logger(__name__)

DEFAULT_SUPPLIER_TYPE = 1


class CertificateTool:
    """Facade exposing certificate lifecycle operations to a generic caller.

    One instance owns one provider session: the first call logs in and the
    outcome is reused for the lifetime of the instance.

    Args:
        transport: Remote API client.
        contacts: Store used to resolve admin/tech/org contact ids.
        login: Reseller API login.
        password: Reseller API password.
        strict_product: Fail order preparation when the product name is not
            in the catalog, instead of sending the order without a product id.
    """

    def __init__(
        self,
        transport: Transport,
        contacts: ContactStore,
        *,
        login: str,
        password: str,
        strict_product: bool = False,
    ) -> None:
        self._transport = transport
        self._contacts = contacts
        self._session = SessionManager(transport, login, password)
        self._strict_product = strict_product

    @classmethod
    def from_settings(cls, settings: SslSettings) -> CertificateTool:
        """Build a tool wired to the HTTP client and JSON contact store."""
        from sslctl.infrastructure.client import GoGetSSLClient
        from sslctl.infrastructure.contacts import JsonContactStore

        provider = settings.provider
        contacts_path = settings.contacts.path
        if contacts_path is not None and not contacts_path.is_absolute():
            contacts_path = settings.root / contacts_path
        return cls(
            GoGetSSLClient(provider.url, provider.timeout),
            JsonContactStore(contacts_path) if contacts_path else _NoContactStore(),
            login=provider.login,
            password=provider.password.get_secret_value(),
            strict_product=settings.orders.strict_product,
        )

    @property
    def session_state(self) -> SessionState:
        return self._session.state

    # ------------------------------------------------------------------
    # Session and request cycle
    # ------------------------------------------------------------------

    def ensure_session(self) -> Result:
        """Log in on first use; return the cached login Result."""
        return self._session.ensure()

    def request(
        self,
        command: str,
        args: Sequence[Any] = (),
        login_required: bool = False,
    ) -> Result:
        """Dispatch *command* to the transport and normalize the response."""
        context = {"command": command, "args": list(args)}
        session = self.ensure_session()
        if is_error_response(session, login_required):
            logger.debug("provider.skipped", command=command, reason="session")
            return to_result(context, session, login_required)

        started = time.perf_counter()
        raw = getattr(self._transport, command)(*args)
        result = to_result(context, raw, login_required)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        if isinstance(result, TaggedError):
            logger.warning(
                "provider.error",
                command=command,
                code=result.code,
                message=result.message,
                duration_ms=elapsed_ms,
            )
        else:
            logger.debug("provider.request", command=command, duration_ms=elapsed_ms)
        return result

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def _fetch_catalog(self) -> dict[str, dict[str, Any]] | TaggedError:
        response = self.request("get_all_products")
        if isinstance(response, TaggedError):
            return response
        products = response.get("products") if isinstance(response, dict) else None
        return build_catalog(products or [])

    def resolve_product(self, name: Any) -> dict[str, Any] | TaggedError | None:
        """Find a product by eid in a freshly fetched catalog; None when absent.

        Only string eids can match; any other *name* is a miss.
        """
        catalog = self._fetch_catalog()
        if isinstance(catalog, TaggedError):
            return catalog
        if not isinstance(name, str):
            return None
        return catalog.get(name)

    def list_products(self) -> ServiceResult:
        """Full product catalog keyed by eid."""
        catalog = self._fetch_catalog()
        meta = None if isinstance(catalog, TaggedError) else {"count": len(catalog)}
        return ServiceResult.from_value("certificates_get_all_products", catalog, meta=meta)

    def list_product_prices(self) -> ServiceResult:
        op = "certificates_get_all_product_prices"
        response = self.request("get_all_product_prices")
        if isinstance(response, TaggedError):
            return ServiceResult.from_value(op, response)
        prices = response.get("product_prices") if isinstance(response, dict) else response
        return ServiceResult.from_value(op, prices or [])

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def get_status(self, order: dict[str, Any]) -> ServiceResult:
        response = self.request("get_order_status", [order.get("remoteid")])
        return ServiceResult.from_value("certificate_info", response)

    def generate_csr(self, order: dict[str, Any]) -> ServiceResult:
        # The provider call takes the record twice: CSR fields and options.
        response = self.request("generate_csr", [order, order])
        return ServiceResult.from_value("certificate_generate_csr", response)

    def get_domain_emails(self, order: dict[str, Any]) -> ServiceResult:
        response = self.request("get_domain_emails", [{"domain": order.get("fqdn")}])
        return ServiceResult.from_value("certificate_get_domain_emails", response)

    def get_webservers(self, order: dict[str, Any]) -> ServiceResult:
        supplier_type = order.get("type") or DEFAULT_SUPPLIER_TYPE
        response = self.request("get_webservers", [supplier_type])
        return ServiceResult.from_value("certificate_get_webservers", response)

    # ------------------------------------------------------------------
    # Issue, renew, reissue
    # ------------------------------------------------------------------

    def prepare_order(self, order: dict[str, Any]) -> dict[str, Any] | TaggedError:
        """Resolve contacts and product, then build the provider payload.

        *order* is enriched in place. Without ``strict_product`` a catalog
        miss attaches ``None`` and the payload goes out with no
        ``product_id``; the provider rejects it. An order prepared before
        carries the catalog entry under ``product`` and is looked up again
        by that entry's eid, so the same record can be resubmitted.
        """
        resolved = resolve_contacts(order, self._contacts)
        if isinstance(resolved, TaggedError):
            return resolved

        name = order.get("product")
        if isinstance(name, Mapping):
            name = name.get("eid")
        product = self.resolve_product(name)
        if isinstance(product, TaggedError):
            return product
        if product is None:
            if self._strict_product:
                return make_error(
                    order, "product not found", {"product": name}, code=CATALOG_LOOKUP_MISS
                )
            logger.warning("order.product_missing", product=name)
        order["product"] = product

        try:
            return assemble(order)
        except InvalidFieldError as exc:
            return make_error(
                order, str(exc), {"field": exc.field, "value": exc.value}, code=INVALID_FIELD
            )

    def issue(self, order: dict[str, Any]) -> ServiceResult:
        return self._submit_order("certificate_issue", "add_ssl_order", order)

    def renew(self, order: dict[str, Any]) -> ServiceResult:
        return self._submit_order("certificate_renew", "add_ssl_renew_order", order)

    def reissue(self, order: dict[str, Any]) -> ServiceResult:
        """Forward the caller's record as-is; no contact or product resolution."""
        response = self.request("reissue_order", [order.get("order_id"), order])
        return ServiceResult.from_value("certificate_reissue", response)

    def _submit_order(self, op: str, command: str, order: dict[str, Any]) -> ServiceResult:
        payload = self.prepare_order(order)
        if isinstance(payload, TaggedError):
            return ServiceResult.from_value(op, payload)
        return ServiceResult.from_value(op, self.request(command, [payload]))


class _NoContactStore:
    """Stand-in used when no contacts file is configured."""

    def search(self, query: Any) -> TaggedError:
        return make_error(
            dict(query),
            "No contact store configured (set contacts.path)",
            code=CONTACT_STORE_ERROR,
        )
