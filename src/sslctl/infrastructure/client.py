"""GoGetSSL reseller API client.

Thin HTTP layer over the `GoGetSSL API <https://my.gogetssl.com/api>`_.
Each method maps to one remote endpoint and returns the decoded JSON body
as-is, including the provider's own error shapes
(``{"error": true, "description": ...}``). Interpretation of those shapes
belongs to :mod:`sslctl.services.classify`.

Transport failures (timeout, connection refused, non-JSON body) come back
as :class:`~sslctl.services.result.TaggedError` values instead of raising.

Endpoints
---------
``POST /auth/``                       login, returns the session ``key``
``GET  /products/``                   full product catalog
``GET  /products/all_prices/``        price list
``GET  /orders/status/{id}``          order status
``POST /tools/csr/generate/``         CSR generation
``POST /tools/domain/emails/``        approver emails for a domain
``GET  /tools/webservers/{type}``     accepted webserver types
``POST /orders/add_ssl_order/``       new order
``POST /orders/add_ssl_renew_order/`` renewal order
``POST /orders/ssl/reissue/{id}``     reissue
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import requests
import structlog
from requests.exceptions import ConnectionError as ReqConnectionError
from requests.exceptions import RequestException, Timeout

from sslctl.services.result import (
    CONNECTION_ERROR,
    INVALID_RESPONSE,
    REQUEST_ERROR,
    TIMEOUT,
    TaggedError,
    make_error,
)

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://my.gogetssl.com/api"
DEFAULT_TIMEOUT = 30.0

Response = dict[str, Any] | list[Any] | TaggedError


class Transport(Protocol):
    """Remote operations the certificate tool dispatches to by name."""

    def auth(self, login: str, password: str) -> Response: ...

    def get_all_products(self) -> Response: ...

    def get_all_product_prices(self) -> Response: ...

    def get_order_status(self, order_id: Any) -> Response: ...

    def generate_csr(self, csr_data: Mapping[str, Any], params: Mapping[str, Any]) -> Response: ...

    def get_domain_emails(self, data: Mapping[str, Any]) -> Response: ...

    def get_webservers(self, supplier_type: Any) -> Response: ...

    def add_ssl_order(self, payload: Mapping[str, Any]) -> Response: ...

    def add_ssl_renew_order(self, payload: Mapping[str, Any]) -> Response: ...

    def reissue_order(self, order_id: Any, data: Mapping[str, Any]) -> Response: ...


class GoGetSSLClient:
    """Concrete :class:`Transport` backed by ``requests``.

    Args:
        base_url: Base URL of the API (defaults to production).
        timeout: Per-request timeout in seconds.
        session: Optional pre-built ``requests.Session`` (tests inject mocks).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._auth_key: str | None = None
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    @property
    def auth_key(self) -> str | None:
        return self._auth_key

    # -- HTTP layer ----------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        data: Mapping[str, Any] | None = None,
        authenticated: bool = True,
    ) -> Response:
        """Execute one call and return the decoded body or a TaggedError."""
        url = f"{self._base_url}{path}"
        params = {"auth_key": self._auth_key} if authenticated and self._auth_key else None
        context = {"method": method, "path": path}
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                data=dict(data) if data is not None else None,
                timeout=self._timeout,
            )
        except Timeout:
            logger.warning("provider.timeout", path=path, timeout=self._timeout)
            return make_error(
                context,
                f"Request to GoGetSSL timed out after {self._timeout}s",
                code=TIMEOUT,
            )
        except ReqConnectionError:
            logger.warning("provider.unreachable", base_url=self._base_url)
            return make_error(
                context,
                f"Could not connect to GoGetSSL API at {self._base_url}",
                code=CONNECTION_ERROR,
            )
        except RequestException as exc:
            return make_error(context, f"Request error for {method} {path}: {exc}", code=REQUEST_ERROR)

        try:
            return response.json()
        except ValueError:
            return make_error(
                context,
                f"GoGetSSL returned HTTP {response.status_code} with a non-JSON body "
                f"for {method} {path}: {response.text[:300]}",
                {"status_code": response.status_code},
                code=INVALID_RESPONSE,
            )

    # -- Remote operations ---------------------------------------------------

    def auth(self, login: str, password: str) -> Response:
        result = self._request(
            "POST",
            "/auth/",
            data={"user": login, "pass": password},
            authenticated=False,
        )
        if isinstance(result, Mapping) and result.get("key"):
            self._auth_key = str(result["key"])
        return result

    def get_all_products(self) -> Response:
        return self._request("GET", "/products/")

    def get_all_product_prices(self) -> Response:
        return self._request("GET", "/products/all_prices/")

    def get_order_status(self, order_id: Any) -> Response:
        return self._request("GET", f"/orders/status/{order_id}")

    def generate_csr(self, csr_data: Mapping[str, Any], params: Mapping[str, Any]) -> Response:
        return self._request("POST", "/tools/csr/generate/", data={**params, **csr_data})

    def get_domain_emails(self, data: Mapping[str, Any]) -> Response:
        return self._request("POST", "/tools/domain/emails/", data=data)

    def get_webservers(self, supplier_type: Any) -> Response:
        return self._request("GET", f"/tools/webservers/{supplier_type}")

    def add_ssl_order(self, payload: Mapping[str, Any]) -> Response:
        return self._request("POST", "/orders/add_ssl_order/", data=payload)

    def add_ssl_renew_order(self, payload: Mapping[str, Any]) -> Response:
        return self._request("POST", "/orders/add_ssl_renew_order/", data=payload)

    def reissue_order(self, order_id: Any, data: Mapping[str, Any]) -> Response:
        return self._request("POST", f"/orders/ssl/reissue/{order_id}", data=data)

    def close(self) -> None:
        self._session.close()

    def __repr__(self) -> str:
        return f"GoGetSSLClient(base_url={self._base_url!r})"
