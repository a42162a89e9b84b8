"""TaggedError and ServiceResult — the universal result contract.

INVARIANT: Expected failures never raise. Every provider call, contact
lookup, and order-preparation step returns either its payload or a
:class:`TaggedError`. A TaggedError is never re-interpreted as success;
layers that don't inspect it pass it upward unchanged.

Public tool operations wrap the outcome in a :class:`ServiceResult`
so the CLI and any other caller consume one shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes
PROVIDER_ERROR = "PROVIDER_ERROR"
EMPTY_RESPONSE = "EMPTY_RESPONSE"
MISSING_FIELD = "MISSING_FIELD"
CATALOG_LOOKUP_MISS = "CATALOG_LOOKUP_MISS"
CONTACT_STORE_ERROR = "CONTACT_STORE_ERROR"
TIMEOUT = "TIMEOUT"
CONNECTION_ERROR = "CONNECTION_ERROR"
REQUEST_ERROR = "REQUEST_ERROR"
INVALID_RESPONSE = "INVALID_RESPONSE"
INVALID_FIELD = "INVALID_FIELD"


class TaggedError(BaseModel):
    """Structured error value carrying the context that produced it.

    Attributes:
        code: Taxonomy tag (``PROVIDER_ERROR``, ``MISSING_FIELD``, ...).
        message: Human-readable description.
        data: Input context of the failed step (command and args, or the order).
        detail: Optional structured detail, e.g. ``{"field": "admin_id"}``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    data: Any = None
    detail: dict[str, Any] = Field(default_factory=dict)


Result = dict[str, Any] | list[Any] | TaggedError


def make_error(
    data: Any,
    message: str,
    detail: dict[str, Any] | None = None,
    *,
    code: str = PROVIDER_ERROR,
) -> TaggedError:
    """Build a TaggedError for *data* (the failing step's input)."""
    return TaggedError(code=code, message=message, data=data, detail=detail or {})


def is_error(value: Any) -> bool:
    """True when *value* is a TaggedError."""
    return isinstance(value, TaggedError)


class ServiceResult(BaseModel):
    """Return type of every public tool operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"certificate_issue"``).
        data: Provider payload on success, passed through unchanged.
        warnings: Non-fatal issues encountered during the operation.
        error: The TaggedError if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: Any = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: TaggedError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def from_value(
        cls,
        op: str,
        value: Result,
        *,
        warnings: list[str] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Wrap a payload-or-TaggedError into the envelope."""
        if isinstance(value, TaggedError):
            return cls(ok=False, op=op, error=value, warnings=warnings or [], meta=meta)
        return cls(ok=True, op=op, data=value, warnings=warnings or [], meta=meta)
