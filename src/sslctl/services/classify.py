"""Provider response classification.

GoGetSSL answers in several shapes: ``{"error": true, "description": ...}``,
``{"success": true, ...}``, bare data objects, or nothing at all. Every
provider call passes through :func:`to_result` so callers see either the
payload or a :class:`TaggedError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sslctl.services.result import (
    EMPTY_RESPONSE,
    PROVIDER_ERROR,
    Result,
    TaggedError,
    make_error,
)

UNKNOWN_ERROR_MESSAGE = "unknown error"
EMPTY_RESPONSE_MESSAGE = "empty response"


def is_error_response(response: Any, login_required: bool = False) -> bool:
    """Decide whether a raw provider response is a failure.

    With *login_required*, the response must carry ``success`` equal to the
    boolean ``True``. Some endpoints answer ``"success": "1"``; that does not
    count.
    """
    if isinstance(response, TaggedError):
        return True
    if isinstance(response, Mapping) and "error" in response:
        return True
    if not login_required:
        return False
    if not isinstance(response, Mapping) or not response.get("success"):
        return True
    return response["success"] is not True


def to_result(context: Any, response: Any, login_required: bool = False) -> Result:
    """Normalize a raw provider response.

    *context* only feeds error reporting; it is never merged into a
    successful payload. An empty response is reported as such whether or
    not a login marker was required.
    """
    if isinstance(response, TaggedError):
        return response
    if not response:
        return make_error(context, EMPTY_RESPONSE_MESSAGE, code=EMPTY_RESPONSE)
    if is_error_response(response, login_required):
        description = response.get("description") if isinstance(response, Mapping) else None
        message = str(description) if description else UNKNOWN_ERROR_MESSAGE
        return make_error(context, message, code=PROVIDER_ERROR)
    return response
