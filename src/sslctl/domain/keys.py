"""Catalog key normalization.

Product display names ("EV SSL--Pro") become stable lowercase keys
("ev_ssl_pro") used to address catalog entries.

INVARIANT: normalize_key is idempotent.
"""

from __future__ import annotations

import re

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")
_TRIM_CHARS = " \t\n\r\0\x0b_"


def normalize_key(label: str) -> str:
    """Turn an arbitrary label into a lowercase, underscore-separated key.

    Examples:
        >>> normalize_key("EV SSL--Pro")
        'ev_ssl_pro'
        >>> normalize_key("  _Wildcard (1 year)_ ")
        'wildcard_1_year'
    """
    key = _INVALID_CHARS.sub("_", label)
    key = _UNDERSCORE_RUNS.sub("_", key)
    return key.lower().strip(_TRIM_CHARS)
