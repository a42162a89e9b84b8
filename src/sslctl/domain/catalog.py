"""Product catalog indexing.

INVARIANT: eids are unique within one catalog. Two products whose names
normalize to the same eid collide and the later entry wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sslctl.domain.keys import normalize_key


def index_product(product: Mapping[str, Any]) -> dict[str, Any]:
    """Copy *product* and add ``remoteid`` (provider id) and ``eid`` (catalog key)."""
    entry = dict(product)
    entry["remoteid"] = entry.get("id")
    entry["eid"] = normalize_key(str(entry.get("name") or ""))
    return entry


def build_catalog(products: Iterable[Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    """Key the provider's product list by eid."""
    catalog: dict[str, dict[str, Any]] = {}
    for product in products:
        entry = index_product(product)
        catalog[entry["eid"]] = entry
    return catalog
