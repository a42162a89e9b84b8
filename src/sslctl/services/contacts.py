"""Contact resolution for order preparation.

Orders reference their admin, tech, and organization contacts by id.
:func:`resolve_contacts` fetches all of them in one store query and
attaches the records to the order under ``admin``, ``tech``, and ``org``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sslctl.domain.fields import is_blank
from sslctl.services.result import (
    CONTACT_STORE_ERROR,
    MISSING_FIELD,
    TaggedError,
    make_error,
)

if TYPE_CHECKING:
    from sslctl.infrastructure.contacts import ContactStore

CONTACT_TYPES: tuple[str, ...] = ("admin", "tech", "org")

NO_DATA_MESSAGE = "no data given"


def resolve_contacts(order: dict[str, Any], store: ContactStore) -> dict[str, Any] | TaggedError:
    """Attach resolved contacts to *order* in place and return it.

    Fails fast, before touching the store, on the first missing
    ``<type>_id`` in ``admin, tech, org`` order.
    """
    ids: dict[str, Any] = {}
    for contact_type in CONTACT_TYPES:
        key = f"{contact_type}_id"
        if is_blank(order.get(key)):
            return make_error(order, NO_DATA_MESSAGE, {"field": key}, code=MISSING_FIELD)
        ids[contact_type] = order[key]

    unique_ids = list(dict.fromkeys(ids.values()))
    contacts = store.search({"ids": unique_ids})
    if isinstance(contacts, TaggedError):
        return make_error(order, contacts.message, contacts.detail, code=CONTACT_STORE_ERROR)

    for contact_type, contact_id in ids.items():
        order[contact_type] = _lookup(contacts, contact_id)
    return order


def _lookup(contacts: dict[Any, Any], contact_id: Any) -> Any:
    """Find a contact whether the store keys by int or by str id."""
    if contact_id in contacts:
        return contacts[contact_id]
    return contacts.get(str(contact_id))
