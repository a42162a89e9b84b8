"""Contact store interface and a JSON-file backed implementation.

The store answers ``search({"ids": [...]})`` with a mapping of
contact id to contact record, or a TaggedError.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from sslctl.services.result import CONTACT_STORE_ERROR, TaggedError, make_error


class ContactStore(Protocol):
    def search(self, query: Mapping[str, Any]) -> dict[Any, Any] | TaggedError: ...


class JsonContactStore:
    """Contacts read from a JSON object keyed by contact id.

    The file is re-read on every search so edits are picked up without
    restarting.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def search(self, query: Mapping[str, Any]) -> dict[Any, Any] | TaggedError:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            return make_error(
                dict(query), f"Cannot read contacts file {self._path}: {exc}", code=CONTACT_STORE_ERROR
            )
        except json.JSONDecodeError as exc:
            return make_error(
                dict(query), f"Invalid JSON in {self._path}: {exc}", code=CONTACT_STORE_ERROR
            )
        if not isinstance(raw, dict):
            return make_error(
                dict(query),
                f"Contacts file {self._path} must hold an object keyed by id",
                code=CONTACT_STORE_ERROR,
            )

        wanted = {str(contact_id) for contact_id in query.get("ids", [])}
        return {key: value for key, value in raw.items() if key in wanted}
