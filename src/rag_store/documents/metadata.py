"""Document metadata bag with typed accessors for provenance keys."""

from __future__ import annotations

import copy
from typing import Any


class Metadata(dict):
    """Ordered ``str -> value`` mapping attached to every document.

    Three keys are reserved for provenance and have typed helpers:

    * ``_source`` – where the document was loaded from (path, URL, …)
    * ``_parent_id`` – id of the document a chunk was cut from
    * ``_text`` – the raw text a vector was computed from

    Several documents may hold the *same* ``Metadata`` instance (e.g. a
    document and the copy returned by ``with_content``).  Code that needs an
    independent copy must call :meth:`snapshot`.
    """

    KEY_SOURCE = "_source"
    KEY_PARENT_ID = "_parent_id"
    KEY_TEXT = "_text"

    # -- source ---------------------------------------------------------------

    def has_source(self) -> bool:
        return self.KEY_SOURCE in self

    def get_source(self) -> str | None:
        return self.get(self.KEY_SOURCE)

    def set_source(self, source: str) -> None:
        self[self.KEY_SOURCE] = source

    # -- parent id ------------------------------------------------------------

    def has_parent_id(self) -> bool:
        return self.KEY_PARENT_ID in self

    def get_parent_id(self) -> str | int | None:
        return self.get(self.KEY_PARENT_ID)

    def set_parent_id(self, parent_id: str | int) -> None:
        self[self.KEY_PARENT_ID] = parent_id

    # -- text -----------------------------------------------------------------

    def has_text(self) -> bool:
        return self.KEY_TEXT in self

    def get_text(self) -> str | None:
        return self.get(self.KEY_TEXT)

    def set_text(self, text: str) -> None:
        self[self.KEY_TEXT] = text

    # -- copying --------------------------------------------------------------

    def snapshot(self) -> Metadata:
        """Return a deep, independent copy; nested values are not shared."""
        return Metadata(copy.deepcopy(dict(self)))

    def to_dict(self) -> dict[str, Any]:
        """Plain ``dict`` copy, e.g. for JSON payloads."""
        return dict(self)

    def __repr__(self) -> str:  # noqa: D105
        return f"Metadata({dict.__repr__(self)})"
