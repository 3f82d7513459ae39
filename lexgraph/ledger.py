"""In-memory staging area for draft relations.

The ledger is owned by a single editing session and mutated only from that
session, one editor action at a time. It keeps no copy on disk: anything not
saved is gone when the session ends.

Insertion order is display order. Entries are addressed exclusively by their
`temp_id`, so removing one entry never shifts the identity of another.
Duplicate relations are allowed; the ledger does not compare relations.
"""

from __future__ import annotations

import uuid
from typing import Iterator

from lexschema.relation import DraftRelation, DraftRelationInput


class DraftRelationLedger:
    """Ordered collection of not-yet-persisted relations, keyed by temp id.

    Thread safety: Not thread-safe. A ledger belongs to one session.

    Example:
        ```python
        ledger = DraftRelationLedger()
        temp_id = ledger.add(DraftRelationInput(from_provision=..., ...))
        ledger.remove(temp_id)
        ```
    """

    temp_id_prefix = "draft-"

    def __init__(self) -> None:
        self._entries: dict[str, DraftRelation] = {}

    def _new_temp_id(self) -> str:
        temp_id = f"{self.temp_id_prefix}{uuid.uuid4().hex}"
        while temp_id in self._entries:
            temp_id = f"{self.temp_id_prefix}{uuid.uuid4().hex}"
        return temp_id

    def add(self, relation: DraftRelationInput) -> str:
        """Append a relation and return its freshly assigned temp id.

        Only presence is checked here: the four entity references and a
        relation kind. Everything else is validated when the relation is
        turned into a payload at save time.

        Raises:
            ValueError: If an entity reference or the relation kind is missing.
        """
        if not relation.is_well_formed:
            raise ValueError(f"Draft relation is missing {', '.join(relation.missing_fields())}")
        temp_id = self._new_temp_id()
        # A DraftRelation passed back in gets a new identity, not its old one.
        self._entries[temp_id] = DraftRelation(
            **{name: getattr(relation, name) for name in DraftRelationInput.model_fields},
            temp_id=temp_id,
        )
        return temp_id

    def remove(self, temp_id: str) -> bool:
        """Remove the entry with `temp_id`. Unknown ids are ignored.

        Returns:
            True if an entry was removed.
        """
        return self._entries.pop(temp_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def list(self) -> tuple[DraftRelation, ...]:
        """Snapshot of all entries in insertion order."""
        return tuple(self._entries.values())

    def get(self, temp_id: str) -> DraftRelation | None:
        return self._entries.get(temp_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DraftRelation]:
        return iter(self.list())

    def __contains__(self, temp_id: object) -> bool:
        return temp_id in self._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)})"
