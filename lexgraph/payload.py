"""Serialization of draft relations into storable cross-reference payloads.

The builder is pure: it never looks anything up. In particular the numeric
key of the source provision is resolved by the caller (see
`ProvisionIdResolverInterface`) and passed in, because the draft only knows
the display identifier of the provision.
"""

from __future__ import annotations

from typing import Iterable

from lexschema.relation import CrossReferencePayload, DraftRelationInput


class IncompleteRelationError(ValueError):
    """A draft relation lacks an entity reference needed to store it.

    Recoverable: re-select the missing entity and try again.
    """

    def __init__(self, missing: tuple[str, ...], temp_id: str | None = None):
        self.missing = missing
        self.temp_id = temp_id
        where = f" in draft {temp_id!r}" if temp_id else ""
        super().__init__(f"Cannot store relation{where}: missing {', '.join(missing)}")


# relation_kind is not checked: the ledger never holds a draft without one.
REQUIRED_FIELDS = ("from_provision", "to_provision", "to_document")


class CrossReferencePayloadBuilder:
    """Validates one draft relation and maps it to a `CrossReferencePayload`.

    Field derivation:
        - ``to_document_number``: target document number, else its id
        - ``to_anchor``: target provision anchor, else its provision number
        - ``ref_text``: the note unless it is empty or blank, in which case None
        - ``from_provision_id``: `resolved_from_id` as given
    """

    def build(self, draft: DraftRelationInput, resolved_from_id: int) -> CrossReferencePayload:
        """Build the payload for `draft`.

        Raises:
            IncompleteRelationError: If the source provision, target provision
                or target document is missing.
        """
        missing = tuple(name for name in REQUIRED_FIELDS if getattr(draft, name) is None)
        if missing:
            raise IncompleteRelationError(missing, getattr(draft, "temp_id", None))
        to_document = draft.to_document
        to_provision = draft.to_provision

        return CrossReferencePayload(
            from_provision_id=resolved_from_id,
            to_document_number=to_document.document_number or to_document.document_id,  # type: ignore[union-attr]
            to_anchor=to_provision.anchor or to_provision.provision_number,  # type: ignore[union-attr]
            ref_type=draft.relation_kind,
            ref_text=draft.note if draft.note and draft.note.strip() else None,
        )

    def build_batch(self, pairs: Iterable[tuple[DraftRelationInput, int]]) -> list[CrossReferencePayload]:
        """Build payloads for (draft, resolved_from_id) pairs.

        Either every payload is built or the first IncompleteRelationError is
        raised; a partial batch is never returned.
        """
        return [self.build(draft, from_id) for draft, from_id in pairs]
