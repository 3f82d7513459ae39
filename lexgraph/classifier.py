"""Classification of legal documents and provisions into source kinds.

`classify` is the single decision point: an explicit, recognised kind always
wins; otherwise the anchor (a canonical citation such as
``LOV-1998-07-17-56.§3-1``) is matched against citation prefixes. The rules
are ordered so that overlapping prefixes resolve the same way every time.
Classification never fails; missing information degrades to
``SourceKind.UNKNOWN``.
"""

from lexschema.document import LegalDocument, LegalProvision
from lexschema.kinds import SourceKind

_KIND_BY_VALUE: dict[str, SourceKind] = {kind.value: kind for kind in SourceKind}

# (prefixes, substrings, kind), checked in order against the upper-cased anchor.
ANCHOR_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...], SourceKind], ...] = (
    (("PROP-", "OTPRP-", "NOU-", "INNST-"), (), SourceKind.PREPARATORY_WORK),
    (("HR-", "RT-"), ("HØYESTERETT",), SourceKind.CASELAW),
    (("FOR-",), (), SourceKind.REGULATION),
    (("LOV-",), (), SourceKind.STATUTE),
    (("RUN-", "RUND-", "RS-"), (), SourceKind.CIRCULAR),
)


def _classify_anchor(anchor: str | None) -> SourceKind:
    if not anchor:
        return SourceKind.UNKNOWN
    upper = anchor.upper()
    for prefixes, substrings, kind in ANCHOR_RULES:
        if upper.startswith(prefixes) or any(s in upper for s in substrings):
            return kind
    return SourceKind.UNKNOWN


def classify(anchor: str | None = None, explicit_kind: str | None = None) -> SourceKind:
    """Resolve a citation and/or declared kind to exactly one SourceKind.

    Args:
        anchor: Canonical citation string. Matched case-insensitively.
        explicit_kind: Declared kind. Matched case-sensitively against the
            SourceKind values; an unrecognised value is ignored.

    Returns:
        The explicit kind if it is a SourceKind value, else the kind implied
        by the anchor, else ``SourceKind.UNKNOWN``.
    """
    if explicit_kind is not None:
        kind = _KIND_BY_VALUE.get(explicit_kind)
        if kind is not None:
            return kind
    return _classify_anchor(anchor)


def classify_document(document: LegalDocument) -> SourceKind:
    """Classify a document by its declared kind, then its citation number."""
    return classify(document.document_number, document.source_kind)


def classify_node(provision: LegalProvision, document: LegalDocument) -> SourceKind:
    """Classify a provision for display.

    Provision anchors are not always canonical citations (some stores use
    slugs like ``regnskapsloven.§3-1``), so when the anchor says nothing the
    parent document's citation number is tried as well.
    """
    kind = classify(provision.anchor, document.source_kind)
    if kind is SourceKind.UNKNOWN and document.document_number:
        kind = _classify_anchor(document.document_number)
    return kind
