"""Rule-based default relation kinds for a pair of source kinds."""

from lexschema.kinds import DEFAULT_RELATION_KIND, RelationKind, SourceKind

# Ordered (source, destination) -> kind rules; first match wins.
SUGGESTION_RULES: tuple[tuple[SourceKind, SourceKind, RelationKind], ...] = (
    (SourceKind.REGULATION, SourceKind.STATUTE, RelationKind.ENABLED_BY),
    (SourceKind.CIRCULAR, SourceKind.STATUTE, RelationKind.CLARIFIES),
    (SourceKind.CASELAW, SourceKind.STATUTE, RelationKind.INTERPRETS),
    (SourceKind.CASELAW, SourceKind.REGULATION, RelationKind.INTERPRETS),
    (SourceKind.PREPARATORY_WORK, SourceKind.STATUTE, RelationKind.CLARIFIES),
    # Mirror of the first rule for a statute -> regulation pick.
    (SourceKind.STATUTE, SourceKind.REGULATION, RelationKind.ENABLED_BY),
)


def suggest(source_kind: SourceKind, destination_kind: SourceKind) -> RelationKind:
    """Propose a relation kind for a link from `source_kind` to `destination_kind`.

    Total: every pair yields a kind, falling back to ``RelationKind.CITES``.
    The result is only a default; callers are free to override it.
    """
    for src, dst, kind in SUGGESTION_RULES:
        if source_kind == src and destination_kind == dst:
            return kind
    return DEFAULT_RELATION_KIND
