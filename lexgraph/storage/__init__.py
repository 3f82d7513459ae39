"""Collaborator implementations for the cross-reference engine.

Interfaces live in `lexschema.storage`; this package provides the
in-memory backends used for tests, development and demo mode.
"""

from lexgraph.storage.memory import (
    InMemoryCrossReferenceStorage,
    InMemoryLegalSourceLookup,
    InMemoryProvisionIdResolver,
)

__all__ = [
    "InMemoryCrossReferenceStorage",
    "InMemoryLegalSourceLookup",
    "InMemoryProvisionIdResolver",
]
