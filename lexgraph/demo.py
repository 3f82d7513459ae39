"""Fixed sample corpus for demo mode.

A handful of Norwegian accounting-law sources: two statutes, a regulation, a
Supreme Court decision, a circular and a preparatory work, each with a few
provisions. Some documents declare their source kind and some do not, so the
classifier's citation rules are exercised either way.
"""

from lexgraph.storage.memory import InMemoryLegalSourceLookup, InMemoryProvisionIdResolver
from lexschema.document import LegalDocument, LegalProvision
from lexschema.kinds import SourceKind

DEMO_DOCUMENTS: tuple[LegalDocument, ...] = (
    LegalDocument(
        document_id="1",
        title="Lov om årsregnskap m.v. (regnskapsloven)",
        document_number="LOV-1998-07-17-56",
        source_kind=SourceKind.STATUTE.value,
        is_primary_source=True,
        source_url="https://lovdata.no/dokument/NL/lov/1998-07-17-56",
    ),
    LegalDocument(
        document_id="2",
        title="Lov om revisjon og revisorer (revisorloven)",
        document_number="LOV-2020-11-20-128",
        is_primary_source=True,
        source_url="https://lovdata.no/dokument/NL/lov/2020-11-20-128",
    ),
    LegalDocument(
        document_id="3",
        title="Forskrift om årsregnskap m.m.",
        document_number="FOR-1999-12-11-1319",
        source_kind=SourceKind.REGULATION.value,
        is_primary_source=True,
        source_url="https://lovdata.no/dokument/SF/forskrift/1999-12-11-1319",
    ),
    LegalDocument(
        document_id="4",
        title="HR-2020-1234-A - Regnskapslovens anvendelse",
        document_number="HR-2020-1234-A",
        source_url="https://lovdata.no/dokument/HRSIV/hrsiv-2020-1234",
    ),
    LegalDocument(
        document_id="5",
        title="Rundskriv om regnskapslovens bestemmelser",
        document_number="RS-2020-001",
        source_url="https://regjeringen.no/rs-2020-001",
    ),
    LegalDocument(
        document_id="6",
        title="Ot.prp. nr. 42 (1997-98) Om lov om årsregnskap m.v.",
        document_number="OTPRP-1997-98-42",
        source_url="https://stortinget.no/otprp-1997-98-42",
    ),
)

DEMO_PROVISIONS: tuple[LegalProvision, ...] = (
    LegalProvision(
        provision_id="1",
        provision_number="3-1",
        title="Regnskapspliktige",
        document_id="1",
        anchor="LOV-1998-07-17-56.§3-1",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="2",
        provision_number="3-2",
        title="Årsregnskap og årsberetning",
        document_id="1",
        anchor="LOV-1998-07-17-56.§3-2",
        sort_order=2,
    ),
    LegalProvision(
        provision_id="3",
        provision_number="1-1",
        title="Virkeområde",
        document_id="3",
        anchor="FOR-1999-12-11-1319.§1-1",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="4",
        provision_number="9-1",
        title="Revisjonsplikt",
        document_id="2",
        anchor="revisorloven.§9-1",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="5",
        provision_number="45",
        title="Domspremisser",
        document_id="4",
        anchor="HR-2020-1234-A.avsn45",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="6",
        provision_number="2",
        title="Kommentarer til § 3-1",
        document_id="5",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="7",
        provision_number="5.3",
        title="Merknader til § 3-1",
        document_id="6",
        anchor="OTPRP-1997-98-42.kap5.3",
        sort_order=1,
    ),
    LegalProvision(
        provision_id="8",
        provision_number="3-3",
        title="Opphevet",
        document_id="1",
        anchor="LOV-1998-07-17-56.§3-3",
        sort_order=3,
        is_active=False,
    ),
)


def demo_lookup() -> InMemoryLegalSourceLookup:
    """Lookup collaborator serving the demo corpus."""
    return InMemoryLegalSourceLookup(documents=DEMO_DOCUMENTS, provisions=DEMO_PROVISIONS)


def demo_resolver() -> InMemoryProvisionIdResolver:
    """Resolver mapping every demo provision to its numeric id."""
    return InMemoryProvisionIdResolver.from_provisions(DEMO_PROVISIONS)
