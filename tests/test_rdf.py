"""rdflib bridge tests: JSON-LD in, N-Quads out, SPARQL over the store."""

from __future__ import annotations

from datetime import date

import pytest
from rdflib import BNode, URIRef
from rdflib import Literal as RdfLiteral

from triplepipe.errors import InvalidPattern, MalformedDocument
from triplepipe.normalizer import normalize
from triplepipe.rdf import (
    from_rdflib,
    sparql_select,
    to_graph,
    to_nquads,
    to_rdflib,
    triples_from_jsonld,
    triples_from_nquads,
)
from triplepipe.store import TripleStore
from triplepipe.terms import IRI, XSD_INTEGER, XSD_STRING, Literal, Triple

SCHEMA = "http://schema.org/"
ME = IRI("http://manu.sporny.org/#me")

PERSON = {
    SCHEMA + "name": "Manu Sporny",
    SCHEMA + "url": {"@id": "http://manu.sporny.org/"},
    SCHEMA + "image": {"@id": "http://manu.sporny.org/images/manu.png"},
}


def person_store() -> TripleStore:
    store = TripleStore()
    for t in normalize(PERSON, subject=ME):
        store.insert(t)
    return store


def test_term_conversion():
    assert to_rdflib(ME) == URIRef(ME.value)
    assert to_rdflib(IRI("_:b1")) == BNode("b1")
    assert from_rdflib(BNode("b1")) == IRI("_:b1")
    assert from_rdflib(RdfLiteral("x", datatype=URIRef(XSD_STRING))) == Literal("x")
    assert from_rdflib(RdfLiteral("hi", lang="en")) == Literal("hi", language="en")
    assert from_rdflib(to_rdflib(Literal("7", XSD_INTEGER))) == Literal("7", XSD_INTEGER)


def test_graph_export_keeps_literals_distinct():
    graph = to_graph(person_store())
    assert len(graph) == 3
    assert (URIRef(ME.value), URIRef(SCHEMA + "name"), RdfLiteral("Manu Sporny")) in graph
    assert (URIRef(ME.value), URIRef(SCHEMA + "url"), URIRef("http://manu.sporny.org/")) in graph


def test_nquads_export_and_parse():
    store = person_store()
    text = to_nquads(store)
    assert f'<{ME.value}> <{SCHEMA}name> "Manu Sporny" .' in text
    assert set(triples_from_nquads(text)) == set(store.all())


def test_nquads_graph_labels_are_dropped():
    text = '<http://a> <http://b> "c" <http://g> .\n'
    assert list(triples_from_nquads(text)) == [Triple(IRI("http://a"), IRI("http://b"), Literal("c"))]


def test_malformed_nquads():
    with pytest.raises(MalformedDocument):
        list(triples_from_nquads("<http://a> <http://b> .\n"))


def test_jsonld_conversion():
    triples = triples_from_jsonld(PERSON)
    assert len(triples) == 3
    assert all(t.subject.is_blank for t in triples)
    pairs = {(t.predicate, t.object) for t in triples}
    assert (IRI(SCHEMA + "name"), Literal("Manu Sporny")) in pairs
    assert (IRI(SCHEMA + "image"), IRI("http://manu.sporny.org/images/manu.png")) in pairs


def test_jsonld_with_context_and_id():
    doc = {
        "@context": {"name": SCHEMA + "name"},
        "@id": ME.value,
        "name": "Manu Sporny",
    }
    assert triples_from_jsonld(doc) == [Triple(ME, IRI(SCHEMA + "name"), Literal("Manu Sporny"))]


def test_malformed_jsonld():
    with pytest.raises(MalformedDocument):
        triples_from_jsonld("{not json")


def test_sparql_select():
    query = f"SELECT ?s ?p WHERE {{ ?s ?p <http://manu.sporny.org/> }}"
    assert sparql_select(person_store(), query) == [{"s": ME, "p": IRI(SCHEMA + "url")}]


def test_sparql_limit():
    bindings = sparql_select(person_store(), "SELECT * WHERE { ?s ?p ?o }", limit=2)
    assert len(bindings) == 2


def test_sparql_rejects_non_select_and_bad_syntax():
    with pytest.raises(InvalidPattern):
        sparql_select(person_store(), "ASK { ?s ?p ?o }")
    with pytest.raises(InvalidPattern):
        sparql_select(person_store(), "SELEC ?s WHERE")


def test_jsonld_rejects_values_json_cannot_encode():
    with pytest.raises(MalformedDocument):
        triples_from_jsonld({SCHEMA + "birthDate": date(1970, 1, 1)})


def test_invalid_language_tag_is_a_malformed_literal():
    with pytest.raises(MalformedDocument):
        to_rdflib(Literal("hi", language="en us"))
