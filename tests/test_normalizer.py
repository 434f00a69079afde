"""Normalizer tests."""

from __future__ import annotations

import pytest

from triplepipe.errors import MalformedDocument
from triplepipe.normalizer import normalize
from triplepipe.terms import IRI, XSD_BOOLEAN, XSD_DOUBLE, XSD_INTEGER, Literal, Triple

SCHEMA = "http://schema.org/"

PERSON = {
    SCHEMA + "name": "Manu Sporny",
    SCHEMA + "url": {"@id": "http://manu.sporny.org/"},
    SCHEMA + "image": {"id": "http://manu.sporny.org/images/manu.png"},
}


def test_one_triple_per_key_sharing_subject():
    triples = list(normalize(PERSON))
    assert len(triples) == len(PERSON)
    assert len({t.subject for t in triples}) == 1
    assert [t.predicate.value for t in triples] == list(PERSON)


def test_literals_and_references_are_distinct():
    me = IRI("http://manu.sporny.org/#me")
    triples = list(normalize(PERSON, subject=me))
    assert triples == [
        Triple(me, IRI(SCHEMA + "name"), Literal("Manu Sporny")),
        Triple(me, IRI(SCHEMA + "url"), IRI("http://manu.sporny.org/")),
        Triple(me, IRI(SCHEMA + "image"), IRI("http://manu.sporny.org/images/manu.png")),
    ]


def test_subject_string_is_accepted():
    triples = list(normalize({"p": "v"}, subject="http://example.org/s"))
    assert triples[0].subject == IRI("http://example.org/s")


def test_generated_subject_is_blank_and_fresh():
    first = normalize({"p": 1})
    second = normalize({"p": 1})
    assert first.subject.is_blank
    assert first.subject != second.subject


def test_sequence_is_restartable():
    normalized = normalize(PERSON)
    assert list(normalized) == list(normalized)
    assert len(normalized) == 3


def test_number_literal_is_accepted():
    (triple,) = normalize({"p": 42})
    assert triple.object == Literal("42", XSD_INTEGER)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, Literal("true", XSD_BOOLEAN)),
        (2.0, Literal("2", XSD_INTEGER)),
        (5.3, Literal("5.3E0", XSD_DOUBLE)),
        (1e-7, Literal("1.0E-7", XSD_DOUBLE)),
    ],
)
def test_json_number_lexical_forms(value, expected):
    (triple,) = normalize({"p": value})
    assert triple.object == expected


def test_value_objects():
    triples = list(
        normalize(
            {
                "http://example.org/label": {"@value": "Bonjour", "@language": "FR"},
                "http://example.org/born": {"@value": "1970-01-01", "@type": "http://www.w3.org/2001/XMLSchema#date"},
                "http://example.org/count": {"@value": 3},
            }
        )
    )
    assert triples[0].object == Literal("Bonjour", language="fr")
    assert triples[1].object == Literal("1970-01-01", "http://www.w3.org/2001/XMLSchema#date")
    assert triples[2].object == Literal("3", XSD_INTEGER)


@pytest.mark.parametrize(
    "value",
    [
        [1, 2],
        None,
        {"name": "nested"},
        {"id": ""},
        {"id": "http://a", "@id": "http://b"},
        {"id": "http://a", "http://schema.org/name": "x"},
        {"@value": "x", "@language": "en", "@type": "http://t"},
        {"@value": [1]},
        float("nan"),
        {"@value": "hi", "@language": "en us"},
        {"@value": "hi", "@language": "en\n"},
        {"id": "http://a", 1: 2},
        {"@value": "x", 1: 2},
    ],
)
def test_malformed_values(value):
    with pytest.raises(MalformedDocument):
        list(normalize({"p": value}))


def test_error_surfaces_when_entry_is_reached():
    normalized = normalize({"good": "ok", "bad": [1, 2]})
    it = iter(normalized)
    assert next(it).object == Literal("ok")
    with pytest.raises(MalformedDocument):
        next(it)


@pytest.mark.parametrize("doc", [None, ["p", "v"], "p"])
def test_document_must_be_mapping(doc):
    with pytest.raises(MalformedDocument):
        normalize(doc)


def test_empty_predicate_key_is_rejected():
    with pytest.raises(MalformedDocument):
        list(normalize({"": "v"}))


def test_empty_subject_is_rejected():
    with pytest.raises(MalformedDocument):
        normalize({"p": "v"}, subject="")


def test_subtagged_language_is_accepted():
    (triple,) = normalize({"p": {"@value": "color", "@language": "en-US"}})
    assert triple.object == Literal("color", language="en-us")
