# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""rdflib bridge for JSON-LD, N-Quads and SPARQL.

The heavy lifting (JSON-LD toRDF, N-Quads grammar, SPARQL evaluation) is
rdflib's. This module only converts between rdflib nodes and triplepipe
terms, so anything rdflib produces can be inserted into a TripleStore and
anything in a store can be handed to rdflib.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any

from rdflib import BNode, Dataset, Graph, URIRef
from rdflib import Literal as RdfLiteral
from rdflib.term import Node

from triplepipe.errors import InvalidPattern, MalformedDocument
from triplepipe.logger import get_logger
from triplepipe.store import TripleStore
from triplepipe.terms import BLANK_PREFIX, IRI, XSD_STRING, Binding, Literal, Term, Triple

log = get_logger(__name__)


# ── Term conversion ───────────────────────────────────────────


def to_rdflib(term: Term) -> Node:
    if isinstance(term, Literal):
        datatype = URIRef(term.datatype) if term.datatype and not term.language else None
        try:
            return RdfLiteral(term.value, lang=term.language, datatype=datatype)
        except ValueError as exc:
            raise MalformedDocument(f"Invalid literal {term.n3()}: {exc}") from exc
    if term.is_blank:
        return BNode(term.value[len(BLANK_PREFIX):])
    return URIRef(term.value)


def from_rdflib(node: Node) -> Term:
    if isinstance(node, RdfLiteral):
        if node.language:
            return Literal(str(node), language=node.language)
        datatype = str(node.datatype) if node.datatype is not None else None
        if datatype == XSD_STRING:
            datatype = None
        return Literal(str(node), datatype)
    if isinstance(node, BNode):
        return IRI(f"{BLANK_PREFIX}{node}")
    if isinstance(node, URIRef):
        return IRI(str(node))
    raise MalformedDocument(f"Unsupported RDF node: {node!r}")


def _triple(s: Node, p: Node, o: Node) -> Triple:
    subject, predicate = from_rdflib(s), from_rdflib(p)
    if not isinstance(subject, IRI) or not isinstance(predicate, IRI):
        raise MalformedDocument(f"Literal in subject or predicate position: {s!r} {p!r}")
    return Triple(subject, predicate, from_rdflib(o))


# ── Store export ──────────────────────────────────────────────


def to_graph(store: TripleStore) -> Graph:
    """Copy a store snapshot into a fresh rdflib Graph."""
    graph = Graph()
    for t in store.all():
        graph.add((to_rdflib(t.subject), to_rdflib(t.predicate), to_rdflib(t.object)))
    return graph


def to_nquads(store: TripleStore) -> str:
    """Serialize the store as N-Quads in the default graph.

    Default-graph quads carry no graph label, so each line is also valid
    N-Triples.
    """
    return to_graph(store).serialize(format="nt")


# ── Parsing ───────────────────────────────────────────────────


def triples_from_nquads(text: str) -> Iterator[Triple]:
    """Parse N-Quads text; graph labels are dropped."""
    dataset = Dataset()
    try:
        dataset.parse(data=text, format="nquads")
    except Exception as exc:
        raise MalformedDocument(f"N-Quads parse error: {exc}") from exc

    for s, p, o, _ in dataset.quads((None, None, None, None)):
        yield _triple(s, p, o)


def triples_from_jsonld(doc: Mapping[str, Any] | list[Any] | str) -> list[Triple]:
    """Run the JSON-LD toRDF algorithm over ``doc`` through rdflib.

    Unlike the flat normalizer this accepts any JSON-LD: contexts, nested
    node objects, arrays and ``@graph``.
    """
    graph = Graph()
    try:
        data = doc if isinstance(doc, str) else json.dumps(doc)
        graph.parse(data=data, format="json-ld")
    except Exception as exc:
        raise MalformedDocument(f"JSON-LD conversion failed: {exc}") from exc

    triples = [_triple(s, p, o) for s, p, o in graph]
    log.info("JSON-LD produced %d triples", len(triples))
    return triples


# ── SPARQL ────────────────────────────────────────────────────


def sparql_select(store: TripleStore, query: str, limit: int | None = None) -> list[Binding]:
    """Evaluate a SPARQL SELECT against a snapshot of ``store``.

    Unbound variables are left out of each binding, as rdflib's
    ``ResultRow.asdict`` does.
    """
    graph = to_graph(store)
    try:
        result = graph.query(query)
    except Exception as exc:
        raise InvalidPattern(f"SPARQL error: {exc}") from exc

    if result.type != "SELECT":
        raise InvalidPattern(f"Only SELECT queries are supported, got {result.type}")

    bindings: list[Binding] = []
    for row in result:
        bindings.append({name: from_rdflib(node) for name, node in row.asdict().items()})
        if limit is not None and 0 < limit <= len(bindings):
            break
    log.info("SPARQL returned %d bindings", len(bindings))
    return bindings
