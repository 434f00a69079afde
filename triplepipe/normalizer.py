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

"""Flat document to triples.

A document is one subject-implicit record: each key is a predicate IRI,
each value a literal, a reference ``{"id": ...}`` / ``{"@id": ...}`` or a
JSON-LD value object ``{"@value": ..., "@language"|"@type": ...}``.

Numbers and booleans get the lexical forms JSON-LD toRDF gives them, so
the simple path and the rdflib-backed JSON-LD path agree on plain input.
"""

from __future__ import annotations

import math
import re
import uuid
from collections.abc import Iterator, Mapping
from typing import Any

from triplepipe.errors import MalformedDocument
from triplepipe.terms import (
    BLANK_PREFIX,
    IRI,
    XSD_BOOLEAN,
    XSD_DOUBLE,
    XSD_INTEGER,
    Literal,
    Term,
    Triple,
)

Document = Mapping[str, Any]

_REFERENCE_KEYS = ("id", "@id")
_VALUE_KEYS = frozenset({"@value", "@language", "@type"})
_LANGUAGE_TAG = re.compile(r"[a-zA-Z]{1,8}(-[a-zA-Z0-9]{1,8})*")


def new_blank_subject() -> IRI:
    """Fresh blank-node subject, unique across documents and processes."""
    return IRI(f"{BLANK_PREFIX}b{uuid.uuid4().hex[:16]}")


def _double_lexical(value: float) -> str:
    # JSON-LD canonical double: 1.5 -> "1.5E0", 1e-7 -> "1.0E-7"
    mantissa, exponent = f"{value:.15E}".split("E")
    mantissa = mantissa.rstrip("0")
    if mantissa.endswith("."):
        mantissa += "0"
    return f"{mantissa}E{int(exponent)}"


def _native_literal(key: str, value: Any) -> Literal:
    if isinstance(value, bool):
        return Literal("true" if value else "false", XSD_BOOLEAN)
    if isinstance(value, int):
        return Literal(str(value), XSD_INTEGER)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedDocument(f"{key!r}: non-finite number {value!r}")
        if value.is_integer() and abs(value) < 1e21:
            return Literal(str(int(value)), XSD_INTEGER)
        return Literal(_double_lexical(value), XSD_DOUBLE)
    if isinstance(value, str):
        return Literal(value)
    raise MalformedDocument(f"{key!r}: unsupported literal {type(value).__name__}")


def _value_object(key: str, obj: Mapping[str, Any]) -> Literal:
    extra = set(obj) - _VALUE_KEYS
    if extra:
        raise MalformedDocument(f"{key!r}: unexpected keys in value object: {sorted(map(repr, extra))}")

    raw = obj["@value"]
    language = obj.get("@language")
    datatype = obj.get("@type")

    if language is not None and datatype is not None:
        raise MalformedDocument(f"{key!r}: value object has both @language and @type")

    if language is not None:
        if not isinstance(language, str) or not language or not isinstance(raw, str):
            raise MalformedDocument(f"{key!r}: @language needs a string tag and a string @value")
        if not _LANGUAGE_TAG.fullmatch(language):
            raise MalformedDocument(f"{key!r}: {language!r} is not a valid language tag")
        return Literal(raw, language=language.lower())

    if datatype is not None:
        if not isinstance(datatype, str) or not datatype:
            raise MalformedDocument(f"{key!r}: @type must be a non-empty IRI")
        if isinstance(raw, str):
            return Literal(raw, datatype)
        return Literal(_native_literal(key, raw).value, datatype)

    if isinstance(raw, (str, int, float)):
        return _native_literal(key, raw)
    raise MalformedDocument(f"{key!r}: @value must be a string, number or boolean")


def _reference(key: str, obj: Mapping[str, Any]) -> IRI:
    ids = [obj[k] for k in _REFERENCE_KEYS if k in obj]
    if len(ids) != 1 or len(obj) != 1:
        raise MalformedDocument(
            f"{key!r}: reference objects take exactly one 'id' or '@id' field, got {sorted(map(repr, obj))}"
        )
    ref = ids[0]
    if not isinstance(ref, str) or not ref:
        raise MalformedDocument(f"{key!r}: reference id must be a non-empty string")
    return IRI(ref)


def resolve_value(key: str, value: Any) -> Term:
    """Turn one document value into an object term."""
    if isinstance(value, Mapping):
        if "@value" in value:
            return _value_object(key, value)
        return _reference(key, value)
    if isinstance(value, (str, int, float)):
        return _native_literal(key, value)
    raise MalformedDocument(
        f"{key!r}: value must be a literal or a reference object, got {type(value).__name__}"
    )


class Normalization:
    """Lazy, restartable triple sequence for one document.

    Each iteration walks the document again; errors surface when the
    offending entry is reached.
    """

    def __init__(self, doc: Document, subject: IRI) -> None:
        self._doc = doc
        self.subject = subject

    def __iter__(self) -> Iterator[Triple]:
        for key, value in self._doc.items():
            if not isinstance(key, str) or not key:
                raise MalformedDocument(f"Predicate keys must be non-empty strings, got {key!r}")
            yield Triple(self.subject, IRI(key), resolve_value(key, value))

    def __len__(self) -> int:
        return len(self._doc)


def normalize(doc: Document | None, subject: IRI | str | None = None) -> Normalization:
    """Normalize ``doc`` into one triple per key, all sharing one subject.

    Args:
        doc: Mapping of predicate IRI to value.
        subject: Subject IRI. A fresh blank node is used when omitted and
            stays fixed for every iteration of the returned sequence.
    """
    if doc is None or not isinstance(doc, Mapping):
        raise MalformedDocument(f"Document must be a mapping, got {type(doc).__name__}")

    if subject is None:
        resolved = new_blank_subject()
    elif isinstance(subject, IRI):
        resolved = subject
    else:
        resolved = IRI(subject)

    if not resolved.value:
        raise MalformedDocument("Subject IRI must be non-empty")

    return Normalization(doc, resolved)
