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

"""RDF terms, triples and triple patterns.

Plain frozen dataclasses: structural equality, hashable, immutable once
built. Literals are kept distinct from IRIs, so a person's name never ends
up masquerading as a resource identifier.
"""

from __future__ import annotations

from dataclasses import dataclass

XSD = "http://www.w3.org/2001/XMLSchema#"
XSD_STRING = XSD + "string"
XSD_INTEGER = XSD + "integer"
XSD_DOUBLE = XSD + "double"
XSD_BOOLEAN = XSD + "boolean"
RDF_LANG_STRING = "http://www.w3.org/1999/02/22-rdf-syntax-ns#langString"

BLANK_PREFIX = "_:"


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


@dataclass(frozen=True, slots=True)
class IRI:
    """Opaque resource identifier. ``_:`` prefixed values are blank nodes."""

    value: str

    @property
    def is_blank(self) -> bool:
        return self.value.startswith(BLANK_PREFIX)

    def n3(self) -> str:
        return self.value if self.is_blank else f"<{self.value}>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Literal:
    """Lexical value with an optional datatype IRI or language tag.

    A plain string literal carries neither; ``xsd:string`` is implied.
    """

    value: str
    datatype: str | None = None
    language: str | None = None

    def n3(self) -> str:
        text = f'"{_escape(self.value)}"'
        if self.language:
            return f"{text}@{self.language}"
        if self.datatype and self.datatype != XSD_STRING:
            return f"{text}^^<{self.datatype}>"
        return text

    def __str__(self) -> str:
        return self.value


Term = IRI | Literal


@dataclass(frozen=True, slots=True)
class Triple:
    subject: IRI
    predicate: IRI
    object: Term

    def n3(self) -> str:
        return f"{self.subject.n3()} {self.predicate.n3()} {self.object.n3()} ."


@dataclass(frozen=True, slots=True)
class Variable:
    """Query placeholder, written ``?name`` in patterns."""

    name: str

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True, slots=True)
class TriplePattern:
    subject: Term | Variable
    predicate: Term | Variable
    object: Term | Variable

    def positions(self) -> tuple[Term | Variable, Term | Variable, Term | Variable]:
        return (self.subject, self.predicate, self.object)

    def variables(self) -> list[str]:
        """Variable names in first-seen order, without duplicates."""
        names: list[str] = []
        for slot in self.positions():
            if isinstance(slot, Variable) and slot.name not in names:
                names.append(slot.name)
        return names


Binding = dict[str, Term]


def _coerce(value: object) -> object:
    if isinstance(value, str):
        if value.startswith("?"):
            return Variable(value[1:])
        return IRI(value)
    return value


def pattern(subject: object, predicate: object, obj: object) -> TriplePattern:
    """Build a pattern from shorthand.

    Strings starting with ``?`` become variables, other strings become IRIs,
    term and Variable objects pass through. Literals must be given as
    ``Literal`` objects. Nothing is validated here; that happens when the
    pattern is run.
    """
    return TriplePattern(_coerce(subject), _coerce(predicate), _coerce(obj))  # type: ignore[arg-type]
