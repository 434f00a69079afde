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

"""Triple-pattern query runner.

Scans a store snapshot and unifies every triple against a single pattern.
Fixed positions match by equality, variables bind to what they see, and a
variable used twice must see the same value both times.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice

from triplepipe.errors import InvalidPattern
from triplepipe.logger import get_logger
from triplepipe.store import TripleStore
from triplepipe.terms import IRI, Binding, Literal, Triple, TriplePattern, Variable

log = get_logger(__name__)

_ROLES = ("subject", "predicate", "object")


def validate_pattern(pattern: TriplePattern) -> None:
    """Raise InvalidPattern if ``pattern`` cannot be evaluated as written."""
    if not isinstance(pattern, TriplePattern):
        raise InvalidPattern(f"Expected TriplePattern, got {type(pattern).__name__}")

    variables = set(pattern.variables())
    for role, slot in zip(_ROLES, pattern.positions()):
        if isinstance(slot, Variable):
            if not slot.name:
                raise InvalidPattern(f"Empty variable name in {role} position")
            continue
        if isinstance(slot, Literal):
            if role != "object":
                raise InvalidPattern(f"Literal {slot.n3()} cannot appear in {role} position")
        elif not isinstance(slot, IRI) or not slot.value:
            raise InvalidPattern(f"{role.capitalize()} must be a term or a variable, got {slot!r}")
        # a fixed "?s" next to variable ?s reads as both a binding and a constant
        if slot.value.startswith("?") and slot.value[1:] in variables:
            raise InvalidPattern(
                f"'{slot.value}' is used both as a variable and as a fixed {role}"
            )


def unify(pattern: TriplePattern, triple: Triple) -> Binding | None:
    """Bindings for ``triple`` against ``pattern``, or None when it does not match."""
    binding: Binding = {}
    for slot, value in zip(pattern.positions(), (triple.subject, triple.predicate, triple.object)):
        if isinstance(slot, Variable):
            seen = binding.get(slot.name)
            if seen is None:
                binding[slot.name] = value
            elif seen != value:
                return None
        elif slot != value:
            return None
    return binding


class QueryRunner:
    """Evaluates triple patterns against a TripleStore."""

    def run(
        self,
        pattern: TriplePattern,
        store: TripleStore,
        limit: int | None = None,
    ) -> Iterator[Binding]:
        """Lazily yield one binding per matching triple, in insertion order.

        ``limit`` caps the number of bindings; None or a non-positive value
        means unrestricted. The pattern is validated before anything is
        yielded.
        """
        validate_pattern(pattern)
        snapshot = store.all()
        log.debug("Query %s over %d triples (limit=%s)", pattern, len(snapshot), limit)

        matches = self._matches(pattern, snapshot)
        if limit is not None and limit > 0:
            return islice(matches, limit)
        return matches

    @staticmethod
    def _matches(pattern: TriplePattern, snapshot: tuple[Triple, ...]) -> Iterator[Binding]:
        for triple in snapshot:
            binding = unify(pattern, triple)
            if binding is not None:
                yield binding
