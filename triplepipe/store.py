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

"""In-memory triple store.

An insertion-ordered set backed by a dict. Inserts are serialized through
a lock and ``all()`` copies under the same lock, so a reader never sees a
half-applied insert.
"""

from __future__ import annotations

import threading

from triplepipe.errors import InvalidTriple
from triplepipe.logger import get_logger
from triplepipe.terms import IRI, Triple

log = get_logger(__name__)


class TripleStore:
    """Mutable set of triples, transient for the lifetime of a pipeline."""

    def __init__(self) -> None:
        self._triples: dict[Triple, None] = {}
        self._lock = threading.Lock()

    def insert(self, triple: Triple) -> bool:
        """Add ``triple`` unless already present.

        Returns True when the triple was new. Raises InvalidTriple, without
        touching the store, when subject or predicate is empty.
        """
        if not isinstance(triple, Triple):
            raise InvalidTriple(f"Expected Triple, got {type(triple).__name__}")
        for role in ("subject", "predicate"):
            term = getattr(triple, role)
            if not isinstance(term, IRI) or not term.value:
                raise InvalidTriple(f"Triple {role} must be a non-empty IRI: {triple!r}")

        with self._lock:
            if triple in self._triples:
                log.debug("Duplicate triple ignored: %s", triple.n3())
                return False
            self._triples[triple] = None
            return True

    def all(self) -> tuple[Triple, ...]:
        """Snapshot of the current contents in insertion order."""
        with self._lock:
            return tuple(self._triples)

    def size(self) -> int:
        return len(self._triples)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, triple: object) -> bool:
        return triple in self._triples

    def __repr__(self) -> str:
        return f"TripleStore(size={self.size()})"
