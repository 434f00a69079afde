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

"""triplepipe: document to triples to pattern-query bindings."""

from triplepipe.errors import (
    IngestIncomplete,
    InvalidPattern,
    InvalidTriple,
    MalformedDocument,
    PipelineError,
)
from triplepipe.normalizer import normalize
from triplepipe.pipeline import Pipeline, run_pipeline
from triplepipe.query import QueryRunner
from triplepipe.store import TripleStore
from triplepipe.terms import IRI, Binding, Literal, Triple, TriplePattern, Variable, pattern

__all__ = [
    "IRI",
    "Binding",
    "IngestIncomplete",
    "InvalidPattern",
    "InvalidTriple",
    "Literal",
    "MalformedDocument",
    "Pipeline",
    "PipelineError",
    "QueryRunner",
    "Triple",
    "TriplePattern",
    "TripleStore",
    "Variable",
    "normalize",
    "pattern",
    "run_pipeline",
]
