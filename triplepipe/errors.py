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

"""Error kinds raised by the core operations.

All are reported synchronously at the offending call. None of them leaves
a store partially mutated.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every triplepipe error."""


class MalformedDocument(PipelineError):
    """A document value is neither a literal nor a valid reference."""


class InvalidTriple(PipelineError):
    """A triple with an empty subject or predicate was offered to a store."""


class InvalidPattern(PipelineError):
    """A query pattern cannot be evaluated as written."""


class IngestIncomplete(PipelineError):
    """The query phase was entered before the ingest phase signalled completion."""
