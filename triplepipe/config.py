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

"""Loads a workflow YAML file into typed dataclasses.

Pure loader, no pipeline logic. The YAML structure IS the workflow
contract: one document to ingest, one query to run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from triplepipe.result import Fail, Ok, Result
from triplepipe.terms import Literal, TriplePattern, pattern

FORMATS = ("simple", "jsonld")


# ── Document ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class DocumentConfig:
    data: Any
    subject: str | None = None
    format: str = "simple"


# ── Query ──────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Exactly one of ``pattern`` and ``sparql`` is set."""
    pattern: TriplePattern | None = None
    sparql: str | None = None
    limit: int | None = None


# ── Output ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class OutputConfig:
    nquads: bool = False


# ── Top-level ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class PipelineConfig:
    document: DocumentConfig
    query: QueryConfig
    output: OutputConfig


# ── Loader ─────────────────────────────────────────────────────

def _build_slot(raw: Any) -> Any:
    """Pattern slot: a plain string, or ``{literal: ..., datatype|language: ...}``."""
    if isinstance(raw, dict):
        return Literal(
            value=str(raw["literal"]),
            datatype=raw.get("datatype"),
            language=raw.get("language"),
        )
    if not isinstance(raw, str):
        raise TypeError(f"pattern entries must be strings or literal mappings, got {raw!r}")
    return raw


def _build_query(raw: dict[str, Any]) -> QueryConfig:
    if not isinstance(raw, dict):
        raise TypeError(f"query must be a mapping, got {type(raw).__name__}")
    raw_pattern = raw.get("pattern")
    sparql = raw.get("sparql")
    if (raw_pattern is None) == (sparql is None):
        raise KeyError("query needs exactly one of 'pattern' or 'sparql'")

    built = None
    if raw_pattern is not None:
        if not isinstance(raw_pattern, list) or len(raw_pattern) != 3:
            raise TypeError("query.pattern must be a list of three entries")
        built = pattern(*(_build_slot(slot) for slot in raw_pattern))

    limit = raw.get("limit")
    if limit is not None and not isinstance(limit, int):
        raise TypeError(f"query.limit must be an integer, got {limit!r}")

    return QueryConfig(pattern=built, sparql=sparql, limit=limit)


def _build_document(raw: dict[str, Any]) -> DocumentConfig:
    if not isinstance(raw, dict):
        raise TypeError(f"document must be a mapping, got {type(raw).__name__}")
    fmt = raw.get("format", "simple")
    if fmt not in FORMATS:
        raise KeyError(f"document.format must be one of {FORMATS}, got {fmt!r}")
    subject = raw.get("subject")
    if subject is not None and not isinstance(subject, str):
        raise TypeError(f"document.subject must be a string, got {subject!r}")
    return DocumentConfig(data=raw["data"], subject=subject, format=fmt)


def load_config(path: Path) -> Result[PipelineConfig]:
    """Load a workflow YAML into PipelineConfig. No validation beyond structure."""
    if not path.exists():
        return Fail(error=f"Config file not found: {path}")

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", context=str(path))

    try:
        config = PipelineConfig(
            document=_build_document(raw["document"]),
            query=_build_query(raw["query"]),
            output=OutputConfig(**(raw.get("output") or {})),
        )
    except (KeyError, TypeError) as exc:
        return Fail(error=f"Config structure error: {exc}", context=str(path))

    return Ok(data=config)
