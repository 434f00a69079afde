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

"""Pipeline orchestrator with two explicit phases.

  1. Ingest: normalize the document, insert every triple, then signal
     completion on a barrier.
  2. Query: evaluate a triple pattern (or SPARQL SELECT) against the
     populated store.

The query phase refuses to start until the ingest barrier is set, so it
can never observe a partially populated store. Store and runner are
injected and live exactly as long as the Pipeline instance.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from triplepipe.config import DocumentConfig, PipelineConfig
from triplepipe.errors import IngestIncomplete, PipelineError
from triplepipe.logger import PipelineSummary, get_logger
from triplepipe.normalizer import normalize
from triplepipe.query import QueryRunner
from triplepipe.rdf import sparql_select, to_nquads, triples_from_jsonld
from triplepipe.result import Fail, Ok, Result
from triplepipe.store import TripleStore
from triplepipe.terms import Binding, Triple, TriplePattern

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class IngestReport:
    subject: str | None
    inserted: int
    duplicates: int


@dataclass
class PipelineRun:
    """Everything a caller needs to display the outcome of one run."""

    bindings: list[Binding]
    store: TripleStore
    nquads: str | None = None
    summary: PipelineSummary = field(default_factory=PipelineSummary)


class Pipeline:
    def __init__(
        self,
        store: TripleStore | None = None,
        runner: QueryRunner | None = None,
        summary: PipelineSummary | None = None,
    ) -> None:
        self.store = store if store is not None else TripleStore()
        self.runner = runner if runner is not None else QueryRunner()
        self.summary = summary if summary is not None else PipelineSummary()
        self._ingested = threading.Event()
        self._write_lock = threading.Lock()

    @property
    def ingested(self) -> bool:
        return self._ingested.is_set()

    def _stage(self, doc: Any, subject: str | None, fmt: str) -> tuple[str | None, list[Triple]]:
        if fmt == "jsonld":
            return None, triples_from_jsonld(doc)
        normalized = normalize(doc, subject)
        return normalized.subject.value, list(normalized)

    def ingest(self, doc: Any, subject: str | None = None, fmt: str = "simple") -> Result[IngestReport]:
        """Run the ingest phase for one document.

        The whole document is normalized before the first insert, so a
        malformed document leaves the store untouched. Ingests are
        serialized; the barrier is lowered while one is in progress.
        """
        counter = self.summary.counter("ingest")

        with self._write_lock:
            self._ingested.clear()
            try:
                staged_subject, triples = self._stage(doc, subject, fmt)
                inserted = duplicates = 0
                for triple in triples:
                    if self.store.insert(triple):
                        inserted += 1
                    else:
                        duplicates += 1
            except PipelineError as exc:
                counter.failed += 1
                log.warning("Ingest failed: %s", exc)
                return Fail.from_exc(exc, context=subject)
            finally:
                self._ingested.set()

        counter.ok += inserted
        counter.skipped += duplicates
        log.info("Ingested %d triples (%d duplicates), store size %d", inserted, duplicates, self.store.size())
        return Ok(data=IngestReport(subject=staged_subject, inserted=inserted, duplicates=duplicates))

    def _require_ingest(self) -> None:
        # caller holds _write_lock, so no ingest can start before the snapshot
        if not self._ingested.is_set():
            raise IngestIncomplete("Query phase entered before ingest completed")

    def query(self, pattern: TriplePattern, limit: int | None = None) -> Iterator[Binding]:
        """Evaluate ``pattern`` against the ingested store.

        The runner snapshots the store eagerly, so bindings drawn later
        never reflect an ingest that started after this call.
        """
        with self._write_lock:
            self._require_ingest()
            return self.runner.run(pattern, self.store, limit)

    def sparql(self, query: str, limit: int | None = None) -> list[Binding]:
        """Evaluate a SPARQL SELECT against the ingested store."""
        with self._write_lock:
            self._require_ingest()
            return sparql_select(self.store, query, limit)


def _ingest(pipeline: Pipeline, document: DocumentConfig) -> Result[IngestReport]:
    log.info("── Ingest (%s) ──", document.format)
    return pipeline.ingest(document.data, subject=document.subject, fmt=document.format)


def run_pipeline(config: PipelineConfig, pipeline: Pipeline | None = None) -> Result[PipelineRun]:
    """Run ingest then query as described by ``config``."""
    pipeline = pipeline if pipeline is not None else Pipeline()
    summary = pipeline.summary

    ingest_result = _ingest(pipeline, config.document)
    if not ingest_result.ok:
        log.error("Ingest phase failed: %s", ingest_result.error)
        log.info(summary.report())
        return ingest_result  # type: ignore[return-value]

    log.info("── Query ──")
    counter = summary.counter("query")
    query = config.query
    try:
        if query.sparql is not None:
            bindings = pipeline.sparql(query.sparql, query.limit)
        else:
            bindings = list(pipeline.query(query.pattern, query.limit))
    except PipelineError as exc:
        counter.failed += 1
        log.error("Query phase failed: %s", exc)
        log.info(summary.report())
        return Fail.from_exc(exc)

    counter.ok += len(bindings)
    summary.store_size = pipeline.store.size()

    nquads = None
    if config.output.nquads:
        try:
            nquads = to_nquads(pipeline.store)
        except PipelineError as exc:
            log.error("N-Quads export failed: %s", exc)
            log.info(summary.report())
            return Fail.from_exc(exc)

    log.info(summary.report())
    return Ok(data=PipelineRun(bindings=bindings, store=pipeline.store, nquads=nquads, summary=summary))
