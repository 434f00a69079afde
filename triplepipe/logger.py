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

"""Logger factory and per-phase counters.

Counts inserted, duplicate and failed items per pipeline phase so a run
can end with a short summary block.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

_FMT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger configured with a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


@dataclass
class StepCounter:
    """Tracks outcomes for a single pipeline phase."""

    name: str
    ok: int = 0
    skipped: int = 0
    failed: int = 0


_LABELS = {
    "ingest": ("inserted", "duplicate", "rejected"),
    "query": ("bindings", "skipped", "failed"),
}


@dataclass
class PipelineSummary:
    """Phase counters plus the store size observed once the query ran."""

    steps: dict[str, StepCounter] = field(default_factory=dict)
    store_size: int | None = None

    def counter(self, name: str) -> StepCounter:
        """Get or create a counter for a named phase."""
        if name not in self.steps:
            self.steps[name] = StepCounter(name=name)
        return self.steps[name]

    def report(self) -> str:
        lines: list[str] = ["", "Triple Pipeline Summary", "=" * 40]
        for step in self.steps.values():
            ok_label, skipped_label, failed_label = _LABELS.get(step.name, ("ok", "skipped", "failed"))
            parts = [f"{step.name}: {step.ok} {ok_label}"]
            if step.skipped:
                parts.append(f"{step.skipped} {skipped_label}")
            if step.failed:
                parts.append(f"{step.failed} {failed_label}")
            lines.append("  ".join(parts))
        if self.store_size is not None:
            lines.append(f"store: {self.store_size} triples")
        lines.append("=" * 40)
        return "\n".join(lines)
