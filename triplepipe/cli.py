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

"""Command line entry point.

Reads a YAML workflow, ingests its document into an in-memory store,
runs its query and prints one binding per line as JSON on stdout.
Logs go to stderr.

Usage: triplepipe --workflow=workflows/person.yaml
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from triplepipe.config import load_config
from triplepipe.logger import get_logger
from triplepipe.pipeline import run_pipeline
from triplepipe.terms import Binding

log = get_logger("triplepipe")


def render_binding(binding: Binding) -> str:
    """One JSON object per binding, terms in N-Triples notation."""
    return json.dumps({name: term.n3() for name, term in binding.items()}, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="triplepipe",
        description="Execute a YAML workflow: document → triples → query bindings",
    )
    parser.add_argument(
        "--workflow",
        type=Path,
        required=True,
        help="Path to workflow YAML (e.g. workflows/person.yaml)",
    )
    args = parser.parse_args(argv)

    workflow = args.workflow.resolve()
    if not workflow.exists():
        log.error("Workflow file not found: %s", workflow)
        return 1

    cfg_result = load_config(workflow)
    if not cfg_result.ok:
        log.error(cfg_result.error)
        return 1

    log.info("Workflow: %s", workflow.name)

    result = run_pipeline(cfg_result.data)
    if not result.ok:
        log.error("Pipeline failed: %s", result.error)
        return 1

    run = result.data
    if run.nquads is not None:
        sys.stdout.write(run.nquads)
    for binding in run.bindings:
        print(render_binding(binding))

    return 0


if __name__ == "__main__":
    sys.exit(main())
