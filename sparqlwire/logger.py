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

"""Logger factory plus ok/failed counters for command-line runs.

The protocol core only emits DEBUG traces; reporting failures is left
to whoever calls it. RunSummary gives that caller a compact tally of
outcomes grouped by error kind.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

_FMT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"

_created: set[str] = set()


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a stdlib logger with a single stderr handler and a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(level)
    _created.add(name)
    return logger


@dataclass
class QueryCounter:
    """Outcome tally for one endpoint."""

    endpoint: str
    ok: int = 0
    failed: dict[str, int] = field(default_factory=dict)

    def fail(self, kind: str) -> None:
        self.failed[kind] = self.failed.get(kind, 0) + 1

    @property
    def failed_total(self) -> int:
        return sum(self.failed.values())


@dataclass
class RunSummary:
    """Accumulates counters across every endpoint touched in a run."""

    endpoints: dict[str, QueryCounter] = field(default_factory=dict)

    def counter(self, endpoint: str) -> QueryCounter:
        """Get or create the counter for an endpoint."""
        if endpoint not in self.endpoints:
            self.endpoints[endpoint] = QueryCounter(endpoint=endpoint)
        return self.endpoints[endpoint]

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Query Summary", "=" * 40]
        for counter in self.endpoints.values():
            parts = [f"{counter.endpoint}: {counter.ok} ok"]
            if counter.failed:
                kinds = ", ".join(f"{kind}={n}" for kind, n in sorted(counter.failed.items()))
                parts.append(f"{counter.failed_total} failed ({kinds})")
            lines.append("  ".join(parts))
        lines.append("=" * 40)
        return "\n".join(lines)


def set_level(level: int) -> None:
    """Change the level of every logger handed out by get_logger()."""
    for name in _created:
        logging.getLogger(name).setLevel(level)
