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

"""Progress events for one execute() call.

A call moves through EXECUTING (request sent, waiting for headers),
DOWNLOADING (body chunks arriving, throttled to PROGRESS_INTERVAL),
PARSING (body being decoded) and COMPLETE (status and elapsed time).
Callbacks run on the event loop and should return quickly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

# Seconds between two DOWNLOADING events; the last chunk is always reported.
PROGRESS_INTERVAL = 0.1


class Phase(str, Enum):
    EXECUTING = "executing"
    DOWNLOADING = "downloading"
    PARSING = "parsing"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class Progress:
    phase: Phase
    bytes_received: int = 0
    total_bytes: int | None = None
    speed: float = 0.0  # bytes per second
    status: int | None = None
    elapsed: float | None = None  # seconds since the request was sent


ProgressCallback = Callable[[Progress], None]


def content_length(raw: str | None) -> int | None:
    """Parse a Content-Length header; anything unusable means unknown."""
    if raw is None or not raw.strip().isdigit():
        return None
    return int(raw.strip())
