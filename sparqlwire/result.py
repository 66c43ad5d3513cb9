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

"""Ok / Fail values for the pure, fallible steps of the client.

Config loading, endpoint checks, term parsing and result decoding never
raise on bad input: they return Result[T] = Ok[T] | Fail. Only the
network-facing client turns a Fail into a raised QueryError.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful step carrying typed data."""

    data: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class Fail:
    """Failed step: a human-readable error plus optional context (offending input, path...)."""

    error: str
    context: Any = None
    ok: bool = field(default=False, init=False)


Result = Ok[T] | Fail


def collect(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Gather a sequence of results into one; the first Fail short-circuits."""
    items: list[T] = []
    for result in results:
        if not result.ok:
            return result
        items.append(result.data)
    return Ok(data=items)
