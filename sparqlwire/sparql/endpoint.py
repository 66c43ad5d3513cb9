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
"""Endpoint URL checks done before any request is built."""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass

from sparqlwire.result import Fail, Ok, Result


@dataclass(frozen=True, slots=True)
class EndpointCheck:
    url: str
    warning: str | None = None


def validate_endpoint(url: str) -> Result[EndpointCheck]:
    """Accept absolute http(s) URLs; plain http passes with a warning."""
    candidate = url.strip()
    if not candidate:
        return Fail(error="Endpoint URL is empty")

    try:
        parsed = urllib.parse.urlsplit(candidate)
    except ValueError as exc:
        return Fail(error=f"Invalid endpoint URL: {exc}", context=candidate)

    if parsed.scheme not in ("http", "https"):
        return Fail(error="Endpoint URL must use HTTP or HTTPS", context=candidate)
    if not parsed.netloc:
        return Fail(
            error="Invalid endpoint URL; expected a complete URL such as https://example.org/sparql",
            context=candidate,
        )
    if "#" in candidate:
        return Fail(error="Endpoint URL must not contain a fragment ('#...')", context=candidate)

    warning = None
    if parsed.scheme == "http":
        warning = "Plain HTTP endpoint: queries and credentials travel unencrypted"
    return Ok(data=EndpointCheck(url=candidate, warning=warning))
