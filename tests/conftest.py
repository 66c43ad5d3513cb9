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

"""Shared fixtures: SparqlClient instances wired to an in-memory transport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from sparqlwire.config import ClientConfig
from sparqlwire.sparql.client import SparqlClient

ENDPOINT = "http://ex.org/sparql"
JSON_RESULTS = "application/sparql-results+json"


def json_response(payload: Any, status: int = 200, content_type: str = JSON_RESULTS) -> httpx.Response:
    return httpx.Response(
        status,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": content_type},
    )


@pytest.fixture
def select_payload() -> dict[str, Any]:
    return {
        "head": {"vars": ["s", "label", "n"]},
        "results": {
            "bindings": [
                {
                    "s": {"type": "uri", "value": "http://ex.org/a"},
                    "label": {"type": "literal", "value": "Alpha", "xml:lang": "en"},
                    "n": {
                        "type": "literal",
                        "value": "1",
                        "datatype": "http://www.w3.org/2001/XMLSchema#integer",
                    },
                },
                {
                    "s": {"type": "bnode", "value": "b0"},
                },
            ]
        },
    }


@pytest_asyncio.fixture
async def make_client():
    """Factory: make_client(handler, **config) -> SparqlClient over httpx.MockTransport."""
    opened: list[httpx.AsyncClient] = []

    def factory(handler, **config: Any) -> SparqlClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http)
        return SparqlClient(ClientConfig(**config), http_client=http)

    yield factory

    for http in opened:
        await http.aclose()
