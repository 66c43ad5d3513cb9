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

"""Result formats, their MIME types, and Accept header negotiation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from sparqlwire.sparql.querytype import QueryType, produces_bindings


class ResultFormat(str, Enum):
    JSON = "json"
    XML = "xml"
    CSV = "csv"
    TSV = "tsv"
    TURTLE = "turtle"
    JSONLD = "jsonld"
    NTRIPLES = "ntriples"
    RDFXML = "rdfxml"


SPARQL_RESULTS_JSON = "application/sparql-results+json"
SPARQL_RESULTS_XML = "application/sparql-results+xml"
TURTLE = "text/turtle"
JSON_LD = "application/ld+json"

MIME_TYPES: dict[ResultFormat, str] = {
    ResultFormat.JSON: SPARQL_RESULTS_JSON,
    ResultFormat.XML: SPARQL_RESULTS_XML,
    ResultFormat.CSV: "text/csv",
    ResultFormat.TSV: "text/tab-separated-values",
    ResultFormat.TURTLE: TURTLE,
    ResultFormat.JSONLD: JSON_LD,
    ResultFormat.NTRIPLES: "application/n-triples",
    ResultFormat.RDFXML: "application/rdf+xml",
}

_LABELS: dict[str, str] = {
    SPARQL_RESULTS_JSON: "JSON",
    SPARQL_RESULTS_XML: "XML",
    "text/csv": "CSV",
    "text/tab-separated-values": "TSV",
    TURTLE: "Turtle",
    JSON_LD: "JSON-LD",
    "application/n-triples": "N-Triples",
    "application/rdf+xml": "RDF/XML",
}

_BINDINGS_PREFERENCE = (
    SPARQL_RESULTS_JSON,
    SPARQL_RESULTS_XML,
    "text/csv",
    "text/tab-separated-values",
)

_GRAPH_PREFERENCE = (
    TURTLE,
    "application/rdf+xml",
    JSON_LD,
    "application/n-triples",
)

# Weighted fallbacks appended after the preferred MIME type.
_BINDINGS_FALLBACK = ((SPARQL_RESULTS_JSON, "0.9"), (SPARQL_RESULTS_XML, "0.8"))
_GRAPH_FALLBACK = ((TURTLE, "0.9"), (JSON_LD, "0.8"))
_WILDCARD = "*/*;q=0.7"


def parse_format(name: str) -> ResultFormat | None:
    """Look up a format by short name (``json``, ``turtle``...), case-insensitive."""
    try:
        return ResultFormat(name.strip().lower())
    except ValueError:
        return None


def format_to_mime(fmt: ResultFormat) -> str:
    return MIME_TYPES[fmt]


def mime_to_format(mime_type: str) -> ResultFormat | None:
    """Reverse lookup; parameters such as ``;charset=utf-8`` are ignored."""
    base = mime_type.split(";", 1)[0].strip().lower()
    for fmt, mime in MIME_TYPES.items():
        if mime == base:
            return fmt
    return None


def format_label(mime_type: str) -> str:
    """Short human-readable name for a MIME type, or the MIME type itself."""
    return _LABELS.get(mime_type, mime_type)


def default_formats(query_type: QueryType) -> list[str]:
    """Formats to offer when the endpoint does not advertise its own."""
    if produces_bindings(query_type):
        return list(_BINDINGS_PREFERENCE)
    return list(_GRAPH_PREFERENCE)


def best_format(available: Iterable[str], query_type: QueryType) -> str:
    """Pick the most suitable MIME type among those an endpoint supports."""
    offered = list(available)
    preference = _GRAPH_PREFERENCE
    if produces_bindings(query_type):
        preference = _BINDINGS_PREFERENCE + _GRAPH_PREFERENCE
    for mime in preference:
        if mime in offered:
            return mime
    return offered[0] if offered else SPARQL_RESULTS_JSON


def accept_header(
    query_type: QueryType,
    desired: ResultFormat | None = None,
    mime_types: Mapping[ResultFormat, str] = MIME_TYPES,
) -> str:
    """Build a weighted Accept header for the given query form.

    The preferred type is listed unweighted, followed by the family
    fallbacks (minus the preferred one) and a ``*/*`` wildcard, so the
    header never ends without a catch-all.
    """
    if produces_bindings(query_type):
        default, fallback = ResultFormat.JSON, _BINDINGS_FALLBACK
    else:
        default, fallback = ResultFormat.TURTLE, _GRAPH_FALLBACK

    preferred = mime_types.get(desired) if desired is not None else None
    if not preferred:
        preferred = mime_types.get(default, MIME_TYPES[default])

    parts = [preferred]
    parts.extend(f"{mime};q={weight}" for mime, weight in fallback if mime != preferred)
    parts.append(_WILDCARD)
    return ", ".join(parts)
