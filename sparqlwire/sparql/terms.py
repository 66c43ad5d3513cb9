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

"""RDF terms of the SPARQL JSON results format, decoded into Cells.

Wire shapes (https://www.w3.org/TR/sparql11-results-json/#select-encode-terms):
  {"type": "uri", "value": ...}
  {"type": "bnode", "value": ...}
  {"type": "literal", "value": ..., "xml:lang": ...}
  {"type": "literal", "value": ..., "datatype": ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sparqlwire.result import Fail, Ok, Result

XSD = "http://www.w3.org/2001/XMLSchema#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


class TermKind(str, Enum):
    IRI = "iri"
    LITERAL = "literal"
    BLANK_NODE = "bnode"


@dataclass(frozen=True, slots=True)
class Cell:
    """One bound value. datatype and language_tag are never both set."""

    kind: TermKind
    value: str
    datatype: str | None = None
    language_tag: str | None = None
    raw_identifier: str | None = None

    def annotation(self, abbreviate: bool = True) -> str:
        """``@lang`` or ``^^datatype`` suffix for literals, empty otherwise."""
        if self.kind is not TermKind.LITERAL:
            return ""
        if self.language_tag:
            return f"@{self.language_tag}"
        if self.datatype:
            dt = abbreviate_datatype(self.datatype) if abbreviate else self.datatype
            return f"^^{dt}"
        return ""


def abbreviate_datatype(datatype: str) -> str:
    """Shorten XSD and RDF datatype IRIs to their ``xsd:`` / ``rdf:`` forms."""
    for prefix, iri in (("xsd", XSD), ("rdf", RDF)):
        if datatype.startswith(iri):
            return f"{prefix}:{datatype[len(iri):]}"
    return datatype


def _optional_str(term: dict[str, Any], key: str) -> Result[str | None]:
    value = term.get(key)
    if value is None:
        return Ok(data=None)
    if not isinstance(value, str):
        return Fail(error=f"Term field '{key}' must be a string", context=term)
    return Ok(data=value or None)


def _literal(value: str, term: dict[str, Any]) -> Result[Cell]:
    lang = _optional_str(term, "xml:lang")
    if not lang.ok:
        return lang  # type: ignore[return-value]
    datatype = _optional_str(term, "datatype")
    if not datatype.ok:
        return datatype  # type: ignore[return-value]

    if lang.data:
        # rdf:langString (SPARQL 1.1) is implied by the tag and not kept.
        return Ok(data=Cell(kind=TermKind.LITERAL, value=value, language_tag=lang.data))
    return Ok(data=Cell(kind=TermKind.LITERAL, value=value, datatype=datatype.data))


def parse_term(term: Any) -> Result[Cell]:
    """Decode one wire term. Unknown ``type`` values are a Fail, never a guess."""
    if not isinstance(term, dict):
        return Fail(error="RDF term must be a JSON object", context=term)

    kind = term.get("type")
    value = term.get("value")
    if not isinstance(value, str):
        return Fail(error="RDF term 'value' must be a string", context=term)

    if kind == "uri":
        return Ok(data=Cell(kind=TermKind.IRI, value=value, raw_identifier=value))
    if kind == "bnode":
        return Ok(data=Cell(kind=TermKind.BLANK_NODE, value=value))
    # "typed-literal" is still written by some older endpoints.
    if kind in ("literal", "typed-literal"):
        return _literal(value, term)

    return Fail(error=f"Unrecognized RDF term type: {kind!r}", context=term)
