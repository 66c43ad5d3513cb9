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

"""Response body -> typed result.

Only the SPARQL JSON results family is decoded structurally. Every other
content type (XML results, CSV, Turtle, JSON-LD...) is handed back as a
GraphResult holding the raw text and its declared content type.

Decoding is pure: no I/O, no shared state, and the same body always
yields an equal result.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sparqlwire.result import Fail, Ok, Result, collect
from sparqlwire.sparql.terms import Cell, parse_term

JSON_RESULT_TYPES = frozenset({"application/sparql-results+json", "application/json"})

Row = dict[str, Cell]


@dataclass(frozen=True, slots=True)
class TableResult:
    """SELECT answer. A variable missing from a row is unbound."""

    columns: list[str]
    rows: list[Row]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)


@dataclass(frozen=True, slots=True)
class BooleanResult:
    """ASK answer."""

    value: bool


@dataclass(frozen=True, slots=True)
class GraphResult:
    """Opaque pass-through for anything that is not JSON results."""

    raw: str
    content_type: str


DecodedResult = TableResult | BooleanResult | GraphResult


def is_json_results(content_type: str) -> bool:
    base = content_type.split(";", 1)[0].strip().lower()
    return base in JSON_RESULT_TYPES


def _columns(payload: Mapping[str, Any]) -> Result[list[str]]:
    head = payload.get("head")
    if not isinstance(head, dict):
        return Fail(error="Missing or invalid 'head' object")

    variables = head.get("vars", [])
    if not isinstance(variables, list) or not all(isinstance(v, str) for v in variables):
        return Fail(error="'head.vars' must be a list of strings", context=variables)
    if len(set(variables)) != len(variables):
        return Fail(error="'head.vars' contains duplicate variables", context=variables)
    return Ok(data=list(variables))


def _row(binding: Any, columns: list[str], index: int) -> Result[Row]:
    if not isinstance(binding, dict):
        return Fail(error=f"Binding {index} is not a JSON object", context=binding)

    undeclared = [name for name in binding if name not in columns]
    if undeclared:
        return Fail(
            error=f"Binding {index} uses variables not declared in head.vars: {', '.join(undeclared)}",
            context=binding,
        )

    row: Row = {}
    for name in columns:
        if name not in binding:
            continue
        cell = parse_term(binding[name])
        if not cell.ok:
            return Fail(error=f"Binding {index}, variable '{name}': {cell.error}", context=cell.context)
        row[name] = cell.data
    return Ok(data=row)


def _table(payload: Mapping[str, Any]) -> Result[TableResult]:
    columns = _columns(payload)
    if not columns.ok:
        return columns  # type: ignore[return-value]

    results = payload.get("results")
    if results is None:
        return Ok(data=TableResult(columns=columns.data, rows=[]))
    if not isinstance(results, dict):
        return Fail(error="'results' must be a JSON object", context=results)

    bindings = results.get("bindings", [])
    if not isinstance(bindings, list):
        return Fail(error="'results.bindings' must be a list", context=bindings)

    rows = collect(_row(binding, columns.data, i) for i, binding in enumerate(bindings))
    if not rows.ok:
        return rows  # type: ignore[return-value]
    return Ok(data=TableResult(columns=columns.data, rows=rows.data))


def body_charset(content_type: str) -> str:
    """The charset parameter of a Content-Type, UTF-8 when absent."""
    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return "utf-8"


def body_text(body: bytes, content_type: str) -> Result[str]:
    """Strictly decode a response body; undecodable bytes are a failure, not U+FFFD."""
    charset = body_charset(content_type)
    try:
        return Ok(data=body.decode(charset))
    except LookupError:
        return Fail(error=f"Unknown response charset: {charset}", context=content_type)
    except UnicodeDecodeError as exc:
        return Fail(
            error=f"Response body is not valid {charset}: byte 0x{body[exc.start]:02x} at offset {exc.start}",
            context=body.decode(charset, errors="replace"),
        )


def decode_json(body: str) -> Result[TableResult | BooleanResult]:
    """Structural decode of a SPARQL JSON results document."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        return Fail(error=f"Response body is not valid JSON: {exc}", context=body)

    if not isinstance(payload, dict):
        return Fail(error="Top-level JSON value must be an object", context=body)

    if "boolean" in payload:
        value = payload["boolean"]
        if not isinstance(value, bool):
            return Fail(error="'boolean' must be true or false", context=value)
        return Ok(data=BooleanResult(value=value))

    return _table(payload)


def decode_result(body: str | bytes, content_type: str) -> Result[DecodedResult]:
    """Decode a successful response body according to its content type.

    Raw bytes are decoded with the declared charset (UTF-8 by default)
    before anything else; invalid bytes fail instead of being replaced.
    """
    if isinstance(body, bytes):
        text = body_text(body, content_type)
        if not text.ok:
            return text  # type: ignore[return-value]
        body = text.data

    if is_json_results(content_type):
        return decode_json(body)  # type: ignore[return-value]
    return Ok(data=GraphResult(raw=body, content_type=content_type))
