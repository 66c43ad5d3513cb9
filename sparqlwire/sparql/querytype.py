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

"""Query form detection from raw SPARQL text.

Skips the prologue (byte order mark, BASE / PREFIX declarations, comments,
whitespace) and looks at the first keyword. Unrecognized text is treated as SELECT.
"""

from __future__ import annotations

import re
from enum import Enum


class QueryType(str, Enum):
    SELECT = "SELECT"
    ASK = "ASK"
    CONSTRUCT = "CONSTRUCT"
    DESCRIBE = "DESCRIBE"
    UPDATE = "UPDATE"


# One prologue token per match; classify() strips them until none is left.
_PROLOGUE_TOKEN = re.compile(
    r"""\A(?:
        \ufeff
      | \s+
      | \#[^\n]*(?:\n|\Z)
      | BASE\s*<[^>]*>
      | PREFIX\s+[^\s:]*:\s*<[^>]*>
    )""",
    re.IGNORECASE | re.VERBOSE,
)

_QUERY_FORMS = {
    "SELECT": QueryType.SELECT,
    "ASK": QueryType.ASK,
    "CONSTRUCT": QueryType.CONSTRUCT,
    "DESCRIBE": QueryType.DESCRIBE,
}

# WITH opens a DELETE/INSERT ... WHERE modify operation.
_UPDATE_OPERATIONS = frozenset(
    {"INSERT", "DELETE", "LOAD", "CLEAR", "CREATE", "DROP", "COPY", "MOVE", "ADD", "WITH"}
)

_KEYWORD = re.compile(r"\A([A-Za-z]+)\b")


def strip_prologue(query: str) -> str:
    """Return the query text starting at its first non-prologue token."""
    rest = query
    while match := _PROLOGUE_TOKEN.match(rest):
        rest = rest[match.end():]
    return rest


def classify(query: str) -> QueryType:
    """Detect the query form; total, never raises."""
    match = _KEYWORD.match(strip_prologue(query))
    if match is None:
        return QueryType.SELECT

    keyword = match.group(1).upper()
    if keyword in _QUERY_FORMS:
        return _QUERY_FORMS[keyword]
    if keyword in _UPDATE_OPERATIONS:
        return QueryType.UPDATE
    return QueryType.SELECT


def produces_bindings(query_type: QueryType) -> bool:
    """SELECT and ASK answer with variable bindings or a boolean."""
    return query_type in (QueryType.SELECT, QueryType.ASK)


def produces_graph(query_type: QueryType) -> bool:
    """CONSTRUCT and DESCRIBE answer with an RDF graph."""
    return query_type in (QueryType.CONSTRUCT, QueryType.DESCRIBE)
