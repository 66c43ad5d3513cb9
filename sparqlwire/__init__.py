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

"""sparqlwire: a stateless SPARQL Protocol client and result codec."""

from sparqlwire.config import ClientConfig, load_config
from sparqlwire.sparql.cancel import CancellationToken, CancelReason
from sparqlwire.sparql.client import QueryRequest, RequestPlan, SparqlClient, execute_query
from sparqlwire.sparql.decoder import BooleanResult, DecodedResult, GraphResult, TableResult, decode_result
from sparqlwire.sparql.errors import ErrorKind, QueryError
from sparqlwire.sparql.formats import ResultFormat, accept_header
from sparqlwire.sparql.progress import Phase, Progress
from sparqlwire.sparql.querytype import QueryType, classify
from sparqlwire.sparql.terms import Cell, TermKind, parse_term

__version__ = "0.1.0"

__all__ = [
    "BooleanResult",
    "CancelReason",
    "CancellationToken",
    "Cell",
    "ClientConfig",
    "DecodedResult",
    "ErrorKind",
    "GraphResult",
    "Phase",
    "Progress",
    "QueryError",
    "QueryRequest",
    "QueryType",
    "RequestPlan",
    "ResultFormat",
    "SparqlClient",
    "TableResult",
    "TermKind",
    "accept_header",
    "classify",
    "decode_result",
    "execute_query",
    "load_config",
    "parse_term",
]
