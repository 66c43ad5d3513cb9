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

"""Error taxonomy for SPARQL requests.

Every failure of a call ends up as exactly one QueryError. The kind is
decided in a fixed order, first match wins:

  1. cancellation or timeout        -> timeout
  2. blocked cross-origin request   -> cors
  3. no response at all             -> network
  4. 400 with a syntax-error body   -> sparql
  5. any other status >= 400        -> http
  6. undecodable success body       -> parse
  7. anything else                  -> unknown
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

import httpx

from sparqlwire.result import Fail
from sparqlwire.sparql.cancel import CancelReason, OperationCancelled

ERROR_DETAIL_LIMIT = 500


class ErrorKind(str, Enum):
    NETWORK = "network"
    CORS = "cors"
    TIMEOUT = "timeout"
    HTTP = "http"
    SPARQL = "sparql"
    PARSE = "parse"
    UNKNOWN = "unknown"


_FALLBACK_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK: "Network error: unable to reach the endpoint",
    ErrorKind.CORS: "CORS error: cross-origin request blocked",
    ErrorKind.TIMEOUT: "Query timed out or was cancelled",
    ErrorKind.HTTP: "The endpoint answered with an HTTP error",
    ErrorKind.SPARQL: "The endpoint rejected the query as invalid SPARQL",
    ErrorKind.PARSE: "The endpoint returned a result that could not be decoded",
    ErrorKind.UNKNOWN: "Unexpected error while running the query",
}

_HTTP_SUMMARIES: dict[int, str] = {
    400: "Bad Request: the endpoint rejected the request",
    401: "Unauthorized: authentication required",
    403: "Forbidden: access denied to this endpoint",
    404: "Not Found: endpoint does not exist",
    406: "Not Acceptable: requested format not supported by endpoint",
    408: "Request Timeout: query took too long to execute",
    414: "URI Too Long: send the query with POST instead",
    429: "Too Many Requests: the endpoint is rate limiting",
    500: "Internal Server Error: the SPARQL endpoint encountered an error",
    502: "Bad Gateway: the SPARQL endpoint is not responding correctly",
    503: "Service Unavailable: the SPARQL endpoint is temporarily down",
    504: "Gateway Timeout: the SPARQL endpoint did not respond in time",
}

_SPARQL_ERROR = re.compile(r"syntax|pars(?:e|ing)|malformed|lexical|unexpected|encountered", re.IGNORECASE)
_CORS_ERROR = re.compile(r"\bcors\b|cross-origin|blocked", re.IGNORECASE)

_CORS_DETAIL = (
    "The endpoint does not allow cross-origin requests from this origin. "
    "Route the request through a proxy, or ask the endpoint administrator "
    "to send Access-Control-Allow-Origin headers."
)
_NETWORK_DETAIL = "Check that the endpoint URL is correct and the server is reachable."


class QueryError(Exception):
    """The single failure type raised by SparqlClient.execute()."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        *,
        http_status: int | None = None,
        detail: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.message = message.strip() or _FALLBACK_MESSAGES[kind]
        self.http_status = http_status
        self.detail = detail
        self.cause = cause
        super().__init__(self.message)

    def __repr__(self) -> str:
        status = f", http_status={self.http_status}" if self.http_status is not None else ""
        return f"QueryError(kind={self.kind.value!r}, message={self.message!r}{status})"


def excerpt(text: Any, limit: int = ERROR_DETAIL_LIMIT) -> str | None:
    """Bounded, stripped excerpt of a body or message; None if empty."""
    if text is None:
        return None
    cleaned = str(text).strip()
    if not cleaned:
        return None
    return cleaned[:limit]


def _error_body_detail(body: str, content_type: str) -> str:
    """Prefer the ``message`` field of a JSON error body, else the raw text."""
    if "json" not in content_type.lower():
        return body
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return body


def classify_exception(
    exc: BaseException,
    *,
    timeout: float | None = None,
    limit: int = ERROR_DETAIL_LIMIT,
) -> QueryError:
    """Map a transport-level exception (no usable response) to a QueryError."""
    if isinstance(exc, QueryError):
        return exc

    if isinstance(exc, OperationCancelled):
        if exc.reason is CancelReason.CALLER:
            detail = "The query was cancelled by the caller."
        elif timeout is not None:
            detail = f"No complete response within {timeout:g}s."
        else:
            detail = "The query took too long to execute."
        return QueryError(ErrorKind.TIMEOUT, "Query timeout or cancelled", detail=detail, cause=exc)

    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        detail = f"No complete response within {timeout:g}s." if timeout is not None else None
        return QueryError(ErrorKind.TIMEOUT, "Query timeout or cancelled", detail=detail, cause=exc)

    text = str(exc)
    if _CORS_ERROR.search(text):
        return QueryError(ErrorKind.CORS, "CORS error: cross-origin request blocked", detail=_CORS_DETAIL, cause=exc)

    if isinstance(exc, (httpx.TransportError, OSError)):
        reason = excerpt(text, limit)
        detail = f"{reason}\n\n{_NETWORK_DETAIL}" if reason else _NETWORK_DETAIL
        return QueryError(ErrorKind.NETWORK, "Network error: unable to reach endpoint", detail=detail, cause=exc)

    return QueryError(ErrorKind.UNKNOWN, text or type(exc).__name__, cause=exc)


def classify_response(
    status: int,
    body: str,
    *,
    reason_phrase: str = "",
    content_type: str = "",
    accept: str | None = None,
    limit: int = ERROR_DETAIL_LIMIT,
) -> QueryError:
    """Map a non-2xx response to a QueryError; body is whatever could be read."""
    detail = excerpt(_error_body_detail(body, content_type), limit)

    if status == 400 and _SPARQL_ERROR.search(body):
        return QueryError(
            ErrorKind.SPARQL,
            "Bad Request: invalid SPARQL query",
            http_status=status,
            detail=detail,
        )

    if status >= 400:
        message = _HTTP_SUMMARIES.get(status) or f"HTTP {status}: {reason_phrase or 'request failed'}"
        if status == 406 and accept:
            detail = excerpt(
                f"The endpoint does not support the requested format: {accept}. "
                "Try a different format or check the formats the endpoint advertises.",
                limit,
            )
        return QueryError(ErrorKind.HTTP, message, http_status=status, detail=detail)

    return QueryError(
        ErrorKind.UNKNOWN,
        f"Unexpected HTTP status {status}",
        http_status=status,
        detail=detail,
    )


def decode_failure(fail: Fail, *, limit: int = ERROR_DETAIL_LIMIT) -> QueryError:
    """Turn a decoder Fail into a parse QueryError."""
    return QueryError(
        ErrorKind.PARSE,
        f"Malformed result: {fail.error}",
        detail=excerpt(fail.context, limit),
    )
