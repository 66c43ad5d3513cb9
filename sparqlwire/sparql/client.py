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

"""SPARQL Protocol client over httpx.

Picks GET or POST per query form and URL length, negotiates the result
format, and turns the response into a typed result or a QueryError.
No retries, no caching: one call, one request, one outcome.

    GET    endpoint?query=<percent-encoded text>     Accept: ...
    POST   body=<query text>   Content-Type: application/sparql-query
    POST   body=<update text>  Content-Type: application/sparql-update
"""

from __future__ import annotations

import asyncio
import ssl
import time
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

import certifi
import httpx

from sparqlwire.config import ClientConfig
from sparqlwire.logger import get_logger
from sparqlwire.result import Fail, Ok, Result
from sparqlwire.sparql.cancel import CancellationToken, CancelReason, OperationCancelled
from sparqlwire.sparql.decoder import DecodedResult, TableResult, body_charset, decode_result
from sparqlwire.sparql.endpoint import validate_endpoint
from sparqlwire.sparql.errors import (
    ErrorKind,
    QueryError,
    classify_exception,
    classify_response,
    decode_failure,
)
from sparqlwire.sparql.formats import ResultFormat, accept_header
from sparqlwire.sparql.progress import PROGRESS_INTERVAL, Phase, Progress, ProgressCallback, content_length
from sparqlwire.sparql.querytype import QueryType, classify

log = get_logger(__name__)

SPARQL_QUERY = "application/sparql-query"
SPARQL_UPDATE = "application/sparql-update"

_ssl_ctx = ssl.create_default_context(cafile=certifi.where())


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """Everything one call needs; anything left as None comes from ClientConfig."""

    endpoint: str
    query: str
    format: ResultFormat | None = None
    accept: str | None = None
    method: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None
    on_progress: ProgressCallback | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class RequestPlan:
    method: str
    url: str
    headers: dict[str, str]
    body: str | None = None


def merge_headers(*layers: Mapping[str, str]) -> dict[str, str]:
    """Merge header mappings, later layers winning; names compare case-insensitively."""
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        for name, value in layer.items():
            merged[name.lower()] = (name, value)
    return dict(merged.values())


def get_url(endpoint: str, query: str) -> str:
    """The URL a GET request would use, with the query fully percent-encoded.

    Existing query parameters are kept; a fragment is never sent.
    """
    parts = urllib.parse.urlsplit(endpoint)
    param = f"query={urllib.parse.quote(query, safe='')}"
    existing = parts.query
    if existing and not existing.endswith("&"):
        existing += "&"
    return urllib.parse.urlunsplit(parts._replace(query=existing + param, fragment=""))


def build_plan(
    endpoint: str,
    query: str,
    query_type: QueryType,
    accept: str,
    *,
    method: str | None = None,
    headers: Mapping[str, str] | None = None,
    get_url_limit: int = 2000,
) -> RequestPlan:
    """Choose method, URL, headers and body for one request.

    Updates always go out as POST; a method override only applies to
    queries. Caller headers override every default set here.
    """
    custom = headers or {}

    if query_type is QueryType.UPDATE:
        defaults = {"Accept": accept, "Content-Type": SPARQL_UPDATE}
        return RequestPlan("POST", endpoint, merge_headers(defaults, custom), body=query)

    url = get_url(endpoint, query)
    if method is None:
        method = "GET" if len(url) <= get_url_limit else "POST"
    method = method.upper()

    if method == "GET":
        return RequestPlan("GET", url, merge_headers({"Accept": accept}, custom))
    if method == "POST":
        defaults = {"Accept": accept, "Content-Type": SPARQL_QUERY}
        return RequestPlan("POST", endpoint, merge_headers(defaults, custom), body=query)
    raise ValueError(f"Unsupported HTTP method for SPARQL queries: {method}")


class SparqlClient:
    """One explicit client instance per caller; calls share nothing but the connection pool.

    Usage:
        async with SparqlClient(config) as client:
            result = await client.execute(QueryRequest(endpoint, "ASK { ?s ?p ?o }"))
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> SparqlClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http_client is None:
            # Deadlines come from the per-call token, not from httpx.
            self._http_client = httpx.AsyncClient(verify=_ssl_ctx, timeout=None, follow_redirects=True)
            self._owns_client = True
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @staticmethod
    def classify(query: str) -> QueryType:
        return classify(query)

    def plan(self, request: QueryRequest, query_type: QueryType | None = None) -> RequestPlan:
        """Build the request plan for a call without sending anything."""
        if query_type is None:
            query_type = classify(request.query)
        accept = request.accept or accept_header(query_type, request.format or self.config.preferred_format)
        headers = merge_headers(
            {"User-Agent": self.config.user_agent},
            self.config.extra_headers,
            request.headers,
        )
        return build_plan(
            request.endpoint,
            request.query,
            query_type,
            accept,
            method=request.method,
            headers=headers,
            get_url_limit=self.config.get_url_limit,
        )

    async def _fetch(self, plan: RequestPlan, on_progress: ProgressCallback | None) -> tuple[httpx.Response, bytes]:
        """Send the request and read the whole body, reporting download progress."""
        request = self.http.build_request(
            plan.method,
            plan.url,
            headers=plan.headers,
            content=plan.body.encode("utf-8") if plan.body is not None else None,
        )
        response = await self.http.send(request, stream=True)
        try:
            body = await _download(response, on_progress)
        finally:
            await response.aclose()
        return response, body

    async def _send(
        self,
        plan: RequestPlan,
        token: CancellationToken,
        timeout: float,
        on_progress: ProgressCallback | None = None,
    ) -> tuple[httpx.Response, bytes]:
        """Race the request (including body download) against the token and the deadline."""
        send_task = asyncio.ensure_future(self._fetch(plan, on_progress))
        cancel_task = asyncio.ensure_future(token.wait())

        try:
            done, _ = await asyncio.wait(
                {send_task, cancel_task},
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            send_task.cancel()
            raise
        finally:
            cancel_task.cancel()

        if send_task in done:
            return send_task.result()

        token.cancel(CancelReason.TIMEOUT)
        send_task.cancel()
        await asyncio.gather(send_task, return_exceptions=True)
        assert token.reason is not None
        raise OperationCancelled(token.reason)

    async def execute(
        self,
        request: QueryRequest,
        token: CancellationToken | None = None,
    ) -> DecodedResult:
        """Run one query or update. Raises QueryError on every failure path."""
        limit = self.config.error_detail_limit
        timeout = request.timeout if request.timeout is not None else self.config.timeout
        notify = request.on_progress

        check = validate_endpoint(request.endpoint)
        if not check.ok:
            raise QueryError(ErrorKind.UNKNOWN, check.error, detail=check.context)
        request = replace(request, endpoint=check.data.url)

        query_type = classify(request.query)
        try:
            plan = self.plan(request, query_type)
        except ValueError as exc:
            raise QueryError(ErrorKind.UNKNOWN, str(exc), cause=exc) from exc

        token = token or CancellationToken()
        if token.cancelled:
            assert token.reason is not None
            raise classify_exception(OperationCancelled(token.reason), timeout=timeout)

        log.debug("%s %s (%s, %d header(s))", plan.method, request.endpoint, query_type.value, len(plan.headers))
        started = time.monotonic()
        if notify is not None:
            notify(Progress(Phase.EXECUTING))

        try:
            response, body = await self._send(plan, token, timeout, notify)
        except Exception as exc:
            raise classify_exception(exc, timeout=timeout, limit=limit) from exc

        content_type = response.headers.get("content-type", "")
        if not response.is_success:
            raise classify_response(
                response.status_code,
                _error_text(body, content_type),
                reason_phrase=response.reason_phrase,
                content_type=content_type,
                accept=httpx.Headers(plan.headers).get("accept"),
                limit=limit,
            )

        if token.cancelled:
            assert token.reason is not None
            raise classify_exception(OperationCancelled(token.reason), timeout=timeout)

        content_type = content_type or "text/plain"
        if notify is not None:
            notify(Progress(Phase.PARSING, bytes_received=len(body)))
        decoded = decode_result(body, content_type)
        if not decoded.ok:
            raise decode_failure(decoded, limit=limit)

        elapsed = time.monotonic() - started
        log.debug(
            "%d bytes of %s in %.0f ms -> %s",
            len(body),
            content_type,
            elapsed * 1000,
            _shape(decoded.data),
        )
        if notify is not None:
            notify(Progress(Phase.COMPLETE, bytes_received=len(body), status=response.status_code, elapsed=elapsed))
        return decoded.data


async def _download(response: httpx.Response, on_progress: ProgressCallback | None) -> bytes:
    total = content_length(response.headers.get("content-length"))
    chunks: list[bytes] = []
    received = 0
    started = time.monotonic()
    last_report: float | None = None

    async for chunk in response.aiter_bytes():
        chunks.append(chunk)
        received += len(chunk)
        now = time.monotonic()
        if on_progress is not None and (last_report is None or now - last_report >= PROGRESS_INTERVAL):
            on_progress(_downloading(received, total, now - started))
            last_report = now

    if on_progress is not None:
        on_progress(_downloading(received, total, time.monotonic() - started))
    return b"".join(chunks)


def _downloading(received: int, total: int | None, elapsed: float) -> Progress:
    speed = received / elapsed if elapsed > 0 else 0.0
    return Progress(Phase.DOWNLOADING, bytes_received=received, total_bytes=total, speed=speed)


def _error_text(body: bytes, content_type: str) -> str:
    # Only feeds a bounded error excerpt, so lossy decoding is fine here.
    try:
        return body.decode(body_charset(content_type), errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def _shape(result: DecodedResult) -> str:
    if isinstance(result, TableResult):
        return f"{result.row_count} row(s) x {result.column_count} column(s)"
    return type(result).__name__


async def execute_query(
    endpoint: str,
    query: str,
    config: ClientConfig | None = None,
    **options,
) -> Result[DecodedResult]:
    """One-shot helper: run a query with a throwaway client and return Ok / Fail.

    The Fail context is the QueryError itself, so callers can still branch on kind.
    """
    async with SparqlClient(config) as client:
        try:
            data = await client.execute(QueryRequest(endpoint=endpoint, query=query, **options))
        except QueryError as exc:
            return Fail(error=exc.message, context=exc)
    return Ok(data=data)
