# SPDX-License-Identifier: MIT
"""
█████╗ ██████╗  █████╗ ███████╗
██╔══██╗██╔══██╗██╔══██╗██╔════╝
███████║██████╔╝███████║███████╗
██╔══██║██╔══██╗██╔══██║╚════██║
██║  ██║██║  ██║██║  ██║███████║
╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>

Licensed under the MIT License.
See LICENSE and THIRD_PARTY_LICENSES for details.

sparqlwire — command-line SPARQL Protocol client

Runs one or more queries against an endpoint and prints the results:
tables as TSV, ASK answers as true/false, anything else as raw text.

Usage:
    sparqlwire --endpoint https://query.wikidata.org/sparql --query "ASK { ?s ?p ?o }"
    sparqlwire --config client.yaml --query-file q1.rq --query-file q2.rq --format json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from sparqlwire.config import ClientConfig, load_config
from sparqlwire.logger import RunSummary, get_logger, set_level
from sparqlwire.sparql.client import execute_query
from sparqlwire.sparql.decoder import BooleanResult, DecodedResult, TableResult
from sparqlwire.sparql.endpoint import validate_endpoint
from sparqlwire.sparql.errors import ErrorKind, QueryError
from sparqlwire.sparql.formats import ResultFormat, parse_format
from sparqlwire.sparql.terms import Cell, TermKind

log = get_logger(__name__)


def format_cell(cell: Cell | None) -> str:
    """N-Triples-like rendering; unbound is an empty field."""
    if cell is None:
        return ""
    if cell.kind is TermKind.IRI:
        return f"<{cell.value}>"
    if cell.kind is TermKind.BLANK_NODE:
        return f"_:{cell.value}"
    escaped = cell.value.replace("\\", "\\\\").replace('"', '\\"').replace("\t", "\\t").replace("\n", "\\n")
    return f'"{escaped}"{cell.annotation(abbreviate=False)}'


def render(result: DecodedResult) -> str:
    if isinstance(result, TableResult):
        lines = ["\t".join(f"?{name}" for name in result.columns)]
        for row in result.rows:
            lines.append("\t".join(format_cell(row.get(name)) for name in result.columns))
        return "\n".join(lines)
    if isinstance(result, BooleanResult):
        return "true" if result.value else "false"
    return result.raw


def _header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def _format(raw: str) -> ResultFormat:
    fmt = parse_format(raw)
    if fmt is None:
        choices = ", ".join(f.value for f in ResultFormat)
        raise argparse.ArgumentTypeError(f"unknown format {raw!r} (choose from {choices})")
    return fmt


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparqlwire",
        description="Run SPARQL queries and updates against a SPARQL Protocol endpoint",
    )
    parser.add_argument("--endpoint", help="Endpoint URL (overrides the config file)")
    parser.add_argument("--config", type=Path, help="Client settings YAML")
    parser.add_argument("--query", action="append", default=[], help="Query text (repeatable)")
    parser.add_argument("--query-file", type=Path, action="append", default=[], help="File holding a query (repeatable)")
    parser.add_argument("--format", type=_format, help="Preferred result format (json, xml, csv, turtle...)")
    parser.add_argument("--accept", help="Literal Accept header, bypassing negotiation")
    parser.add_argument("--method", choices=["GET", "POST"], help="Force the HTTP method for queries")
    parser.add_argument("--header", type=_header, action="append", default=[], help="Extra header 'Name: value' (repeatable)")
    parser.add_argument("--timeout", type=float, help="Seconds before a query is abandoned")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request plans and timings")
    return parser


async def _run(config: ClientConfig, endpoint: str, queries: list[str], args: argparse.Namespace) -> int:
    summary = RunSummary()
    counter = summary.counter(endpoint)
    status = 0

    for index, query in enumerate(queries, start=1):
        result = await execute_query(
            endpoint,
            query,
            config,
            format=args.format,
            accept=args.accept,
            method=args.method,
            headers=dict(args.header),
            timeout=args.timeout,
        )
        if not result.ok:
            error: QueryError = result.context
            counter.fail(error.kind.value)
            log.error("Query %d failed [%s]: %s", index, error.kind.value, error.message)
            if error.detail:
                log.error("%s", error.detail)
            if error.kind is ErrorKind.PARSE:
                log.error("The endpoint returned a non-conformant result document")
            status = 1
            continue

        counter.ok += 1
        print(render(result.data))

    log.info(summary.report())
    return status


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    config = ClientConfig()
    if args.config is not None:
        cfg_result = load_config(args.config.resolve())
        if not cfg_result.ok:
            log.error(cfg_result.error)
            return 1
        config = cfg_result.data
    if args.timeout is not None:
        config = replace(config, timeout=args.timeout)

    endpoint = args.endpoint or config.endpoint
    if not endpoint:
        log.error("No endpoint given (use --endpoint or 'endpoint:' in the config)")
        return 1
    check = validate_endpoint(endpoint)
    if not check.ok:
        log.error(check.error)
        return 1
    if check.data.warning:
        log.warning(check.data.warning)

    queries = list(args.query)
    for path in args.query_file:
        if not path.exists():
            log.error("Query file not found: %s", path)
            return 1
        try:
            queries.append(path.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Cannot read query file %s: %s", path, exc)
            return 1
    if not queries:
        log.error("Nothing to run (use --query or --query-file)")
        return 1

    return asyncio.run(_run(config, check.data.url, queries, args))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
