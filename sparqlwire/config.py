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

"""Loads client settings from YAML into a frozen dataclass.

Every key is optional; absent keys keep the defaults below.

    endpoint: https://query.wikidata.org/sparql
    timeout: 60              # seconds
    preferred_format: json   # json | xml | csv | tsv | turtle | jsonld | ntriples | rdfxml
    get_url_limit: 2000      # longer GET URLs switch to POST
    error_detail_limit: 500  # max characters kept from error bodies
    user_agent: sparqlwire/0.1
    extra_headers:
      Authorization: Bearer ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sparqlwire.result import Fail, Ok, Result
from sparqlwire.sparql.errors import ERROR_DETAIL_LIMIT
from sparqlwire.sparql.formats import ResultFormat, parse_format

DEFAULT_TIMEOUT = 60.0
DEFAULT_GET_URL_LIMIT = 2000
DEFAULT_USER_AGENT = "sparqlwire/0.1"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    endpoint: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    extra_headers: dict[str, str] = field(default_factory=dict)
    preferred_format: ResultFormat | None = None
    get_url_limit: int = DEFAULT_GET_URL_LIMIT
    error_detail_limit: int = ERROR_DETAIL_LIMIT
    user_agent: str = DEFAULT_USER_AGENT


def _positive(raw: dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise TypeError(f"'{key}' must be a positive number, got {value!r}")
    return value


def _headers(raw: dict[str, Any]) -> dict[str, str]:
    headers = raw.get("extra_headers") or {}
    if not isinstance(headers, dict):
        raise TypeError("'extra_headers' must be a mapping")
    return {str(k): str(v) for k, v in headers.items()}


def config_from_dict(raw: dict[str, Any]) -> Result[ClientConfig]:
    """Build a ClientConfig from an already-parsed mapping."""
    preferred: ResultFormat | None = None
    if raw.get("preferred_format") is not None:
        preferred = parse_format(str(raw["preferred_format"]))
        if preferred is None:
            return Fail(error=f"Unknown result format: {raw['preferred_format']}")

    try:
        config = ClientConfig(
            endpoint=raw.get("endpoint"),
            timeout=float(_positive(raw, "timeout", DEFAULT_TIMEOUT)),
            extra_headers=_headers(raw),
            preferred_format=preferred,
            get_url_limit=int(_positive(raw, "get_url_limit", DEFAULT_GET_URL_LIMIT)),
            error_detail_limit=int(_positive(raw, "error_detail_limit", ERROR_DETAIL_LIMIT)),
            user_agent=str(raw.get("user_agent", DEFAULT_USER_AGENT)),
        )
    except (KeyError, TypeError) as exc:
        return Fail(error=f"Config structure error: {exc}")

    return Ok(data=config)


def load_config(path: Path) -> Result[ClientConfig]:
    """Load a YAML config file. No network access, no endpoint probing."""
    if not path.exists():
        return Fail(error=f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        return Fail(error=f"Cannot read config file: {exc}", context=str(path))
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", context=str(path))

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return Fail(error="Config root must be a mapping", context=str(path))

    result = config_from_dict(raw)
    if not result.ok:
        return Fail(error=result.error, context=str(path))
    return result
