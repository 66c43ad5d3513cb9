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

"""YAML config loading and endpoint checks."""

from pathlib import Path

import pytest

from sparqlwire.config import DEFAULT_GET_URL_LIMIT, ClientConfig, config_from_dict, load_config
from sparqlwire.sparql.endpoint import validate_endpoint
from sparqlwire.sparql.formats import ResultFormat


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "client.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_full_config(tmp_path):
    path = _write(
        tmp_path,
        """
endpoint: https://query.wikidata.org/sparql
timeout: 12.5
preferred_format: Turtle
get_url_limit: 1500
error_detail_limit: 200
user_agent: tests/2.0
extra_headers:
  Authorization: Bearer abc
  X-Count: 3
""",
    )
    result = load_config(path)
    assert result.ok
    config = result.data
    assert config.endpoint == "https://query.wikidata.org/sparql"
    assert config.timeout == 12.5
    assert config.preferred_format is ResultFormat.TURTLE
    assert config.get_url_limit == 1500
    assert config.error_detail_limit == 200
    assert config.user_agent == "tests/2.0"
    assert config.extra_headers == {"Authorization": "Bearer abc", "X-Count": "3"}


def test_empty_file_gives_defaults(tmp_path):
    result = load_config(_write(tmp_path, ""))
    assert result.ok
    assert result.data == ClientConfig()
    assert result.data.get_url_limit == DEFAULT_GET_URL_LIMIT


def test_missing_file(tmp_path):
    result = load_config(tmp_path / "absent.yaml")
    assert not result.ok
    assert "not found" in result.error


def test_yaml_syntax_error(tmp_path):
    result = load_config(_write(tmp_path, "endpoint: [unclosed"))
    assert not result.ok
    assert result.error.startswith("YAML parse error")


def test_root_must_be_mapping(tmp_path):
    assert not load_config(_write(tmp_path, "- a\n- b\n")).ok


@pytest.mark.parametrize(
    "raw",
    [
        {"preferred_format": "yaml"},
        {"timeout": 0},
        {"timeout": "soon"},
        {"timeout": True},
        {"get_url_limit": -1},
        {"extra_headers": ["a"]},
    ],
)
def test_invalid_values(raw):
    result = config_from_dict(raw)
    assert not result.ok
    assert result.error


@pytest.mark.parametrize("url", ["https://ex.org/sparql", "https://ex.org:8443/ds/query?x=1"])
def test_https_endpoint(url):
    result = validate_endpoint(url)
    assert result.ok
    assert result.data.warning is None


def test_http_endpoint_warns():
    result = validate_endpoint("  http://localhost:3030/ds/sparql ")
    assert result.ok
    assert result.data.url == "http://localhost:3030/ds/sparql"
    assert result.data.warning


@pytest.mark.parametrize(
    "url",
    [
        "",
        "   ",
        "file:///tmp/x",
        "localhost:3030/sparql",
        "https://",
        "http://[::1",
        "http://ex.org/sparql#frag",
        "https://ex.org/sparql#",
    ],
)
def test_rejected_endpoints(url):
    assert not validate_endpoint(url).ok


def test_fragment_is_rejected_with_a_reason():
    result = validate_endpoint("https://ex.org/sparql#main")
    assert not result.ok
    assert "fragment" in result.error


def test_directory_instead_of_file(tmp_path):
    result = load_config(tmp_path)
    assert not result.ok
    assert result.error.startswith("Cannot read config file")


def test_undecodable_file(tmp_path):
    path = tmp_path / "client.yaml"
    path.write_bytes(b"endpoint: \xff\xfe\n")
    result = load_config(path)
    assert not result.ok
    assert result.error.startswith("Cannot read config file")
