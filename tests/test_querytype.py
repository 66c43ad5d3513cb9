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

"""Query form detection."""

import pytest

from sparqlwire.sparql.querytype import QueryType, classify, produces_bindings, produces_graph, strip_prologue


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("SELECT * WHERE { ?s ?p ?o }", QueryType.SELECT),
        ("ask { ?s ?p ?o }", QueryType.ASK),
        ("ASK{?s ?p ?o}", QueryType.ASK),
        ("CONSTRUCT { ?s ?p ?o } WHERE { ?s ?p ?o }", QueryType.CONSTRUCT),
        ("describe <http://ex.org/a>", QueryType.DESCRIBE),
        ("INSERT DATA { <a> <b> <c> }", QueryType.UPDATE),
        ("DELETE WHERE { ?s ?p ?o }", QueryType.UPDATE),
        ("LOAD <http://ex.org/data.ttl>", QueryType.UPDATE),
        ("CLEAR ALL", QueryType.UPDATE),
        ("CREATE GRAPH <g>", QueryType.UPDATE),
        ("DROP SILENT GRAPH <g>", QueryType.UPDATE),
        ("COPY <a> TO <b>", QueryType.UPDATE),
        ("MOVE <a> TO <b>", QueryType.UPDATE),
        ("ADD <a> TO <b>", QueryType.UPDATE),
        ("WITH <g> DELETE { ?s ?p ?o } WHERE { ?s ?p ?o }", QueryType.UPDATE),
    ],
)
def test_first_keyword_decides(query, expected):
    assert classify(query) is expected


def test_prologue_is_skipped():
    query = """
        BASE <http://ex.org/>
        PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
        prefix : <http://ex.org/ns#>
        ASK { ?s rdfs:label ?l }
    """
    assert classify(query) is QueryType.ASK


def test_prefix_declarations_on_one_line():
    query = "PREFIX a: <http://a/> PREFIX b: <http://b/> INSERT DATA { a:x b:y a:z }"
    assert classify(query) is QueryType.UPDATE


def test_comments_are_skipped():
    query = "# find everything\nPREFIX ex: <http://ex.org/> # inline\n# another\nDESCRIBE ex:a"
    assert classify(query) is QueryType.DESCRIBE


def test_keywords_inside_prefix_iris_do_not_count():
    query = "PREFIX insert: <http://ex.org/delete#> SELECT ?x WHERE { ?x a insert:Thing }"
    assert classify(query) is QueryType.SELECT


@pytest.mark.parametrize("query", ["", "   ", "# only a comment", "FOO BAR", "SELECTION", "{ ?s ?p ?o }"])
def test_unrecognized_defaults_to_select(query):
    assert classify(query) is QueryType.SELECT


def test_strip_prologue_keeps_body():
    assert strip_prologue("PREFIX ex: <http://ex.org/>\n  SELECT ?x {}") == "SELECT ?x {}"


def test_form_helpers():
    assert produces_bindings(QueryType.SELECT) and produces_bindings(QueryType.ASK)
    assert produces_graph(QueryType.CONSTRUCT) and produces_graph(QueryType.DESCRIBE)
    assert not produces_bindings(QueryType.UPDATE)
    assert not produces_graph(QueryType.UPDATE)


def test_byte_order_mark_is_skipped():
    assert classify("\ufeffINSERT DATA { <a> <b> <c> }") is QueryType.UPDATE
    assert classify("\ufeffPREFIX ex: <http://ex.org/>\nASK { ex:a ?p ?o }") is QueryType.ASK
