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

"""Cancellation token, Result helpers, run summary."""

import asyncio

from sparqlwire.logger import RunSummary
from sparqlwire.result import Fail, Ok, collect
from sparqlwire.sparql.cancel import CancellationToken, CancelReason


def test_token_first_cancel_wins():
    token = CancellationToken()
    assert not token.cancelled
    assert token.cancel(CancelReason.TIMEOUT) is True
    assert token.cancel(CancelReason.CALLER) is False
    assert token.reason is CancelReason.TIMEOUT
    assert "cancelled(timeout)" in repr(token)


async def test_token_wait_wakes_on_cancel():
    token = CancellationToken()
    waiter = asyncio.create_task(token.wait())
    await asyncio.sleep(0)
    assert not waiter.done()
    token.cancel()
    assert await waiter is CancelReason.CALLER


async def test_token_wait_after_cancel_returns_immediately():
    token = CancellationToken()
    token.cancel(CancelReason.TIMEOUT)
    assert await asyncio.wait_for(token.wait(), timeout=1) is CancelReason.TIMEOUT


def test_collect_short_circuits():
    assert collect([Ok(data=1), Ok(data=2)]) == Ok(data=[1, 2])
    failure = Fail(error="second")
    assert collect([Ok(data=1), failure, Fail(error="third")]) is failure
    assert collect([]) == Ok(data=[])


def test_run_summary_report():
    summary = RunSummary()
    counter = summary.counter("https://ex.org/sparql")
    counter.ok += 2
    counter.fail("http")
    counter.fail("http")
    counter.fail("timeout")

    assert summary.counter("https://ex.org/sparql") is counter
    assert counter.failed_total == 3
    report = summary.report()
    assert "https://ex.org/sparql: 2 ok" in report
    assert "3 failed (http=2, timeout=1)" in report
