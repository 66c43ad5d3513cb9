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

"""Single-shot cancellation token shared by a call's timer and its caller."""

from __future__ import annotations

import asyncio
from enum import Enum


class CancelReason(str, Enum):
    TIMEOUT = "timeout"
    CALLER = "caller"


class CancellationToken:
    """Either active, or cancelled with a reason. Never goes back to active.

    The first cancel() wins; later calls keep the original reason. The
    token is awaitable through wait(), which the client races against
    the in-flight request.
    """

    def __init__(self) -> None:
        self._reason: CancelReason | None = None
        self._event: asyncio.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> CancelReason | None:
        return self._reason

    def cancel(self, reason: CancelReason = CancelReason.CALLER) -> bool:
        """Cancel the token. Returns False if it was already cancelled."""
        if self._reason is not None:
            return False
        self._reason = reason
        if self._event is not None:
            self._event.set()
        return True

    async def wait(self) -> CancelReason:
        """Suspend until the token is cancelled."""
        if self._event is None:
            # Bound to whichever loop first awaits the token.
            self._event = asyncio.Event()
            if self._reason is not None:
                self._event.set()
        await self._event.wait()
        assert self._reason is not None
        return self._reason

    def __repr__(self) -> str:
        state = f"cancelled({self._reason.value})" if self._reason else "active"
        return f"CancellationToken({state})"


class OperationCancelled(Exception):
    """Raised by the client when a token fires before the response is complete."""

    def __init__(self, reason: CancelReason) -> None:
        super().__init__(f"operation cancelled ({reason.value})")
        self.reason = reason
