"""High-level async client that polls the train feed and keeps it reconciled."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pytrains._transport import HttpTransport, Transport
from pytrains.config import TrainsConfig
from pytrains.exceptions import TrainsError, TrainsTransportError
from pytrains.ingestion.payload import parse_payload
from pytrains.models.train import TrainState
from pytrains.state.events import CycleResult
from pytrains.state.store import TrainStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TrainsClient:
    """Async poller for the live train feed.

    Usage::

        async with TrainsClient(config, on_update=render) as client:
            await client.run()

    Cycles never overlap: each one awaits the transport, reconciles
    synchronously and only then waits ``refresh_interval`` before the next.
    """

    def __init__(
        self,
        config: TrainsConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_update: Callable[[CycleResult], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config or TrainsConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._clock = clock
        self._store = TrainStore(self._config, clock=clock)
        self._on_update = on_update
        self._cycle_lock = asyncio.Lock()
        self._active = asyncio.Event()
        self._active.set()
        self._wake = asyncio.Event()
        self._stopped = False
        self._last_result: CycleResult | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TrainsClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def store(self) -> TrainStore:
        return self._store

    @property
    def trains(self) -> dict[str, TrainState]:
        return self._store.snapshot()

    @property
    def last_result(self) -> CycleResult | None:
        return self._last_result

    @property
    def is_active(self) -> bool:
        return self._active.is_set()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TrainsError("Client not initialized. Use 'async with TrainsClient(...) as client:'")
        return self._transport

    def _notify(self, result: CycleResult) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update(result)
        except Exception:
            _logger.debug("on_update callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Poll cycle
    # ------------------------------------------------------------------

    async def refresh(self) -> CycleResult:
        """Run one fetch-reconcile-evict cycle.

        A failed fetch leaves every store untouched and is reported as
        ``CycleResult(ok=False)`` rather than raised.
        """
        async with self._cycle_lock:
            transport = self._require_transport()
            try:
                payload = await transport.fetch_json()
            except TrainsTransportError as exc:
                _logger.warning("Could not update trains: %s", exc)
                result = CycleResult(
                    ok=False,
                    trains=self._store.snapshot(),
                    error=str(exc),
                    completed_at=self._clock(),
                )
            else:
                records, meta = parse_payload(payload)
                result = self._store.reconcile(records, meta=meta)
                _logger.debug(
                    "Reconciled %d trains (%d evicted, %d dropped)",
                    len(result.trains),
                    len(result.evicted),
                    result.dropped,
                )
            self._last_result = result

        self._notify(result)
        return result

    async def run(self) -> None:
        """Poll until :meth:`stop` is called.

        Paused clients schedule nothing; :meth:`resume` triggers an
        immediate cycle.
        """
        self._stopped = False
        while not self._stopped:
            await self._active.wait()
            if self._stopped:
                break

            self._wake.clear()
            try:
                await self.refresh()
            except Exception:
                _logger.exception("Train update cycle failed")

            if self._stopped:
                break
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._wake.wait(), self._config.refresh_interval)

    def pause(self) -> None:
        """Stop scheduling cycles; reconciled state is kept as-is."""
        self._active.clear()

    def resume(self) -> None:
        """Resume polling and run a cycle right away."""
        self._active.set()
        self._wake.set()

    def stop(self) -> None:
        self._stopped = True
        self._active.set()
        self._wake.set()
