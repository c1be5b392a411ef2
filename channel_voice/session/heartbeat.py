"""Connection health monitoring and bounded reconnection."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable, Awaitable

from channel_voice.errors import TransportDisconnect
from channel_voice.state.heartbeat import HeartbeatState
from channel_voice.state.settings import HeartbeatSettings
from channel_voice.transport.connection import VoiceConnection

logger = logging.getLogger(__name__)

_RECOVERY_SIGNALS = ("signalling", "connecting")
_LOST_STATUSES = ("disconnected", "destroyed")

FailureCallback = Callable[[TransportDisconnect], Awaitable[None]]


class HeartbeatMonitor:
    """healthy -> recovering -> healthy, or recovering -> failed.

    A periodic task polls the transport status; status callbacks trigger
    recovery immediately. Exhaustion hands a ``TransportDisconnect`` to
    ``on_failed``, which is expected to release the session.
    """

    def __init__(
        self,
        connection: VoiceConnection,
        settings: HeartbeatSettings,
        *,
        group_id: str,
        on_failed: FailureCallback,
    ) -> None:
        self._connection = connection
        self._settings = settings
        self._group_id = group_id
        self._on_failed = on_failed
        self._interval_s = max(0.001, settings.interval_ms / 1000.0)
        self._backoff_base_s = max(0.0, settings.backoff_base_ms / 1000.0)
        self._backoff_max_s = max(self._backoff_base_s, settings.backoff_max_ms / 1000.0)
        self._signal_timeout_s = max(0.0, settings.recovery_signal_timeout_ms / 1000.0)
        self._ready_timeout_s = max(0.0, settings.join_timeout_ms / 1000.0)
        self.state = HeartbeatState(status=str(connection.status), next_backoff_s=self._backoff_base_s)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._recovery: asyncio.Task | None = None

    @property
    def recovering(self) -> bool:
        return self._recovery is not None and not self._recovery.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._connection.on_status(self._on_status)
            self._task = asyncio.create_task(self._loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        current = asyncio.current_task()
        tasks = [t for t in (self._task, self._recovery) if t is not None and t is not current]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)
        self._task = None

    def check(self) -> None:
        """Compare the observed transport status against the health phase."""
        if self._stop_event.is_set():
            return
        status = str(self._connection.status)
        self.state.status = status
        self.state.last_check_at = time.monotonic()
        if status == "ready":
            if not self.recovering:
                self._mark_healthy()
            return
        self._ensure_recovery()

    def _on_status(self, status: str) -> None:
        if self._stop_event.is_set() or self.state.phase == "failed":
            return
        self.state.status = str(status)
        if status == "ready":
            if self.recovering and self.state.phase == "recovering" and self._recovery is not asyncio.current_task():
                self._recovery.cancel()
            self._mark_healthy()
        elif status in _LOST_STATUSES:
            self._ensure_recovery()

    async def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._interval_s)
                if self._stop_event.is_set():
                    break
                self.check()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("heartbeat loop failed (group=%s)", self._group_id)

    def _ensure_recovery(self) -> None:
        if self._stop_event.is_set() or self.state.phase == "failed" or self.recovering:
            return
        self._recovery = asyncio.create_task(self._recover())

    def _mark_healthy(self) -> None:
        # Failed is terminal; the session is already being released.
        if self.state.phase == "failed":
            return
        if self.state.phase != "healthy":
            logger.info("voice connection healthy again (group=%s)", self._group_id)
        self.state.phase = "healthy"
        self.state.consecutive_failures = 0
        self.state.next_backoff_s = self._backoff_base_s

    async def _recover(self) -> None:
        self.state.phase = "recovering"
        logger.warning("voice connection lost (group=%s status=%s); recovering", self._group_id, self.state.status)
        try:
            if await self._await_transport_recovery():
                self._mark_healthy()
                return
            if await self._reconnect():
                self._mark_healthy()
                return
        except asyncio.CancelledError:
            return

        self.state.phase = "failed"
        error = TransportDisconnect(
            f"reconnection attempts exhausted for group {self._group_id}",
            group_id=self._group_id,
            attempts=self.state.consecutive_failures,
        )
        logger.error("%s", error.message)
        try:
            await self._on_failed(error)
        except Exception:
            logger.exception("session teardown after transport failure failed (group=%s)", self._group_id)

    async def _await_transport_recovery(self) -> bool:
        """Wait for the transport's own recovery signal, then for ``ready``."""
        status = str(self._connection.status)
        if status == "ready":
            return True
        if status not in _RECOVERY_SIGNALS and not await self._first_signal():
            return False
        try:
            await self._connection.wait_for_status("ready", self._ready_timeout_s)
        except Exception:
            return False
        return True

    async def _first_signal(self) -> bool:
        pending = {
            asyncio.create_task(self._connection.wait_for_status(status, self._signal_timeout_s))
            for status in _RECOVERY_SIGNALS
        }
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                if any(not t.cancelled() and t.exception() is None for t in done):
                    return True
            return False
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

    async def _reconnect(self) -> bool:
        while self.state.consecutive_failures < self._settings.max_reconnect_attempts:
            delay = self.state.next_backoff_s
            await asyncio.sleep(delay)
            if str(self._connection.status) == "ready":
                return True
            try:
                await self._connection.rejoin()
                await self._connection.wait_for_status("ready", self._ready_timeout_s)
            except Exception as exc:
                self.state.consecutive_failures += 1
                self.state.next_backoff_s = min(self._backoff_max_s, max(delay * 2, self._backoff_base_s))
                logger.warning(
                    "reconnect attempt %d/%d failed (group=%s): %s",
                    self.state.consecutive_failures,
                    self._settings.max_reconnect_attempts,
                    self._group_id,
                    exc,
                )
                continue
            logger.info("reconnected (group=%s)", self._group_id)
            return True
        return False


__all__ = ["FailureCallback", "HeartbeatMonitor"]
