"""
Progress — single-slot phase state and its SSE relay.

ProgressState holds the most recently published phase. publish() overwrites
the slot and wakes waiting streams; stream_phases() yields SSE-formatted
frames for StreamingResponse until the terminal phase is seen.
"""

import asyncio
from datetime import datetime, timezone
from typing import AsyncGenerator, Awaitable, Callable, Optional

from models import TERMINAL_PHASE, ProgressSnapshot, UploadPhase


class ProgressState:
    """Process-wide slot for the current upload phase.

    One writer (the active batch upload) and any number of readers. Only the
    latest value is kept; readers that need to notice transitions compare
    the version counter.
    """

    def __init__(self):
        self._phase = ""
        self._version = 0
        self._updated_at: Optional[str] = None
        self._changed = asyncio.Event()
        self.running = False

    @property
    def version(self) -> int:
        return self._version

    def publish(self, phase: UploadPhase | str) -> None:
        """Overwrite the slot and wake every task waiting for a change."""
        self._phase = str(getattr(phase, "value", phase))
        self._version += 1
        self._updated_at = datetime.now(timezone.utc).isoformat()
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    def observe(self) -> str:
        return self._phase

    async def wait_for_change(self, since_version: int, timeout: Optional[float] = None) -> int:
        """Suspend until the version moves past since_version or timeout elapses."""
        if self._version != since_version:
            return self._version
        try:
            await asyncio.wait_for(self._changed.wait(), timeout)
        except asyncio.TimeoutError:
            pass
        return self._version

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            phase=self._phase,
            version=self._version,
            updated_at=self._updated_at,
            running=self.running,
        )


def format_event(phase: str) -> str:
    return f"data: {phase}\n\n"


async def stream_phases(
    state: ProgressState,
    poll_interval: float,
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    max_duration: Optional[float] = None,
) -> AsyncGenerator[str, None]:
    """Async generator yielding one SSE frame per observation of the slot.

    Emits the current phase right away, then again whenever the phase is
    republished or poll_interval passes, whichever is first. Stops after
    emitting the terminal phase, when the client goes away, or once
    max_duration seconds have passed (no limit when None).
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max_duration if max_duration is not None else None

    while True:
        version = state.version
        phase = state.observe()
        yield format_event(phase)

        if phase == TERMINAL_PHASE.value:
            print("[Events] Stream closed: upload completed")
            return

        timeout = poll_interval
        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                print(f"[Events] Stream closed: no {TERMINAL_PHASE.value} after {max_duration}s")
                return
            timeout = min(timeout, remaining)

        await state.wait_for_change(version, timeout)

        if is_disconnected is not None and await is_disconnected():
            print("[Events] Stream closed: client disconnected")
            return
