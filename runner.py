"""
Runner — simulated batch upload.

Walks the fixed upload phases in order, publishing each one to the shared
ProgressState and pausing between phases to stand in for real work.
"""

import asyncio
import time

from models import TERMINAL_PHASE, UPLOAD_SEQUENCE
from progress import ProgressState


class UploadInProgressError(RuntimeError):
    """Raised when a batch upload is triggered while another is still running."""


async def run_batch_upload(state: ProgressState, phase_delay: float = 0.5) -> None:
    """Publish every upload phase in order, sleeping phase_delay between them.

    Returns once COMPLETED has been published. Only one run may write to the
    slot at a time; a second caller gets UploadInProgressError and the slot
    is left untouched.
    """
    if state.running:
        print(f"[Upload] Rejected: upload already at {state.observe()}")
        raise UploadInProgressError(f"Batch upload already running ({state.observe()})")

    state.running = True
    started = time.monotonic()
    print("[Upload] Batch upload started")
    try:
        for phase in UPLOAD_SEQUENCE:
            state.publish(phase)
            print(f"[Upload] {phase.value}")
            if phase is not TERMINAL_PHASE:
                await asyncio.sleep(phase_delay)
    finally:
        state.running = False

    print(f"[Upload] Batch upload finished in {time.monotonic() - started:.2f}s")
