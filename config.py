"""
Config — process settings read from the environment.

Values can come from a .env file (loaded in main.py) or the real environment.
Millisecond settings are converted to seconds for asyncio.sleep.
"""

import os

PORT = int(os.getenv("PORT", "3000"))
HOST = os.getenv("HOST", "0.0.0.0")

PHASE_DELAY = int(os.getenv("PHASE_DELAY_MS", "500")) / 1000
POLL_INTERVAL = int(os.getenv("POLL_INTERVAL_MS", "200")) / 1000

# Unset means event streams never time out on their own
_max_seconds = os.getenv("EVENT_STREAM_MAX_SECONDS", "")
EVENT_STREAM_MAX_SECONDS: float | None = float(_max_seconds) if _max_seconds else None
