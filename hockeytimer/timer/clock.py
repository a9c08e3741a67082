"""Wall-clock time source.

The engine measures everything against an absolute end timestamp, so the
clock must keep advancing while the process is suspended.  ``time.time``
does; ``time.monotonic`` does not on every platform (macOS stops it during
sleep), which is why it is not used here.
"""

from __future__ import annotations

import time


class SystemClock:
    """Returns the current wall-clock time in epoch seconds."""

    def now(self) -> float:
        return time.time()


SYSTEM_CLOCK = SystemClock()
