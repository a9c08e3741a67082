"""Sound + haptic alert dispatcher."""

from __future__ import annotations

import logging
from typing import Callable

from ..timer.collaborators import AlertDispatcher, AlertEvent, LiveSnapshot
from .sounds import SoundManager

log = logging.getLogger(__name__)


class SoundAlertDispatcher(AlertDispatcher):
    """Plays the selected alert sound and fires the haptic hook.

    Both events get the same beep, as on the ice: one whistle per shift
    change and one at the final buzzer.  *haptic* is any zero-argument
    callable; on the desktop the app passes one that bounces the dock icon.
    """

    def __init__(
        self,
        sounds: SoundManager,
        *,
        haptic: Callable[[], None] | None = None,
    ) -> None:
        self._sounds = sounds
        self._haptic = haptic

    def _handle(self, event: AlertEvent, snapshot: LiveSnapshot) -> None:
        if event is AlertEvent.INTERVAL_ELAPSED:
            log.info(
                "Shift change: %d/%d done, %ds left",
                snapshot.shifts_completed, snapshot.total_shifts,
                snapshot.remaining_seconds,
            )
        else:
            log.info("Session over after %d shifts", snapshot.shifts_completed)

        self._sounds.play()
        if self._haptic is not None:
            try:
                self._haptic()
            except Exception:
                log.exception("Haptic feedback failed")
