"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES
from .alerts import SoundAlertDispatcher

__all__ = ["SoundManager", "SOUND_NAMES", "SoundAlertDispatcher"]
