"""Alert sound synthesis and playback using numpy + QSoundEffect.

The four alert sounds are generated programmatically as WAV files and
cached to disk, so later launches only load them.

Sound names
-----------
- ``hockey whistle`` — referee's pea whistle, fast warble
- ``whistle``        — plain steady whistle blast
- ``bell``           — struck bell with a long ring-out
- ``horn``           — low goal horn
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR, SOUND_NAMES

log = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    # Attack
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    # Decay
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    # Sustain
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    # Release
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _timeline(duration_s: float) -> np.ndarray:
    return np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    return np.sin(2 * np.pi * freq * _timeline(duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_pea_whistle() -> bytes:
    """Hockey whistle — 2.9 kHz carrier warbled at 28 Hz by the pea."""
    duration = 0.7
    t = _timeline(duration)
    warble = 180.0 * np.sin(2 * np.pi * 28.0 * t)
    phase = 2 * np.pi * 2900.0 * t + (warble / 28.0)
    tone = np.sin(phase) * 0.5 + np.sin(2 * phase) * 0.08
    # Breath noise gives it the "chiff"
    rng = np.random.default_rng(7)
    tone += rng.normal(0.0, 0.03, len(t))
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.02),
        decay=int(SAMPLE_RATE * 0.05),
        sustain_level=0.85,
        release=int(SAMPLE_RATE * 0.08),
    )
    return _to_wav_bytes(tone * env)


def _generate_whistle() -> bytes:
    """Whistle — steady 2.5 kHz blast, no warble."""
    duration = 0.6
    tone = _sine(2500.0, duration) * 0.5 + _sine(5000.0, duration) * 0.05
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.015),
        decay=int(SAMPLE_RATE * 0.04),
        sustain_level=0.9,
        release=int(SAMPLE_RATE * 0.06),
    )
    return _to_wav_bytes(tone * env)


def _generate_bell() -> bytes:
    """Bell — A5 with inharmonic partials, sharp strike, long decay."""
    duration = 1.4
    t = _timeline(duration)
    partials = ((880.0, 0.35, 2.5), (2376.0, 0.12, 4.0), (4136.0, 0.06, 6.0))
    combined = np.zeros(len(t))
    for freq, amp, damping in partials:
        combined += np.sin(2 * np.pi * freq * t) * amp * np.exp(-damping * t)
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.004),
        decay=0,
        sustain_level=1.0,
        release=int(SAMPLE_RATE * 0.2),
    )
    return _to_wav_bytes(combined * env)


def _generate_horn() -> bytes:
    """Horn — low goal horn: band-limited sawtooth at 220 Hz plus a fifth."""
    duration = 1.2
    t = _timeline(duration)
    combined = np.zeros(len(t))
    for base, amp in ((220.0, 0.3), (330.0, 0.15)):
        for k in range(1, 12):
            combined += np.sin(2 * np.pi * base * k * t) * amp / k
    combined /= max(1e-9, float(np.max(np.abs(combined))))
    combined *= 0.6
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.05),
        decay=int(SAMPLE_RATE * 0.1),
        sustain_level=0.8,
        release=int(SAMPLE_RATE * 0.25),
    )
    return _to_wav_bytes(combined * env)


# Map sound names to generator functions
_GENERATORS: dict[str, callable] = {
    "hockey whistle": _generate_pea_whistle,
    "whistle": _generate_whistle,
    "bell": _generate_bell,
    "horn": _generate_horn,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages alert sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(0.8)
        mgr.set_selected("bell")
        mgr.play()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: float = 1.0,
        selected: str = SOUND_NAMES[0],
    ) -> None:
        super().__init__(parent)
        self._volume = max(0.0, min(volume, 1.0))
        self._selected = selected
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: float) -> None:
        """Set volume (0.0-1.0).  Updates all loaded effects."""
        self._volume = max(0.0, min(float(level), 1.0))
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_selected(self, name: str) -> None:
        if name not in SOUND_NAMES:
            log.warning("Unknown alert sound %r, keeping %r", name, self._selected)
            return
        self._selected = name

    def play(self, name: str | None = None) -> bool:
        """Play *name* (default: the selected sound).

        Returns False and logs when the sound is not available.
        """
        name = name or self._selected
        effect = self._effects.get(name)
        if effect is None:
            log.warning("Alert sound %r is not available", name)
            return False
        effect.setVolume(self._volume)
        effect.play()
        return True

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def selected(self) -> str:
        return self._selected

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, gen_fn in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(gen_fn())
        except OSError:
            log.exception("Could not write alert sounds to %s", self._sounds_dir)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                log.warning("Missing alert sound file %s", path)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
