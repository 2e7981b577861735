from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pygame

from stair_blocks.events.bus import EVENT_COLUMN_COMPLETE, EVENT_SNAP, EVENT_VICTORY, EventBus

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

C5, E5, G5, C6 = 523.25, 659.25, 783.99, 1046.50

# (frequency Hz, start s, duration s)
Note = Tuple[float, float, float]

COLUMN_FANFARE: Tuple[Note, ...] = (
    (C5, 0.0, 0.4),
    (E5, 0.1, 0.4),
    (G5, 0.2, 0.6),
)

VICTORY_FANFARE: Tuple[Note, ...] = (
    (C5, 0.0, 0.5),
    (E5, 0.15, 0.5),
    (G5, 0.3, 0.5),
    (C6, 0.45, 0.5),
    (G5, 0.6, 0.5),
    # final chord
    (C5, 0.8, 1.5),
    (E5, 0.8, 1.5),
    (G5, 0.8, 1.5),
    (C6, 0.8, 1.5),
)


def _times(duration: float) -> np.ndarray:
    return np.arange(int(round(duration * SAMPLE_RATE)), dtype=np.float64) / SAMPLE_RATE


def exp_envelope(duration: float, start: float, end: float) -> np.ndarray:
    t = _times(duration)
    return start * (end / start) ** (t / duration)


def triangle(freq: float, duration: float) -> np.ndarray:
    phase = _times(duration) * freq
    return 2.0 * np.abs(2.0 * (phase - np.floor(phase + 0.5))) - 1.0


def snap_wave(duration: float = 0.2, sweep: float = 0.1,
              f_start: float = 400.0, f_end: float = 600.0) -> np.ndarray:
    """Short sine chirp that rises exponentially, then holds."""
    t = _times(duration)
    freq = np.where(t < sweep, f_start * (f_end / f_start) ** (t / sweep), f_end)
    phase = 2.0 * np.pi * np.cumsum(freq) / SAMPLE_RATE
    return np.sin(phase) * exp_envelope(duration, 0.3, 0.01)


def mix_notes(notes: Iterable[Note], gain: float = 0.2) -> np.ndarray:
    notes = list(notes)
    if not notes:
        return np.zeros(0)
    total = max(start + duration for _, start, duration in notes)
    out = np.zeros(int(round(total * SAMPLE_RATE)) + 1)
    for freq, start, duration in notes:
        wave = triangle(freq, duration) * exp_envelope(duration, gain, 0.01)
        offset = int(round(start * SAMPLE_RATE))
        out[offset:offset + wave.size] += wave
    return out


def to_pcm16(wave: np.ndarray) -> np.ndarray:
    return (np.clip(wave, -1.0, 1.0) * 32767).astype(np.int16)


class AudioCues:
    """Plays the snap and fanfare cues when the session announces them."""

    def __init__(self, event_bus: EventBus, enabled: bool = True):
        self.enabled = enabled
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        if enabled:
            self._load()
        event_bus.subscribe(EVENT_SNAP, self.on_snap)
        event_bus.subscribe(EVENT_COLUMN_COMPLETE, self.on_column_complete)
        event_bus.subscribe(EVENT_VICTORY, self.on_victory)

    def _load(self) -> None:
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            _, _, channels = pygame.mixer.get_init()
        except pygame.error as exc:
            logger.warning("audio disabled: %s", exc)
            self.enabled = False
            return
        waves = {
            "snap": snap_wave(),
            "column": mix_notes(COLUMN_FANFARE),
            "victory": mix_notes(VICTORY_FANFARE),
        }
        for name, wave in waves.items():
            pcm = to_pcm16(wave)
            if channels > 1:
                pcm = np.ascontiguousarray(np.repeat(pcm[:, None], channels, axis=1))
            self._sounds[name] = pygame.sndarray.make_sound(pcm)

    def play(self, name: str) -> Optional[pygame.mixer.Channel]:
        sound = self._sounds.get(name)
        if not self.enabled or sound is None:
            return None
        return sound.play()

    def on_snap(self, sender, **kwargs):
        self.play("snap")

    def on_column_complete(self, sender, **kwargs):
        self.play("column")

    def on_victory(self, sender, **kwargs):
        self.play("victory")
