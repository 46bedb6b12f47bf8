"""Assetless sound effects for game events.

The synthesizer renders cues from oscillator primitives (see ``cues``) and
pushes them to an ``AudioOutput``. It owns no game state. Audio is cosmetic:
a disabled synthesizer, a suspended output or a failing host device all turn
cue calls into silent no-ops instead of errors.
"""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

from chem_quest.audio.cues import CUES, CueName, render_cue
from chem_quest.constants.audio_constants import DEFAULT_MASTER_VOLUME, SAMPLE_RATE

logger = logging.getLogger(__name__)


class AudioOutput(Protocol):
    """Host audio device that accepts rendered mono float samples."""

    @property
    def suspended(self) -> bool: ...

    def resume(self) -> None: ...

    def play(self, samples: np.ndarray, sample_rate: int) -> None: ...

    def close(self) -> None: ...


class NullAudioOutput:
    """Output used when no audio device is available."""

    suspended = False

    def resume(self) -> None:
        pass

    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        pass

    def close(self) -> None:
        pass


class ToneSynthesizer:
    """Renders named cues and plays them through an injected output."""

    def __init__(
        self,
        output: AudioOutput,
        *,
        master_volume: float = DEFAULT_MASTER_VOLUME,
        enabled: bool = True,
        sample_rate: int = SAMPLE_RATE,
    ) -> None:
        self._output: AudioOutput | None = output
        self._sample_rate = sample_rate
        self._master_volume = _clamp_volume(master_volume)
        self._enabled = enabled
        self._rendered: dict[CueName, np.ndarray] = {}

    @classmethod
    def create(
        cls,
        output: AudioOutput | None = None,
        *,
        master_volume: float = DEFAULT_MASTER_VOLUME,
        enabled: bool = True,
    ) -> ToneSynthesizer:
        """Build a synthesizer; without an output every cue is silent."""
        return cls(output or NullAudioOutput(), master_volume=master_volume, enabled=enabled)

    def dispose(self) -> None:
        if self._output is None:
            return
        try:
            self._output.close()
        except Exception:
            logger.warning("Failed to close audio output", exc_info=True)
        self._output = None
        self._rendered.clear()

    @property
    def is_disposed(self) -> bool:
        return self._output is None

    @property
    def master_volume(self) -> float:
        return self._master_volume

    def set_volume(self, volume: float) -> None:
        self._master_volume = _clamp_volume(volume)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def resume(self) -> None:
        """Wake a suspended output; call on the first user interaction."""
        if self._output is None or not self._output.suspended:
            return
        try:
            self._output.resume()
        except Exception:
            logger.warning("Audio output could not be resumed", exc_info=True)

    def play(self, cue: CueName) -> None:
        if not self._enabled or self._output is None or self._output.suspended:
            return
        try:
            samples = self._render(cue) * self._master_volume
            self._output.play(samples, self._sample_rate)
        except Exception:
            logger.warning("Could not play cue %s", cue.value, exc_info=True)

    def _render(self, cue: CueName) -> np.ndarray:
        rendered = self._rendered.get(cue)
        if rendered is None:
            rendered = render_cue(CUES[cue], self._sample_rate)
            self._rendered[cue] = rendered
        return rendered


def _clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, float(volume)))
