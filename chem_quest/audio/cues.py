"""Cue definitions and oscillator rendering.

Every cue is a fixed list of tone segments. A segment is one or more
oscillator voices, an optional low-pass filter and an amplitude envelope with
a fast linear attack and an exponential decay, so notes never start or stop
with an audible click. Rendering is pure: it returns float samples in
``[-1, 1]`` and leaves playback to an ``AudioOutput``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

import numpy as np

from chem_quest.constants.audio_constants import (
    AMBIENT_GAIN,
    AMBIENT_HOLD_SECONDS,
    AMBIENT_RELEASE_FLOOR,
    AMBIENT_RELEASE_SECONDS,
    ATTACK_SECONDS,
    DECAY_FLOOR_GAIN,
    SEGMENT_PEAK_GAIN,
)


class CueName(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CLICK = "click"
    HOVER = "hover"
    TRANSITION = "transition"
    AMBIENT = "ambient"
    BOND_FORMED = "bond_formed"


class Waveform(Enum):
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


@dataclass(frozen=True, slots=True)
class Voice:
    """A single oscillator; ``end_frequency`` sweeps exponentially over the segment."""

    frequency: float
    waveform: Waveform = Waveform.SINE
    end_frequency: float | None = None


@dataclass(frozen=True, slots=True)
class Envelope:
    peak: float = SEGMENT_PEAK_GAIN
    attack: float = ATTACK_SECONDS
    hold: float = 0.0
    floor: float = DECAY_FLOOR_GAIN


@dataclass(frozen=True, slots=True)
class LowPass:
    cutoff: float
    end_cutoff: float | None = None
    q: float = math.sqrt(0.5)


@dataclass(frozen=True, slots=True)
class ToneSegment:
    """One scheduled sound; ``offset`` is relative to the previous segment's start."""

    voices: tuple[Voice, ...]
    duration: float
    offset: float = 0.0
    envelope: Envelope = Envelope()
    low_pass: LowPass | None = None


@dataclass(frozen=True, slots=True)
class Cue:
    name: CueName
    segments: tuple[ToneSegment, ...]

    @property
    def duration(self) -> float:
        start = 0.0
        end = 0.0
        for segment in self.segments:
            start += segment.offset
            end = max(end, start + segment.duration)
        return end


def _note(frequency: float, duration: float, waveform: Waveform = Waveform.SINE, offset: float = 0.0) -> ToneSegment:
    return ToneSegment(voices=(Voice(frequency, waveform),), duration=duration, offset=offset)


CUES: dict[CueName, Cue] = {
    CueName.CORRECT: Cue(
        CueName.CORRECT,
        (
            _note(880, 0.1),
            _note(1100, 0.15, offset=0.1),
            _note(1320, 0.2, offset=0.1),
        ),
    ),
    CueName.BOND_FORMED: Cue(
        CueName.BOND_FORMED,
        (
            _note(440, 0.1),
            _note(554, 0.1, offset=0.05),
            _note(659, 0.15, offset=0.05),
        ),
    ),
    CueName.INCORRECT: Cue(
        CueName.INCORRECT,
        (
            _note(200, 0.3, Waveform.SAWTOOTH),
            _note(180, 0.2, Waveform.SAWTOOTH, offset=0.15),
        ),
    ),
    CueName.CLICK: Cue(CueName.CLICK, (_note(800, 0.05, Waveform.SQUARE),)),
    CueName.HOVER: Cue(CueName.HOVER, (_note(600, 0.03),)),
    CueName.TRANSITION: Cue(
        CueName.TRANSITION,
        (
            ToneSegment(
                voices=(Voice(400, Waveform.SAWTOOTH, end_frequency=100),),
                duration=0.8,
                envelope=Envelope(peak=0.2, attack=0.1),
                low_pass=LowPass(cutoff=2000, end_cutoff=200),
            ),
        ),
    ),
    CueName.AMBIENT: Cue(
        CueName.AMBIENT,
        (
            ToneSegment(
                voices=(Voice(60, Waveform.SAWTOOTH), Voice(90, Waveform.SINE)),
                duration=AMBIENT_HOLD_SECONDS + AMBIENT_RELEASE_SECONDS,
                envelope=Envelope(
                    peak=AMBIENT_GAIN,
                    attack=0.0,
                    hold=AMBIENT_HOLD_SECONDS,
                    floor=AMBIENT_RELEASE_FLOOR,
                ),
                low_pass=LowPass(cutoff=300, q=5.0),
            ),
        ),
    ),
}


def oscillator(voice: Voice, duration: float, sample_rate: int) -> np.ndarray:
    frames = max(1, int(round(duration * sample_rate)))
    t = np.arange(frames) / sample_rate
    if voice.end_frequency is None:
        phase = 2 * np.pi * voice.frequency * t
    else:
        # Exponential sweep, integrated sample by sample to keep the phase continuous.
        ratio = voice.end_frequency / voice.frequency
        freq = voice.frequency * np.power(ratio, t / duration)
        phase = 2 * np.pi * np.cumsum(freq) / sample_rate
    if voice.waveform is Waveform.SINE:
        return np.sin(phase)
    if voice.waveform is Waveform.SQUARE:
        return np.sign(np.sin(phase))
    saw = 2.0 * np.mod(phase / (2 * np.pi), 1.0) - 1.0
    if voice.waveform is Waveform.SAWTOOTH:
        return saw
    return 2.0 * np.abs(saw) - 1.0


def envelope_curve(envelope: Envelope, duration: float, sample_rate: int) -> np.ndarray:
    frames = max(1, int(round(duration * sample_rate)))
    t = np.arange(frames) / sample_rate
    curve = np.full(frames, envelope.peak, dtype=np.float64)

    if envelope.attack > 0:
        attack_mask = t < envelope.attack
        curve[attack_mask] = envelope.peak * t[attack_mask] / envelope.attack

    decay_start = envelope.attack + envelope.hold
    decay_length = duration - decay_start
    if decay_length > 0:
        decay_mask = t >= decay_start
        progress = (t[decay_mask] - decay_start) / decay_length
        curve[decay_mask] = envelope.peak * np.power(envelope.floor / envelope.peak, progress)
    return curve


def low_pass_filter(samples: np.ndarray, low_pass: LowPass, sample_rate: int) -> np.ndarray:
    """Resonant biquad low-pass (RBJ cookbook) with an optional exponential cutoff sweep."""
    frames = len(samples)
    nyquist = sample_rate / 2 * 0.95
    if low_pass.end_cutoff is None:
        cutoffs = np.full(frames, low_pass.cutoff, dtype=np.float64)
    else:
        ratio = low_pass.end_cutoff / low_pass.cutoff
        cutoffs = low_pass.cutoff * np.power(ratio, np.arange(frames) / max(1, frames - 1))
    cutoffs = np.clip(cutoffs, 10.0, nyquist)

    omega = 2 * np.pi * cutoffs / sample_rate
    alpha = np.sin(omega) / (2 * low_pass.q)
    cos_w = np.cos(omega)
    a0 = 1 + alpha
    b0 = (1 - cos_w) / 2 / a0
    b1 = (1 - cos_w) / a0
    a1 = -2 * cos_w / a0
    a2 = (1 - alpha) / a0

    # Plain floats: numpy scalar indexing is too slow inside a per-sample loop.
    xs = np.asarray(samples, dtype=np.float64).tolist()
    b0s, b1s, a1s, a2s = b0.tolist(), b1.tolist(), a1.tolist(), a2.tolist()
    out = [0.0] * frames
    x1 = x2 = y1 = y2 = 0.0
    for n in range(frames):
        x0 = xs[n]
        y0 = b0s[n] * x0 + b1s[n] * x1 + b0s[n] * x2 - a1s[n] * y1 - a2s[n] * y2
        out[n] = y0
        x2, x1 = x1, x0
        y2, y1 = y1, y0
    return np.asarray(out, dtype=np.float64)


def render_segment(segment: ToneSegment, sample_rate: int) -> np.ndarray:
    mixed = sum(oscillator(voice, segment.duration, sample_rate) for voice in segment.voices)
    if segment.low_pass is not None:
        mixed = low_pass_filter(mixed, segment.low_pass, sample_rate)
    return mixed * envelope_curve(segment.envelope, segment.duration, sample_rate)


def render_cue(cue: Cue, sample_rate: int) -> np.ndarray:
    """Mix every segment of ``cue`` at its scheduled start into one mono buffer."""
    total_frames = int(round(cue.duration * sample_rate)) + 1
    buffer = np.zeros(total_frames, dtype=np.float64)
    start = 0.0
    for segment in cue.segments:
        start += segment.offset
        rendered = render_segment(segment, sample_rate)
        first = int(round(start * sample_rate))
        last = min(total_frames, first + len(rendered))
        buffer[first:last] += rendered[: last - first]
    return np.clip(buffer, -1.0, 1.0).astype(np.float32)


def to_pcm16(samples: np.ndarray) -> bytes:
    """Convert float samples to little-endian signed 16-bit PCM."""
    clipped = np.clip(samples, -1.0, 1.0)
    return (clipped * 32767).astype("<i2").tobytes()
