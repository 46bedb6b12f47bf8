from __future__ import annotations

import numpy as np
import pytest

from chem_quest.audio.cues import (
    CUES,
    CueName,
    Envelope,
    Voice,
    Waveform,
    envelope_curve,
    oscillator,
    render_cue,
    to_pcm16,
)
from chem_quest.audio.tone_synthesizer import NullAudioOutput, ToneSynthesizer

from conftest import RecordingOutput

SAMPLE_RATE = 8000


def test_every_cue_is_defined() -> None:
    assert set(CUES) == set(CueName)


@pytest.mark.parametrize(
    "cue, duration",
    [
        (CueName.CORRECT, 0.4),
        (CueName.BOND_FORMED, 0.25),
        (CueName.INCORRECT, 0.35),
        (CueName.CLICK, 0.05),
        (CueName.HOVER, 0.03),
        (CueName.TRANSITION, 0.8),
    ],
)
def test_cue_durations(cue: CueName, duration: float) -> None:
    assert CUES[cue].duration == pytest.approx(duration)


def test_rendered_cue_is_bounded_and_sized() -> None:
    samples = render_cue(CUES[CueName.CORRECT], SAMPLE_RATE)
    assert samples.dtype == np.float32
    assert len(samples) == int(round(0.4 * SAMPLE_RATE)) + 1
    assert np.max(np.abs(samples)) <= 1.0
    assert np.max(np.abs(samples)) > 0.05


def test_swept_low_passed_cue_renders_finite_samples() -> None:
    samples = render_cue(CUES[CueName.TRANSITION], SAMPLE_RATE)
    assert np.all(np.isfinite(samples))
    assert np.max(np.abs(samples)) > 0.0


def test_envelope_attacks_then_decays_to_floor() -> None:
    curve = envelope_curve(Envelope(peak=0.3, attack=0.01, floor=0.01), 0.2, SAMPLE_RATE)
    assert curve[0] == 0.0
    assert np.argmax(curve) == pytest.approx(0.01 * SAMPLE_RATE, abs=1)
    assert curve[-1] == pytest.approx(0.01, rel=0.05)


def test_envelope_hold_keeps_peak() -> None:
    curve = envelope_curve(Envelope(peak=0.05, attack=0.0, hold=1.0, floor=0.001), 2.0, SAMPLE_RATE)
    assert np.allclose(curve[: SAMPLE_RATE - 1], 0.05)
    assert curve[-1] < 0.002


@pytest.mark.parametrize("waveform", list(Waveform))
def test_oscillator_waveforms_stay_in_range(waveform: Waveform) -> None:
    samples = oscillator(Voice(440, waveform), 0.1, SAMPLE_RATE)
    assert len(samples) == 800
    assert np.max(samples) <= 1.0
    assert np.min(samples) >= -1.0


def test_to_pcm16_clips_and_packs_little_endian() -> None:
    data = to_pcm16(np.array([0.0, 1.0, -1.0, 2.0], dtype=np.float32))
    values = np.frombuffer(data, dtype="<i2")
    assert values.tolist() == [0, 32767, -32767, 32767]


def test_play_scales_by_master_volume() -> None:
    output = RecordingOutput()
    synthesizer = ToneSynthesizer(output, master_volume=0.5, sample_rate=SAMPLE_RATE)

    synthesizer.play(CueName.CLICK)

    (samples, rate), = output.played
    reference = render_cue(CUES[CueName.CLICK], SAMPLE_RATE)
    assert rate == SAMPLE_RATE
    assert np.allclose(samples, reference * 0.5)


def test_disabled_synthesizer_is_silent() -> None:
    output = RecordingOutput()
    synthesizer = ToneSynthesizer(output, enabled=False, sample_rate=SAMPLE_RATE)
    synthesizer.play(CueName.CORRECT)
    assert output.played == []

    synthesizer.set_enabled(True)
    synthesizer.play(CueName.CORRECT)
    assert len(output.played) == 1


def test_suspended_output_is_silent_until_resumed() -> None:
    output = RecordingOutput(suspended=True)
    synthesizer = ToneSynthesizer(output, sample_rate=SAMPLE_RATE)

    synthesizer.play(CueName.HOVER)
    assert output.played == []

    synthesizer.resume()
    synthesizer.play(CueName.HOVER)
    assert len(output.played) == 1


def test_failing_output_does_not_raise() -> None:
    class BrokenOutput(RecordingOutput):
        def play(self, samples: np.ndarray, sample_rate: int) -> None:
            raise OSError("device unplugged")

    synthesizer = ToneSynthesizer(BrokenOutput(), sample_rate=SAMPLE_RATE)
    synthesizer.play(CueName.CLICK)


def test_volume_is_clamped() -> None:
    synthesizer = ToneSynthesizer.create(master_volume=3.0)
    assert synthesizer.master_volume == 1.0
    synthesizer.set_volume(-1)
    assert synthesizer.master_volume == 0.0


def test_dispose_closes_output_and_silences() -> None:
    output = RecordingOutput()
    synthesizer = ToneSynthesizer(output, sample_rate=SAMPLE_RATE)
    synthesizer.dispose()
    synthesizer.dispose()

    assert output.closed
    assert synthesizer.is_disposed
    synthesizer.play(CueName.CLICK)
    assert output.played == []


def test_create_without_output_uses_null_output() -> None:
    synthesizer = ToneSynthesizer.create()
    synthesizer.play(CueName.CLICK)
    assert not synthesizer.is_disposed
    NullAudioOutput().play(np.zeros(1), SAMPLE_RATE)
