"""QtMultimedia playback for synthesized cues."""

from __future__ import annotations

import logging

import numpy as np
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QObject
from PySide6.QtMultimedia import QAudio, QAudioFormat, QAudioSink, QMediaDevices

from chem_quest.audio.cues import to_pcm16

logger = logging.getLogger(__name__)


class QtAudioOutput(QObject):
    """Plays each cue on its own ``QAudioSink`` so cues can overlap.

    The output starts suspended and stays silent until ``resume`` is called
    from the first user interaction.
    """

    def __init__(self, sample_rate: int, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._device = QMediaDevices.defaultAudioOutput()
        if self._device.isNull():
            raise RuntimeError("No audio output device available.")

        self._format = QAudioFormat()
        self._format.setSampleRate(sample_rate)
        self._format.setChannelCount(1)
        self._format.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        if not self._device.isFormatSupported(self._format):
            raise RuntimeError("Default audio device does not support 16-bit mono output.")

        self._sample_rate = sample_rate
        self._suspended = True
        self._active: list[tuple[QAudioSink, QBuffer]] = []

    @property
    def suspended(self) -> bool:
        return self._suspended

    def resume(self) -> None:
        self._suspended = False
        logger.debug("Audio output resumed")

    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        if sample_rate != self._sample_rate:
            raise ValueError(f"Output expects {self._sample_rate} Hz, got {sample_rate} Hz.")

        buffer = QBuffer(self)
        buffer.setData(QByteArray(to_pcm16(samples)))
        buffer.open(QIODevice.OpenModeFlag.ReadOnly)

        sink = QAudioSink(self._device, self._format, self)
        sink.stateChanged.connect(
            lambda state, s=sink, b=buffer: self._handle_state_changed(s, b, state)
        )
        self._active.append((sink, buffer))
        sink.start(buffer)

    def close(self) -> None:
        active, self._active = self._active, []
        for sink, buffer in active:
            sink.stop()
            buffer.close()

    def _handle_state_changed(self, sink: QAudioSink, buffer: QBuffer, state: QAudio.State) -> None:
        if state not in (QAudio.State.IdleState, QAudio.State.StoppedState):
            return
        if (sink, buffer) not in self._active:
            return
        self._active.remove((sink, buffer))
        sink.stop()
        buffer.close()
        sink.deleteLater()
        buffer.deleteLater()
