"""Audio constants for the tone synthesizer."""

SAMPLE_RATE: int = 22050
DEFAULT_MASTER_VOLUME: float = 0.3
SEGMENT_PEAK_GAIN: float = 0.3
ATTACK_SECONDS: float = 0.01
DECAY_FLOOR_GAIN: float = 0.01

AMBIENT_GAIN: float = 0.05
AMBIENT_HOLD_SECONDS: float = 8.0
AMBIENT_RELEASE_SECONDS: float = 2.0
AMBIENT_RELEASE_FLOOR: float = 0.001
