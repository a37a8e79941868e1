"""Happy path scenario: no clock drift, exact trigger latencies.

Configuration:
- EEG 500 Hz, ET 1000 Hz, ET starts 0.5 s before the EEG
- Anchors 103 (first) and 203 (last)
- No jitter, so the two-point and regression mappings coincide
"""

from synthetic.models import SyntheticRecordingPair
from synthetic.recording_synth import SyntheticPair, build_recording_pair


def make_pair(*, n_events: int = 10, n_eye_events: int = 0, seed: int = 42) -> SyntheticPair:
    """Generate a perfectly aligned EEG/ET pair.

    Example:
        >>> from synthetic.scenarios import happy_path
        >>> pair = happy_path.make_pair()
        >>> pair.true_slope
        0.5
    """
    return build_recording_pair(
        SyntheticRecordingPair(
            eeg_srate=500.0,
            et_srate=1000.0,
            duration_s=n_events + 2.0,
            et_lead_s=0.5,
            clock_drift_ppm=0.0,
            n_events=n_events,
            jitter_samples=0,
            n_eye_events=n_eye_events,
            seed=seed,
        )
    )
