"""Drifting ET clock with jittered trigger latencies.

Configuration:
- ET clock 200 ppm fast relative to the EEG
- ±2 ET samples of jitter on every ET trigger
- Regression over all shared events should beat the two-point mapping
"""

from synthetic.models import SyntheticRecordingPair
from synthetic.recording_synth import SyntheticPair, build_recording_pair


def make_pair(
    *,
    n_events: int = 40,
    clock_drift_ppm: float = 200.0,
    jitter_samples: int = 2,
    seed: int = 7,
) -> SyntheticPair:
    """Generate an EEG/ET pair whose clocks disagree.

    Example:
        >>> from synthetic.scenarios import drift_jitter
        >>> pair = drift_jitter.make_pair()
        >>> round(pair.true_slope, 6)
        0.4999
    """
    return build_recording_pair(
        SyntheticRecordingPair(
            eeg_srate=500.0,
            et_srate=1000.0,
            duration_s=n_events * 0.5 + 2.0,
            event_interval_s=0.5,
            et_lead_s=1.25,
            clock_drift_ppm=clock_drift_ppm,
            n_events=n_events,
            jitter_samples=jitter_samples,
            seed=seed,
        )
    )
