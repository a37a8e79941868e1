"""EEG triggers as BrainVision-style strings ("S 103"), ET triggers as integers.

Also carries eye movement tables and free-text tracker messages so the full
merge path can be exercised.
"""

from synthetic.models import SyntheticRecordingPair
from synthetic.recording_synth import SyntheticPair, build_recording_pair


def make_pair(*, n_events: int = 12, n_eye_events: int = 5, seed: int = 3) -> SyntheticPair:
    """Generate an EEG/ET pair with string-typed EEG triggers."""
    return build_recording_pair(
        SyntheticRecordingPair(
            n_events=n_events,
            duration_s=n_events + 2.0,
            string_triggers=True,
            n_eye_events=n_eye_events,
            other_messages=["!CAL VALIDATION HV9 L LEFT GOOD", "TRIALID 1"],
            seed=seed,
        )
    )
