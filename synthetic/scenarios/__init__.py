"""Ready-made synthetic scenarios.

Each scenario module exposes ``make_pair`` returning a SyntheticPair:
- happy_path: identical clocks, exact trigger latencies
- drift_jitter: drifting ET clock with jittered trigger latencies
- string_triggers: BrainVision-style "S 103" EEG trigger labels
"""

from . import drift_jitter, happy_path, string_triggers

__all__ = ["happy_path", "drift_jitter", "string_triggers"]
