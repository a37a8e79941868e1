"""Synthetic data helpers for ET2EEG.

Public API to generate minimal, valid in-memory inputs:
- EEG recording plus parallel eye tracking bundle with known clock mapping
- EEG recording with saccade events for overweighting

These utilities are intended for demos, tests, and quick E2E exercises.
"""

from .models import SyntheticRecordingPair, SyntheticSaccadeRecording
from .recording_synth import ET_COLUMNS, SyntheticPair, build_recording_pair, build_saccade_recording, trigger_schedule
from .utils import deterministic_numpy_rng, deterministic_rng, drifted_rate

__all__ = [
    # Options
    "SyntheticRecordingPair",
    "SyntheticSaccadeRecording",
    # Result objects
    "SyntheticPair",
    # Builders
    "ET_COLUMNS",
    "trigger_schedule",
    "build_recording_pair",
    "build_saccade_recording",
    # Utilities
    "deterministic_rng",
    "deterministic_numpy_rng",
    "drifted_rate",
]
