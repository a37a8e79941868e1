"""Data models for synthetic EEG / eye tracking generation.

Models:
-------
- SyntheticRecordingPair: Parameters for a simultaneously recorded EEG/ET pair
- SyntheticSaccadeRecording: Parameters for an EEG recording with saccade events

Design Principles:
------------------
- Use Pydantic for validation and type safety
- Immutable models (frozen=True)
- Sensible defaults for common test scenarios
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


class SyntheticRecordingPair(BaseModel):
    """Parameters for generating an EEG recording and its parallel eye track.

    Both devices observe the same trigger sequence. The ET clock starts
    ``et_lead_s`` seconds before the EEG and may run fast or slow by
    ``clock_drift_ppm``.

    Attributes:
        eeg_srate: EEG sampling rate (Hz)
        et_srate: Nominal ET sampling rate (Hz)
        duration_s: EEG recording length (seconds)
        et_lead_s: ET recording starts this long before the EEG
        clock_drift_ppm: ET clock drift relative to EEG (parts per million)
        first_event_s: Time of the start-anchor trigger
        event_interval_s: Spacing of consecutive triggers
        n_events: Total triggers (including both anchors)
        start_event: Start anchor code
        end_event: End anchor code
        trial_codes: Codes cycled between the anchors
        jitter_samples: Uniform ± jitter on ET trigger latencies (ET samples)
        string_triggers: Encode EEG triggers as "S <code>" strings
        et_only_code: Extra code present in the ET only (None = none)
        n_eeg_channels: Number of EEG channels
        n_eye_events: Saccades/fixations per eye (0 = no eye events)
        other_messages: Free-text tracker messages
        seed: Random seed for deterministic generation
    """

    eeg_srate: float = Field(500.0, gt=0)
    et_srate: float = Field(1000.0, gt=0)
    duration_s: float = Field(20.0, gt=0)
    et_lead_s: float = Field(0.5, ge=0)
    clock_drift_ppm: float = Field(0.0)
    first_event_s: float = Field(1.0, ge=0)
    event_interval_s: float = Field(1.0, gt=0)
    n_events: int = Field(15, ge=2)
    start_event: int = Field(103)
    end_event: int = Field(203)
    trial_codes: List[int] = Field(default_factory=lambda: [11, 12, 13])
    jitter_samples: int = Field(0, ge=0)
    string_triggers: bool = Field(False)
    et_only_code: int | None = Field(77)
    n_eeg_channels: int = Field(4, ge=1)
    n_eye_events: int = Field(0, ge=0)
    other_messages: List[str] = Field(default_factory=list)
    seed: int = Field(42)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("trial_codes")
    @classmethod
    def validate_trial_codes(cls, v: List[int]) -> List[int]:
        """Ensure at least one trial code."""
        if not v:
            raise ValueError("trial_codes cannot be empty")
        return v


class SyntheticSaccadeRecording(BaseModel):
    """Parameters for an EEG recording with saccade-like events.

    Attributes:
        srate: Sampling rate (Hz)
        n_channels: Number of channels
        pnts: Samples per epoch (or total samples when continuous)
        trials: Number of epochs (1 = continuous)
        saccade_latencies: Saccade onsets (flattened sample index)
        other_events: Latencies of unrelated "fixation" events
        channel_offset: Constant added to every channel
        seed: Random seed for deterministic generation
    """

    srate: float = Field(500.0, gt=0)
    n_channels: int = Field(3, ge=1)
    pnts: int = Field(1000, ge=1)
    trials: int = Field(1, ge=1)
    saccade_latencies: List[int] = Field(default_factory=lambda: [100, 300, 500, 700])
    other_events: List[int] = Field(default_factory=lambda: [200, 600])
    channel_offset: float = Field(10.0)
    seed: int = Field(42)

    model_config = {"frozen": True, "extra": "forbid"}
