"""Synthetic EEG recordings and parallel eye tracking bundles.

Generates an in-memory EEG Recording and EyeTrackerBundle that observed the
same trigger sequence on two independent clocks. The true ET→EEG mapping is
returned alongside so tests can check the recovered one.

Timeline:
---------
- EEG sample i is at time i / eeg_srate
- ET sample j is at time j / (et_srate * (1 + ppm * 1e-6)) - et_lead_s
- Hence EEG index = slope * j + intercept with
  slope = eeg_srate / drifted ET rate and intercept = -et_lead_s * eeg_srate

ET columns:
-----------
- "time": nominal ET timestamp in ms
- "gaze_x [px]": 100 + the EEG index of the ET sample (exactly linear, so
  the resampled channel equals 100 + EEG index inside the sync range)
- "gaze_y [px]": slow sinusoid plus noise
- "pupil": constant baseline plus noise

Example:
    >>> from synthetic.models import SyntheticRecordingPair
    >>> from synthetic.recording_synth import build_recording_pair
    >>> pair = build_recording_pair(SyntheticRecordingPair(n_events=5))
    >>> pair.recording.events[0].type
    103
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import numpy as np

from et2eeg.domain import ChannelInfo, Event, EyeEventTable, EyeTrackerBundle, Recording

from .models import SyntheticRecordingPair, SyntheticSaccadeRecording
from .utils import deterministic_numpy_rng, deterministic_rng, drifted_rate

__all__ = [
    "ET_COLUMNS",
    "SyntheticPair",
    "trigger_schedule",
    "build_recording_pair",
    "build_saccade_recording",
]

ET_COLUMNS = ["time", "gaze_x [px]", "gaze_y [px]", "pupil"]
GAZE_X_OFFSET = 100.0


@dataclass(frozen=True)
class SyntheticPair:
    """Generated EEG/ET pair with its ground-truth mapping.

    Attributes
    ----------
    recording : Recording
        Continuous EEG recording with trigger events.
    bundle : EyeTrackerBundle
        Eye tracking data with the same triggers in ET sample indices.
    options : SyntheticRecordingPair
        Parameters used for generation.
    true_slope : float
        EEG samples per ET sample.
    true_intercept : float
        EEG index of ET sample 0.
    trigger_codes : List[int]
        Shared trigger codes in time order.
    """

    recording: Recording
    bundle: EyeTrackerBundle
    options: SyntheticRecordingPair
    true_slope: float
    true_intercept: float
    trigger_codes: List[int] = field(default_factory=list)

    def eeg_index(self, et_index: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Ground-truth EEG index of an ET sample index."""
        return self.true_slope * np.asarray(et_index, dtype=float) + self.true_intercept


def trigger_schedule(options: SyntheticRecordingPair) -> List[Tuple[int, float]]:
    """(code, EEG time in s) for every shared trigger, start and end anchors included."""
    schedule = []
    for k in range(options.n_events):
        if k == 0:
            code = options.start_event
        elif k == options.n_events - 1:
            code = options.end_event
        else:
            code = options.trial_codes[(k - 1) % len(options.trial_codes)]
        schedule.append((code, options.first_event_s + k * options.event_interval_s))
    return schedule


def _eeg_type(code: int, string_triggers: bool) -> Union[int, str]:
    return f"S{code:>4}" if string_triggers else code


def _eye_event_tables(
    options: SyntheticRecordingPair,
    et_rate: float,
    span_s: Tuple[float, float],
) -> Dict[str, EyeEventTable]:
    """Saccade and fixation tables with rows for both eyes."""
    if options.n_eye_events == 0:
        return {}

    start_s, end_s = span_s
    step = (end_s - start_s) / options.n_eye_events
    onsets_s = [start_s + (m + 0.5) * step for m in range(options.n_eye_events)]
    rng = deterministic_rng(options.seed, "eye_events")

    tables = {}
    for movement_type, base_duration_s, extra_name in (("saccades", 0.04, "amplitude"), ("fixations", 0.2, "posx")):
        eye: List[str] = []
        rows: List[List[float]] = []
        for eye_code, shift_s in (("L", 0.0), ("R", 0.002)):
            for onset_s in onsets_s:
                onset_s = onset_s + shift_s + (0.1 if movement_type == "fixations" else 0.0)
                eye.append(eye_code)
                rows.append(
                    [
                        float(round((onset_s + options.et_lead_s) * et_rate)),
                        float(round(base_duration_s * et_rate)),
                        round(rng.uniform(1.0, 10.0), 3) if extra_name == "amplitude" else round(rng.uniform(0, 1920), 1),
                    ]
                )
        tables[movement_type] = EyeEventTable(eye=eye, colheader=["latency", "duration", extra_name], data=np.array(rows))
    return tables


def build_recording_pair(options: SyntheticRecordingPair | None = None) -> SyntheticPair:
    """Generate a synchronized EEG recording and eye tracking bundle.

    Args:
        options: Generation parameters (defaults if None)

    Returns:
        SyntheticPair with recording, bundle and true mapping

    Raises:
        ValueError: Trigger schedule does not fit inside the EEG recording
    """
    options = options or SyntheticRecordingPair()

    eeg_pnts = int(round(options.duration_s * options.eeg_srate))
    et_rate = drifted_rate(options.et_srate, options.clock_drift_ppm)
    slope = options.eeg_srate / et_rate
    intercept = -options.et_lead_s * options.eeg_srate

    schedule = trigger_schedule(options)
    last_time = schedule[-1][1]
    if int(round(last_time * options.eeg_srate)) >= eeg_pnts:
        raise ValueError(f"Last trigger at {last_time:.3f}s lies beyond the {options.duration_s:.3f}s EEG recording")

    jitter_rng = deterministic_rng(options.seed, "jitter")
    eeg_events: List[Event] = []
    et_events: List[Event] = []
    for code, t in schedule:
        eeg_events.append(Event(type=_eeg_type(code, options.string_triggers), latency=int(round(t * options.eeg_srate))))
        jitter = jitter_rng.randint(-options.jitter_samples, options.jitter_samples) if options.jitter_samples else 0
        et_events.append(Event(type=code, latency=max(0, int(round((t + options.et_lead_s) * et_rate)) + jitter)))

    if options.et_only_code is not None and len(schedule) > 1:
        t_mid = (schedule[0][1] + schedule[1][1]) / 2
        et_events.append(Event(type=options.et_only_code, latency=int(round((t_mid + options.et_lead_s) * et_rate))))
        et_events.sort(key=lambda e: e.latency)

    # EEG channels
    eeg_rng = deterministic_numpy_rng(options.seed, "eeg")
    eeg_data = eeg_rng.normal(0.0, 10.0, size=(options.n_eeg_channels, eeg_pnts))
    chanlocs = [ChannelInfo(labels=f"EEG{i + 1}", type="EEG") for i in range(options.n_eeg_channels)]

    # ET samples cover the whole EEG recording plus the lead
    et_n = int(math.ceil((options.duration_s + options.et_lead_s) * et_rate)) + 1
    et_index = np.arange(et_n, dtype=float)
    et_rng = deterministic_numpy_rng(options.seed, "et")
    et_data = np.column_stack(
        [
            et_index * 1000.0 / options.et_srate,
            GAZE_X_OFFSET + (slope * et_index + intercept),
            500.0 + 200.0 * np.sin(2 * np.pi * 0.25 * et_index / et_rate) + et_rng.normal(0.0, 1.0, et_n),
            1200.0 + et_rng.normal(0.0, 5.0, et_n),
        ]
    )

    bundle = EyeTrackerBundle(
        data=et_data,
        colheader=list(ET_COLUMNS),
        events=et_events,
        srate=options.et_srate,
        eyeevent=_eye_event_tables(options, et_rate, (schedule[0][1], last_time)),
        othermessages=list(options.other_messages) if options.other_messages else None,
    )
    recording = Recording(
        data=eeg_data,
        srate=options.eeg_srate,
        chanlocs=chanlocs,
        events=eeg_events,
        setname="synthetic EEG",
    )

    return SyntheticPair(
        recording=recording,
        bundle=bundle,
        options=options,
        true_slope=slope,
        true_intercept=intercept,
        trigger_codes=[code for code, _ in schedule],
    )


def build_saccade_recording(options: SyntheticSaccadeRecording | None = None) -> Recording:
    """Generate a recording with "saccade" and "fixation" events.

    Data is noise plus ``channel_offset``. For epoched recordings
    (``trials > 1``) event latencies index the flattened sample axis and
    carry their epoch number.

    Args:
        options: Generation parameters (defaults if None)

    Returns:
        Continuous (trials == 1) or epoched Recording

    Raises:
        ValueError: An event latency lies beyond the data
    """
    options = options or SyntheticSaccadeRecording()

    n_total = options.pnts * options.trials
    latencies = list(options.saccade_latencies) + list(options.other_events)
    if any(lat >= n_total for lat in latencies):
        raise ValueError(f"Event latencies must be below {n_total}")

    rng = deterministic_numpy_rng(options.seed, "saccade_recording")
    shape = (options.n_channels, options.pnts) if options.trials == 1 else (options.n_channels, options.pnts, options.trials)
    data = options.channel_offset + rng.normal(0.0, 1.0, size=shape)

    def _event(event_type: str, latency: int) -> Event:
        epoch = latency // options.pnts if options.trials > 1 else None
        return Event(type=event_type, latency=latency, epoch=epoch)

    events = [_event("saccade", lat) for lat in options.saccade_latencies]
    events += [_event("fixation", lat) for lat in options.other_events]
    events.sort(key=lambda e: e.latency)

    return Recording(
        data=data,
        srate=options.srate,
        chanlocs=[ChannelInfo(labels=f"Ch{i + 1}", type="EEG") for i in range(options.n_channels)],
        events=events,
        setname="synthetic saccades",
    )
