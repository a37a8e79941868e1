"""Append resampled eye tracking channels to an EEG recording."""

import logging
import re
from typing import List, Sequence

import numpy as np

from ..domain import ChannelInfo, Recording
from ..exceptions import MergeError, ParameterError, RecordingError

__all__ = ["EYE_CHANNEL_TYPE", "sanitize_channel_label", "validate_channel_selection", "append_eye_channels"]

logger = logging.getLogger(__name__)

EYE_CHANNEL_TYPE = "EYE"

# Characters that break downstream channel-name decoding
_LABEL_SUBSTITUTIONS = (("_", "-"), ("[", "("), ("]", ")"))
_SPACE_NOT_BEFORE_PAREN = re.compile(r" (?!\()")


def sanitize_channel_label(label: str) -> str:
    """Make an ET column name safe as a channel label.

    Underscores become hyphens and square brackets become parentheses.
    Spaces become hyphens, except a space directly before "(" which keeps
    unit suffixes readable: "gaze_x [px]" -> "gaze-x (px)". Applying the
    function twice gives the same result as applying it once.
    """
    for old, new in _LABEL_SUBSTITUTIONS:
        label = label.replace(old, new)
    return _SPACE_NOT_BEFORE_PAREN.sub("-", label)


def validate_channel_selection(import_columns: Sequence[int], labels: Sequence[str], n_columns: int) -> None:
    """Check column indices and label count before anything is built.

    Raises:
        ParameterError: Empty selection, index out of range, or label count mismatch
    """
    if len(import_columns) == 0:
        raise ParameterError("No eye tracking columns selected for import")
    bad = [c for c in import_columns if not 0 <= c < n_columns]
    if bad:
        raise ParameterError(
            f"Column indices {bad} out of range for eye tracking data with {n_columns} columns",
            context={"bad_columns": bad, "n_columns": n_columns},
        )
    if len(labels) != len(import_columns):
        raise ParameterError(f"Got {len(labels)} channel labels for {len(import_columns)} imported columns")


def append_eye_channels(
    recording: Recording,
    resampled: np.ndarray,
    import_columns: Sequence[int],
    labels: Sequence[str],
    sample_first_event: int,
    sample_last_event: int,
) -> Recording:
    """Return a copy of ``recording`` with one EYE channel per imported column.

    New channels are zero everywhere except the inclusive range
    ``sample_first_event..sample_last_event``, which receives the matching
    column of ``resampled``.

    Args:
        recording: Continuous EEG recording
        resampled: Resampled ET data, one row per EEG sample of the range
        import_columns: 0-based column indices into ``resampled``
        labels: Channel label per imported column (sanitized here)
        sample_first_event: First EEG sample of the range
        sample_last_event: Last EEG sample of the range

    Raises:
        RecordingError: Recording is epoched
        ParameterError: Invalid column selection or labels
        MergeError: Resampled data does not fit the range
    """
    if recording.data.ndim != 2:
        raise RecordingError("ET channels can only be appended to continuous (not epoched) data")
    validate_channel_selection(import_columns, labels, resampled.shape[1])

    n_range = sample_last_event - sample_first_event + 1
    if resampled.shape[0] != n_range:
        raise MergeError(f"Resampled data has {resampled.shape[0]} rows but the sync range spans {n_range} samples")
    if not 0 <= sample_first_event <= sample_last_event < recording.pnts:
        raise MergeError(f"Sync range {sample_first_event}..{sample_last_event} is outside the recording")

    clean_labels: List[str] = [sanitize_channel_label(lab) for lab in labels]
    if clean_labels != list(labels):
        logger.info("Replaced characters in ET channel names for compatibility with channel-name decoding")

    eye_rows = np.zeros((len(import_columns), recording.pnts), dtype=np.result_type(recording.data.dtype, resampled.dtype))
    eye_rows[:, sample_first_event : sample_last_event + 1] = resampled[:, list(import_columns)].T

    new_chanlocs = [ChannelInfo(labels=lab, ref="", type=EYE_CHANNEL_TYPE) for lab in clean_labels]
    chanlocs = list(recording.chanlocs)
    if not chanlocs and recording.nbchan:
        chanlocs = [ChannelInfo(labels=str(i + 1)) for i in range(recording.nbchan)]

    logger.info(f"Added {len(new_chanlocs)} EYE channel(s): {clean_labels}")
    return Recording(
        data=np.vstack([recording.data, eye_rows]),
        srate=recording.srate,
        chanlocs=chanlocs + new_chanlocs,
        events=list(recording.events),
        etc=dict(recording.etc),
        setname=recording.setname,
    )
