"""Event-window overweighting for ICA training data.

Creates a training dataset in which samples around one event type (e.g.
saccade onsets) are overrepresented: short event-locked windows are cut
from the recording, optionally mean-centred per channel, repeated until
they make up a chosen proportion of the original length, and appended to
a flattened copy of the recording.

Example:
    >>> training = overweight_events(recording, "saccade", (-0.02, 0.01), ow_proportion=0.5, remove_mean=True)
    >>> training.pnts == recording.pnts + round(0.5 * recording.pnts)
    True

Note:
    The appended block carries no events; event latencies of the original
    samples are unchanged. High-pass filtering for ICA should happen before
    overweighting.
"""

import logging
import math
from typing import List, Optional, Tuple, Union

import numpy as np

from .domain import Event, Recording
from .exceptions import OverweightError

__all__ = ["window_bounds", "extract_event_windows", "tile_windows", "overweight_events"]

logger = logging.getLogger(__name__)


def _is_event_of_type(event: Event, event_type: Union[int, str]) -> bool:
    return event.type == event_type or str(event.type) == str(event_type)


def window_bounds(timelim: Tuple[float, float], srate: float) -> Tuple[int, int]:
    """Convert a [before, after] window in seconds to sample offsets.

    Returns:
        (start offset, stop offset) relative to event onset; the window
        covers ``onset + start .. onset + stop - 1``

    Raises:
        OverweightError: Window is empty or reversed
    """
    before, after = timelim
    start, stop = int(round(before * srate)), int(round(after * srate))
    if stop <= start:
        raise OverweightError(f"Time window {list(timelim)} s spans no samples at {srate:g} Hz")
    return start, stop


def extract_event_windows(
    data: np.ndarray,
    events: List[Event],
    event_type: Union[int, str],
    bounds: Tuple[int, int],
    remove_mean: bool = False,
    epoch_length: Optional[int] = None,
) -> np.ndarray:
    """Cut one window per event of ``event_type`` and join them end to end.

    Windows reaching past either end of ``data`` are skipped, as are windows
    spanning two epochs when ``epoch_length`` is given.

    Args:
        data: Continuous data, (channels, samples)
        events: Events with latencies into ``data``
        event_type: Event type to lock windows to
        bounds: Sample offsets from ``window_bounds``
        remove_mean: Subtract each channel's mean within each window
        epoch_length: Samples per epoch of flattened epoched data

    Returns:
        Array of shape (channels, n_windows * window_width)
    """
    start, stop = bounds
    n_samples = data.shape[1]
    windows = []
    n_skipped = 0

    for event in events:
        if not _is_event_of_type(event, event_type):
            continue
        lo, hi = event.latency + start, event.latency + stop
        if lo < 0 or hi > n_samples or (epoch_length and lo // epoch_length != (hi - 1) // epoch_length):
            n_skipped += 1
            continue
        window = data[:, lo:hi].astype(float)
        if remove_mean:
            window = window - window.mean(axis=1, keepdims=True)
        windows.append(window)

    if n_skipped:
        logger.warning(f"Skipped {n_skipped} '{event_type}' window(s) extending beyond the data or epoch")

    if not windows:
        return np.empty((data.shape[0], 0))
    return np.concatenate(windows, axis=1)


def tile_windows(windows: np.ndarray, n_target: int) -> np.ndarray:
    """Repeat ``windows`` along the sample axis and cut to ``n_target`` samples.

    Raises:
        OverweightError: No window data to repeat
    """
    width = windows.shape[1]
    if width == 0:
        raise OverweightError("No event-locked data to overweight: zero windows were extracted")
    repeats = math.ceil(n_target / width)
    return np.tile(windows, (1, repeats))[:, :n_target]


def overweight_events(
    recording: Recording,
    event_type: Union[int, str],
    timelim: Tuple[float, float],
    ow_proportion: float,
    remove_mean: bool = True,
) -> Recording:
    """Append repeated event-locked windows to a flattened copy of a recording.

    Args:
        recording: Continuous or epoched recording containing ``event_type``
        event_type: Event type around which data is overweighted
        timelim: [before, after] in seconds relative to event onset,
            e.g. (-0.02, 0.01)
        ow_proportion: Appended samples as a fraction of the original
            sample count (1.0 doubles the dataset)
        remove_mean: Remove each channel's mean within each window

    Returns:
        New continuous Recording of ``pnts + round(ow_proportion * pnts)``
        samples

    Raises:
        OverweightError: Negative proportion, empty window, or no windows
            of ``event_type`` in the data
    """
    if ow_proportion < 0:
        raise OverweightError(f"ow_proportion must be >= 0, got {ow_proportion}")

    flat = recording.flatten()
    if ow_proportion == 0:
        logger.info("ow_proportion is 0; returning the flattened recording unchanged")
        return flat

    logger.info(
        f"Creating dataset with event '{event_type}' overweighted; appended samples will make up "
        f"{ow_proportion * 100:.0f} percent of the original length"
    )

    n_points = flat.pnts
    n_target = int(round(ow_proportion * n_points))
    bounds = window_bounds(timelim, flat.srate)
    epoch_length = recording.pnts if recording.is_epoched else None

    windows = extract_event_windows(
        flat.data, flat.events, event_type, bounds, remove_mean=remove_mean, epoch_length=epoch_length
    )
    n_windows = windows.shape[1] // (bounds[1] - bounds[0])
    if windows.shape[1] == 0:
        raise OverweightError(
            f"Found no complete windows for event type '{event_type}'",
            context={"event_type": event_type, "timelim": list(timelim)},
        )

    appended = tile_windows(windows, n_target)
    etc = dict(flat.etc)
    etc["overweight"] = {
        "event_type": event_type,
        "timelim": list(timelim),
        "ow_proportion": ow_proportion,
        "remove_mean": remove_mean,
        "n_windows": n_windows,
        "n_original_samples": n_points,
        "n_appended_samples": n_target,
    }

    logger.info(f"Appended {n_target} samples built from {n_windows} '{event_type}' window(s)")
    return Recording(
        data=np.concatenate([flat.data.astype(np.result_type(flat.data.dtype, appended.dtype)), appended], axis=1),
        srate=flat.srate,
        chanlocs=list(flat.chanlocs),
        events=list(flat.events),
        etc=etc,
        setname=f"{flat.setname} overweighted".strip(),
    )
