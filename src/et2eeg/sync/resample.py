"""Resample eye tracker samples onto the EEG timeline.

Each EEG sample inside the synchronized range is mapped back to a
fractional ET position and the ET columns are linearly interpolated there.
"""

import logging

import numpy as np
from scipy.interpolate import interp1d

from ..exceptions import SyncError
from .models import AffineMapping

__all__ = ["resample_to_primary"]

logger = logging.getLogger(__name__)


def resample_to_primary(
    data: np.ndarray,
    mapping: AffineMapping,
    sample_first_event: int,
    sample_last_event: int,
    n_primary: int,
    srate: float,
    filter_eyetrack: bool = False,
) -> np.ndarray:
    """Interpolate ET data at every EEG sample of the synchronized range.

    Args:
        data: ET samples, (n_secondary, n_columns)
        mapping: ET→EEG affine mapping
        sample_first_event: First EEG sample of the range (inclusive)
        sample_last_event: Last EEG sample of the range (inclusive)
        n_primary: Number of EEG samples
        srate: EEG sampling rate in Hz
        filter_eyetrack: Anti-alias filtering request; not implemented,
            the data is never filtered

    Returns:
        Array of shape (sample_last_event - sample_first_event + 1, n_columns)

    Raises:
        SyncError: Range outside the EEG or too little ET data
    """
    if not 0 <= sample_first_event <= sample_last_event < n_primary:
        raise SyncError(f"Sync range {sample_first_event}..{sample_last_event} is outside the EEG (0..{n_primary - 1})")
    if data.ndim != 2 or data.shape[0] < 2:
        raise SyncError(f"Need at least two ET samples to interpolate, got shape {data.shape}")

    if filter_eyetrack:
        logger.warning("Filtering of eye tracking data is not implemented; data is resampled without filtering")

    primary_index = np.arange(sample_first_event, sample_last_event + 1)
    positions = mapping.inverse(primary_index)

    # Clamp to the recorded ET span instead of extrapolating
    n_secondary = data.shape[0]
    n_clamped = int(np.count_nonzero((positions < 0) | (positions > n_secondary - 1)))
    if n_clamped:
        logger.warning(f"{n_clamped} EEG sample(s) map outside the ET recording and were held at the edge value")
    positions = np.clip(positions, 0, n_secondary - 1)

    interpolator = interp1d(np.arange(n_secondary), data, kind="linear", axis=0, assume_sorted=True)
    resampled = interpolator(positions)

    # Positions landing exactly on an ET sample take that sample verbatim
    on_grid = positions == np.floor(positions)
    resampled[on_grid] = data[positions[on_grid].astype(int)]

    logger.info(
        f"Resampled {data.shape[1]} ET column(s) from {n_secondary} samples to {primary_index.size} EEG samples "
        f"at {srate:g} Hz"
    )
    return resampled
