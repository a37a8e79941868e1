"""Clock alignment between EEG and eye tracker sample indices.

Provides the two-point anchor mapping, event-pair matching within a search
radius, and the least-squares mapping over all matched pairs.

The synchronized range runs from the first start-anchor event to the last
end-anchor event in the EEG, inclusive. ET data is only ever placed inside
that range.

Example:
    >>> alignment = align_clocks(eeg_codes, et_codes, shared, 103, 203, do_regression=True, search_radius=4)
    >>> alignment.mapping.slope
    0.5
"""

import logging
from typing import List, Tuple

import numpy as np
from scipy import stats

from ..exceptions import SyncError
from .models import AffineMapping, ClockAlignment, MatchedPair

__all__ = [
    "find_anchor_latencies",
    "fit_two_point",
    "match_event_pairs",
    "fit_regression",
    "align_clocks",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Anchors
# =============================================================================


def find_anchor_latencies(codes: np.ndarray, start_event: int, end_event: int) -> Tuple[int, int]:
    """Latency of the first start event and of the last end event.

    Args:
        codes: Canonical (code, latency) table
        start_event: Start anchor code
        end_event: End anchor code

    Returns:
        (first start latency, last end latency)

    Raises:
        SyncError: One of the anchor codes does not occur
    """
    start_rows = np.flatnonzero(codes[:, 0] == start_event)
    end_rows = np.flatnonzero(codes[:, 0] == end_event)
    if start_rows.size == 0 or end_rows.size == 0:
        raise SyncError(f"Anchor events {start_event}/{end_event} not found")
    return int(codes[start_rows[0], 1]), int(codes[end_rows[-1], 1])


def fit_two_point(primary_anchors: Tuple[int, int], secondary_anchors: Tuple[int, int]) -> AffineMapping:
    """Exact affine mapping through two (ET, EEG) anchor pairs.

    Raises:
        SyncError: Anchors coincide or run backwards in either stream
    """
    p_start, p_end = primary_anchors
    s_start, s_end = secondary_anchors

    if p_end <= p_start:
        raise SyncError(f"End event (EEG sample {p_end}) does not follow start event (EEG sample {p_start})")
    if s_end <= s_start:
        raise SyncError(f"End event (ET sample {s_end}) does not follow start event (ET sample {s_start})")

    slope = (p_end - p_start) / (s_end - s_start)
    intercept = p_start - slope * s_start
    return AffineMapping(slope=slope, intercept=intercept, method="two_point")


# =============================================================================
# Event Matching
# =============================================================================


def match_event_pairs(
    primary_codes: np.ndarray,
    secondary_codes: np.ndarray,
    shared_types: np.ndarray,
    coarse: AffineMapping,
    search_radius: int,
    sync_range: Tuple[int, int],
) -> List[MatchedPair]:
    """Pair EEG events with same-type ET events near their predicted position.

    For every EEG event of a shared type inside ``sync_range`` (inclusive),
    ET events of that type are mapped through ``coarse`` and kept if they
    land within ``search_radius`` samples. The nearest candidate wins;
    equidistant candidates resolve to the earliest ET event. Pairs chosen
    among several candidates are flagged ambiguous.

    Note:
        Same-type events closer together than ``2 * search_radius + 1``
        samples cannot be told apart. Such pairs are flagged, not dropped;
        reduce or raise ``search_radius`` to suit the event density.

    Returns:
        Matched pairs in EEG event order
    """
    if search_radius <= 0:
        raise SyncError(f"search_radius must be a positive number of samples, got {search_radius}")

    first, last = sync_range
    secondary_pred = coarse(secondary_codes[:, 1])
    pairs: List[MatchedPair] = []
    n_unmatched = 0

    for code, latency in primary_codes:
        if code not in shared_types or not first <= latency <= last:
            continue

        same_type = np.flatnonzero(secondary_codes[:, 0] == code)
        distance = np.abs(secondary_pred[same_type] - latency)
        within = same_type[distance <= search_radius]
        if within.size == 0:
            n_unmatched += 1
            continue

        # argmin returns the first minimum, i.e. the earliest ET event on ties
        best = within[np.argmin(np.abs(secondary_pred[within] - latency))]
        pairs.append(
            MatchedPair(
                event_type=int(code),
                primary_latency=int(latency),
                secondary_latency=int(secondary_codes[best, 1]),
                ambiguous=bool(within.size > 1),
            )
        )

    n_ambiguous = sum(p.ambiguous for p in pairs)
    if n_ambiguous:
        logger.warning(
            f"{n_ambiguous} event(s) had several ET candidates within ±{search_radius} samples; "
            "nearest was used. Consider adjusting search_radius."
        )
    if n_unmatched:
        logger.info(f"{n_unmatched} EEG event(s) in sync range had no ET match within ±{search_radius} samples")

    logger.debug(f"Matched {len(pairs)} shared event pair(s)")
    return pairs


def fit_regression(pairs: List[MatchedPair]) -> AffineMapping:
    """Ordinary least-squares mapping over matched pairs (x = ET, y = EEG).

    Raises:
        SyncError: Fewer than two pairs or no spread in ET latencies
    """
    if len(pairs) < 2:
        raise SyncError(f"Regression needs at least two matched events, got {len(pairs)}")

    x = np.array([p.secondary_latency for p in pairs], dtype=float)
    y = np.array([p.primary_latency for p in pairs], dtype=float)
    if np.all(x == x[0]):
        raise SyncError("Regression needs matched events at more than one ET latency")

    fit = stats.linregress(x, y)
    logger.debug(f"Regression fit: slope={fit.slope:.9f}, intercept={fit.intercept:.3f}, r={fit.rvalue:.6f}")
    return AffineMapping(slope=float(fit.slope), intercept=float(fit.intercept), method="regression")


# =============================================================================
# High-Level Alignment
# =============================================================================


def align_clocks(
    primary_codes: np.ndarray,
    secondary_codes: np.ndarray,
    shared_types: np.ndarray,
    start_event: int,
    end_event: int,
    do_regression: bool = True,
    search_radius: int = 4,
) -> ClockAlignment:
    """Estimate the ET→EEG mapping and the synchronized EEG range.

    Args:
        primary_codes: Canonical EEG (code, latency) table
        secondary_codes: Canonical ET (code, latency) table
        shared_types: Codes present in both streams
        start_event: Start anchor code (first occurrence used)
        end_event: End anchor code (last occurrence used)
        do_regression: Fit over all matched pairs instead of the anchors
        search_radius: Matching tolerance in EEG samples

    Returns:
        ClockAlignment with mapping, inclusive sync range and matched pairs

    Raises:
        SyncError: Degenerate anchors or too few pairs for regression
    """
    primary_anchors = find_anchor_latencies(primary_codes, start_event, end_event)
    secondary_anchors = find_anchor_latencies(secondary_codes, start_event, end_event)

    coarse = fit_two_point(primary_anchors, secondary_anchors)
    pairs = match_event_pairs(primary_codes, secondary_codes, shared_types, coarse, search_radius, primary_anchors)

    mapping = fit_regression(pairs) if do_regression else coarse
    logger.info(
        f"Clock mapping ({mapping.method}): EEG = {mapping.slope:.6f} * ET + {mapping.intercept:.3f}; "
        f"sync range EEG samples {primary_anchors[0]}..{primary_anchors[1]}"
    )

    return ClockAlignment(
        mapping=mapping,
        sample_first_event=primary_anchors[0],
        sample_last_event=primary_anchors[1],
        secondary_anchors=secondary_anchors,
        pairs=pairs,
    )
