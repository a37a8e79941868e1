"""Shared event-type discovery between primary and secondary streams."""

import logging
from typing import Dict, Iterable

import numpy as np

from ..exceptions import AnchorEventError, NoSharedEventsError

__all__ = ["find_shared_types", "count_event_types", "validate_anchor_types"]

logger = logging.getLogger(__name__)


def find_shared_types(primary_codes: np.ndarray, secondary_codes: np.ndarray) -> np.ndarray:
    """Intersect the distinct event codes of both streams.

    Args:
        primary_codes: Canonical (code, latency) table of the EEG
        secondary_codes: Canonical (code, latency) table of the ET

    Returns:
        Sorted array of codes present in both streams

    Raises:
        NoSharedEventsError: No code occurs in both streams
    """
    shared = np.intersect1d(primary_codes[:, 0], secondary_codes[:, 0])
    if shared.size == 0:
        raise NoSharedEventsError(
            "There are no shared events that occur both in the EEG and the eye track",
            context={
                "primary_types": np.unique(primary_codes[:, 0]).tolist(),
                "secondary_types": np.unique(secondary_codes[:, 0]).tolist(),
            },
        )

    logger.info(f"Found {shared.size} shared event type(s): {shared.tolist()}")
    return shared


def count_event_types(codes: np.ndarray, types: Iterable[int]) -> Dict[int, int]:
    """Count occurrences of each requested type in a canonical table."""
    return {int(t): int(np.count_nonzero(codes[:, 0] == t)) for t in types}


def validate_anchor_types(start_event: int, end_event: int, shared_types: np.ndarray) -> None:
    """Ensure both anchor codes are shared by the two streams.

    Raises:
        AnchorEventError: One or both anchors missing from the shared set
    """
    missing = [int(t) for t in (start_event, end_event) if t not in shared_types]
    if missing:
        raise AnchorEventError(
            f"Did not find events of the specified type {missing} in both ET and EEG data",
            context={"missing": missing, "shared_types": shared_types.tolist()},
        )
