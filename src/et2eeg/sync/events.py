"""Canonical event-code extraction.

Event types arrive either as integer codes or as strings with an embedded
trigger value (BrainVision-style "S 123", "R234"). Both representations are
resolved here, once, into integer codes so downstream matching never
branches on representation.

Example:
    >>> from et2eeg.domain import Event
    >>> extract_event_codes([Event(type="S 103", latency=10), Event(type="boundary", latency=0)])
    array([[103,  10]])
"""

import logging
import re
from typing import List, Optional, Sequence, Union

import numpy as np

from ..domain import Event
from ..exceptions import NoEventsError

__all__ = ["parse_event_code", "extract_event_codes", "find_boundary_events"]

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")

BOUNDARY_TYPE = "boundary"


def parse_event_code(event_type: Union[int, str]) -> Optional[int]:
    """Resolve one event type to an integer code.

    Args:
        event_type: Integer code or string label

    Returns:
        Integer code, or None when a string contains no digits
    """
    if isinstance(event_type, str):
        match = _DIGITS.search(event_type)
        if match is None:
            return None
        return int(match.group())
    return int(event_type)


def extract_event_codes(events: Sequence[Event], label: str = "recording") -> np.ndarray:
    """Build the canonical (code, latency) table for a recording.

    Event order is preserved. If any type is a string, string types are
    reduced to their first run of digits and events without digits are
    left out of the table. Purely numeric event lists pass through.

    Args:
        events: Events of one recording
        label: Name used in log and error messages

    Returns:
        int64 array of shape (n, 2): column 0 code, column 1 latency

    Raises:
        NoEventsError: Event list is empty
    """
    if not events:
        raise NoEventsError(f"Found no trigger/event information in the {label}")

    has_strings = any(isinstance(e.type, str) for e in events)
    rows: List[List[int]] = []
    n_dropped = 0

    for event in events:
        if has_strings:
            code = parse_event_code(event.type)
            if code is None:
                n_dropped += 1
                continue
        else:
            code = int(event.type)
        rows.append([code, event.latency])

    if n_dropped:
        logger.debug(f"Ignored {n_dropped} {label} event(s) without a numeric code")

    if not rows:
        return np.empty((0, 2), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def find_boundary_events(events: Sequence[Event]) -> List[Event]:
    """Return 'boundary' events (discontinuities in continuous data)."""
    return [e for e in events if isinstance(e.type, str) and e.type == BOUNDARY_TYPE]
