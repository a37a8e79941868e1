"""Import eye movement events and tracker messages into an EEG recording."""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..domain import Event, EyeEventTable, Recording
from ..domain.eyetracker import DURATION_COLUMN, LATENCY_COLUMN
from ..sync.models import AffineMapping

__all__ = ["eye_event_label", "import_eye_events", "attach_other_messages"]

logger = logging.getLogger(__name__)


def eye_event_label(eye: str, movement_type: str) -> str:
    """Composite event type, e.g. ("L", "saccades") -> "L_saccade"."""
    singular = movement_type[:-1] if movement_type.endswith("s") else movement_type
    return f"{eye}_{singular}"


def _table_to_events(
    table: EyeEventTable,
    rows: np.ndarray,
    label: str,
    mapping: AffineMapping,
    sync_range: Tuple[int, int],
) -> Tuple[List[Event], int]:
    first, last = sync_range
    latencies = np.rint(mapping(table.column(LATENCY_COLUMN)[rows])).astype(int)
    durations = table.column(DURATION_COLUMN)[rows] if DURATION_COLUMN in table.colheader else None
    extras = {
        name: table.column(name)[rows].tolist()
        for name in table.colheader
        if name not in (LATENCY_COLUMN, DURATION_COLUMN)
    }

    events: List[Event] = []
    n_outside = 0
    for k, latency in enumerate(latencies.tolist()):
        if not first <= latency <= last:
            n_outside += 1
            continue

        duration = None
        if durations is not None and np.isfinite(durations[k]):
            duration = max(0, int(round(durations[k] * mapping.slope)))

        events.append(
            Event(
                type=label,
                latency=latency,
                duration=duration,
                extra={name: values[k] for name, values in extras.items()},
            )
        )
    return events, n_outside


def import_eye_events(
    recording: Recording,
    eyeevent: Mapping[str, EyeEventTable],
    mapping: AffineMapping,
    sample_first_event: int,
    sample_last_event: int,
) -> Tuple[Recording, Dict[str, int]]:
    """Add tracker-detected eye movement events to a copy of ``recording``.

    One event per table row, typed ``<eye>_<movement-singular>``. Onsets
    are mapped to EEG samples with ``mapping``; rows landing outside the
    synchronized range are dropped. Durations are rescaled to EEG samples
    and all other columns are carried in ``Event.extra``. The merged event
    list is re-checked for consistency (sorted by latency, in range).

    Returns:
        (updated recording, number of imported events per composite type)
    """
    new_events: List[Event] = []
    counts: Dict[str, int] = {}

    for movement_type in sorted(eyeevent):
        table = eyeevent[movement_type]
        eye_codes = np.asarray(table.eye)
        for eye in sorted(set(table.eye)):
            label = eye_event_label(eye, movement_type)
            rows = np.flatnonzero(eye_codes == eye)
            events, n_outside = _table_to_events(table, rows, label, mapping, (sample_first_event, sample_last_event))
            if n_outside:
                logger.debug(f"Dropped {n_outside} {label} event(s) outside the sync range")
            new_events.extend(events)
            counts[label] = len(events)

    for label, n in counts.items():
        logger.info(f"Imported {n} events of type {label}")

    merged = Recording(
        data=recording.data,
        srate=recording.srate,
        chanlocs=list(recording.chanlocs),
        events=list(recording.events) + new_events,
        etc=dict(recording.etc),
        setname=recording.setname,
    )
    return merged.check_event_consistency(), counts


def attach_other_messages(recording: Recording, messages: Optional[List[str]]) -> Recording:
    """Store free-text tracker messages in ``etc["eyetracker_othermessages"]``."""
    if messages is None:
        return recording

    etc = dict(recording.etc)
    etc["eyetracker_othermessages"] = list(messages)
    logger.info(f"Attached {len(messages)} other eye tracking message(s) to recording etc")
    return Recording(
        data=recording.data,
        srate=recording.srate,
        chanlocs=list(recording.chanlocs),
        events=list(recording.events),
        etc=etc,
        setname=recording.setname,
    )
