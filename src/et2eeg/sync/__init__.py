"""Temporal synchronization of eye tracking and EEG recordings.

Provides canonical event-code extraction, shared-type discovery, clock
alignment (two-point or regression), resampling of ET samples onto the EEG
timeline, and sync-quality estimation.

Example:
    >>> from et2eeg.sync import extract_event_codes, find_shared_types, align_clocks
    >>> eeg_codes = extract_event_codes(recording.events, "EEG")
    >>> et_codes = extract_event_codes(bundle.events, "eye track")
    >>> shared = find_shared_types(eeg_codes, et_codes)
    >>> alignment = align_clocks(eeg_codes, et_codes, shared, 103, 203)
"""

# Exceptions
from ..exceptions import AnchorEventError, NoEventsError, NoSharedEventsError, SyncError

# Event extraction
from .events import extract_event_codes, find_boundary_events, parse_event_code

# Clock alignment
from .mapping import align_clocks, find_anchor_latencies, fit_regression, fit_two_point, match_event_pairs

# Module-local models
from .models import AffineMapping, ClockAlignment, MatchedPair, SyncQualityRow, SyncQualityStats

# Sync quality
from .quality import SYNC_QUALITY_COLUMNS, compute_sync_quality, summarize_sync_quality, sync_quality_frame, write_sync_quality

# Resampling
from .resample import resample_to_primary

# Shared events
from .shared import count_event_types, find_shared_types, validate_anchor_types

__all__ = [
    # Exceptions
    "SyncError",
    "NoEventsError",
    "NoSharedEventsError",
    "AnchorEventError",
    # Models
    "AffineMapping",
    "MatchedPair",
    "ClockAlignment",
    "SyncQualityRow",
    "SyncQualityStats",
    # Events
    "parse_event_code",
    "extract_event_codes",
    "find_boundary_events",
    # Shared
    "find_shared_types",
    "count_event_types",
    "validate_anchor_types",
    # Mapping
    "find_anchor_latencies",
    "fit_two_point",
    "match_event_pairs",
    "fit_regression",
    "align_clocks",
    # Resampling
    "resample_to_primary",
    # Quality
    "SYNC_QUALITY_COLUMNS",
    "compute_sync_quality",
    "summarize_sync_quality",
    "sync_quality_frame",
    "write_sync_quality",
]
