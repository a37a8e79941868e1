"""Eye tracker import orchestration for ET2EEG.

This module owns parameter resolution and coordinates the synchronization
stages. Low-level stages receive primitives (arrays, codes, indices) only.

Stages:
-------
1. Validate the EEG recording (non-empty, continuous)
2. Extract canonical event codes from both streams
3. Find shared event types; resolve parameters (explicit or resolver)
4. Align clocks (two-point or regression)
5. Resample selected ET columns onto the EEG timeline
6. Compute the sync-quality table
7. Merge EYE channels, eye movement events and messages into a copy

The caller's recording is never modified: on success a new Recording is
returned, on failure an exception propagates and nothing has changed.

Example:
--------
>>> from et2eeg.pipeline import ImportParams, import_eyetracker
>>> params = ImportParams(start_event=103, end_event=203, import_columns=[1, 2], channel_labels=["gaze_x", "gaze_y"])
>>> result = import_eyetracker(recording, bundle, params)
>>> result["recording"].chanlocs[-1].type
'EYE'
>>> result["stats"].mean_abs_error_samples
0.12
"""

import logging
from typing import Any, List, Optional, TypedDict

import numpy as np
from pydantic import BaseModel, Field

from .config import Settings
from .domain import EyeTrackerBundle, Recording
from .exceptions import ParameterError, RecordingError
from .merge import append_eye_channels, attach_other_messages, import_eye_events, validate_channel_selection
from .sync import (
    AffineMapping,
    SyncQualityRow,
    SyncQualityStats,
    align_clocks,
    compute_sync_quality,
    count_event_types,
    extract_event_codes,
    find_boundary_events,
    find_shared_types,
    resample_to_primary,
    summarize_sync_quality,
    sync_quality_frame,
    validate_anchor_types,
)
from .sync.protocols import ParameterResolver, SyncPlotter
from .utils import time_block

__all__ = ["ImportParams", "ImportResult", "import_eyetracker", "format_history"]

logger = logging.getLogger(__name__)


# =============================================================================
# Parameters and Result Models
# =============================================================================


class ImportParams(BaseModel):
    """Fully resolved eye tracker import parameters.

    Attributes:
        start_event: Shared code whose first occurrence starts the sync range
        end_event: Shared code whose last occurrence ends the sync range
        import_columns: 0-based ET column indices to import
        channel_labels: Label per imported column (None = ET column headers)
        import_eye_events: Import tracker-detected saccades/fixations/blinks
        do_regression: Fit mapping over all shared events
        filter_eyetrack: Accepted for compatibility; no filtering is done
        plot_fig: Pass the sync-quality table to the plotter
        search_radius: Matching tolerance in EEG samples
    """

    model_config = {"frozen": True, "extra": "forbid"}

    start_event: int
    end_event: int
    import_columns: List[int] = Field(..., min_length=1)
    channel_labels: Optional[List[str]] = None
    import_eye_events: bool = False
    do_regression: bool = True
    filter_eyetrack: bool = False
    plot_fig: bool = False
    search_radius: int = Field(default=4, gt=0)

    @classmethod
    def from_settings(cls, settings: Settings, **values: Any) -> "ImportParams":
        """Build parameters, taking unspecified flags from ``settings.sync``."""
        defaults = settings.sync.model_dump()
        defaults.update(values)
        return cls(**defaults)


class ImportResult(TypedDict):
    """Result of import_eyetracker.

    Attributes:
        recording: EEG recording with EYE channels (input unchanged if cancelled)
        mapping: Fitted ET→EEG mapping (None if cancelled)
        sync_quality: Sync-quality rows (empty if cancelled)
        stats: Sync-quality summary (None if cancelled)
        history: Reproducible call string for audit (empty if cancelled)
        cancelled: Parameter collection was cancelled
    """

    recording: Recording
    mapping: Optional[AffineMapping]
    sync_quality: List[SyncQualityRow]
    stats: Optional[SyncQualityStats]
    history: str
    cancelled: bool


def format_history(params: ImportParams) -> str:
    """Render a call string that reproduces the import."""
    args = ", ".join(f"{k}={v!r}" for k, v in params.model_dump().items())
    return f"recording = import_eyetracker(recording, bundle, ImportParams({args}))"


def _example_data(data: np.ndarray) -> List[float]:
    """First non-zero value per column (0.0 for all-zero columns)."""
    examples = []
    for column in data.T:
        nonzero = np.flatnonzero(column)
        examples.append(float(column[nonzero[0]]) if nonzero.size else 0.0)
    return examples


def _validate_recording(recording: Recording) -> None:
    if recording.is_empty:
        raise RecordingError("The EEG recording must be loaded before synchronizing it with eye tracking data")
    if recording.data.ndim != 2:
        raise RecordingError("For synchronization with eye tracking data, the EEG must be continuous (not yet epoched)")

    boundaries = find_boundary_events(recording.events)
    if boundaries:
        if any((e.duration or 0) > 1 for e in boundaries):
            logger.warning(
                "Recording has 'boundary' events that represent removed samples (duration > 1); "
                "this will cause problems if they lie in the synchronization range"
            )
        else:
            logger.warning(
                "Recording has 'boundary' events without duration information; they may represent "
                "removed samples and cause problems inside the synchronization range"
            )


def _cancelled(recording: Recording) -> ImportResult:
    logger.info("Parameter selection cancelled; recording left unchanged")
    return ImportResult(recording=recording, mapping=None, sync_quality=[], stats=None, history="", cancelled=True)


# =============================================================================
# Core Orchestration
# =============================================================================


def import_eyetracker(
    recording: Recording,
    bundle: EyeTrackerBundle,
    params: Optional[ImportParams] = None,
    *,
    resolver: Optional[ParameterResolver] = None,
    plotter: Optional[SyncPlotter] = None,
    settings: Optional[Settings] = None,
) -> ImportResult:
    """Synchronize eye tracking data with an EEG recording and merge it.

    Args:
        recording: Continuous EEG recording (not modified)
        bundle: Parsed eye tracking data with shared trigger events
        params: Import parameters; if None, ``resolver`` is asked
        resolver: Collects parameters interactively; returning None cancels
        plotter: Receives the sync-quality table when ``plot_fig`` is set
        settings: Defaults for parameters the resolver leaves unset

    Returns:
        ImportResult with the merged recording, mapping and sync quality

    Raises:
        RecordingError: Recording empty or epoched
        NoEventsError: Either stream has no events
        NoSharedEventsError: No shared event types
        AnchorEventError: Anchor codes not shared
        ParameterError: Missing parameters or invalid column/label selection
        SyncError: Degenerate anchors, too few pairs, bad sync range
    """
    settings = settings or Settings()
    _validate_recording(recording)

    # -------------------------------------------------------------------------
    # Events and shared types
    # -------------------------------------------------------------------------
    eeg_codes = extract_event_codes(recording.events, "EEG")
    et_codes = extract_event_codes(bundle.events, "eye tracking data")
    shared_types = find_shared_types(eeg_codes, et_codes)

    if params is None:
        if resolver is None:
            raise ParameterError("No import parameters given and no resolver to collect them")
        params = resolver(
            shared_types,
            count_event_types(eeg_codes, shared_types),
            count_event_types(et_codes, shared_types),
            list(bundle.colheader),
            _example_data(bundle.data),
            bundle.has_eye_events,
        )
        if params is None:
            return _cancelled(recording)
        if not isinstance(params, ImportParams):
            values = {k: getattr(params, k) for k in ImportParams.model_fields if hasattr(params, k)}
            params = ImportParams.from_settings(settings, **values)

    validate_anchor_types(params.start_event, params.end_event, shared_types)
    labels = params.channel_labels
    if labels is None:
        labels = [bundle.colheader[c] for c in params.import_columns if 0 <= c < bundle.n_columns]
    validate_channel_selection(params.import_columns, labels, bundle.n_columns)

    if params.import_eye_events and not bundle.has_eye_events:
        logger.warning("Found no eye movement events (blinks/saccades/fixations) in the eye tracking data")

    # -------------------------------------------------------------------------
    # Alignment, resampling, quality
    # -------------------------------------------------------------------------
    with time_block("Synchronizing EEG and eye tracking data", logger):
        alignment = align_clocks(
            eeg_codes,
            et_codes,
            shared_types,
            params.start_event,
            params.end_event,
            do_regression=params.do_regression,
            search_radius=params.search_radius,
        )
        first, last = alignment.sync_range
        resampled = resample_to_primary(
            bundle.data,
            alignment.mapping,
            first,
            last,
            recording.pnts,
            recording.srate,
            filter_eyetrack=params.filter_eyetrack,
        )

    rows = compute_sync_quality(alignment.pairs, alignment.mapping)
    stats = summarize_sync_quality(rows, alignment.mapping, recording.srate)

    # -------------------------------------------------------------------------
    # Merge into a new recording
    # -------------------------------------------------------------------------
    merged = append_eye_channels(recording, resampled, params.import_columns, labels, first, last)
    merged.etc["eyetracker_syncquality"] = sync_quality_frame(rows)

    if params.import_eye_events and bundle.has_eye_events:
        merged, counts = import_eye_events(merged, bundle.eyeevent, alignment.mapping, first, last)
        merged.etc["eyetracker_eyeevents_imported"] = counts

    merged = attach_other_messages(merged, bundle.othermessages)

    if params.plot_fig:
        if plotter is not None:
            plotter(rows, alignment.mapping)
        else:
            logger.info("plot_fig requested but no plotter supplied; skipping sync-quality plot")

    logger.info("Synchronization completed")
    return ImportResult(
        recording=merged,
        mapping=alignment.mapping,
        sync_quality=rows,
        stats=stats,
        history=format_history(params),
        cancelled=False,
    )
