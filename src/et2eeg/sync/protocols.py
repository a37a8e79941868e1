"""Protocol definitions for external collaborators.

Interactive parameter entry and plotting are owned by callers. The
pipeline only depends on these structural interfaces, so a GUI dialog, a
CLI prompt or a test stub can all be plugged in.
"""

from typing import Dict, List, Optional, Protocol

import numpy as np

from .models import AffineMapping, SyncQualityRow


class ImportParamsProtocol(Protocol):
    """Minimal parameter interface read by the synchronization pipeline.

    Attributes:
        start_event: Start anchor event code
        end_event: End anchor event code
        import_columns: 0-based ET column indices to import
        channel_labels: Labels for the imported columns (None = headers)
        import_eye_events: Import eye movement events
        do_regression: Regression instead of two-point mapping
        filter_eyetrack: Filtering request (no effect)
        plot_fig: Request a sync-quality plot
        search_radius: Matching tolerance in samples
    """

    start_event: int
    end_event: int
    import_columns: List[int]
    channel_labels: Optional[List[str]]
    import_eye_events: bool
    do_regression: bool
    filter_eyetrack: bool
    plot_fig: bool
    search_radius: int


class ParameterResolver(Protocol):
    """Collects import parameters, e.g. from a dialog.

    Returning None means the user cancelled; the pipeline then returns
    without touching the recording.
    """

    def __call__(
        self,
        shared_types: np.ndarray,
        primary_counts: Dict[int, int],
        secondary_counts: Dict[int, int],
        colheader: List[str],
        example_data: List[float],
        has_eye_events: bool,
    ) -> Optional[ImportParamsProtocol]: ...


class SyncPlotter(Protocol):
    """Renders sync quality for visual inspection."""

    def __call__(self, rows: List[SyncQualityRow], mapping: AffineMapping) -> None: ...
