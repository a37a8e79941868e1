"""Sync-quality estimation and persistence.

For every matched event pair, the ET latency is pushed through the fitted
mapping and compared with the observed EEG latency. The resulting table is
the diagnostic artifact stored with the synchronized recording.

Example:
    >>> rows = compute_sync_quality(alignment.pairs, alignment.mapping)
    >>> stats = summarize_sync_quality(rows, alignment.mapping, srate=500.0)
    >>> stats.max_abs_error_samples
    0.0
"""

import logging
from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from .models import AffineMapping, MatchedPair, SyncQualityRow, SyncQualityStats

__all__ = [
    "SYNC_QUALITY_COLUMNS",
    "compute_sync_quality",
    "summarize_sync_quality",
    "sync_quality_frame",
    "write_sync_quality",
]

logger = logging.getLogger(__name__)

SYNC_QUALITY_COLUMNS = [
    "event_type",
    "primary_latency",
    "secondary_latency",
    "predicted_latency",
    "error_samples",
    "ambiguous",
]


def compute_sync_quality(pairs: List[MatchedPair], mapping: AffineMapping) -> List[SyncQualityRow]:
    """Residual error per matched pair, ordered by EEG latency."""
    rows = []
    for pair in sorted(pairs, key=lambda p: p.primary_latency):
        predicted = float(mapping(pair.secondary_latency))
        rows.append(
            SyncQualityRow(
                event_type=pair.event_type,
                primary_latency=pair.primary_latency,
                secondary_latency=pair.secondary_latency,
                predicted_latency=predicted,
                error_samples=pair.primary_latency - predicted,
                ambiguous=pair.ambiguous,
            )
        )
    return rows


def summarize_sync_quality(rows: List[SyncQualityRow], mapping: AffineMapping, srate: float) -> SyncQualityStats:
    """Aggregate residuals into summary statistics.

    Args:
        rows: Sync-quality table
        mapping: Mapping the residuals were computed against
        srate: EEG sampling rate in Hz (for millisecond conversion)
    """
    errors = np.abs(np.array([r.error_samples for r in rows], dtype=float))
    mean_abs = float(errors.mean()) if errors.size else 0.0

    stats = SyncQualityStats(
        n_pairs=len(rows),
        n_ambiguous=sum(r.ambiguous for r in rows),
        mean_abs_error_samples=mean_abs,
        max_abs_error_samples=float(errors.max()) if errors.size else 0.0,
        mean_abs_error_ms=mean_abs * 1000.0 / srate,
        within_1_sample=int(np.count_nonzero(errors <= 1.0)),
        within_4_samples=int(np.count_nonzero(errors <= 4.0)),
        slope=mapping.slope,
        intercept=mapping.intercept,
        method=mapping.method,
    )

    logger.info(
        f"Sync quality: {stats.n_pairs} shared event(s), mean |error| {stats.mean_abs_error_samples:.3f} samples "
        f"({stats.mean_abs_error_ms:.3f} ms), max {stats.max_abs_error_samples:.3f} samples"
    )
    if stats.n_pairs and stats.max_abs_error_samples > 1.0:
        logger.warning(f"Largest sync error is {stats.max_abs_error_samples:.2f} samples; inspect the sync-quality table")
    return stats


def sync_quality_frame(rows: List[SyncQualityRow]) -> pd.DataFrame:
    """Sync-quality table as a DataFrame with fixed column order."""
    return pd.DataFrame([r.model_dump() for r in rows], columns=SYNC_QUALITY_COLUMNS)


def write_sync_quality(rows: List[SyncQualityRow], path: Union[str, Path]) -> None:
    """Write the sync-quality table as CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sync_quality_frame(rows).to_csv(path, index=False)
    logger.info(f"Wrote sync-quality table ({len(rows)} rows) to {path.name}")
