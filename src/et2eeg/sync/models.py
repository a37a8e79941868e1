"""Synchronization models.

Defines the affine clock mapping, matched event pairs, and the
sync-quality row/statistics models reported after alignment.
"""

from typing import List, Literal, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field

__all__ = ["AffineMapping", "MatchedPair", "ClockAlignment", "SyncQualityRow", "SyncQualityStats"]

ArrayLike = Union[float, int, np.ndarray]


class AffineMapping(BaseModel):
    """Affine map from ET sample index to EEG sample index.

    ``primary = slope * secondary + intercept``

    Attributes:
        slope: EEG samples per ET sample (ratio of sampling rates)
        intercept: EEG sample index of ET sample 0
        method: "two_point" (exact through both anchors) or "regression"
    """

    model_config = {"frozen": True, "extra": "forbid"}

    slope: float = Field(..., description="EEG samples per ET sample")
    intercept: float = Field(..., description="EEG index of ET sample 0")
    method: Literal["two_point", "regression"] = Field(..., description="How the mapping was estimated")

    def __call__(self, secondary_index: ArrayLike) -> ArrayLike:
        """Map ET sample index (scalar or array) to fractional EEG index."""
        return self.slope * np.asarray(secondary_index, dtype=float) + self.intercept

    def inverse(self, primary_index: ArrayLike) -> ArrayLike:
        """Map EEG sample index (scalar or array) to fractional ET position."""
        return (np.asarray(primary_index, dtype=float) - self.intercept) / self.slope


class MatchedPair(BaseModel):
    """One EEG event matched to an ET event of the same type.

    Attributes:
        event_type: Shared event code
        primary_latency: EEG sample index
        secondary_latency: ET sample index
        ambiguous: More than one ET candidate fell within the search radius
    """

    model_config = {"frozen": True, "extra": "forbid"}

    event_type: int
    primary_latency: int
    secondary_latency: int
    ambiguous: bool = False


class ClockAlignment(BaseModel):
    """Result of clock alignment.

    Attributes:
        mapping: Fitted ET→EEG mapping
        sample_first_event: EEG latency of first start-anchor event
        sample_last_event: EEG latency of last end-anchor event
        secondary_anchors: ET latencies of the same two anchors
        pairs: Matched event pairs inside the synchronized range
    """

    model_config = {"frozen": True, "extra": "forbid"}

    mapping: AffineMapping
    sample_first_event: int = Field(..., ge=0)
    sample_last_event: int = Field(..., ge=0)
    secondary_anchors: Tuple[int, int]
    pairs: List[MatchedPair] = Field(default_factory=list)

    @property
    def sync_range(self) -> Tuple[int, int]:
        """Inclusive EEG sample range that receives ET data."""
        return self.sample_first_event, self.sample_last_event


class SyncQualityRow(BaseModel):
    """Residual alignment error for one matched event pair.

    ``error_samples = primary_latency - predicted_latency``
    """

    model_config = {"frozen": True, "extra": "forbid"}

    event_type: int = Field(..., description="Shared event code")
    primary_latency: int = Field(..., description="Observed EEG sample index")
    secondary_latency: int = Field(..., description="ET sample index")
    predicted_latency: float = Field(..., description="EEG index predicted from the ET event")
    error_samples: float = Field(..., description="Observed minus predicted, in EEG samples")
    ambiguous: bool = Field(False, description="Match chosen among several candidates")


class SyncQualityStats(BaseModel):
    """Summary of sync quality across all matched pairs."""

    model_config = {"frozen": True, "extra": "forbid"}

    n_pairs: int = Field(..., ge=0)
    n_ambiguous: int = Field(..., ge=0)
    mean_abs_error_samples: float = Field(..., ge=0)
    max_abs_error_samples: float = Field(..., ge=0)
    mean_abs_error_ms: float = Field(..., ge=0)
    within_1_sample: int = Field(..., ge=0)
    within_4_samples: int = Field(..., ge=0)
    slope: float
    intercept: float
    method: Literal["two_point", "regression"]
    filtered: bool = Field(False, description="Always False: anti-alias filtering is not implemented")
