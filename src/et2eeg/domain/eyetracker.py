"""Secondary-stream (eye tracker) bundle models.

The bundle is produced by an external raw-format parser and arrives fully
materialized in memory. Sample data is time-major (one row per ET sample),
events carry ET sample indices, and optional eye movement event tables hold
one row per saccade/fixation/blink detected online by the tracker.
"""

from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .recording import Event

__all__ = ["EyeEventTable", "EyeTrackerBundle"]

LATENCY_COLUMN = "latency"
DURATION_COLUMN = "duration"


class EyeEventTable(BaseModel):
    """Eye movement events of one movement type.

    Attributes:
        eye: Eye code per row (e.g. "L" or "R")
        colheader: Column names of ``data``; must include "latency"
        data: Numeric table, one row per event

    Note:
        "latency" is the onset as an ET sample index. An optional
        "duration" column is expressed in ET samples.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    eye: List[str] = Field(..., description="Eye code per row")
    colheader: List[str] = Field(..., description="Column names")
    data: np.ndarray = Field(..., description="Event table (rows x columns)")

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v: Any) -> np.ndarray:
        arr = np.asarray(v, dtype=float)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1) if arr.size else arr.reshape(0, 0)
        return arr

    @model_validator(mode="after")
    def validate_table(self) -> "EyeEventTable":
        """Validate row/column agreement and presence of the latency column."""
        if LATENCY_COLUMN not in self.colheader:
            raise ValueError(f"eye event table requires a '{LATENCY_COLUMN}' column, got {self.colheader}")
        n_rows = self.data.shape[0]
        if len(self.eye) != n_rows:
            raise ValueError(f"eye has {len(self.eye)} entries but data has {n_rows} rows")
        if n_rows and self.data.shape[1] != len(self.colheader):
            raise ValueError(f"colheader has {len(self.colheader)} names but data has {self.data.shape[1]} columns")
        return self

    def column(self, name: str) -> np.ndarray:
        """Return one column by name."""
        return self.data[:, self.colheader.index(name)]


class EyeTrackerBundle(BaseModel):
    """Parsed eye tracking recording.

    Attributes:
        data: Samples, (n_samples, n_columns)
        colheader: One name per data column
        events: Trigger events with ET sample-index latencies
        srate: Nominal ET sampling rate in Hz (informational)
        eyeevent: Eye movement tables keyed by plural type name
            ("saccades", "fixations", "blinks")
        othermessages: Free-text tracker messages kept for inspection
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    data: np.ndarray = Field(..., description="ET samples (time x columns)")
    colheader: List[str] = Field(..., description="Column names")
    events: List[Event] = Field(default_factory=list, description="ET trigger events")
    srate: Optional[float] = Field(None, description="Nominal ET sampling rate in Hz", gt=0)
    eyeevent: Dict[str, EyeEventTable] = Field(default_factory=dict, description="Eye movement tables")
    othermessages: Optional[List[str]] = Field(None, description="Other tracker messages")

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v: Any) -> np.ndarray:
        return np.asarray(v, dtype=float)

    @model_validator(mode="after")
    def validate_columns(self) -> "EyeTrackerBundle":
        """Validate data shape against column headers."""
        if self.data.ndim != 2:
            raise ValueError(f"ET data must be 2-D (samples x columns), got {self.data.ndim}-D")
        if self.data.shape[1] != len(self.colheader):
            raise ValueError(f"colheader has {len(self.colheader)} names but data has {self.data.shape[1]} columns")
        return self

    @property
    def n_samples(self) -> int:
        return int(self.data.shape[0])

    @property
    def n_columns(self) -> int:
        return int(self.data.shape[1])

    @property
    def has_eye_events(self) -> bool:
        return bool(self.eyeevent)
