"""Primary recording domain models.

This module defines the mutable aggregate that flows through both pipelines:
a Recording holds a sample array, a channel table, an event list and an
``etc`` side-channel for diagnostics. Stages never modify a Recording in
place; they return updated copies so a failing stage leaves the caller's
recording untouched.

Model Hierarchy:
---------------
- Recording
  ├── ChannelInfo (one per data row)
  └── Event (type, latency, optional duration/epoch/metadata)

Data Layout:
-----------
- Continuous: ``data.shape == (nbchan, pnts)``
- Epoched: ``data.shape == (nbchan, pnts, trials)``; event latencies index
  the flattened (epochs end to end) sample axis.

Usage:
------
>>> import numpy as np
>>> from et2eeg.domain import ChannelInfo, Event, Recording
>>> rec = Recording(
...     data=np.zeros((2, 1000)),
...     srate=500.0,
...     chanlocs=[ChannelInfo(labels="Fz"), ChannelInfo(labels="Cz")],
...     events=[Event(type="S 103", latency=10), Event(type=203, latency=900)],
... )
>>> rec.pnts
1000
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import RecordingError

__all__ = ["Event", "ChannelInfo", "Recording"]

logger = logging.getLogger(__name__)


class Event(BaseModel):
    """Discrete marker event.

    Attributes:
        type: Symbolic type, either an integer code or a string such as
            ``"S 123"``, ``"boundary"`` or ``"L_saccade"``
        latency: 0-based sample index of the event onset
        duration: Optional duration in samples
        epoch: Optional epoch index (epoched recordings)
        extra: Per-event metadata (e.g. columns of an imported eye event)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Union[int, str] = Field(..., description="Event type code or label")
    latency: int = Field(..., description="Sample index of event onset", ge=0)
    duration: Optional[int] = Field(None, description="Event duration in samples", ge=0)
    epoch: Optional[int] = Field(None, description="Epoch index for epoched recordings", ge=0)
    extra: Dict[str, Any] = Field(default_factory=dict, description="Additional per-event fields")


class ChannelInfo(BaseModel):
    """Channel descriptor (label, reference, type)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    labels: str = Field(..., description="Channel label")
    ref: str = Field(default="", description="Reference channel label")
    type: str = Field(default="", description="Channel type marker (e.g. 'EEG', 'EYE')")


class Recording(BaseModel):
    """Primary (EEG) recording aggregate.

    Attributes:
        data: Sample array, (nbchan, pnts) or (nbchan, pnts, trials)
        srate: Sampling rate in Hz
        chanlocs: Channel table, one entry per data row
        events: Event list; order is not significant
        etc: Side-channel metadata (sync-quality table, messages, ...)
        setname: Dataset name for history and logs
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, validate_assignment=False)

    data: np.ndarray = Field(..., description="Sample array (channels first)")
    srate: float = Field(..., description="Sampling rate in Hz", gt=0)
    chanlocs: List[ChannelInfo] = Field(default_factory=list, description="Channel table")
    events: List[Event] = Field(default_factory=list, description="Event list")
    etc: Dict[str, Any] = Field(default_factory=dict, description="Side-channel metadata")
    setname: str = Field(default="", description="Dataset name")

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v: Any) -> np.ndarray:
        """Coerce array-likes to a numpy array."""
        return np.asarray(v)

    @model_validator(mode="after")
    def validate_layout(self) -> "Recording":
        """Validate data dimensionality, channel table length and event latencies."""
        if self.data.ndim not in (2, 3):
            raise ValueError(f"data must be 2-D (continuous) or 3-D (epoched), got {self.data.ndim}-D")
        if self.chanlocs and len(self.chanlocs) != self.data.shape[0]:
            raise ValueError(f"chanlocs has {len(self.chanlocs)} entries but data has {self.data.shape[0]} channels")
        n_samples = self.data.shape[1] * (self.data.shape[2] if self.data.ndim == 3 else 1)
        late = [e.latency for e in self.events if e.latency >= n_samples]
        if late:
            raise ValueError(f"{len(late)} event(s) lie beyond the last sample {n_samples - 1}, first at latency {late[0]}")
        return self

    # ------------------------------------------------------------------
    # Derived shape properties
    # ------------------------------------------------------------------

    @property
    def nbchan(self) -> int:
        return int(self.data.shape[0])

    @property
    def pnts(self) -> int:
        return int(self.data.shape[1])

    @property
    def trials(self) -> int:
        return int(self.data.shape[2]) if self.data.ndim == 3 else 1

    @property
    def is_epoched(self) -> bool:
        return self.data.ndim == 3 and self.data.shape[2] > 1

    @property
    def is_empty(self) -> bool:
        return self.data.size == 0

    # ------------------------------------------------------------------
    # Copy-returning operations
    # ------------------------------------------------------------------

    def copy(self) -> "Recording":
        """Deep copy (data, channel table, events and etc)."""
        return Recording(
            data=self.data.copy(),
            srate=self.srate,
            chanlocs=list(self.chanlocs),
            events=list(self.events),
            etc=copy.deepcopy(self.etc),
            setname=self.setname,
        )

    def flatten(self) -> "Recording":
        """Return a continuous copy with epochs concatenated end to end.

        Epoch 0 comes first; within each epoch sample order is kept, so
        flattened index = sample + pnts * epoch.
        """
        if self.data.ndim == 2:
            return self.copy()

        flat = np.reshape(self.data, (self.data.shape[0], -1), order="F").copy()
        return Recording(
            data=flat,
            srate=self.srate,
            chanlocs=list(self.chanlocs),
            events=list(self.events),
            etc=copy.deepcopy(self.etc),
            setname=self.setname,
        )

    def check_event_consistency(self) -> "Recording":
        """Return a copy with events sorted by latency.

        Raises:
            RecordingError: Event latency outside the recording
        """
        n_samples = self.pnts * self.trials
        bad = [e for e in self.events if e.latency >= n_samples]
        if bad:
            raise RecordingError(
                f"{len(bad)} event(s) lie outside the recording (0..{n_samples - 1})",
                context={"first_bad_latency": bad[0].latency, "type": bad[0].type},
            )

        ordered = sorted(self.events, key=lambda e: e.latency)
        logger.debug(f"Event consistency check passed for {len(ordered)} events")
        return Recording(
            data=self.data,
            srate=self.srate,
            chanlocs=list(self.chanlocs),
            events=ordered,
            etc=self.etc,
            setname=self.setname,
        )
