"""Exception hierarchy for ET2EEG.

All errors raised by the package derive from ET2EEGError so callers can
catch one base class. Precondition violations are raised before any output
recording is built, leaving the caller's recording untouched.

Hierarchy:
---------
- ET2EEGError
  ├── ConfigError
  ├── RecordingError
  ├── ParameterError
  ├── SyncError
  │   ├── NoEventsError
  │   ├── NoSharedEventsError
  │   └── AnchorEventError
  ├── MergeError
  └── OverweightError
"""

from typing import Any, Dict, Optional

__all__ = [
    "ET2EEGError",
    "ConfigError",
    "RecordingError",
    "ParameterError",
    "SyncError",
    "NoEventsError",
    "NoSharedEventsError",
    "AnchorEventError",
    "MergeError",
    "OverweightError",
]


class ET2EEGError(Exception):
    """Base error for the package.

    Attributes:
        message: Human-readable description
        context: Optional structured details for diagnostics
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigError(ET2EEGError):
    """Configuration could not be loaded or validated."""

    pass


class RecordingError(ET2EEGError):
    """Primary recording is empty, epoched, or structurally invalid."""

    pass


class ParameterError(ET2EEGError):
    """Caller-supplied import parameters are inconsistent with the inputs."""

    pass


class SyncError(ET2EEGError):
    """Error during clock alignment or resampling."""

    pass


class NoEventsError(SyncError):
    """A recording carries no event list to synchronize on."""

    pass


class NoSharedEventsError(SyncError):
    """No event type occurs in both recordings."""

    pass


class AnchorEventError(SyncError):
    """Selected start/end anchor types are not shared by both recordings."""

    pass


class MergeError(ET2EEGError):
    """Resampled channels or events could not be merged into the recording."""

    pass


class OverweightError(ET2EEGError):
    """Event-window overweighting could not be performed."""

    pass
