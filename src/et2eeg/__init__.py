"""ET2EEG: synchronize eye tracking with EEG and build overweighted ICA training data.

Packages:
- domain: Recording, Event, ChannelInfo, EyeTrackerBundle, EyeEventTable
- sync: event extraction, shared events, clock alignment, resampling, sync quality
- merge: EYE channels, eye movement events, tracker messages
- overweight: event-window overweighting
- pipeline: import_eyetracker orchestration
- config: TOML settings with environment overrides
- utils: logging, timing and diagnostic file output
"""

from et2eeg.domain import ChannelInfo, Event, EyeEventTable, EyeTrackerBundle, Recording
from et2eeg.exceptions import ET2EEGError
from et2eeg.overweight import overweight_events
from et2eeg.pipeline import ImportParams, ImportResult, import_eyetracker

__version__ = "0.1.0"

__all__ = [
    "ET2EEGError",
    "Event",
    "ChannelInfo",
    "Recording",
    "EyeEventTable",
    "EyeTrackerBundle",
    "ImportParams",
    "ImportResult",
    "import_eyetracker",
    "overweight_events",
]
