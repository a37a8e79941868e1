"""Domain models for ET2EEG.

Pydantic-based models shared by the synchronization and overweighting
pipelines.

Package Structure:
-----------------
- recording: Recording aggregate, ChannelInfo, Event
- eyetracker: EyeTrackerBundle, EyeEventTable

Import Patterns:
---------------
from et2eeg.domain import Recording, Event, EyeTrackerBundle
"""

from et2eeg.domain.eyetracker import EyeEventTable, EyeTrackerBundle
from et2eeg.domain.recording import ChannelInfo, Event, Recording

__all__ = [
    "Event",
    "ChannelInfo",
    "Recording",
    "EyeEventTable",
    "EyeTrackerBundle",
]
