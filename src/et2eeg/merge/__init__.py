"""Merge synchronized eye tracking data into an EEG recording.

Appends resampled ET columns as EYE channels and, optionally, tracker
eye movement events and free-text messages. Every function returns a new
Recording.
"""

from .channels import EYE_CHANNEL_TYPE, append_eye_channels, sanitize_channel_label, validate_channel_selection
from .events import attach_other_messages, eye_event_label, import_eye_events

__all__ = [
    "EYE_CHANNEL_TYPE",
    "sanitize_channel_label",
    "validate_channel_selection",
    "append_eye_channels",
    "eye_event_label",
    "import_eye_events",
    "attach_other_messages",
]
