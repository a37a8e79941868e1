"""Unit tests for merging EYE channels, eye movement events and messages."""

import numpy as np
import pytest

from et2eeg.domain import Event, EyeEventTable, Recording
from et2eeg.exceptions import MergeError, ParameterError, RecordingError
from et2eeg.merge import (
    EYE_CHANNEL_TYPE,
    append_eye_channels,
    attach_other_messages,
    eye_event_label,
    import_eye_events,
    sanitize_channel_label,
    validate_channel_selection,
)
from et2eeg.sync import AffineMapping

pytestmark = pytest.mark.unit

HALF_RATE = AffineMapping(slope=0.5, intercept=0.0, method="two_point")


class TestSanitizeChannelLabel:
    """Tests for sanitize_channel_label."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("gaze_x [px]", "gaze-x (px)"),
            ("L_GAZE_X", "L-GAZE-X"),
            ("pupil size", "pupil-size"),
            ("pupil", "pupil"),
        ],
    )
    def test_Should_ReplaceProblemCharacters_When_Sanitizing(self, raw, expected):
        assert sanitize_channel_label(raw) == expected

    @pytest.mark.parametrize("raw", ["gaze_x [px]", "a b_c [d] e", "x  (y)"])
    def test_Should_BeIdempotent_When_AppliedTwice(self, raw):
        once = sanitize_channel_label(raw)
        assert sanitize_channel_label(once) == once


class TestValidateChannelSelection:
    """Tests for validate_channel_selection."""

    def test_Should_Raise_When_NoColumns(self):
        with pytest.raises(ParameterError, match="No eye tracking columns"):
            validate_channel_selection([], [], 3)

    def test_Should_Raise_When_ColumnOutOfRange(self):
        with pytest.raises(ParameterError) as exc_info:
            validate_channel_selection([0, 3], ["a", "b"], 3)
        assert exc_info.value.context["bad_columns"] == [3]

    def test_Should_Raise_When_LabelCountMismatch(self):
        with pytest.raises(ParameterError, match="channel labels"):
            validate_channel_selection([0, 1], ["a"], 3)


class TestAppendEyeChannels:
    """Tests for append_eye_channels."""

    def test_Should_AppendZeroPaddedChannels_When_Merging(self, minimal_recording: Recording):
        resampled = np.column_stack([np.full(891, 5.0), np.full(891, 7.0)])

        merged = append_eye_channels(minimal_recording, resampled, [1], ["gaze_x [px]"], 10, 900)

        assert merged.nbchan == 3
        eye = merged.data[2]
        assert np.all(eye[10:901] == 7.0)
        assert np.all(eye[:10] == 0.0)
        assert np.all(eye[901:] == 0.0)
        assert merged.chanlocs[2].labels == "gaze-x (px)"
        assert merged.chanlocs[2].type == EYE_CHANNEL_TYPE
        assert merged.chanlocs[2].ref == ""

    def test_Should_LeaveInputUntouched_When_Merging(self, minimal_recording: Recording):
        append_eye_channels(minimal_recording, np.ones((891, 1)), [0], ["x"], 10, 900)
        assert minimal_recording.nbchan == 2
        assert len(minimal_recording.chanlocs) == 2

    def test_Should_CreateDefaultLabels_When_RecordingHasNoChanlocs(self):
        rec = Recording(data=np.zeros((2, 20)), srate=100.0)
        merged = append_eye_channels(rec, np.ones((11, 1)), [0], ["pupil"], 5, 15)
        assert [c.labels for c in merged.chanlocs] == ["1", "2", "pupil"]

    def test_Should_Raise_When_RowsDoNotMatchRange(self, minimal_recording: Recording):
        with pytest.raises(MergeError, match="rows"):
            append_eye_channels(minimal_recording, np.ones((10, 1)), [0], ["x"], 10, 900)

    def test_Should_Raise_When_RecordingEpoched(self):
        rec = Recording(data=np.zeros((1, 20, 2)), srate=100.0)
        with pytest.raises(RecordingError):
            append_eye_channels(rec, np.ones((11, 1)), [0], ["x"], 5, 15)


class TestImportEyeEvents:
    """Tests for import_eye_events and eye_event_label."""

    def test_Should_BuildCompositeLabel_When_Called(self):
        assert eye_event_label("L", "saccades") == "L_saccade"
        assert eye_event_label("R", "fixations") == "R_fixation"
        assert eye_event_label("L", "blink") == "L_blink"

    def test_Should_MapOnsetsAndDurations_When_Importing(self, minimal_recording: Recording, eye_event_tables):
        merged, counts = import_eye_events(minimal_recording, eye_event_tables, HALF_RATE, 10, 900)

        assert counts == {"L_saccade": 1, "R_saccade": 1}
        imported = [e for e in merged.events if e.type in counts]
        assert [(e.type, e.latency, e.duration) for e in imported] == [("L_saccade", 200, 20), ("R_saccade", 500, 15)]
        assert imported[0].extra == {"amplitude": 3.5}

    def test_Should_LeaveDurationEmpty_When_TableHasNoDurationColumn(self, minimal_recording: Recording):
        tables = {
            "blinks": EyeEventTable(eye=["L", "L"], colheader=["latency", "posx"], data=np.array([[600.0, 12.5], [800.0, 7.0]]))
        }

        merged, counts = import_eye_events(minimal_recording, tables, HALF_RATE, 10, 900)

        imported = [e for e in merged.events if e.type == "L_blink"]
        assert counts == {"L_blink": 2}
        assert [(e.latency, e.duration, e.extra) for e in imported] == [(300, None, {"posx": 12.5}), (400, None, {"posx": 7.0})]

    def test_Should_SortEvents_When_Importing(self, minimal_recording: Recording, eye_event_tables):
        merged, _ = import_eye_events(minimal_recording, eye_event_tables, HALF_RATE, 10, 900)
        latencies = [e.latency for e in merged.events]
        assert latencies == sorted(latencies)
        assert len(merged.events) == 4
        assert len(minimal_recording.events) == 2

    def test_Should_DropEvents_When_OutsideSyncRange(self, minimal_recording: Recording, eye_event_tables):
        _, counts = import_eye_events(minimal_recording, eye_event_tables, HALF_RATE, 300, 900)
        assert counts == {"L_saccade": 0, "R_saccade": 1}


class TestAttachOtherMessages:
    """Tests for attach_other_messages."""

    def test_Should_StoreMessages_When_Present(self, minimal_recording: Recording):
        merged = attach_other_messages(minimal_recording, ["TRIALID 1"])
        assert merged.etc["eyetracker_othermessages"] == ["TRIALID 1"]
        assert "eyetracker_othermessages" not in minimal_recording.etc

    def test_Should_ReturnSameRecording_When_NoMessages(self, minimal_recording: Recording):
        assert attach_other_messages(minimal_recording, None) is minimal_recording

    def test_Should_KeepExistingEvents_When_Attaching(self, minimal_recording: Recording):
        merged = attach_other_messages(minimal_recording, [])
        assert merged.events == [Event(type=103, latency=10), Event(type=203, latency=900)]
