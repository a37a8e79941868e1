"""Unit tests for canonical event-code extraction and shared-type discovery."""

import numpy as np
import pytest

from et2eeg.domain import Event
from et2eeg.sync import (
    AnchorEventError,
    NoEventsError,
    NoSharedEventsError,
    count_event_types,
    extract_event_codes,
    find_boundary_events,
    find_shared_types,
    parse_event_code,
    validate_anchor_types,
)

pytestmark = pytest.mark.unit


class TestParseEventCode:
    """Tests for parse_event_code."""

    @pytest.mark.parametrize(
        "event_type,expected",
        [
            (103, 103),
            ("S 103", 103),
            ("S  11", 11),
            ("R234", 234),
            ("boundary", None),
        ],
    )
    def test_Should_ExtractFirstDigitRun_When_Parsing(self, event_type, expected):
        assert parse_event_code(event_type) == expected


class TestExtractEventCodes:
    """Tests for extract_event_codes."""

    def test_Should_PreserveOrder_When_NumericTypes(self):
        events = [Event(type=5, latency=30), Event(type=3, latency=10)]
        codes = extract_event_codes(events)
        assert codes.dtype == np.int64
        assert codes.tolist() == [[5, 30], [3, 10]]

    def test_Should_DropDigitlessStrings_When_StringTypesPresent(self):
        events = [
            Event(type="boundary", latency=0),
            Event(type="S 103", latency=10),
            Event(type=203, latency=900),
        ]
        codes = extract_event_codes(events)
        assert codes.tolist() == [[103, 10], [203, 900]]

    def test_Should_ReturnEmptyTable_When_NoNumericCodes(self):
        codes = extract_event_codes([Event(type="boundary", latency=0)])
        assert codes.shape == (0, 2)

    def test_Should_RaiseNoEvents_When_EventListEmpty(self):
        with pytest.raises(NoEventsError, match="eye tracking"):
            extract_event_codes([], "eye tracking data")


class TestBoundaryEvents:
    """Tests for find_boundary_events."""

    def test_Should_ReturnOnlyBoundaries_When_Mixed(self):
        events = [Event(type="boundary", latency=0, duration=5), Event(type=1, latency=3)]
        found = find_boundary_events(events)
        assert len(found) == 1
        assert found[0].duration == 5


class TestSharedTypes:
    """Tests for find_shared_types and helpers."""

    def test_Should_ReturnSortedIntersection_When_TypesOverlap(self):
        primary = np.array([[203, 900], [103, 10], [11, 50]])
        secondary = np.array([[103, 20], [77, 30], [203, 1800]])
        shared = find_shared_types(primary, secondary)
        assert shared.tolist() == [103, 203]

    def test_Should_RaiseWithContext_When_NoOverlap(self):
        primary = np.array([[1, 0]])
        secondary = np.array([[2, 0]])
        with pytest.raises(NoSharedEventsError) as exc_info:
            find_shared_types(primary, secondary)
        assert exc_info.value.context == {"primary_types": [1], "secondary_types": [2]}

    def test_Should_CountOccurrences_When_TypesGiven(self):
        codes = np.array([[11, 0], [11, 5], [12, 9]])
        assert count_event_types(codes, [11, 12, 13]) == {11: 2, 12: 1, 13: 0}

    def test_Should_Pass_When_AnchorsShared(self):
        validate_anchor_types(103, 203, np.array([103, 203]))

    def test_Should_RaiseAnchorError_When_AnchorNotShared(self):
        with pytest.raises(AnchorEventError) as exc_info:
            validate_anchor_types(103, 204, np.array([103, 203]))
        assert exc_info.value.context["missing"] == [204]
