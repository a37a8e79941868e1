"""Unit tests for import_eyetracker orchestration.

Uses the minimal EEG/ET fixtures: EEG 1000 samples at 500 Hz with anchors
at 10 and 900, ET 2000 samples at 1000 Hz with anchors at 20 and 1800.
"""

from types import SimpleNamespace

import numpy as np
import pytest

from et2eeg.config import Settings, SyncConfig
from et2eeg.domain import Event, EyeTrackerBundle, Recording
from et2eeg.exceptions import AnchorEventError, NoEventsError, NoSharedEventsError, ParameterError, RecordingError
from et2eeg.pipeline import ImportParams, format_history, import_eyetracker

pytestmark = pytest.mark.unit


@pytest.fixture
def params() -> ImportParams:
    return ImportParams(start_event=103, end_event=203, import_columns=[0])


class TestImportParams:
    """Tests for ImportParams."""

    def test_Should_ApplyDefaults_When_OnlyRequiredGiven(self, params: ImportParams):
        assert params.do_regression is True
        assert params.search_radius == 4
        assert params.channel_labels is None
        assert params.import_eye_events is False

    def test_Should_RejectEmptyColumns_When_Created(self):
        with pytest.raises(ValueError):
            ImportParams(start_event=1, end_event=2, import_columns=[])

    def test_Should_TakeFlagsFromSettings_When_BuiltFromSettings(self):
        settings = Settings(sync=SyncConfig(search_radius=7, do_regression=False))
        params = ImportParams.from_settings(settings, start_event=1, end_event=2, import_columns=[0])
        assert params.search_radius == 7
        assert params.do_regression is False

    def test_Should_RenderReproducibleCall_When_FormattingHistory(self, params: ImportParams):
        history = format_history(params)
        assert history.startswith("recording = import_eyetracker(recording, bundle, ImportParams(")
        assert "start_event=103" in history
        assert "import_columns=[0]" in history


class TestImportEyetracker:
    """Tests for import_eyetracker on the minimal fixtures."""

    def test_Should_MergeConstantChannel_When_Synchronizing(self, minimal_recording, minimal_bundle, params):
        result = import_eyetracker(minimal_recording, minimal_bundle, params)

        merged = result["recording"]
        assert merged.nbchan == 3
        assert merged.chanlocs[2].labels == "pupil"
        assert merged.chanlocs[2].type == "EYE"
        assert np.all(merged.data[2, 10:901] == 5.0)
        assert np.all(merged.data[2, :10] == 0.0)
        assert np.all(merged.data[2, 901:] == 0.0)
        assert result["mapping"].slope == pytest.approx(0.5)
        assert result["cancelled"] is False

    def test_Should_StoreSyncQuality_When_Synchronizing(self, minimal_recording, minimal_bundle, params):
        result = import_eyetracker(minimal_recording, minimal_bundle, params)

        frame = result["recording"].etc["eyetracker_syncquality"]
        assert len(frame) == 2
        assert frame["error_samples"].abs().max() == pytest.approx(0.0, abs=1e-9)
        assert result["stats"].n_pairs == 2
        assert "ImportParams(" in result["history"]

    def test_Should_NotModifyInput_When_Synchronizing(self, minimal_recording, minimal_bundle, params):
        import_eyetracker(minimal_recording, minimal_bundle, params)
        assert minimal_recording.nbchan == 2
        assert minimal_recording.etc == {}

    def test_Should_UseCustomLabels_When_Given(self, minimal_recording, minimal_bundle):
        params = ImportParams(start_event=103, end_event=203, import_columns=[0], channel_labels=["pupil_size [au]"])
        result = import_eyetracker(minimal_recording, minimal_bundle, params)
        assert result["recording"].chanlocs[2].labels == "pupil-size (au)"

    def test_Should_RaiseRecordingError_When_RecordingEmpty(self, minimal_bundle, params):
        empty = Recording(data=np.zeros((0, 0)), srate=500.0)
        with pytest.raises(RecordingError, match="must be loaded"):
            import_eyetracker(empty, minimal_bundle, params)

    def test_Should_RaiseRecordingError_When_RecordingEpoched(self, minimal_bundle, params):
        epoched = Recording(data=np.zeros((1, 100, 2)), srate=500.0, events=[Event(type=103, latency=1)])
        with pytest.raises(RecordingError, match="continuous"):
            import_eyetracker(epoched, minimal_bundle, params)

    def test_Should_RaiseNoEvents_When_BundleHasNoEvents(self, minimal_recording, params):
        bundle = EyeTrackerBundle(data=np.zeros((10, 1)), colheader=["a"])
        with pytest.raises(NoEventsError):
            import_eyetracker(minimal_recording, bundle, params)

    def test_Should_RaiseNoShared_When_CodesDisjoint(self, minimal_recording):
        bundle = EyeTrackerBundle(data=np.zeros((10, 1)), colheader=["a"], events=[Event(type=1, latency=0)])
        with pytest.raises(NoSharedEventsError):
            import_eyetracker(minimal_recording, bundle, ImportParams(start_event=1, end_event=2, import_columns=[0]))

    def test_Should_RaiseAnchorError_When_AnchorNotShared(self, minimal_recording, minimal_bundle):
        params = ImportParams(start_event=103, end_event=999, import_columns=[0])
        with pytest.raises(AnchorEventError):
            import_eyetracker(minimal_recording, minimal_bundle, params)

    def test_Should_RaiseParameterError_When_ColumnOutOfRange(self, minimal_recording, minimal_bundle):
        params = ImportParams(start_event=103, end_event=203, import_columns=[0, 4])
        with pytest.raises(ParameterError):
            import_eyetracker(minimal_recording, minimal_bundle, params)

    def test_Should_RaiseParameterError_When_NoParamsAndNoResolver(self, minimal_recording, minimal_bundle):
        with pytest.raises(ParameterError, match="resolver"):
            import_eyetracker(minimal_recording, minimal_bundle)


class TestResolverAndPlotter:
    """Tests for the external parameter resolver and plotter."""

    def test_Should_ReturnUnchanged_When_ResolverCancels(self, minimal_recording, minimal_bundle):
        result = import_eyetracker(minimal_recording, minimal_bundle, resolver=lambda *args: None)

        assert result["cancelled"] is True
        assert result["recording"] is minimal_recording
        assert result["history"] == ""
        assert result["mapping"] is None

    def test_Should_PassSharedTypesAndExamples_When_Resolving(self, minimal_recording, minimal_bundle, params):
        seen = {}

        def resolver(shared_types, primary_counts, secondary_counts, colheader, example_data, has_eye_events):
            seen.update(
                shared=shared_types.tolist(),
                primary=primary_counts,
                colheader=colheader,
                example=example_data,
                eye=has_eye_events,
            )
            return params

        import_eyetracker(minimal_recording, minimal_bundle, resolver=resolver)

        assert seen == {
            "shared": [103, 203],
            "primary": {103: 1, 203: 1},
            "colheader": ["pupil"],
            "example": [5.0],
            "eye": False,
        }

    def test_Should_FillMissingFlagsFromSettings_When_ResolverReturnsPartial(self, minimal_recording, minimal_bundle):
        partial = SimpleNamespace(start_event=103, end_event=203, import_columns=[0])
        settings = Settings(sync=SyncConfig(do_regression=False))

        result = import_eyetracker(minimal_recording, minimal_bundle, resolver=lambda *args: partial, settings=settings)

        assert result["mapping"].method == "two_point"

    def test_Should_CallPlotter_When_PlotRequested(self, minimal_recording, minimal_bundle):
        calls = []
        params = ImportParams(start_event=103, end_event=203, import_columns=[0], plot_fig=True)

        import_eyetracker(minimal_recording, minimal_bundle, params, plotter=lambda rows, mapping: calls.append(len(rows)))

        assert calls == [2]

    def test_Should_SkipPlotter_When_PlotNotRequested(self, minimal_recording, minimal_bundle, params):
        calls = []
        import_eyetracker(minimal_recording, minimal_bundle, params, plotter=lambda rows, mapping: calls.append(1))
        assert calls == []
