"""Pytest configuration and shared fixtures for et2eeg tests.

Provides:
- Small hand-built EEG recordings and eye tracking bundles
- Synthetic EEG/ET pairs with known clock mapping
- Settings and TOML configuration builders
- Marker registration
"""

import os
from pathlib import Path

import numpy as np
import pytest

from et2eeg.domain import ChannelInfo, Event, EyeEventTable, EyeTrackerBundle, Recording
from synthetic import SyntheticRecordingPair, build_recording_pair, build_saccade_recording
from synthetic.scenarios import drift_jitter, happy_path, string_triggers


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests (may be slow)")
    config.addinivalue_line("markers", "unit: marks tests as fast unit tests")
    config.addinivalue_line("markers", "property: marks tests that check invariants over many inputs")


# ============================================================================
# Minimal Recordings
# ============================================================================


@pytest.fixture
def minimal_recording() -> Recording:
    """EEG: 2 channels x 1000 samples at 500 Hz, anchors 103@10 and 203@900."""
    return Recording(
        data=np.ones((2, 1000)),
        srate=500.0,
        chanlocs=[ChannelInfo(labels="Fz", type="EEG"), ChannelInfo(labels="Cz", type="EEG")],
        events=[Event(type=103, latency=10), Event(type=203, latency=900)],
        setname="minimal",
    )


@pytest.fixture
def minimal_bundle() -> EyeTrackerBundle:
    """ET: 2000 samples at 1000 Hz, anchors 103@20 and 203@1800, one constant column."""
    return EyeTrackerBundle(
        data=np.full((2000, 1), 5.0),
        colheader=["pupil"],
        events=[Event(type=103, latency=20), Event(type=203, latency=1800)],
        srate=1000.0,
    )


@pytest.fixture
def eye_event_tables() -> dict:
    """Saccade table with one left and one right eye event (ET sample latencies)."""
    return {
        "saccades": EyeEventTable(
            eye=["L", "R"],
            colheader=["latency", "duration", "amplitude"],
            data=np.array([[400.0, 40.0, 3.5], [1000.0, 30.0, 2.0]]),
        )
    }


# ============================================================================
# Synthetic Pairs
# ============================================================================


@pytest.fixture
def happy_pair():
    """Perfectly aligned EEG/ET pair (no drift, no jitter)."""
    return happy_path.make_pair()


@pytest.fixture
def drift_pair():
    """EEG/ET pair with clock drift and trigger jitter."""
    return drift_jitter.make_pair()


@pytest.fixture
def string_trigger_pair():
    """EEG/ET pair with "S 103"-style EEG triggers, eye events and messages."""
    return string_triggers.make_pair()


@pytest.fixture
def pair_factory():
    """Build a synthetic pair from keyword options."""

    def _factory(**options):
        return build_recording_pair(SyntheticRecordingPair(**options))

    return _factory


@pytest.fixture
def saccade_recording() -> Recording:
    """Continuous recording with four saccades and two fixations."""
    return build_saccade_recording()


# ============================================================================
# Configuration
# ============================================================================


@pytest.fixture
def config_toml(tmp_path: Path) -> Path:
    """Write a complete TOML configuration and return its path."""
    path = tmp_path / "et2eeg.toml"
    path.write_text(
        "\n".join(
            [
                "[sync]",
                "search_radius = 6",
                "do_regression = false",
                "import_eye_events = true",
                "",
                "[overweight]",
                'event_type = "L_saccade"',
                "timelim = [-0.01, 0.02]",
                "ow_proportion = 1.0",
                "",
                "[logging]",
                'level = "debug"',
            ]
        )
    )
    return path


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove ET2EEG_* variables so settings tests see only their own overrides."""
    for key in list(os.environ):
        if key.startswith("ET2EEG_"):
            monkeypatch.delenv(key, raising=False)

