"""Example: Synchronizing synthetic eye tracking data with an EEG recording.

This script generates EEG/ET pairs with known clock relationships, imports
the eye track into the EEG and reports sync quality for the two-point and
regression mappings.

Usage:
    python examples/sync_eyetracker.py
"""

from pathlib import Path
import sys

# Add project root to path so we can import synthetic
sys.path.insert(0, str(Path(__file__).parent.parent))

from et2eeg import ImportParams, import_eyetracker
from et2eeg.config import load_settings
from et2eeg.sync import write_sync_quality
from et2eeg.utils import configure_logging
from synthetic.scenarios import drift_jitter, string_triggers


def example_1_two_point_vs_regression():
    """Example 1: Compare mappings on a drifting, jittered eye track."""
    print("\n=== Example 1: Two-point vs Regression ===")

    pair = drift_jitter.make_pair(clock_drift_ppm=300.0, jitter_samples=3)
    print(f"✓ Generated pair: true slope {pair.true_slope:.8f}, true intercept {pair.true_intercept:.2f}")

    for do_regression in (False, True):
        params = ImportParams(start_event=103, end_event=203, import_columns=[1, 2], do_regression=do_regression)
        result = import_eyetracker(pair.recording, pair.bundle, params)
        stats = result["stats"]
        print(f"  - {stats.method:>10}: slope {stats.slope:.8f}, intercept {stats.intercept:.2f}")
        print(f"    mean |error| {stats.mean_abs_error_samples:.3f} samples ({stats.mean_abs_error_ms:.3f} ms)")
        print(f"    within 1 sample: {stats.within_1_sample}/{stats.n_pairs}")


def example_2_full_import(out_dir: Path):
    """Example 2: Import channels, eye events and messages; save sync quality."""
    print("\n=== Example 2: Full Import ===")

    settings = load_settings()
    pair = string_triggers.make_pair()
    params = ImportParams.from_settings(
        settings,
        start_event=103,
        end_event=203,
        import_columns=[1, 2, 3],
        import_eye_events=True,
    )

    result = import_eyetracker(pair.recording, pair.bundle, params)
    merged = result["recording"]

    print(f"✓ Channels: {[c.labels for c in merged.chanlocs]}")
    print(f"  - Eye events: {merged.etc['eyetracker_eyeevents_imported']}")
    print(f"  - Messages: {len(merged.etc['eyetracker_othermessages'])}")
    print(f"  - History: {result['history']}")

    path = out_dir / "syncquality.csv"
    write_sync_quality(result["sync_quality"], path)
    print(f"✓ Sync quality written to: {path}")


def main():
    """Run all examples."""
    configure_logging("WARNING")

    print("=" * 70)
    print("Eye Tracker Synchronization Examples")
    print("=" * 70)

    example_1_two_point_vs_regression()
    example_2_full_import(Path("temp/example_sync"))

    print("\n" + "=" * 70)
    print("✓ All examples completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
