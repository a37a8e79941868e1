"""Example: Building an ICA training set with overweighted saccades.

Imports eye tracker saccades into a synthetic EEG recording, then appends
repeated saccade-onset windows so that ICA sees more eye-movement data.
Parameters come from the [overweight] section of the settings.

Usage:
    python examples/overweight_saccades.py [config.toml]
"""

from pathlib import Path
import sys

# Add project root to path so we can import synthetic
sys.path.insert(0, str(Path(__file__).parent.parent))

from et2eeg import ImportParams, import_eyetracker, overweight_events
from et2eeg.config import load_settings
from et2eeg.utils import configure_logging, time_block
from synthetic.scenarios import string_triggers


def main(config_path=None):
    """Import saccades and overweight them."""
    settings = load_settings(config_path)
    configure_logging(settings.logging.level, settings.logging.structured)

    pair = string_triggers.make_pair(n_events=30, n_eye_events=25)
    params = ImportParams(start_event=103, end_event=203, import_columns=[1, 2], import_eye_events=True)
    merged = import_eyetracker(pair.recording, pair.bundle, params)["recording"]

    cfg = settings.overweight
    # Imported saccades are split by eye; use the left eye unless configured otherwise
    event_type = cfg.event_type if cfg.event_type != "saccade" else "L_saccade"

    with time_block("Overweighting"):
        training = overweight_events(merged, event_type, cfg.timelim, cfg.ow_proportion, cfg.remove_mean)

    info = training.etc["overweight"]
    print(f"✓ {info['n_windows']} '{event_type}' window(s) of {list(cfg.timelim)} s")
    print(f"  - Original samples: {info['n_original_samples']}")
    print(f"  - Appended samples: {info['n_appended_samples']}")
    print(f"  - Training set: {training.nbchan} channels x {training.pnts} samples")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
