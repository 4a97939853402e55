#!/usr/bin/env python3
"""
Entry point for the Calculator application.

Run:

    python main.py [--log-level DEBUG] [--state-file PATH] [--no-persist]

The state file defaults to ~/.calculator/state.json (or CALCULATOR_STATE_FILE);
the log level defaults to INFO (or CALCULATOR_LOG_LEVEL).
"""
import argparse
import logging
import os
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `backend` and `frontend` import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine import CalculatorEngine
from backend.storage import default_state_path, load_engine

LOG_LEVEL_ENV = "CALCULATOR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Four-function pocket calculator")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        default=os.environ.get(LOG_LEVEL_ENV, "INFO").upper(),
                        help="logging verbosity (default: %(default)s)")
    parser.add_argument("--state-file", type=Path, default=None,
                        help="where the calculator snapshot is kept")
    parser.add_argument("--no-persist", action="store_true",
                        help="do not load or save the snapshot")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level, logging.INFO), format=LOG_FORMAT)

    if args.no_persist:
        state_path = None
        engine = CalculatorEngine()
    else:
        state_path = args.state_file or default_state_path()
        engine = load_engine(state_path)

    # Imported late so --help works without a display
    from frontend.gui import CalculatorGUI

    app = CalculatorGUI(engine=engine, state_path=state_path)
    app.mainloop()


if __name__ == "__main__":
    main()
