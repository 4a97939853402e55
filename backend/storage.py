"""
Save and restore the calculator between runs.

The snapshot is a small JSON document. Registers and the operation log are
not part of it, so a restored calculator always starts at zero.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from backend.engine import CalculatorEngine

logger = logging.getLogger(__name__)

STATE_FILE_ENV = "CALCULATOR_STATE_FILE"
DEFAULT_STATE_FILE = Path.home() / ".calculator" / "state.json"

PathLike = Union[str, Path]


def default_state_path() -> Path:
    """State file location; CALCULATOR_STATE_FILE overrides the default."""
    override = os.environ.get(STATE_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_STATE_FILE


def load_engine(path: Optional[PathLike] = None) -> CalculatorEngine:
    """
    Build the engine from the saved snapshot at `path`.
    A missing, unreadable or malformed file gives a fresh engine.
    """
    path = Path(path) if path is not None else default_state_path()
    if not path.exists():
        logger.info("No saved state at %s, starting fresh", path)
        return CalculatorEngine()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read saved state from %s, using defaults: %s", path, e)
        return CalculatorEngine()

    logger.info("Loaded state from %s", path)
    return CalculatorEngine.from_snapshot(data)


def save_engine(engine: CalculatorEngine, path: Optional[PathLike] = None) -> Path:
    path = Path(path) if path is not None else default_state_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(engine.to_snapshot(), indent=2), encoding="utf-8")
    logger.info("Saved state to %s", path)
    return path
