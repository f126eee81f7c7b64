"""
Physical constants and session defaults for QLab Solver.

Units: ℏ = m = 1 throughout the engine.

Session defaults (potential parameters, grid size, playback step, scattering
set-up) are loaded from defaults.json if available, otherwise the built-in
values below are used.
"""

import json
import warnings
from pathlib import Path
from typing import Dict, Any

# =============================================================================
# Natural Units
# =============================================================================

HBAR: float = 1.0
MASS: float = 1.0

# Resonance window for |E - V0| in the tunnelling formulas
RESONANCE_EPSILON: float = 1e-10

# Softening length of the Coulomb-like potential -Z/(|x| + a)
COULOMB_SOFTENING: float = 0.1

# Lower bound of the Heisenberg relation ΔX·ΔP ≥ ℏ/2
HEISENBERG_BOUND: float = 0.5 * HBAR

# =============================================================================
# Load Session Defaults from JSON
# =============================================================================

# Path to defaults.json (same directory as this file)
_DEFAULTS_JSON_PATH = Path(__file__).parent / "defaults.json"

# Built-in defaults (used if defaults.json is missing or unreadable)
_DEFAULT_SETTINGS: Dict[str, Any] = {
    "param1": 1.0,  # ω, well width, step height, separation or charge
    "param2": 1.0,  # well depth (finite / double well)
    "num_states": 5,
    "system_size": 10.0,  # width of the symmetric domain [-L/2, L/2]
    "grid_points": 150,
    "infinite_wall": 1000.0,  # finite stand-in for +∞ outside the box
    "time_step": 0.05,  # simulated time advanced per playback tick
    "playback_speed": 1.0,
    "scattering_energy": 5.0,
    "barrier_height": 8.0,
    "barrier_width": 1.0,
    "custom_expression": "0.5*x**2",
    "custom_min": -5.0,
    "custom_max": 5.0,
    "qubit": [1.0, 0.0],
}


def load_defaults_from_json(path: Path = None) -> Dict[str, Any]:
    """
    Load session defaults from defaults.json.

    If the file doesn't exist or is invalid, returns the built-in values.

    Args:
        path: Alternative JSON file to read. Defaults to the packaged file.

    Returns:
        Dictionary with setting names as keys and values.
    """
    json_path = Path(path) if path is not None else _DEFAULTS_JSON_PATH
    if json_path.exists():
        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
            # Merge with built-ins to ensure all keys exist
            result = _DEFAULT_SETTINGS.copy()
            result.update(loaded)
            return result
        except (json.JSONDecodeError, IOError) as e:
            warnings.warn(
                f"Failed to load {json_path.name}: {e}. Using built-in defaults.",
                RuntimeWarning,
            )
            return _DEFAULT_SETTINGS.copy()
    return _DEFAULT_SETTINGS.copy()


def save_defaults_to_json(settings: Dict[str, Any], path: Path = None) -> None:
    """
    Save session defaults to defaults.json.

    Args:
        settings: Dictionary with setting names and values.
        path: Alternative JSON file to write. Defaults to the packaged file.
    """
    json_path = Path(path) if path is not None else _DEFAULTS_JSON_PATH
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(settings, f, indent=4)


def get_defaults_json_path() -> Path:
    """Return the path to the defaults.json file."""
    return _DEFAULTS_JSON_PATH


# Load defaults at module import time
DEFAULTS: Dict[str, Any] = load_defaults_from_json()

DEFAULT_GRID_POINTS: int = int(DEFAULTS["grid_points"])
DEFAULT_SYSTEM_SIZE: float = float(DEFAULTS["system_size"])
DEFAULT_NUM_STATES: int = int(DEFAULTS["num_states"])
INFINITE_WALL: float = float(DEFAULTS["infinite_wall"])
DEFAULT_TIME_STEP: float = float(DEFAULTS["time_step"])
