"""
Export snapshot and text summaries of a solve.

The snapshot is a plain JSON document:

    {
        "parameters": {...},
        "potential": "<family>",
        "customPotential": {"function", "min", "max"} or null,
        "quantumProperties": {"deltaX", "deltaP", "uncertaintyProduct"},
        "usedFallback": false,
        "data": {"x", "wavefunctions", "energies", "potential"}
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tabulate import tabulate

from qlab_solver.core.engine import SolveResult
from qlab_solver.eigensolver.result import Spectrum
from qlab_solver.scattering.tunneling import TransmissionResult


def build_snapshot(result: SolveResult) -> Dict[str, Any]:
    """
    Serializable snapshot of a solve result.

    Args:
        result: Output of QuantumEngine.solve.

    Returns:
        Dictionary of plain Python types (json.dumps-ready).
    """
    request = result.request
    custom = request.custom_potential
    spectrum = result.spectrum

    return {
        "parameters": {
            "param1": float(request.param1),
            "param2": float(request.param2),
            "numStates": int(request.num_states),
            "systemSize": float(request.system_size),
            "gridPoints": int(request.grid_points),
        },
        "potential": request.family,
        "customPotential": None if custom is None else {
            "function": custom.expression,
            "min": float(custom.x_min),
            "max": float(custom.x_max),
        },
        "quantumProperties": result.properties.to_dict(),
        "usedFallback": bool(spectrum.used_fallback),
        "data": {
            "x": result.domain.x.tolist(),
            "wavefunctions": spectrum.wavefunctions.tolist(),
            "energies": spectrum.energies.tolist(),
            "potential": result.potential.tolist(),
        },
    }


def snapshot_to_json(snapshot: Dict[str, Any], indent: int = 2) -> str:
    return json.dumps(snapshot, indent=indent)


def write_snapshot(snapshot: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write the snapshot as JSON and return the path written."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(snapshot, f, indent=2)
    return path


def format_spectrum_table(spectrum: Spectrum, tablefmt: str = "grid") -> str:
    """Energy levels as a text table."""
    rows = [
        [n, float(energy), float(energy - spectrum.energies[0])]
        for n, energy in enumerate(spectrum.energies)
    ]
    table = tabulate(
        rows, headers=["n", "E_n", "E_n - E_0"], tablefmt=tablefmt, floatfmt=".6f"
    )
    if spectrum.used_fallback:
        table += "\nWARNING: placeholder spectrum (eigensolver failed)"
    return table


def format_session_summary(
    result: SolveResult,
    transmission: Optional[TransmissionResult] = None,
    tablefmt: str = "grid",
) -> str:
    """Parameters, method and uncertainty metrics as a two-column table."""
    request = result.request
    props = result.properties
    rows: List[List[Any]] = [
        ["Potential", request.family],
        ["param1", request.param1],
        ["param2", request.param2],
        ["States", result.spectrum.n_states],
        ["Grid points", result.domain.N],
        ["Method", result.spectrum.method],
        ["Ground-state energy", f"{result.spectrum.ground_state_energy:.6f}"],
        ["dX", f"{props.delta_x:.4f}"],
        ["dP", f"{props.delta_p:.4f}"],
        ["dX*dP", f"{props.uncertainty_product:.4f}"],
        ["Heisenberg (>= 0.5)", "OK" if props.satisfies_heisenberg else "VIOLATED"],
    ]
    if transmission is not None:
        rows.extend([
            ["Transmission T", f"{transmission.T:.4f}"],
            ["Reflection R", f"{transmission.R:.4f}"],
            ["Regime", transmission.regime],
        ])
    return tabulate(
        rows, headers=["Quantity", "Value"], tablefmt=tablefmt, disable_numparse=True
    )
