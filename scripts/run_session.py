"""
Run one QLab session from the command line.

Solves the stationary problem for a potential family, then reports:
- energy levels (analytic or finite-difference)
- ground-state uncertainties and the Heisenberg check
- a few time-evolution frames of the chosen initial state
- rectangular-barrier transmission
- a qubit gate sequence

and optionally writes the JSON export snapshot.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from tabulate import tabulate

from qlab_solver import CustomPotential, QuantumEngine, SolveRequest
from qlab_solver.core.constants import DEFAULTS
from qlab_solver.core.parameters import POTENTIAL_FAMILIES
from qlab_solver.dynamics import INITIAL_STATE_PRESETS, PlaybackScheduler
from qlab_solver.qubit import QubitState, bloch_coordinates, parse_qubit
from qlab_solver.reporting import (
    build_snapshot,
    format_session_summary,
    format_spectrum_table,
    write_snapshot,
)
from qlab_solver.scattering import transmission_curve


def print_header(title):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


def print_evolution(engine, result, preset, n_frames, time_step):
    """Tabulate norm, <x> and peak current over a few playback ticks."""
    scheduler = PlaybackScheduler(
        lambda t: engine.evolve_preset(result, preset, t=t),
        time_step=time_step,
    )
    frames = scheduler.run(n_frames)
    x = result.domain.x

    table_data = []
    for frame in frames:
        mean_x = float(np.sum(x * frame.density) * frame.dx)
        table_data.append([
            f"{frame.t:.2f}",
            f"{frame.norm:.6f}",
            f"{mean_x:+.4f}",
            f"{np.max(np.abs(frame.current)):.4f}",
        ])

    headers = ["t", "Norm", "<x>", "max |J|"]
    print(tabulate(table_data, headers=headers, tablefmt="grid", disable_numparse=True))


def print_transmission(engine, energy, height, width):
    result = engine.tunnel(energy, height, width)
    print(f"  E = {energy}, V0 = {height}, a = {width}")
    print(f"  T = {result.T:.6f}, R = {result.R:.6f} ({result.regime})")

    energies, T = transmission_curve(height, width, np.linspace(0.5, 2 * height + 0.5, 9))
    table_data = [[f"{E:.2f}", f"{t:.6f}"] for E, t in zip(energies, T)]
    print(tabulate(table_data, headers=["E", "T(E)"], tablefmt="grid", disable_numparse=True))
    return result


def print_gates(engine, state, gates):
    table_data = [["(input)", str(state), *[f"{c:+.3f}" for c in bloch_coordinates(state)]]]
    for gate in gates:
        state = engine.apply_gate(state, gate)
        table_data.append([gate, str(state), *[f"{c:+.3f}" for c in bloch_coordinates(state)]])

    headers = ["Gate", "State", "Bloch x", "Bloch y", "Bloch z"]
    print(tabulate(table_data, headers=headers, tablefmt="grid", disable_numparse=True))


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="Solve a 1D potential and report its quantum properties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
---------
  # Default harmonic oscillator
  python scripts/run_session.py

  # Deep double well, superposition dynamics, exported snapshot
  python scripts/run_session.py --potential double --param1 4 --param2 80 \\
      --preset superposition --export session.json

  # User-defined potential on its own interval
  python scripts/run_session.py --potential custom --expression "0.1*x^4 - x^2" \\
      --xmin -6 --xmax 6
        """
    )

    parser.add_argument("--potential", choices=POTENTIAL_FAMILIES, default="harmonic",
                        help="Potential family (default: harmonic)")
    parser.add_argument("--param1", type=float, default=DEFAULTS["param1"],
                        help="First family parameter (omega, width, height, separation or charge)")
    parser.add_argument("--param2", type=float, default=DEFAULTS["param2"],
                        help="Second family parameter (depth)")
    parser.add_argument("--states", type=int, default=DEFAULTS["num_states"],
                        help="Number of eigenstates")
    parser.add_argument("--size", type=float, default=DEFAULTS["system_size"],
                        help="Width of the symmetric domain")
    parser.add_argument("--points", type=int, default=DEFAULTS["grid_points"],
                        help="Number of grid points")
    parser.add_argument("--method", choices=["lapack", "jacobi"], default="lapack",
                        help="Dense eigensolver for numerical families")

    parser.add_argument("--expression", default=DEFAULTS["custom_expression"],
                        help="V(x) for --potential custom")
    parser.add_argument("--xmin", type=float, default=DEFAULTS["custom_min"],
                        help="Left end of the custom interval")
    parser.add_argument("--xmax", type=float, default=DEFAULTS["custom_max"],
                        help="Right end of the custom interval")

    parser.add_argument("--preset", choices=INITIAL_STATE_PRESETS, default="superposition",
                        help="Initial state for the time-evolution table")
    parser.add_argument("--frames", type=int, default=5,
                        help="Number of playback ticks to report")

    parser.add_argument("--energy", type=float, default=DEFAULTS["scattering_energy"],
                        help="Incident energy for tunnelling")
    parser.add_argument("--barrier-height", type=float, default=DEFAULTS["barrier_height"])
    parser.add_argument("--barrier-width", type=float, default=DEFAULTS["barrier_width"])

    parser.add_argument("--qubit", default=None,
                        help='Initial qubit amplitudes, e.g. "1, 0" or "0.6, 0.8j"')
    parser.add_argument("--gates", default="hadamard,pauliZ,hadamard",
                        help="Comma-separated gate sequence")

    parser.add_argument("--export", default=None, help="Write the JSON snapshot to this path")
    parser.add_argument("--verbose", action="store_true", help="Print solver diagnostics")

    args = parser.parse_args(argv)

    custom = None
    if args.potential == "custom":
        custom = CustomPotential(args.expression, args.xmin, args.xmax)

    request = SolveRequest(
        family=args.potential,
        param1=args.param1,
        param2=args.param2,
        num_states=args.states,
        system_size=args.size,
        grid_points=args.points,
        custom=custom,
    )
    engine = QuantumEngine(method=args.method, verbose=args.verbose)

    print_header(f"STATIONARY STATES: {args.potential.upper()}")
    result = engine.solve(request)
    print(format_spectrum_table(result.spectrum))

    print_header("SESSION SUMMARY")
    transmission = engine.tunnel(args.energy, args.barrier_height, args.barrier_width)
    print(format_session_summary(result, transmission))

    print_header(f"TIME EVOLUTION: {args.preset}")
    print_evolution(engine, result, args.preset, args.frames, DEFAULTS["time_step"])

    print_header("BARRIER TRANSMISSION")
    print_transmission(engine, args.energy, args.barrier_height, args.barrier_width)

    print_header("QUBIT GATES")
    if args.qubit is not None:
        state = parse_qubit(args.qubit)
    else:
        state = QubitState.from_sequence(DEFAULTS["qubit"])
    gates = [g.strip() for g in args.gates.split(",") if g.strip()]
    print_gates(engine, state, gates)

    if args.export:
        path = write_snapshot(build_snapshot(result), args.export)
        print(f"\nSnapshot written to {path}")

    if result.used_fallback:
        print("\nWARNING: eigensolver failed; the states shown are placeholders")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
