"""CLI main entry point."""

import argparse
import json
import sys
from pathlib import Path

import yaml

from manifold_sim.io.messages import sample_to_message
from manifold_sim.physics.integrators import INTEGRATORS, get_integrator
from manifold_sim.physics.simulator import Simulator
from manifold_sim.physics.state import State
from manifold_sim.presets import PRESETS, get_preset
from manifold_sim.utils.config import (
    METRIC_KINDS,
    POTENTIAL_KINDS,
    Config,
    canonical_metric_kind,
    canonical_potential_kind,
    load_config,
    save_config,
)


def build_setup(args):
    """Resolve configuration and initial state from a file, a preset and overrides.

    Precedence, lowest first: preset, config file, command-line flags.
    """
    if args.preset is not None:
        config, state = get_preset(args.preset).generate()
    else:
        config, state = Config(), State([0.0, 0.0], [0.0, 0.0])

    if args.config is not None:
        config = load_config(args.config)

    overrides = {}
    if args.metric is not None:
        overrides['metric_kind'] = args.metric
    if args.potential is not None:
        overrides['potential_kind'] = args.potential
    if args.constraint is not None:
        overrides['constraint_expr'] = args.constraint
    if args.repulsive:
        overrides['is_repulsive'] = True
    if args.mass is not None:
        overrides['mass'] = args.mass
    if args.mu is not None:
        overrides['coupling_mu'] = args.mu
    if args.dq is not None:
        overrides['dq'] = args.dq
    if overrides:
        config = config.replace(**overrides)

    q = state.q if args.q is None else args.q
    v = state.v if args.v is None else args.v
    return config, State(q, v)


def write_log(path: str, simulator: Simulator):
    """Write the energy log and final state as JSON or YAML."""
    path = Path(path)
    q, v, time, steps = simulator.get_state()
    data = {
        'config': simulator.config.to_dict(),
        'time': time,
        'steps': steps,
        'finalState': {'q': q.tolist(), 'v': v.tolist()},
        'referenceEnergy': simulator.reference_energy,
        'faults': list(simulator.faults),
        'energyLog': [sample_to_message(sample) for sample in simulator.energy_log],
    }
    with open(path, 'w') as f:
        if path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def run_simulation(args):
    """Run a simulation."""
    try:
        config, state = build_setup(args)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        sys.exit(1)

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Configuration saved to {args.save_config}")

    integrator = get_integrator(args.integrator)
    sim = Simulator(
        config,
        integrator,
        dt=args.dt,
        batch_size=args.batch_size,
        log_interval=args.log_interval,
    )
    sim.initialize(state.q, state.v)

    if not args.quiet:
        print(f"Metric: {config.metric_kind}, Potential: {config.potential_kind}, "
              f"Constraint: {config.constraint_expr or 'none'}")
        print(f"Integrator: {integrator.name}, dt: {args.dt}, steps: {args.steps}")
        print(f"{'Step':<8} {'Time':<10} {'E':<16} {'dE/E0':<12} {'log10':<10}")
        print("-" * 60)
        print(f"{0:<8} {0.0:<10.3f} {sim.reference_energy:<16.8f} {0.0:<12.3e} {'-':<10}")

        def report(simulator, energy_log):
            for sample in energy_log:
                t = sample.step_index * simulator.dt
                print(f"{sample.step_index:<8} {t:<10.3f} {sample.energy:<16.8f} "
                      f"{sample.relative_error:<12.3e} {sample.log10_error:<10.3f}")

        sim.on_energy_callback = report

    sim.run(args.steps)

    if sim.halted:
        print(f"Simulation halted at step {sim.step_count}: {', '.join(sim.faults)}")
    elif sim.faults and not args.quiet:
        print(f"Faults reported: {', '.join(sim.faults)}")

    if args.output:
        write_log(args.output, sim)
        print(f"Energy log written to {args.output}")

    if not args.quiet:
        print("Simulation complete!")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Manifold Simulator - constrained 2-DOF dynamics")

    # Scenario
    parser.add_argument('--preset', type=str, default=None,
                       choices=list(PRESETS.keys()),
                       help='Preset scenario (configuration and initial state)')
    parser.add_argument('--config', type=str, default=None,
                       help='Configuration file (.json or .yaml), applied over the preset')
    parser.add_argument('--metric', type=canonical_metric_kind, default=None,
                       help=f"Metric kind ({', '.join(METRIC_KINDS)})")
    parser.add_argument('--potential', type=canonical_potential_kind, default=None,
                       help=f"Potential kind ({', '.join(POTENTIAL_KINDS)})")
    parser.add_argument('--constraint', type=str, default=None,
                       help='Constraint expression in q1, q2, e.g. "q1 - q2"')
    parser.add_argument('--repulsive', action='store_true',
                       help='Make the Central potential repulsive')
    parser.add_argument('--mass', type=float, default=None,
                       help='Particle mass')
    parser.add_argument('--mu', type=float, default=None,
                       help='Coupling parameter mu')
    parser.add_argument('--dq', type=float, default=None,
                       help='Finite-difference step (default: 1e-4)')

    # Initial conditions
    parser.add_argument('--q', type=float, nargs=2, default=None, metavar=('Q1', 'Q2'),
                       help='Initial coordinates')
    parser.add_argument('--v', type=float, nargs=2, default=None, metavar=('V1', 'V2'),
                       help='Initial velocities')

    # Integration
    parser.add_argument('--integrator', type=str, default='rk4',
                       choices=list(INTEGRATORS.keys()),
                       help='Numerical integrator')
    parser.add_argument('--dt', type=float, default=0.01,
                       help='Time step')
    parser.add_argument('--steps', type=int, default=1000,
                       help='Number of simulation steps')
    parser.add_argument('--batch-size', type=int, default=32,
                       help='Steps per batch')
    parser.add_argument('--log-interval', type=int, default=100,
                       help='Sample energy every N steps (0 disables)')

    # Output
    parser.add_argument('--output', type=str, default=None,
                       help='Write energy log and final state (.json or .yaml)')
    parser.add_argument('--save-config', type=str, default=None,
                       help='Save the resolved configuration to file')
    parser.add_argument('--quiet', action='store_true',
                       help='Suppress the energy table')

    # Info
    parser.add_argument('--list-presets', action='store_true',
                       help='List available presets and exit')

    args = parser.parse_args(argv)

    if args.list_presets:
        print("Available presets:")
        for name, preset_class in PRESETS.items():
            print(f"  - {name}: {preset_class().description}")
        return

    if args.preset is None and args.config is None:
        args.preset = 'double_pendulum'

    run_simulation(args)


if __name__ == '__main__':
    main()
