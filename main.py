#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
States of Matter Engine - Command Line Interface
================================================================================

Project:        States of Matter Engine
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Command line interface for running and checking the States of Matter
molecular dynamics engine.
"""

import argparse
import logging
import time

import matplotlib.pyplot as plt

from states_of_matter.constants import GAS_TEMPERATURE
from states_of_matter.logging_config import setup_logging
from states_of_matter.model import SimulationModel, ModelConfig, ThermostatType
from states_of_matter.particles import MoleculeType
from states_of_matter.thermodynamics import (
    Phase, calculate_global_order_parameter, describe_state
)
from states_of_matter.visualization import (
    VisualizationConfig, render_snapshot, render_history_plot, create_animation
)

logger = logging.getLogger("states_of_matter.main")


def _record(model: SimulationModel, tick: int, history: dict) -> None:
    history['tick'].append(tick)
    history['temperature'].append(model.get_temperature_in_kelvin())
    history['pressure'].append(model.get_pressure_in_atmospheres())


def _atom_names(model: SimulationModel):
    return [particle.name for particle in model.particles]


def run_stability_test(molecule_type: MoleculeType, n_steps: int = 500, seed: int = None):
    """
    Run a solid at constant set-point and check the container holds.

    Args:
        molecule_type: Species to simulate
        n_steps: Number of clock ticks
        seed: Random seed
    """
    print("=" * 60)
    print("States of Matter - Stability Test")
    print("=" * 60)

    model = SimulationModel(ModelConfig(molecule_type=molecule_type, seed=seed))
    model.set_phase(Phase.SOLID)
    print(f"\n{model.number_of_molecules} {molecule_type.value} molecules as a solid")
    print(f"Running {n_steps} ticks...")

    history = {'tick': [], 'temperature': [], 'pressure': []}
    t_start = time.time()
    for tick in range(n_steps):
        model.step()
        if tick % 10 == 0:
            _record(model, tick, history)
        if tick % 100 == 0:
            logger.info("Tick %5d: T = %.1f K, P = %.3f atm, measured = %.4f",
                        tick, model.get_temperature_in_kelvin(),
                        model.get_pressure_in_atmospheres(), model.strategies.verlet.temperature)
    t_end = time.time()

    print(f"\nSimulation completed in {t_end - t_start:.2f} seconds")
    print(f"Ticks per second: {n_steps / (t_end - t_start):.1f}")

    order = calculate_global_order_parameter(model.molecule_data_set.molecule_center_of_mass_positions)
    phase, description = describe_state(model.get_temperature_in_kelvin(),
                                        model.get_pressure_in_atmospheres(), order)
    print(f"\nFinal State:")
    print(f"  {description}")
    print(f"  Potential Energy: {model.strategies.verlet.potential_energy:.2f}")

    if model.is_exploded:
        print("  ⚠ Container exploded")
    elif phase is Phase.SOLID:
        print("  ✓ Crystal held together")
    else:
        print("  ✓ Container intact")

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    render_snapshot(model.snapshot(), _atom_names(model), VisualizationConfig(), ax=axes[0])
    render_history_plot(history, ax=axes[1])
    plt.tight_layout()
    plt.savefig('stability_test.png', dpi=150)
    print(f"\nPlot saved to stability_test.png")
    plt.show()


def run_heating_demo(molecule_type: MoleculeType, max_steps: int = 5000, seed: int = None):
    """
    Heat a solid at full power until it boils.

    Args:
        molecule_type: Species to simulate
        max_steps: Upper bound on clock ticks
        seed: Random seed
    """
    print("=" * 60)
    print("States of Matter - Heating Demonstration")
    print("=" * 60)

    model = SimulationModel(ModelConfig(molecule_type=molecule_type, seed=seed))
    model.set_phase(Phase.SOLID)
    model.set_heating_cooling_amount(1.0)

    history = {'tick': [], 'temperature': [], 'pressure': []}
    order_history = []
    print("\nHeating the crystal...")
    for tick in range(max_steps):
        model.step()
        if tick % 20 == 0:
            _record(model, tick, history)
            order = calculate_global_order_parameter(
                model.molecule_data_set.molecule_center_of_mass_positions
            )
            order_history.append(order)
            if tick % 200 == 0:
                _, description = describe_state(history['temperature'][-1], history['pressure'][-1], order)
                print(f"  Tick {tick:5d}: {description}")
        if model.temperature_set_point >= GAS_TEMPERATURE:
            print(f"\nReached gas temperature after {tick + 1} ticks")
            break

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    render_history_plot(history, ax=axes[0])

    ax = axes[1]
    ax.plot(history['temperature'], order_history, 'b.-')
    ax.axhline(y=0.6, color='red', linestyle='--', alpha=0.5, label='Solid threshold')
    ax.set_xlabel('Temperature (K)')
    ax.set_ylabel('Order Parameter (ψ₆)')
    ax.set_title('Melting Transition')
    ax.legend()
    ax.grid(True, alpha=0.3)

    render_snapshot(model.snapshot(), _atom_names(model), VisualizationConfig(), ax=axes[2])

    plt.tight_layout()
    plt.savefig('heating_demo.png', dpi=150)
    print(f"\nPlot saved to heating_demo.png")
    plt.show()


def run_animation(molecule_type: MoleculeType, phase: Phase, n_frames: int = 300, seed: int = None):
    """
    Animate a model in the given starting phase.

    Args:
        molecule_type: Species to simulate
        phase: Starting phase
        n_frames: Number of animation frames
        seed: Random seed
    """
    print("=" * 60)
    print("States of Matter - Animation")
    print("=" * 60)

    model = SimulationModel(ModelConfig(molecule_type=molecule_type,
                                        thermostat_type=ThermostatType.ADAPTIVE, seed=seed))
    model.set_phase(phase)

    print(f"Creating animation with {n_frames} frames...")
    ani = create_animation(model, n_frames=n_frames)

    print("Saving animation (this may take a while)...")
    ani.save('states_of_matter.gif', writer='pillow', fps=20)
    print("Animation saved to states_of_matter.gif")

    plt.show()


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="States of Matter - 2D Molecular Dynamics Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --test                  Check a neon crystal stays put
  python main.py --demo --species water  Heat ice until it boils
  python main.py --animate --species argon --phase gas
                                         Animate argon gas
        """
    )

    parser.add_argument('--test', action='store_true',
                        help='Run stability test')
    parser.add_argument('--demo', action='store_true',
                        help='Run heating demonstration')
    parser.add_argument('--animate', action='store_true',
                        help='Create animation')
    parser.add_argument('--species', type=str, default='neon',
                        choices=[molecule_type.value for molecule_type in MoleculeType],
                        help='Molecule species (default: neon)')
    parser.add_argument('--phase', type=str, default='solid',
                        choices=[phase.value for phase in Phase],
                        help='Starting phase for --animate (default: solid)')
    parser.add_argument('--steps', '-s', type=int, default=500,
                        help='Number of clock ticks (default: 500)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible runs')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write the log to this file')

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    molecule_type = MoleculeType(args.species)
    if args.test:
        run_stability_test(molecule_type, n_steps=args.steps, seed=args.seed)
    elif args.demo:
        run_heating_demo(molecule_type, max_steps=max(args.steps, 5000), seed=args.seed)
    elif args.animate:
        run_animation(molecule_type, Phase(args.phase), n_frames=args.steps, seed=args.seed)
    else:
        parser.print_help()
        print("\nNo action specified. Run with --test, --demo, or --animate")


if __name__ == "__main__":
    main()
