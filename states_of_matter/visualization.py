#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Visualization Module
================================================================================

Project:        States of Matter Engine
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Matplotlib rendering for the command line driver. Everything here works
from ModelSnapshot objects and recorded histories, never from the live
model, so drawing can't disturb the simulation.
- Atoms drawn to scale inside the container, colored by element
- Temperature and pressure history plots
- Animation of a running model
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.collections import PatchCollection
from matplotlib.patches import Circle

from .observers import ModelSnapshot

# Element colors, keyed by ParticleRecord name
ATOM_COLORS = {
    'neon': '#1a9fff',
    'argon': '#ff8c1a',
    'oxygen': '#e6001a',
    'hydrogen': '#f2f2f2',
    'configurable': '#8b5cf6',
}
DEFAULT_ATOM_COLOR = '#6b7280'


@dataclass
class VisualizationConfig:
    """Configuration for visualization."""
    background_color: str = "#1a1a2e"
    container_color: str = "white"
    show_info: bool = True
    figsize: Tuple[int, int] = (8, 8)


def get_atom_colors(names: List[str]) -> List[str]:
    return [ATOM_COLORS.get(name, DEFAULT_ATOM_COLOR) for name in names]


def render_snapshot(
    snapshot: ModelSnapshot,
    atom_names: List[str],
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Draw the atoms and the container of a snapshot.

    Args:
        snapshot: State to draw (positions in picometers)
        atom_names: Element name of each atom, for coloring
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    if ax is None:
        fig = plt.figure(figsize=config.figsize)
        ax = fig.add_axes([0, 0, 1, 1])
    else:
        fig = ax.figure

    ax.clear()
    ax.set_facecolor(config.background_color)
    fig.patch.set_facecolor(config.background_color)

    circles = [
        Circle((x, y), radius)
        for (x, y), radius in zip(snapshot.atom_positions, snapshot.atom_radii)
    ]
    atoms = PatchCollection(circles, facecolors=get_atom_colors(atom_names),
                            edgecolors='white', linewidths=0.3, alpha=0.9)
    ax.add_collection(atoms)

    width = snapshot.container_width
    height = snapshot.container_height
    if snapshot.is_exploded:
        # Only the walls and floor survive an explosion.
        ax.plot([0, 0, width, width], [height, 0, 0, height],
                color=config.container_color, linewidth=1.5, alpha=0.5)
    else:
        ax.plot([0, width, width, 0, 0], [0, 0, height, height, 0],
                color=config.container_color, linewidth=1.5, alpha=0.5)

    # Keep the nominal container in frame even while it grows after an explosion.
    view_height = max(height, width) if not snapshot.is_exploded else width
    margin = width * 0.02
    ax.set_xlim(-margin, width + margin)
    ax.set_ylim(-margin, view_height + margin)
    ax.set_aspect('equal')

    if config.show_info:
        ax.text(0.02, 0.98,
                f"{snapshot.molecule_type.value}  "
                f"T = {snapshot.temperature_in_kelvin:.1f} K  "
                f"P = {snapshot.pressure_in_atmospheres:.2f} atm",
                transform=ax.transAxes, color='white', fontsize=10, va='top')

    ax.set_xticks([])
    ax.set_yticks([])
    ax.axis('off')

    return fig


def render_history_plot(
    history: Dict[str, List[float]],
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot temperature (K) and pressure (atm) against tick count.

    Args:
        history: Dict with 'tick', 'temperature' and 'pressure' lists
        ax: Optional existing axes; pressure goes on a twin axis

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    ax.clear()
    ticks = np.asarray(history.get('tick', []))
    ax.plot(ticks, history.get('temperature', []), 'r-', label='Temperature', linewidth=1.5)
    ax.set_xlabel('Tick')
    ax.set_ylabel('Temperature (K)', color='r')
    ax.grid(True, alpha=0.3)

    ax_pressure = ax.twinx()
    ax_pressure.plot(ticks, history.get('pressure', []), 'b-', label='Pressure', linewidth=1.5)
    ax_pressure.set_ylabel('Pressure (atm)', color='b')

    ax.set_title('Temperature and Pressure')
    return fig


def render_dashboard(
    snapshot: ModelSnapshot,
    atom_names: List[str],
    history: Dict[str, List[float]],
    config: Optional[VisualizationConfig] = None
) -> plt.Figure:
    """Particles on the left, history on the right."""
    if config is None:
        config = VisualizationConfig()

    fig = plt.figure(figsize=(14, 6))
    ax_particles = fig.add_subplot(1, 2, 1)
    render_snapshot(snapshot, atom_names, config, ax=ax_particles)

    ax_history = fig.add_subplot(1, 2, 2)
    if len(history.get('tick', [])) > 0:
        render_history_plot(history, ax=ax_history)

    fig.patch.set_facecolor(config.background_color)
    plt.tight_layout()
    return fig


def create_animation(
    model,
    n_frames: int = 300,
    ticks_per_frame: int = 1,
    config: Optional[VisualizationConfig] = None,
    fps: int = 30
) -> animation.FuncAnimation:
    """
    Animate a model, stepping it between frames.

    Args:
        model: SimulationModel to run
        n_frames: Number of frames
        ticks_per_frame: Model ticks per frame
        config: Visualization configuration
        fps: Frames per second

    Returns:
        Matplotlib animation
    """
    if config is None:
        config = VisualizationConfig()

    fig, ax = plt.subplots(1, 1, figsize=config.figsize)

    def update(frame):
        for _ in range(ticks_per_frame):
            model.step()
        names = [particle.name for particle in model.particles]
        render_snapshot(model.snapshot(), names, config, ax=ax)
        return ax,

    return animation.FuncAnimation(
        fig, update, frames=n_frames,
        interval=1000 / fps, blit=False
    )
