"""Plotting and project utilities."""

from pathlib import Path

from .heatmap import (
    ConvectionPlotter,
    draw_temperature_map,
    temperature_colormap,
    temperature_to_rgb,
)


def get_project_root():
    """Repository root (the directory holding ``src/``)."""
    return Path(__file__).resolve().parents[2]


__all__ = [
    "ConvectionPlotter",
    "draw_temperature_map",
    "temperature_colormap",
    "temperature_to_rgb",
    "get_project_root",
]
