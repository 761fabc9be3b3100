"""Temperature heatmap rendering and run plotting."""

import colorsys
import logging
from pathlib import Path

import h5py
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.colors import ListedColormap

from convection.errors import RenderError

log = logging.getLogger(__name__)

SATURATION = 0.7
LIGHTNESS = 0.5
COLORBAR_LEVELS = 100

_hls_to_rgb = np.vectorize(colorsys.hls_to_rgb, otypes=[np.float64] * 3)


def hsl_to_rgb(h, s, l):
    """Vectorised HSL -> RGB; `h` in degrees, `s`, `l` and output in [0, 1]."""
    h = np.asarray(h, dtype=np.float64) / 360.0
    return np.stack(_hls_to_rgb(h, l, s), axis=-1)


def temperature_to_rgb(temp):
    """Map temperature to colour: hue = 240 (1 - T), blue (cold) to red (hot).

    Temperatures are clipped to [0, 1] before mapping.
    """
    temp = np.clip(np.asarray(temp, dtype=np.float64), 0.0, 1.0)
    return hsl_to_rgb(240.0 * (1.0 - temp), SATURATION, LIGHTNESS)


def temperature_colormap():
    """Colormap equivalent of ``temperature_to_rgb`` for colour bars."""
    return ListedColormap(temperature_to_rgb(np.linspace(0.0, 1.0, COLORBAR_LEVELS)))


def draw_temperature_map(temp, output_path):
    """Render a temperature field as a cell heatmap with a colour bar.

    Parameters
    ----------
    temp : np.ndarray
        Temperature field of shape (ny, nx); row 0 is drawn at the bottom.
    output_path : str or Path
        Image file to write (format from the suffix, e.g. .png).

    Raises
    ------
    RenderError
        If the figure cannot be produced or written.
    """
    temp = np.asarray(temp)
    ny, nx = temp.shape
    output_path = Path(output_path)

    fig, ax = plt.subplots(figsize=(8, 7))
    try:
        ax.imshow(
            temperature_to_rgb(temp),
            origin="lower",
            extent=(0, nx, 0, ny),
            interpolation="nearest",
        )
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_title("Temperature Distribution", fontweight="bold")

        mappable = plt.cm.ScalarMappable(cmap=temperature_colormap(), norm=plt.Normalize(0.0, 1.0))
        fig.colorbar(mappable, ax=ax, orientation="vertical", label="Temperature")

        fig.savefig(output_path, bbox_inches="tight", dpi=100)
    except (OSError, ValueError) as exc:
        raise RenderError(f"Could not write temperature map to {output_path}: {exc}") from exc
    finally:
        plt.close(fig)

    log.info("Visualization saved to %s", output_path)
    return output_path


class ConvectionPlotter:
    """Plotter for a convection run saved with ``ConvectionSolver.save``.

    Parameters
    ----------
    h5_path : str or Path
        Path to the HDF5 file.

    Attributes
    ----------
    metadata : pd.DataFrame
        Single-row DataFrame of the run parameters.
    fields : dict of np.ndarray
        The five grid fields.
    time_series : pd.DataFrame
        Per-step energy and enstrophy with a ``step`` column.
    """

    def __init__(self, h5_path):
        h5_path = Path(h5_path)
        if not h5_path.exists():
            raise FileNotFoundError(f"HDF5 file not found: {h5_path}")

        with h5py.File(h5_path, "r") as f:
            self.metadata = pd.DataFrame([dict(f.attrs)])
            self.fields = {key: np.asarray(ds) for key, ds in f["fields"].items()}
            self.time_series = pd.DataFrame(
                {key: np.asarray(ds) for key, ds in f["time_series"].items()}
            ).assign(step=lambda df: range(1, len(df) + 1))

    def plot_history(self, output_path=None):
        """Plot kinetic energy and enstrophy against time step."""
        long = self.time_series.melt(id_vars="step", var_name="quantity", value_name="value")

        g = sns.relplot(
            data=long,
            x="step",
            y="value",
            col="quantity",
            kind="line",
            height=4,
            aspect=1.2,
            linewidth=2,
            facet_kws={"sharey": False},
        )
        g.set_axis_labels("Time step", "")
        Ra = self.metadata["ra"].iloc[0]
        g.figure.suptitle(f"Diagnostics (Ra = {Ra:.0f})", fontweight="bold", y=1.05)

        if output_path:
            g.savefig(output_path, bbox_inches="tight", dpi=300)
            log.info("History plot saved to: %s", output_path)
        return g

    def plot_temperature(self, output_path):
        return draw_temperature_map(self.fields["temp"], output_path)

    def plot_stream_function(self, output_path=None):
        """Contour plot of the stream function."""
        psi = self.fields["stream"]
        ny, nx = psi.shape
        x = np.linspace(0.0, 1.0, nx)
        y = np.linspace(0.0, 1.0, ny)

        fig, ax = plt.subplots(figsize=(8, 7))
        cf = ax.contourf(x, y, psi, levels=20, cmap="RdBu_r")
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_title("Stream function", fontweight="bold")
        ax.set_aspect("equal")
        plt.colorbar(cf, ax=ax, label=r"$\psi$")
        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, bbox_inches="tight", dpi=300)
            log.info("Stream function plot saved to: %s", output_path)
        return fig
