"""
Heated Cavity Convection Visualization
======================================

This script visualizes the convection run computed by compute_convection.py.
"""

# %%
# Setup and Load Data
# -------------------

from utils import get_project_root, ConvectionPlotter

project_root = get_project_root()
data_dir = project_root / "data" / "Convection"
fig_dir = project_root / "figures" / "Convection"
fig_dir.mkdir(parents=True, exist_ok=True)

plotter = ConvectionPlotter(data_dir / "convection_Ra1e4.h5")
print(f"Loaded solution from: {data_dir / 'convection_Ra1e4.h5'}")

# %%
# Temperature Field
# -----------------

plotter.plot_temperature(fig_dir / "convection_Ra1e4_temperature.png")
print("  ✓ Temperature map saved")

# %%
# Stream Function
# ---------------

plotter.plot_stream_function(output_path=fig_dir / "convection_Ra1e4_stream.pdf")
print("  ✓ Stream function plot saved")

# %%
# Energy and Enstrophy History
# ----------------------------

plotter.plot_history(output_path=fig_dir / "convection_Ra1e4_history.pdf")
print("  ✓ History plot saved")

print(f"\nAll figures saved to: {fig_dir}")
