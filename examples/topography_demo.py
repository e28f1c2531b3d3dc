#!/usr/bin/env python3
"""
Draw a pointer stroke into a height field and paint its isobands.

Stands in for the UI: a sine-shaped stroke is fed through raise_at one
cell at a time, then every band is drawn as filled matplotlib polygons.
"""

import math
import sys

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.collections import PatchCollection
from matplotlib.patches import Polygon

from topo_contours import GridSize, HeightField, Preset
from topo_contours.utils.logging import configure_logging


def stroke_cells(size, samples=120):
    """Grid cells along a sine stroke across the field."""
    cells = []
    for i in range(samples):
        t = i / (samples - 1)
        x = int(t * (size.width - 1))
        y = int((0.5 + 0.3 * math.sin(t * 2 * math.pi)) * (size.height - 1))
        if not cells or cells[-1] != (x, y):
            cells.append((x, y))
    return cells


def paint_isobands(field, output="topography.png"):
    """Render every band of the field to a PNG file."""
    bands = field.isobands()
    fig, ax = plt.subplots(figsize=(10, 10 * field.size.height / field.size.width))

    cmap = plt.get_cmap("terrain")
    for k, band in enumerate(bands):
        patches = [Polygon(ring, closed=True) for ring in band.rings]
        if not patches:
            continue
        collection = PatchCollection(
            patches,
            facecolor=cmap(k / max(len(bands) - 1, 1)),
            edgecolor="black",
            linewidth=0.5,
        )
        ax.add_collection(collection)

    ax.set_xlim(0, field.size.width)
    ax.set_ylim(field.size.height, 0)
    ax.set_aspect("equal")
    ax.set_title(f"{field.preset.value} preset, {len(bands)} bands")
    fig.savefig(output, dpi=100)
    plt.close(fig)
    return output


def main(preset="empty"):
    """Run one stroke and save the picture."""
    configure_logging(level="INFO", fmt="console")

    size = GridSize.from_pixels(800, 500, cell_size=10)
    field = HeightField(size, Preset.parse(preset), seed="demo", field_id="demo")
    print(f"Grid {size.width}x{size.height} ({size.cell_count} cells), preset={field.preset.value}")

    cells = stroke_cells(size)
    for x, y in cells:
        field.raise_at(x, y, z_delta=8)

    print(f"Raised {len(cells)} cells, min={field.min:.1f} max={field.max:.1f}")
    print(f"Thresholds: {field.thresholds()}")
    print(f"Saved {paint_isobands(field, f'topography_{field.preset.value}.png')}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
