"""
Orthographic projection of a mesh onto a coarse depth grid
"""

import enum
import logging

import numpy as np

from .geometry import bounding_box

logger = logging.getLogger(__name__)


class ProjectFrom(enum.Enum):
    """Viewing direction, each value is (grid-X axis, grid-Y axis, depth axis)"""
    SIDE = (2, 1, 0)
    FRONT = (2, 0, 1)
    TOP = (1, 0, 2)

    @property
    def axes(self):
        return self.value

    @classmethod
    def parse(cls, name):
        """Look up a direction by name, e.g. 'top'"""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(d.name.lower() for d in cls)
            raise ValueError(f"Unknown view '{name}', expected one of: {choices}") from None


def grid_shape(size):
    """Rows are halved to offset the height of terminal character cells"""
    return size // 2 + 1, size + 1


def project(mesh, size, direction=ProjectFrom.SIDE) -> np.ndarray:
    """
    Project the mesh vertices into a size x size grid seen from ``direction``

    The larger of the two displayed extents fills the grid, the other axis
    keeps the aspect ratio. Each cell keeps the highest normalized depth of
    the vertices landing in it.

    Args:
        mesh: Mesh to project
        size: Grid resolution S, the grid has S//2+1 rows and S+1 columns
        direction: ProjectFrom member selecting the collapsed axis

    Returns:
        float32 array with values in [0, 1], 0 where no vertex landed
    """
    if size < 1:
        raise ValueError(f"Grid size must be at least 1, got {size}")

    rows, cols = grid_shape(size)
    grid = np.zeros((rows, cols), dtype=np.float32)

    vertices = mesh.vertex_array().reshape(-1, 3)
    if not len(vertices):
        return grid

    x_axis, y_axis, depth_axis = direction.axes
    box = bounding_box(mesh)
    extents = box.dimensions

    scale = max(extents[x_axis], extents[y_axis]) / np.float32(size)
    if not scale > 0:
        logger.debug("Mesh has no extent across the %s view, using unit scale", direction.name.lower())
        scale = np.float32(1.0)

    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        adjusted_x = (vertices[:, x_axis] - box.mins[x_axis]) / scale
        adjusted_y = (vertices[:, y_axis] - box.mins[y_axis]) / scale
        # Zero depth extent gives NaN depths, which never beat an empty cell
        depth = (vertices[:, depth_axis] - box.mins[depth_axis]) / extents[depth_axis]

    finite = np.isfinite(adjusted_x) & np.isfinite(adjusted_y)
    skipped = int(np.count_nonzero(~finite))
    if skipped:
        logger.debug("Skipping %d vertices with non-finite coordinates", skipped)

    grid_x = adjusted_x[finite].astype(np.int64)
    grid_y = adjusted_y[finite].astype(np.int64)
    depth = depth[finite]

    # Mirrored and compressed rows, clamped against rounding at the extents
    row = np.clip((size - grid_x) // 2, 0, rows - 1)
    col = np.clip(grid_y, 0, cols - 1)

    depth = np.where(np.isnan(depth), np.float32(0.0), depth).astype(np.float32)
    np.maximum.at(grid, (row, col), depth)
    return grid
