"""Wall boundary conditions for temperature and vorticity."""

from numba import njit

T_HOT = 1.0
T_COLD = 0.0


def apply_temperature_walls(temp):
    """
    Hot bottom, left and right walls, cold top wall.

    Columns are written after rows, so the two top corners end up hot.
    """
    temp[0, :] = T_HOT
    temp[-1, :] = T_COLD
    temp[:, 0] = T_HOT
    temp[:, -1] = T_HOT
    return temp


@njit(cache=True)
def apply_thom_vorticity(stream, dx, dy, vort):
    """
    Thom's formula for wall vorticity on no-slip walls.

    Only the non-corner wall cells are assigned; the four corner cells keep
    whatever value they already hold.
    """
    ny, nx = stream.shape
    dx2 = dx * dx
    dy2 = dy * dy

    for j in range(1, nx - 1):
        vort[0, j] = -2.0 * stream[1, j] / dy2            # bottom
        vort[ny - 1, j] = -2.0 * stream[ny - 2, j] / dy2  # top
    for i in range(1, ny - 1):
        vort[i, 0] = -2.0 * stream[i, 1] / dx2            # left
        vort[i, nx - 1] = -2.0 * stream[i, nx - 2] / dx2  # right
