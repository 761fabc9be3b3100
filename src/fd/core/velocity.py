from numba import njit


@njit(cache=True)
def reconstruct_velocity(stream, dx, dy, u, v):
    """
    Interior velocity from the stream function by central differences.

    u = d(psi)/dy, v = -d(psi)/dx. Boundary cells of `u` and `v` are not
    written, which keeps the walls no-slip.
    """
    ny, nx = stream.shape
    for i in range(1, ny - 1):
        for j in range(1, nx - 1):
            u[i, j] = (stream[i + 1, j] - stream[i - 1, j]) / (2.0 * dy)
            v[i, j] = -(stream[i, j + 1] - stream[i, j - 1]) / (2.0 * dx)
