from numba import njit


@njit(inline="always", cache=True)
def laplacian(phi, i, j, dx, dy):
    """5-point central Laplacian at interior cell (i, j)."""
    return ((phi[i, j + 1] - 2.0 * phi[i, j] + phi[i, j - 1]) / (dx * dx)
            + (phi[i + 1, j] - 2.0 * phi[i, j] + phi[i - 1, j]) / (dy * dy))


@njit(inline="always", cache=True)
def central_dx(phi, i, j, dx):
    """Central first derivative in x at interior cell (i, j)."""
    return (phi[i, j + 1] - phi[i, j - 1]) / (2.0 * dx)
