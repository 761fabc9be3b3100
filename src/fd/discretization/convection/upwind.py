from numba import njit


@njit(inline="always", cache=True)
def upwind_advection(phi, i, j, u, v, dx, dy):
    """
    First-order upwind advection terms (u dphi/dx, v dphi/dy) at cell (i, j).

    Backward difference when the local velocity is positive, forward
    difference otherwise.
    """
    if u > 0.0:
        adv_x = u * (phi[i, j] - phi[i, j - 1]) / dx
    else:
        adv_x = u * (phi[i, j + 1] - phi[i, j]) / dx

    if v > 0.0:
        adv_y = v * (phi[i, j] - phi[i - 1, j]) / dy
    else:
        adv_y = v * (phi[i + 1, j] - phi[i, j]) / dy

    return adv_x, adv_y
