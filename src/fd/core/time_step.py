"""Explicit forward-Euler step for vorticity and temperature."""

from numba import njit

from ..discretization.convection.upwind import upwind_advection
from ..discretization.diffusion.central_diff import laplacian, central_dx


@njit(cache=True)
def advance_vorticity_temperature(vort, temp, u, v, dx, dy, dt, pr, ra, vort_new, temp_new):
    """
    Advance vorticity and temperature one time step over the interior.

    All reads come from `vort` and `temp`; results go to the interior of
    `vort_new` and `temp_new`. Boundary cells of the new buffers are not
    written.

    Vorticity:   d(w)/dt = pr lap(w) - u.grad(w) + ra pr dT/dx
    Temperature: d(T)/dt = lap(T) - u.grad(T)
    """
    ny, nx = vort.shape

    for i in range(1, ny - 1):
        for j in range(1, nx - 1):
            u_ij = u[i, j]
            v_ij = v[i, j]

            vort_adv_x, vort_adv_y = upwind_advection(vort, i, j, u_ij, v_ij, dx, dy)
            temp_adv_x, temp_adv_y = upwind_advection(temp, i, j, u_ij, v_ij, dx, dy)

            vort_diff = pr * laplacian(vort, i, j, dx, dy)
            temp_diff = laplacian(temp, i, j, dx, dy)

            buoyancy = ra * pr * central_dx(temp, i, j, dx)

            vort_new[i, j] = vort[i, j] + dt * (vort_diff - vort_adv_x - vort_adv_y + buoyancy)
            temp_new[i, j] = temp[i, j] + dt * (temp_diff - temp_adv_x - temp_adv_y)
