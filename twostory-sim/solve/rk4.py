import numpy as np

from models.twodof import PreconditionError, as_state_vector, derivative
from diagnostics.energy import total_energy


def _check_step(t, h):
    h = float(h); t = float(t)
    if not np.isfinite(h) or h <= 0.0:
        raise PreconditionError(f"step size must be positive and finite, got h={h}")
    if not np.isfinite(t):
        raise PreconditionError(f"time must be finite, got t={t}")
    return t, h


def rk4_step(t, y, h, params):
    """
    Advance y from t to t + h with classical 4th-order Runge-Kutta.

    Returns a new state vector; the caller's y is left untouched.
    """
    t, h = _check_step(t, h)
    y = as_state_vector(y)

    k1 = derivative(t, y, params)
    k2 = derivative(t + 0.5*h, y + 0.5*h*k1, params)
    k3 = derivative(t + 0.5*h, y + 0.5*h*k2, params)
    k4 = derivative(t + h, y + h*k3, params)

    return y + (h/6.0) * (k1 + 2.0*k2 + 2.0*k3 + k4)


def simulate(params, t_end, h, y0=None):
    """
    Fixed-step run from t = 0 to t_end (steps = round(t_end / h)).

    Energy is sampled from the state immediately before each advance, so
    row i holds (t_i, y_i, E(y_i)) and the last row is the post-loop state.
    """
    t_end = float(t_end)
    if not np.isfinite(t_end) or t_end <= 0.0:
        raise PreconditionError(f"t_end must be positive and finite, got {t_end}")
    _, h = _check_step(0.0, h)

    steps = int(round(t_end / h))
    y = as_state_vector(np.zeros(4) if y0 is None else y0)

    t_hist = np.zeros(steps + 1, dtype=float)
    y_hist = np.zeros((steps + 1, 4), dtype=float)
    e_hist = np.zeros(steps + 1, dtype=float)

    t = 0.0
    for i in range(steps + 1):
        t_hist[i] = t
        y_hist[i] = y
        e_hist[i] = total_energy(y, params)
        if i < steps:
            y = rk4_step(t, y, h, params)
            t += h

    return {"t": t_hist, "y": y_hist, "energy": e_hist, "steps": steps, "h": h}
