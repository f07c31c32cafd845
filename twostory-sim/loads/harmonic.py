import numpy as np

def harmonic_force(t, F0, omega):
    """F(t) = F0 sin(omega t); t may be a scalar or an array of times."""
    if np.ndim(t) == 0:
        return float(F0) * float(np.sin(float(omega) * float(t)))
    return float(F0) * np.sin(float(omega) * np.asarray(t, dtype=float))
