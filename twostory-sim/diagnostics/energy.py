import numpy as np

from models.twodof import PreconditionError, as_state_vector

def kinetic_energy(y, params):
    _, _, v1, v2 = as_state_vector(y)
    return 0.5*params.m1*v1*v1 + 0.5*params.m2*v2*v2

def potential_energy(y, params):
    x1, x2, _, _ = as_state_vector(y)
    return 0.5*params.k1*x1*x1 + 0.5*params.k2*(x2 - x1)*(x2 - x1)

def total_energy(y, params):
    """EK + EP (J). Observation only, never used to steer the step."""
    return float(kinetic_energy(y, params) + potential_energy(y, params))

def energy_history(Y, params):
    Y = np.asarray(Y, dtype=float)
    if Y.ndim != 2 or Y.shape[1] != 4:
        raise PreconditionError(f"history must have shape (n, 4), got {Y.shape}")
    x1, x2, v1, v2 = Y.T
    ek = 0.5*params.m1*v1**2 + 0.5*params.m2*v2**2
    ep = 0.5*params.k1*x1**2 + 0.5*params.k2*(x2 - x1)**2
    return ek + ep

def relative_drift(energy):
    e = np.asarray(energy, dtype=float)
    if e.size == 0 or e[0] == 0.0:
        raise PreconditionError("relative drift needs a non-zero initial energy")
    return float(np.max(np.abs(e - e[0])) / abs(e[0]))
