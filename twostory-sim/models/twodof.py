from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from loads.harmonic import harmonic_force


class PreconditionError(ValueError):
    """Raised for inputs the model cannot integrate (bad step, mass, NaN...)."""


class State(NamedTuple):
    x1: float   # floor 1 displacement (m)
    x2: float   # floor 2 displacement (m)
    v1: float   # floor 1 velocity (m/s)
    v2: float   # floor 2 velocity (m/s)

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0, 0.0)


# reference two-story building
REFERENCE = dict(m1=1000.0, m2=800.0, k1=2.0e6, k2=1.5e6,
                 c1=2000.0, c2=1500.0, F0=5000.0, omega=10.0)


@dataclass(frozen=True)
class TwoDofParams:
    m1: float = REFERENCE["m1"]        # kg
    m2: float = REFERENCE["m2"]        # kg
    k1: float = REFERENCE["k1"]        # N/m
    k2: float = REFERENCE["k2"]        # N/m
    c1: float = REFERENCE["c1"]        # N.s/m
    c2: float = REFERENCE["c2"]        # N.s/m
    F0: float = REFERENCE["F0"]        # N
    omega: float = REFERENCE["omega"]  # rad/s

    def __post_init__(self):
        for name in REFERENCE:
            val = getattr(self, name)
            if not np.isfinite(val):
                raise PreconditionError(f"{name} must be finite, got {val!r}")
        if self.m1 <= 0 or self.m2 <= 0:
            raise PreconditionError(f"masses must be positive (m1={self.m1}, m2={self.m2})")
        for name in ("k1", "k2", "c1", "c2"):
            if getattr(self, name) < 0:
                raise PreconditionError(f"{name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_config(cls, cfg):
        # force numeric types (handles YAML strings like "2e6")
        cfg = cfg or {}
        return cls(**{name: float(cfg.get(name, default)) for name, default in REFERENCE.items()})


def as_state_vector(y):
    y = np.array(y, dtype=float)
    if y.shape != (4,):
        raise PreconditionError(f"state must have 4 components (x1, x2, v1, v2), got shape {y.shape}")
    if not np.all(np.isfinite(y)):
        raise PreconditionError(f"state must be finite, got {y}")
    return y


def derivative(t, y, params):
    """
    dy/dt for y = (x1, x2, v1, v2):

        m1*a1 = F0 sin(omega t) - c1 v1 - k1 x1 + c2 (v2-v1) + k2 (x2-x1)
        m2*a2 = -c2 (v2-v1) - k2 (x2-x1)

    Floor 1 is tied to the base by (k1, c1) and to floor 2 by (k2, c2);
    only floor 1 is excited.
    """
    x1, x2, v1, v2 = as_state_vector(y)
    p = params

    F1 = harmonic_force(t, p.F0, p.omega)
    a1 = (F1 - p.c1*v1 - p.k1*x1 + p.c2*(v2 - v1) + p.k2*(x2 - x1)) / p.m1
    a2 = (-p.c2*(v2 - v1) - p.k2*(x2 - x1)) / p.m2
    return np.array([v1, v2, a1, a2], dtype=float)
