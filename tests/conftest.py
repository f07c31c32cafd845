import pytest

from models.twodof import TwoDofParams


@pytest.fixture
def params():
    # reference two-story building
    return TwoDofParams(m1=1000.0, m2=800.0, k1=2.0e6, k2=1.5e6,
                        c1=2000.0, c2=1500.0, F0=5000.0, omega=10.0)


@pytest.fixture
def free_params(params):
    # no excitation, no damping: conservative system
    return TwoDofParams(m1=params.m1, m2=params.m2, k1=params.k1, k2=params.k2,
                        c1=0.0, c2=0.0, F0=0.0, omega=params.omega)
