from dataclasses import replace

import numpy as np
import pytest

from models.twodof import PreconditionError, State, TwoDofParams, as_state_vector, derivative
from models.modal import system_matrices, modal_analysis, floor_frequencies, modal_damping
from loads.harmonic import harmonic_force


def test_derivative_by_hand(params):
    # F1(0) = 0
    dydt = derivative(0.0, [0.001, 0.002, 0.1, -0.1], params)
    np.testing.assert_allclose(dydt, [0.1, -0.1, -1.0, -1.5], rtol=1e-12)


def test_derivative_kinematic_identity(params):
    rng = np.random.default_rng(3)
    for _ in range(20):
        y = rng.normal(size=4)
        t = rng.uniform(0, 10)
        dydt = derivative(t, y, params)
        assert dydt[0] == y[2]
        assert dydt[1] == y[3]


def test_derivative_excitation_only_on_floor_1(params):
    t = 0.3
    dydt = derivative(t, State.zero(), params)
    assert dydt[2] == pytest.approx(params.F0 * np.sin(params.omega * t) / params.m1)
    assert dydt[3] == 0.0


def test_derivative_matches_matrices(params):
    M, C, K = system_matrices(params)
    y = np.array([0.003, -0.001, 0.2, 0.05])
    free = replace(params, F0=0.0)
    acc = -np.linalg.solve(M, C @ y[2:] + K @ y[:2])
    np.testing.assert_allclose(derivative(1.0, y, free)[2:], acc, rtol=1e-12)


def test_derivative_does_not_touch_input(params):
    y = np.array([0.001, 0.002, 0.1, -0.1])
    before = y.copy()
    derivative(0.5, y, params)
    np.testing.assert_array_equal(y, before)


def test_harmonic_force_scalar_and_array():
    assert harmonic_force(0.0, 5000.0, 10.0) == 0.0
    assert harmonic_force(np.pi / 20, 5000.0, 10.0) == pytest.approx(5000.0)
    t = np.linspace(0, 1, 11)
    np.testing.assert_allclose(harmonic_force(t, 2.0, 3.0), 2.0 * np.sin(3.0 * t))


def test_params_are_immutable(params):
    with pytest.raises(AttributeError):
        params.m1 = 1.0


@pytest.mark.parametrize("bad", [
    dict(m1=0.0), dict(m2=-1.0), dict(k1=-1.0), dict(c2=-0.1),
    dict(F0=float("nan")), dict(omega=float("inf")),
])
def test_params_reject_bad_values(bad):
    with pytest.raises(PreconditionError):
        TwoDofParams(**bad)


def test_params_from_config_casts_strings():
    p = TwoDofParams.from_config({"k1": "2e6", "m2": "800", "omega": 12})
    assert p.k1 == 2.0e6 and isinstance(p.k1, float)
    assert p.m2 == 800.0
    assert p.omega == 12.0
    # missing keys fall back to the reference building
    assert p.m1 == 1000.0 and p.F0 == 5000.0


def test_params_from_empty_config():
    assert TwoDofParams.from_config(None) == TwoDofParams()


@pytest.mark.parametrize("y", [[0.0, 0.0, 0.0], [0.0] * 5, [[0.0, 0.0], [0.0, 0.0]],
                               [0.0, np.nan, 0.0, 0.0], [np.inf, 0.0, 0.0, 0.0]])
def test_state_vector_rejects_bad_input(y):
    with pytest.raises(PreconditionError):
        as_state_vector(y)


def test_state_vector_from_named_state():
    y = as_state_vector(State(1.0, 2.0, 3.0, 4.0))
    np.testing.assert_array_equal(y, [1.0, 2.0, 3.0, 4.0])
    assert State(*y).v2 == 4.0


def test_floor_frequencies(params):
    omega1, omega2 = floor_frequencies(params)
    assert omega1 == pytest.approx(np.sqrt(3500.0))
    assert omega2 == pytest.approx(np.sqrt(1875.0))


def test_modal_analysis(params):
    M, C, K = system_matrices(params)
    f, w, phi = modal_analysis(M, K)
    lam = np.sort(np.linalg.eigvals(np.linalg.solve(M, K)).real)
    np.testing.assert_allclose(w**2, lam, rtol=1e-10)
    np.testing.assert_allclose(f, w / (2 * np.pi))
    np.testing.assert_allclose(phi[-1, :], [1.0, 1.0])
    # mode 1: floors in phase, mode 2: out of phase
    assert phi[0, 0] > 0 and phi[0, 1] < 0

    zeta = modal_damping(C, M, phi, w)
    assert np.all(np.isfinite(zeta)) and np.all(zeta > 0)
