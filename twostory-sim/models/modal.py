import numpy as np
from scipy.linalg import eigh

def system_matrices(params):
    """M, C, K of the two-story shear model (same equations as derivative)."""
    p = params
    M = np.diag([p.m1, p.m2]).astype(float)
    K = np.array([[p.k1 + p.k2, -p.k2],
                  [-p.k2,        p.k2]], dtype=float)
    C = np.array([[p.c1 + p.c2, -p.c2],
                  [-p.c2,        p.c2]], dtype=float)
    return M, C, K

def modal_analysis(M, K):
    w2, phi = eigh(K, M)
    w = np.sqrt(np.clip(w2, 0, None))
    f = w / (2*np.pi)
    # normalize by roof; a mode with no roof motion keeps eigh's scaling
    roof = phi[-1, :]
    scale = np.where(np.abs(roof) > 1e-12, roof, 1.0)
    phi = phi / scale
    return f, w, phi

def floor_frequencies(params):
    # per-floor nominal frequencies (each floor with its neighbours held fixed)
    p = params
    omega1 = np.sqrt((p.k1 + p.k2) / p.m1)
    omega2 = np.sqrt(p.k2 / p.m2)
    return float(omega1), float(omega2)

def modal_damping(C, M, phi, w):
    zetas = []
    for i in range(len(w)):
        v = phi[:, i:i+1]
        num = (v.T @ C @ v).item()
        den = 2.0 * w[i] * (v.T @ M @ v).item()
        zetas.append(num/den if den > 0 else np.nan)
    return np.array(zetas)
