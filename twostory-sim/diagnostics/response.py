import numpy as np

def rms(x):
    x = np.asarray(x, dtype=float)
    return float(np.sqrt(np.mean(x**2))) if x.size else 0.0

def response_summary(t, Y):
    t = np.asarray(t, dtype=float); Y = np.asarray(Y, dtype=float)
    if len(t) != len(Y) or len(t) == 0:
        raise ValueError("t and Y must be non-empty and of equal length")
    absY = np.abs(Y)
    i1 = int(np.argmax(absY[:, 0])); i2 = int(np.argmax(absY[:, 1]))
    return dict(
        peak_x1=float(absY[i1, 0]), t_peak_x1=float(t[i1]),
        peak_x2=float(absY[i2, 1]), t_peak_x2=float(t[i2]),
        peak_v1=float(absY[:, 2].max()), peak_v2=float(absY[:, 3].max()),
        rms_x1=rms(Y[:, 0]), rms_x2=rms(Y[:, 1]),
        final=Y[-1].copy(),
    )
