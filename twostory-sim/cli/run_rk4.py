import argparse
import os
import sys
import yaml
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from models.twodof import TwoDofParams
from models.modal import system_matrices, modal_analysis, floor_frequencies, modal_damping
from solve.rk4 import simulate
from diagnostics.response import response_summary

COLUMNS = ["Waktu(s)", "x1(m)", "x2(m)", "v1(m/s)", "v2(m/s)", "Energi(J)"]


def export_table(res, save_every):
    """Decimated time history, formatted like the reference text export."""
    idx = np.arange(0, res["steps"] + 1, int(save_every))
    Y = res["y"][idx]
    return pd.DataFrame({
        COLUMNS[0]: [f"{v:.3f}" for v in res["t"][idx]],
        COLUMNS[1]: [f"{v:.8f}" for v in Y[:, 0]],
        COLUMNS[2]: [f"{v:.8f}" for v in Y[:, 1]],
        COLUMNS[3]: [f"{v:.8f}" for v in Y[:, 2]],
        COLUMNS[4]: [f"{v:.8f}" for v in Y[:, 3]],
        COLUMNS[5]: [f"{v:.4f}" for v in res["energy"][idx]],
    })


def print_params(p):
    print("[cfg] Parameter sistem:")
    print(f"      m1 = {p.m1:.0f} kg, m2 = {p.m2:.0f} kg")
    print(f"      k1 = {p.k1:.0e} N/m, k2 = {p.k2:.0e} N/m")
    print(f"      c1 = {p.c1:.0f} N.s/m, c2 = {p.c2:.0f} N.s/m")
    print(f"      F(t) = {p.F0:.0f} sin({p.omega:.0f}*t) N")

    omega1, omega2 = floor_frequencies(p)
    print(f"[freq] per-floor: ω1 = {omega1:.2f} rad/s, ω2 = {omega2:.2f} rad/s")

    M, C, K = system_matrices(p)
    f, w, phi = modal_analysis(M, K)
    zeta = modal_damping(C, M, phi, w)
    print(f"[eig] w1={w[0]:.2f} rad/s (f1={f[0]:.3f} Hz, ζ1={zeta[0]*100:.2f}%), "
          f"w2={w[1]:.2f} rad/s (f2={f[1]:.3f} Hz, ζ2={zeta[1]*100:.2f}%)")
    return w


def main(cfg_path, out_path=None, make_plot=False):
    print(f"[run] cfg={cfg_path}")
    if not os.path.exists(cfg_path):
        print("[error] config file not found")
        sys.exit(1)

    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}

    params = TwoDofParams.from_config(cfg)
    t_end = float(cfg.get("t_end", 20.0))
    h = float(cfg.get("h", 0.001))
    print_every = int(cfg.get("print_every", 1000))
    save_every = int(cfg.get("save_every", 10))
    out_path = out_path or str(cfg.get("output", "hasil_simulasi.txt"))

    print(f"[cfg] t_end={t_end}, h={h}, print_every={print_every}, save_every={save_every}")
    print_params(params)

    # open the export before integrating so a bad path fails fast
    try:
        fh = open(out_path, "w", newline="")
    except OSError as e:
        print(f"[error] cannot create output file {out_path}: {e}")
        sys.exit(1)

    with fh:
        print("[run] RK4 simulation started...")
        res = simulate(params, t_end, h)

        print("\t".join(COLUMNS))
        print("-" * 62)
        for i in range(0, res["steps"] + 1, print_every):
            x1, x2, v1, v2 = res["y"][i]
            print(f"{res['t'][i]:.1f}\t{x1:.6f}\t{x2:.6f}\t{v1:.6f}\t{v2:.6f}\t{res['energy'][i]:.2f}")

        export_table(res, save_every).to_csv(fh, sep="\t", index=False)

    print(f"[out] saved {out_path} ({res['steps'] + 1} steps, every {save_every} written)")

    summary = response_summary(res["t"], res["y"])
    x1f, x2f, _, _ = summary["final"]
    print("[stats] final state:")
    print(f"        x1 = {x1f:.6f} m, x2 = {x2f:.6f} m")
    print(f"        max|x1| = {summary['peak_x1']:.6f} m @ t={summary['t_peak_x1']:.3f} s, "
          f"max|x2| = {summary['peak_x2']:.6f} m @ t={summary['t_peak_x2']:.3f} s")
    print(f"        total energy = {res['energy'][-1]:.4f} J")

    if make_plot:
        figs_dir = os.path.join("figs")
        os.makedirs(figs_dir, exist_ok=True)

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 5), sharex=True)
        ax1.plot(res["t"], res["y"][:, 0], label="x1")
        ax1.plot(res["t"], res["y"][:, 1], label="x2")
        ax1.set_ylabel("Displacement (m)")
        ax1.legend()
        ax2.plot(res["t"], res["energy"])
        ax2.set_xlabel("Time (s)")
        ax2.set_ylabel("Energy (J)")
        ax1.set_title(f"2-DOF RK4, h={h:g} s, F={params.F0:.0f} sin({params.omega:g} t)")
        fig.tight_layout()
        fig.savefig(os.path.join(figs_dir, "rk4_timehist.png"), dpi=200)
        plt.close(fig)
        print(f"Saved: {os.path.join(figs_dir, 'rk4_timehist.png')}")

    return res


def cli():
    try:
        ap = argparse.ArgumentParser()
        ap.add_argument("--config", default=os.path.join("configs", "base.yaml"))
        ap.add_argument("--out", default=None)
        ap.add_argument("--plot", action="store_true")
        args = ap.parse_args()
        main(args.config, args.out, args.plot)
    except Exception as e:
        print("[fatal]", repr(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
