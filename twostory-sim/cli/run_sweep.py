import argparse, os, sys, yaml, pandas as pd, matplotlib.pyplot as plt
from dataclasses import replace
from models.twodof import TwoDofParams
from models.modal import system_matrices, modal_analysis
from solve.rk4 import simulate
from diagnostics.response import response_summary

def simulate_once(params, omega, t_end, h):
    # independent run: own parameter object, own state
    p = replace(params, omega=float(omega))
    res = simulate(p, t_end, h)
    s = response_summary(res["t"], res["y"])
    return dict(omega=float(omega),
                peak_x1=s["peak_x1"], peak_x2=s["peak_x2"],
                rms_x1=s["rms_x1"], rms_x2=s["rms_x2"],
                final_energy=float(res["energy"][-1]))

def sweep_omegas(cfg, params):
    omegas = cfg.get("omega_sweep")
    if not omegas:
        omegas = [f*params.omega for f in (0.5, 0.75, 1.0, 1.25, 1.5)]
    return [float(w) for w in omegas]

def main(cfg_path, out_csv, make_plot):
    # --- load & cast config safely ---
    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}

    params = TwoDofParams.from_config(cfg)
    t_end  = float(cfg.get("t_end", 20.0))
    h      = float(cfg.get("h", 0.001))
    omegas = sweep_omegas(cfg, params)

    rows = []
    for w in omegas:
        r = simulate_once(params, w, t_end, h)
        print(f"[sweep] omega={w:.2f} rad/s → max|x1|={r['peak_x1']:.6f} m, max|x2|={r['peak_x2']:.6f} m")
        rows.append(r)

    df = pd.DataFrame(rows, columns=["omega", "peak_x1", "peak_x2", "rms_x1", "rms_x2", "final_energy"])
    df.to_csv(out_csv, index=False)
    print(f"[OK] wrote {out_csv} with {len(df)} runs")

    if make_plot:
        M, C, K = system_matrices(params)
        _, w_modal, _ = modal_analysis(M, K)

        os.makedirs("figs", exist_ok=True)
        plt.figure(figsize=(6,4))
        plt.plot(df["omega"], df["peak_x1"], "o-", label="max|x1|")
        plt.plot(df["omega"], df["peak_x2"], "s-", label="max|x2|")
        for wn in w_modal:
            plt.axvline(wn, color="k", linestyle="--", linewidth=1)
        plt.xlabel("Excitation ω (rad/s)")
        plt.ylabel("Peak displacement (m)")
        plt.title(f"Frequency sweep, t_end={t_end:g} s")
        plt.legend()
        plt.tight_layout()
        out_png = os.path.join("figs", "omega_sweep.png")
        plt.savefig(out_png, dpi=200)
        plt.close()
        print(f"[OK] wrote {out_png}")

    return df

def cli():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=os.path.join("configs", "base.yaml"))
    ap.add_argument("--out", default="omega_sweep.csv")
    ap.add_argument("--plot", action="store_true")
    args = ap.parse_args()
    try:
        main(args.config, args.out, args.plot)
    except Exception as e:
        print("[fatal]", repr(e))
        sys.exit(1)

if __name__ == "__main__":
    cli()
