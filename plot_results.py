# plot_results.py  (cumulative arm selections per simulate.py run)
from pathlib import Path

import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

RESULTS_DIR = Path("results")
PLOTS_DIR = RESULTS_DIR / "plots"


def load_selections(results_dir: Path = RESULTS_DIR) -> pd.DataFrame:
    frames = []
    results_dir = Path(results_dir)
    if not results_dir.exists():
        print(f"No {results_dir}/ directory found.")
        return pd.DataFrame()
    for sub in sorted(results_dir.iterdir()):
        path = sub / "selections.csv"
        if not sub.is_dir() or not path.exists():
            continue
        df = pd.read_csv(path)
        df["run"] = sub.name
        frames.append(df)
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True)


def cumulative_counts(df: pd.DataFrame) -> pd.DataFrame:
    """One row per (run, step), one column per arm: picks of that arm so far."""
    onehot = pd.get_dummies(df["arm"]).astype(int)
    onehot.insert(0, "step", df["step"].values)
    onehot.insert(0, "run", df["run"].values)
    arm_cols = [c for c in onehot.columns if c not in ("run", "step")]
    onehot = onehot.sort_values(["run", "step"])
    onehot[arm_cols] = onehot.groupby("run")[arm_cols].cumsum()
    return onehot.reset_index(drop=True)


def plot_run(cum: pd.DataFrame, run: str, outfile: Path) -> None:
    g = cum[cum["run"] == run]
    fig, ax = plt.subplots(figsize=(6.8, 4.0))
    for arm in [c for c in g.columns if c not in ("run", "step")]:
        ax.plot(g["step"], g[arm], label=str(arm))
    ax.set_xlabel("Step")
    ax.set_ylabel("Times selected")
    ax.set_title(f"Cumulative selections ({run})")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend(title="arm")
    fig.tight_layout()
    fig.savefig(outfile, dpi=160)
    plt.close(fig)


def main():
    df = load_selections()
    if df.empty:
        print("No selections found in results/. Run simulate.py first.")
        return

    PLOTS_DIR.mkdir(parents=True, exist_ok=True)
    cum = cumulative_counts(df)
    for run in cum["run"].unique():
        plot_run(cum, run, PLOTS_DIR / f"{run}_selections.png")

    print(f"Saved plots to {PLOTS_DIR.resolve()}")

if __name__ == "__main__":
    main()
