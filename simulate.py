"""Synthetic select/reward loop for the ε-greedy estimator.

Run examples:
  # 5 arms, arm 0 always pays 1, everything else pays 0
  python simulate.py --arms 5 --epsilon 0.7 --best-arm 0 --seed 7

  # continue from a previous run's snapshot
  python simulate.py --restore results/run/state.json --steps 200 --name run2

Steps default to arms * 100.
Outputs land in results/<name>/ (selections.csv, state.json, summary.txt)
"""
from __future__ import annotations
import argparse, csv, json, random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import numpy as np

from egreedy import EGreedy, EGreedySerialized

PayoutFn = Callable[[int, random.Random], float]


@dataclass
class SimulationResult:
    arms: int
    epsilon: float
    steps: int
    best_arm: int
    # (step, arm, reward)
    selections: List[Tuple[int, int, float]] = field(default_factory=list)
    state: Optional[EGreedySerialized] = None

    @property
    def total_reward(self) -> float:
        return float(sum(r for _, _, r in self.selections))


def deterministic_payout(best_arm: int) -> PayoutFn:
    def payout(arm: int, rng: random.Random) -> float:
        return 1.0 if arm == best_arm else 0.0
    return payout


def simulate(
    arms: int,
    epsilon: float,
    steps: int,
    best_arm: int,
    seed: Optional[int] = None,
    payout: Optional[PayoutFn] = None,
    restore: Optional[EGreedySerialized] = None,
) -> SimulationResult:
    rng = random.Random(seed)
    if restore is not None:
        bandit = EGreedy(restore, rng=rng)
    else:
        bandit = EGreedy({"arms": arms, "epsilon": epsilon}, rng=rng)
    if not 0 <= best_arm < bandit.arms:
        raise ValueError(f"best_arm must be in [0, {bandit.arms}), got {best_arm}")
    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    payout = payout or deterministic_payout(best_arm)

    result = SimulationResult(bandit.arms, bandit.epsilon, steps, best_arm)
    for step in range(steps):
        arm = bandit.select()
        reward = float(payout(arm, rng))
        bandit.reward(arm, reward)
        result.selections.append((step, arm, reward))

    result.state = bandit.serialize()
    return result


def summarize(result: SimulationResult) -> str:
    picks = np.asarray([a for _, a, _ in result.selections], dtype=int)
    counts = np.bincount(picks, minlength=result.arms) if picks.size else np.zeros(result.arms, dtype=int)
    share = float(counts[result.best_arm] / picks.size) if picks.size else 0.0
    return (
        f"Arms: {result.arms}\n"
        f"Epsilon: {result.epsilon}\n"
        f"Steps: {result.steps}\n"
        f"Best Arm: {result.best_arm}\n"
        f"Total Reward: {result.total_reward:.2f}\n"
        f"Best Arm Share: {share:.2%}\n"
        f"Counts: {' '.join(str(c) for c in result.state['counts'])}\n"
    )


def write_results(result: SimulationResult, out_dir: Path) -> str:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    with open(out_dir / "selections.csv", "w", newline="") as f:
        cw = csv.writer(f)
        cw.writerow(["step", "arm", "reward"])
        cw.writerows(result.selections)

    with open(out_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(result.state, f, indent=2)

    summary = summarize(result)
    with open(out_dir / "summary.txt", "w", encoding="utf-8") as f:
        f.write(summary)
    return summary


def run(args: argparse.Namespace) -> None:
    restore = None
    if args.restore:
        with open(args.restore, "r", encoding="utf-8") as f:
            restore = json.load(f)

    arms = restore["arms"] if restore else args.arms
    steps = args.steps if args.steps is not None else arms * 100
    result = simulate(arms, args.epsilon, steps, args.best_arm, seed=args.seed, restore=restore)

    summary = write_results(result, Path("results") / args.name)
    print(summary, end="")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run a synthetic ε-greedy bandit experiment")
    p.add_argument("--arms", type=int, default=5)
    p.add_argument("--epsilon", type=float, default=0.7)
    p.add_argument("--steps", type=int, default=None, help="Number of select/reward rounds (default arms*100)")
    p.add_argument("--best-arm", dest="best_arm", type=int, default=0, help="Arm that always pays 1.0")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--restore", default=None, help="Path to a state.json snapshot to continue from")
    p.add_argument("--name", default="egreedy", help="Run name under results/")
    return p


if __name__ == "__main__":
    run(build_parser().parse_args())
