"""Tests for the simulation driver and plotting helpers."""
import csv
import json
import tempfile
import unittest
from pathlib import Path

from egreedy import EGreedy
from plot_results import cumulative_counts, load_selections, plot_run
from simulate import build_parser, simulate, write_results


class TestSimulate(unittest.TestCase):
    def test_paying_arm_dominates(self):
        res = simulate(arms=5, epsilon=0.7, steps=500, best_arm=0, seed=21)
        counts = res.state["counts"]
        self.assertEqual(sum(counts), 500)
        for other in range(1, 5):
            self.assertGreater(counts[0], counts[other])
        self.assertEqual(res.total_reward, float(counts[0]))

    def test_seed_is_reproducible(self):
        a = simulate(arms=3, epsilon=0.5, steps=100, best_arm=2, seed=4)
        b = simulate(arms=3, epsilon=0.5, steps=100, best_arm=2, seed=4)
        self.assertEqual(a.selections, b.selections)

    def test_restore_continues_snapshot(self):
        first = simulate(arms=3, epsilon=0.5, steps=50, best_arm=1, seed=2)
        second = simulate(arms=3, epsilon=0.9, steps=20, best_arm=1, seed=3, restore=first.state)
        self.assertEqual(sum(second.state["counts"]), 70)
        self.assertEqual(second.epsilon, 0.5)

    def test_custom_payout(self):
        res = simulate(arms=2, epsilon=1.0, steps=40, best_arm=0, seed=1,
                       payout=lambda arm, rng: 0.25)
        for count, value in zip(res.state["counts"], res.state["values"]):
            self.assertAlmostEqual(value, 0.25 if count else 0.0)

    def test_rejects_bad_best_arm(self):
        with self.assertRaises(ValueError):
            simulate(arms=3, epsilon=0.5, steps=10, best_arm=3)

    def test_write_results(self):
        res = simulate(arms=4, epsilon=0.6, steps=80, best_arm=1, seed=9)
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "run"
            summary = write_results(res, out)

            with open(out / "selections.csv", newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 80)
            self.assertEqual(set(rows[0]), {"step", "arm", "reward"})

            state = json.loads((out / "state.json").read_text())
            self.assertEqual(state, res.state)
            self.assertEqual(EGreedy(state).serialize(), res.state)

            self.assertEqual((out / "summary.txt").read_text(), summary)
            self.assertIn("Steps: 80", summary)
            self.assertIn("Best Arm: 1", summary)

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual((args.arms, args.epsilon, args.best_arm), (5, 0.7, 0))
        self.assertIsNone(args.steps)


class TestPlotResults(unittest.TestCase):
    def test_cumulative_counts_and_plot(self):
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            write_results(simulate(arms=3, epsilon=1.0, steps=30, best_arm=0, seed=5), base / "a")
            df = load_selections(base)
            self.assertEqual(len(df), 30)
            self.assertEqual(set(df["run"]), {"a"})

            cum = cumulative_counts(df)
            arm_cols = [c for c in cum.columns if c not in ("run", "step")]
            self.assertEqual(int(cum[arm_cols].iloc[-1].sum()), 30)

            outfile = base / "a.png"
            plot_run(cum, "a", outfile)
            self.assertTrue(outfile.exists())

    def test_missing_results_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertTrue(load_selections(Path(tmp) / "nope").empty)


if __name__ == "__main__":
    unittest.main()
