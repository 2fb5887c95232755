import unittest

import numpy as np

from adaptive_trial.core.replication import iter_replications, simulate_replication
from adaptive_trial.core.statistics import two_proportion_z
from adaptive_trial.models.design import DesignConfig
from adaptive_trial.models.results import Zone
from adaptive_trial.models.scenario import ScenarioConfig

from helpers import ScriptedGenerator


class ScriptedReplicationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.design = DesignConfig.bhatt_mehta_2016()
        self.scenario = ScenarioConfig(p_control=0.051, true_rrr=0.21)

    def test_favorable_zone_stops_early_at_interim_size(self) -> None:
        rng = ScriptedGenerator([200, 120, 80, 60])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.FAVORABLE)
        self.assertEqual(outcome.sample_size_adaptive, 7630)
        self.assertAlmostEqual(outcome.final_z_adaptive, two_proportion_z(200, 120, 7630))
        self.assertAlmostEqual(outcome.final_z_nonadaptive, two_proportion_z(280, 180, 10900))
        # No adaptive stage-2 draws after early stopping.
        self.assertEqual(len(rng.calls), 4)
        self.assertEqual(rng.remaining, 0)

    def test_favorable_zone_below_boundary_continues_to_planned_size(self) -> None:
        rng = ScriptedGenerator([150, 115, 50, 40, 55, 45])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.FAVORABLE)
        self.assertEqual(outcome.sample_size_adaptive, 10900)
        self.assertAlmostEqual(outcome.final_z_adaptive, two_proportion_z(205, 160, 10900))
        self.assertEqual([n for n, _ in rng.calls], [3815, 3815, 1635, 1635, 1635, 1635])

    def test_promising_zone_increase_is_capped(self) -> None:
        rng = ScriptedGenerator([150, 125, 50, 40, 300, 250])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.PROMISING)
        self.assertEqual(outcome.sample_size_adaptive, 20000)
        self.assertEqual(rng.calls[4][0], 6185)
        self.assertAlmostEqual(outcome.final_z_adaptive, two_proportion_z(450, 375, 20000))

    def test_promising_zone_below_cap(self) -> None:
        rng = ScriptedGenerator([150, 119, 50, 40, 120, 100])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.PROMISING)
        self.assertGreater(outcome.sample_size_adaptive, 10900)
        self.assertLess(outcome.sample_size_adaptive, 20000)
        size = outcome.sample_size_adaptive
        self.assertNotEqual(size, int(size))
        # Each arm enrols floor(stage / 2); the statistic keeps the unrounded size.
        self.assertEqual(rng.calls[4][0], int((size - 7630) // 2))
        self.assertAlmostEqual(outcome.final_z_adaptive, two_proportion_z(270, 219, size))

    def test_unfavorable_zone(self) -> None:
        rng = ScriptedGenerator([150, 140, 60, 55, 61, 56])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.UNFAVORABLE)
        self.assertEqual(outcome.sample_size_adaptive, 10900)

    def test_degenerate_interim_falls_back_to_zero(self) -> None:
        rng = ScriptedGenerator([0, 0, 0, 0, 0, 0])
        outcome = simulate_replication(self.design, self.scenario, rng)
        self.assertIs(outcome.zone, Zone.UNFAVORABLE)
        self.assertEqual(outcome.final_z_adaptive, 0.0)
        self.assertEqual(outcome.final_z_nonadaptive, 0.0)
        self.assertEqual(outcome.sample_size_adaptive, 10900)

    def test_binomial_probabilities_follow_scenario(self) -> None:
        rng = ScriptedGenerator([150, 140, 60, 55, 61, 56])
        simulate_replication(self.design, self.scenario, rng)
        probabilities = [p for _, p in rng.calls]
        self.assertEqual(probabilities[0::2], [0.051] * 3)
        for p in probabilities[1::2]:
            self.assertAlmostEqual(p, 0.051 * 0.79)


class RandomReplicationInvariantTests(unittest.TestCase):
    def test_sample_size_bounds_and_single_zone(self) -> None:
        design = DesignConfig.bhatt_mehta_2016()
        scenario = ScenarioConfig(p_control=0.0475, true_rrr=0.18)
        rng = np.random.default_rng(2016)
        for outcome in iter_replications(design, scenario, rng, 2000):
            self.assertIn(outcome.zone, list(Zone))
            self.assertGreaterEqual(outcome.sample_size_adaptive, design.n_interim)
            self.assertLessEqual(outcome.sample_size_adaptive, design.n_max_cap)
            self.assertTrue(np.isfinite(outcome.final_z_adaptive))
            self.assertTrue(np.isfinite(outcome.final_z_nonadaptive))


if __name__ == "__main__":
    unittest.main()
