import math
import unittest

from scipy.stats import norm

from adaptive_trial.core.zones import adapt_sample_size, classify_zone, required_second_stage_size
from adaptive_trial.models.design import DesignConfig
from adaptive_trial.models.results import Zone


class ZoneClassificationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.design = DesignConfig.bhatt_mehta_2016()

    def test_boundaries_belong_to_promising_zone(self) -> None:
        self.assertIs(classify_zone(0.136, self.design), Zone.PROMISING)
        self.assertIs(classify_zone(0.212, self.design), Zone.PROMISING)

    def test_outside_boundaries(self) -> None:
        self.assertIs(classify_zone(0.1359, self.design), Zone.UNFAVORABLE)
        self.assertIs(classify_zone(-0.5, self.design), Zone.UNFAVORABLE)
        self.assertIs(classify_zone(0.2121, self.design), Zone.FAVORABLE)
        self.assertIs(classify_zone(1.0, self.design), Zone.FAVORABLE)

    def test_every_value_maps_to_exactly_one_zone(self) -> None:
        for step in range(-50, 101):
            zone = classify_zone(step / 100.0, self.design)
            self.assertIn(zone, list(Zone))


class SampleSizeAdaptationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.design = DesignConfig.bhatt_mehta_2016()

    def test_second_stage_size_formula(self) -> None:
        observed = 1 - 119 / 150
        delta = math.log(1 - observed)
        gap = norm.ppf(1 - 0.025) - norm.ppf(1 - 0.90)
        expected = gap**2 / (delta**2 / (4 / 0.051)) - 7630
        self.assertAlmostEqual(
            required_second_stage_size(observed, self.design, 0.051), expected, places=6
        )

    def test_zero_or_infinite_log_effect_requires_no_increase(self) -> None:
        self.assertEqual(required_second_stage_size(0.0, self.design, 0.051), 0.0)
        self.assertEqual(required_second_stage_size(1.0, self.design, 0.051), 0.0)

    def test_required_size_never_negative(self) -> None:
        # Large observed effects need fewer subjects than already enrolled.
        self.assertEqual(required_second_stage_size(0.9, self.design, 0.5), 0.0)

    def test_promising_zone_is_capped(self) -> None:
        size = adapt_sample_size(Zone.PROMISING, 0.14, 0.0, self.design, 0.051)
        self.assertEqual(size, self.design.n_max_cap)

    def test_unfavorable_keeps_planned_size(self) -> None:
        size = adapt_sample_size(Zone.UNFAVORABLE, 0.05, 1.0, self.design, 0.051)
        self.assertEqual(size, 10900)

    def test_favorable_stops_early_only_past_boundary(self) -> None:
        stop = adapt_sample_size(Zone.FAVORABLE, 0.3, 2.797, self.design, 0.051)
        carry_on = adapt_sample_size(Zone.FAVORABLE, 0.3, 2.79, self.design, 0.051)
        self.assertEqual(stop, 7630)
        self.assertEqual(carry_on, 10900)


if __name__ == "__main__":
    unittest.main()
