import json
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from adaptive_trial.core.simulator import aggregate
from adaptive_trial.models.design import DesignConfig
from adaptive_trial.models.results import ReplicationOutcome, StudyResults, Zone
from adaptive_trial.models.scenario import ScenarioConfig
from adaptive_trial.reporting import NOT_AVAILABLE, ReportGenerator, format_scenario_report


def _study() -> StudyResults:
    design = DesignConfig.bhatt_mehta_2016()
    scenario = ScenarioConfig(p_control=0.051, true_rrr=0.21)
    outcomes = [
        ReplicationOutcome(Zone.UNFAVORABLE, 1.0, 2.5, 10900),
        ReplicationOutcome(Zone.FAVORABLE, 3.1, 3.0, 7630),
    ]
    study = StudyResults(design=design, simulation={"n_simulations": 2, "random_seed": 1})
    study.add_result(aggregate(outcomes, design, scenario, metadata={"random_seed": 1}))
    return study


class TextReportTests(unittest.TestCase):
    def test_report_lists_every_zone_and_marks_unentered(self) -> None:
        study = _study()
        result = next(iter(study.scenario_results.values()))
        report = format_scenario_report(result, study.design)
        self.assertIn("Control Rate: 0.051, True RRR: 0.21", report)
        self.assertIn("Overall Power (Adaptive):     0.50", report)
        self.assertIn("Overall Power (Non-Adaptive): 1.00", report)
        promising = [line for line in report.splitlines() if line.startswith("Promising")]
        self.assertEqual(len(promising), 1)
        self.assertIn(NOT_AVAILABLE, promising[0])
        favorable = [line for line in report.splitlines() if line.startswith("Favorable")][0]
        self.assertIn("7630", favorable)
        self.assertIn("10900", favorable)


class ReportGeneratorTests(unittest.TestCase):
    def test_export_all_writes_artefacts(self) -> None:
        study = _study()
        with tempfile.TemporaryDirectory() as tmp:
            paths = ReportGenerator(tmp).export_all(study)
            self.assertEqual(set(paths), {"summary", "zones", "metadata", "report"})
            for path in paths.values():
                self.assertTrue(Path(path).exists())

            zones = pd.read_csv(paths["zones"])
            self.assertEqual(list(zones["zone"]), ["Unfavorable", "Promising", "Favorable"])
            self.assertTrue(pd.isna(zones.loc[1, "avg_n_adaptive"]))

            summary = pd.read_csv(paths["summary"])
            self.assertAlmostEqual(summary.loc[0, "power_adaptive"], 0.5)

            metadata = json.loads(Path(paths["metadata"]).read_text(encoding="utf-8"))
            self.assertEqual(metadata["design"]["n_interim"], 7630.0)
            self.assertEqual(metadata["simulation"]["random_seed"], 1)

    def test_timestamped_output_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            generator = ReportGenerator(tmp, timestamped=True, run_label="run_a")
            self.assertEqual(generator.output_dir, Path(tmp) / "run_a")
            self.assertTrue(generator.output_dir.is_dir())
            path = generator.export_metadata(_study())
            self.assertEqual(path.parent, Path(tmp) / "run_a")
            metadata = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(metadata["run_label"], "run_a")


if __name__ == "__main__":
    unittest.main()
