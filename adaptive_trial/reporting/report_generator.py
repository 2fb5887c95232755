"""Report generation utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..config import OUTPUT_ROOT
from ..models.results import StudyResults
from .text_report import format_study_report

LOGGER = logging.getLogger(__name__)


def _json_default(obj: object) -> object:
    """JSON serializer that handles numpy/enum/path objects gracefully."""
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, set):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class ReportGenerator:
    """Persist simulation study outputs to disk."""

    def __init__(
        self,
        output_dir: str | Path = OUTPUT_ROOT,
        *,
        timestamped: bool = False,
        run_label: Optional[str] = None,
    ) -> None:
        base_dir = Path(output_dir)
        base_dir.mkdir(parents=True, exist_ok=True)
        if timestamped:
            run_label = run_label or datetime.utcnow().strftime("run_%Y%m%d_%H%M%S")
            self.output_dir = base_dir / run_label
        else:
            self.output_dir = base_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.run_label = self.output_dir.name

    # ------------------------------------------------------------------ helpers
    def _write_json(self, payload: Dict[str, object], filename: str) -> Path:
        path = self.output_dir / filename
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, default=_json_default)
        return path

    def _write_table(self, table: pd.DataFrame, filename: str) -> Path:
        path = self.output_dir / filename
        table.to_csv(path, index=False)
        return path

    # ------------------------------------------------------------------ exports
    def export_summary(self, results: StudyResults, filename: str = "power_summary.csv") -> Path:
        """Overall power and average sample size per scenario."""
        return self._write_table(results.summary_frame(), filename)

    def export_zone_table(self, results: StudyResults, filename: str = "zone_summary.csv") -> Path:
        """Per-zone operating characteristics; unentered zones have empty avg N."""
        return self._write_table(results.zone_frame(), filename)

    def export_metadata(self, results: StudyResults, filename: str = "run_metadata.json") -> Path:
        payload: Dict[str, object] = {
            "generated_at": datetime.utcnow(),
            "run_label": self.run_label,
            "design": results.design.to_metadata(),
            "simulation": results.simulation,
            "scenarios": {
                scenario_id: {
                    "scenario": result.scenario.model_dump(),
                    "metadata": result.metadata,
                }
                for scenario_id, result in results.scenario_results.items()
            },
        }
        return self._write_json(payload, filename)

    def export_text_report(self, results: StudyResults, filename: str = "report.txt") -> Path:
        path = self.output_dir / filename
        path.write_text(format_study_report(results), encoding="utf-8")
        return path

    def export_all(self, results: StudyResults) -> Dict[str, Path]:
        """Write every artefact and return their paths keyed by name."""
        paths = {
            "summary": self.export_summary(results),
            "zones": self.export_zone_table(results),
            "metadata": self.export_metadata(results),
            "report": self.export_text_report(results),
        }
        LOGGER.info("Exported %d report artefacts to %s", len(paths), self.output_dir)
        return paths


__all__ = ["ReportGenerator"]
