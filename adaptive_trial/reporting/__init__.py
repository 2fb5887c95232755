"""Reporting helpers for simulation studies."""

from .report_generator import ReportGenerator
from .text_report import NOT_AVAILABLE, format_scenario_report, format_study_report

__all__ = ["NOT_AVAILABLE", "ReportGenerator", "format_scenario_report", "format_study_report"]
