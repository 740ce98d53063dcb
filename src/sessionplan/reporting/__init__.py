"""Reporting utilities."""

from .adjustments import AdjustmentTrace
from .reports import build_error_report, build_validation_error_report, build_success_report

__all__ = ["AdjustmentTrace", "build_error_report", "build_validation_error_report", "build_success_report"]
