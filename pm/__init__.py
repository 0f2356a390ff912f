"""
Performance outputs — projection summaries, model-health decisions, and CSV export.
"""

from .metrics import ProjectionSummary, summarize_projection, waterfall_table
from .decisions import HealthReport, generate_health_report
from .report import build_csv_report, report_filename, write_csv_report

__all__ = [
    "ProjectionSummary",
    "summarize_projection",
    "waterfall_table",
    "HealthReport",
    "generate_health_report",
    "build_csv_report",
    "report_filename",
    "write_csv_report",
]
