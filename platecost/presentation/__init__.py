"""Presentation of a comparison: table rows and chart payloads."""

from .charts import CHART_SLOTS, ChartSlotRegistry, build_chart_payloads, to_altair
from .table import build_comparison_rows, row_styles, rows_to_dataframe

__all__ = [
    "CHART_SLOTS",
    "ChartSlotRegistry",
    "build_chart_payloads",
    "to_altair",
    "build_comparison_rows",
    "row_styles",
    "rows_to_dataframe",
]
