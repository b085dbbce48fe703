"""Comparison table: one row per cost category."""
from typing import List

import pandas as pd

from ..config.models import (
    COMPARISON_ITEMS,
    ComparisonResult,
    ComparisonRow,
    Workflow,
)

DEFAULT_SIGNIFICANCE_PCT = 10.0

TABLE_COLUMNS = ["成本项目", Workflow.CHEMISTRY_FREE.label, Workflow.TRADITIONAL.label, "差异"]


def percentage_difference(value_a: float, value_b: float) -> float:
    """``(a - b) / b * 100``, or 0 when ``b`` is 0."""
    if value_b == 0:
        return 0.0
    return (value_a - value_b) / value_b * 100


def build_comparison_rows(
    result: ComparisonResult,
    significance_pct: float = DEFAULT_SIGNIFICANCE_PCT,
    decimals: int = 2,
) -> List[ComparisonRow]:
    """Build the table rows for a comparison.

    The lower of the two values is marked ``preferred``; a row is
    ``significant`` when the difference exceeds ``significance_pct`` percent
    of the traditional value.
    """
    rows: List[ComparisonRow] = []
    for item, label in COMPARISON_ITEMS:
        a = result.fl.value_of(item)
        b = result.tr.value_of(item)
        pct = percentage_difference(a, b)

        preferred = None
        if a < b:
            preferred = Workflow.CHEMISTRY_FREE
        elif b < a:
            preferred = Workflow.TRADITIONAL

        rows.append(ComparisonRow(
            item=item,
            label=label,
            value_a=a,
            value_b=b,
            difference=a - b,
            percentage_diff=pct,
            preferred=preferred,
            significant=abs(pct) > significance_pct,
            threshold_pct=significance_pct,
            decimals=decimals,
        ))
    return rows


def rows_to_dataframe(rows: List[ComparisonRow]) -> pd.DataFrame:
    """Formatted table (strings with fixed decimals) for display."""
    return pd.DataFrame(
        [[r.label, r.formatted_a, r.formatted_b, r.formatted_difference] for r in rows],
        columns=TABLE_COLUMNS,
    )


def row_styles(rows: List[ComparisonRow]) -> pd.DataFrame:
    """CSS per cell of :func:`rows_to_dataframe`, for ``Styler.apply(axis=None)``.

    Lower values get a green background, significant differences red text.
    """
    lower = "background-color: #c6efce; color: #006100"
    significant = "color: #9c0006; font-weight: bold"

    styles = []
    for r in rows:
        cells = ["", "", "", ""]
        if r.preferred is Workflow.CHEMISTRY_FREE:
            cells[1] = lower
        elif r.preferred is Workflow.TRADITIONAL:
            cells[2] = lower
        if r.significant:
            cells[3] = significant
        styles.append(cells)
    return pd.DataFrame(styles, columns=TABLE_COLUMNS)
