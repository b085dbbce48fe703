"""Comparison endpoints -- synchronous, stateless.

Computes both cost breakdowns, the table rows and the chart payloads
from the posted inputs.  Nothing is stored server-side.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from platecost.engine.comparator import compare
from platecost.excel.exporter import comparison_xlsx_bytes
from platecost.presentation.charts import build_chart_payloads
from platecost.presentation.table import build_comparison_rows
from shared.schemas.compare import ComparisonRowOut, CompareRequest, CompareResponse

logger = logging.getLogger(__name__)
router = APIRouter()

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _run(body: CompareRequest):
    fl_record = body.chemistry_free.to_record()
    tr_record = body.traditional.to_record()
    result = compare(fl_record, tr_record)
    rows = build_comparison_rows(result, significance_pct=body.significance_threshold_pct)
    return (fl_record, tr_record), result, rows


@router.post("/compare", response_model=CompareResponse)
async def compare_workflows(body: CompareRequest):
    """Compare the monthly costs of the chemistry-free and traditional workflows."""
    _, result, rows = _run(body)
    logger.info(
        "Compared workflows: fl total=%.2f, tr total=%.2f",
        result.fl.total_monthly_cost,
        result.tr.total_monthly_cost,
    )

    return CompareResponse(
        chemistry_free=result.fl,
        traditional=result.tr,
        rows=[
            ComparisonRowOut(
                item=r.item,
                label=r.label,
                chemistry_free=r.value_a,
                traditional=r.value_b,
                difference=r.difference,
                percentage_diff=r.percentage_diff,
                preferred=r.preferred.value if r.preferred is not None else None,
                significant=r.significant,
                note=r.significance_note(),
            )
            for r in rows
        ],
        charts=build_chart_payloads(result),
    )


@router.post("/compare/excel")
async def compare_excel(body: CompareRequest):
    """Comparison workbook (.xlsx) for the posted inputs."""
    inputs, result, rows = _run(body)
    data = comparison_xlsx_bytes(result, rows=rows, inputs=inputs)
    return StreamingResponse(
        io.BytesIO(data),
        media_type=XLSX_MIME,
        headers={"Content-Disposition": 'attachment; filename="plate_cost_comparison.xlsx"'},
    )
