"""Export a cost comparison to an Excel workbook."""
import logging
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple, Union

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill

from ..config.fields import FIELDS, display_label
from ..config.models import ComparisonResult, ComparisonRow, InputRecord, Workflow
from ..presentation.table import TABLE_COLUMNS, build_comparison_rows

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="FF4472C4", end_color="FF4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFFFF", bold=True)
LOWER_FILL = PatternFill(start_color="FFC6EFCE", end_color="FFC6EFCE", fill_type="solid")
SIGNIFICANT_FONT = Font(color="FF9C0006", bold=True)

InputPair = Tuple[InputRecord, InputRecord]


def build_workbook(
    result: ComparisonResult,
    rows: Optional[List[ComparisonRow]] = None,
    inputs: Optional[InputPair] = None,
) -> openpyxl.Workbook:
    """Build the comparison workbook.

    Sheets:
      - "Cost Comparison": one row per cost category, lower value filled
        green, significant differences and their percentage in red.
      - "Inputs" (only when ``inputs`` = (chemistry_free, traditional)
        records are given): the values the comparison was computed from.
    """
    if rows is None:
        rows = build_comparison_rows(result)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Cost Comparison"

    ws["A1"] = "版材成本对比 (Plate Cost Comparison)"
    ws["A1"].font = Font(size=14, bold=True)

    headers = TABLE_COLUMNS + ["差异 (%)"]
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=3, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal="center")

    for row_idx, r in enumerate(rows, 4):
        number_format = "0." + "0" * r.decimals if r.decimals else "0"
        ws.cell(row=row_idx, column=1, value=r.label)
        a_cell = ws.cell(row=row_idx, column=2, value=r.value_a)
        b_cell = ws.cell(row=row_idx, column=3, value=r.value_b)
        d_cell = ws.cell(row=row_idx, column=4, value=r.difference)
        p_cell = ws.cell(row=row_idx, column=5, value=round(r.percentage_diff, 2))
        for c in (a_cell, b_cell, d_cell):
            c.number_format = number_format

        if r.preferred is Workflow.CHEMISTRY_FREE:
            a_cell.fill = LOWER_FILL
        elif r.preferred is Workflow.TRADITIONAL:
            b_cell.fill = LOWER_FILL
        if r.significant:
            d_cell.font = SIGNIFICANT_FONT
            p_cell.font = SIGNIFICANT_FONT

    if inputs is not None:
        _write_inputs_sheet(wb, inputs)

    # Auto-fit columns
    for sheet in wb.worksheets:
        for col in sheet.columns:
            max_length = max(len(str(cell.value or "")) for cell in col)
            sheet.column_dimensions[col[0].column_letter].width = min(max_length + 4, 40)

    return wb


def _write_inputs_sheet(wb: openpyxl.Workbook, inputs: InputPair) -> None:
    fl_record, tr_record = inputs
    ws = wb.create_sheet(title="Inputs")
    headers = ["输入项", Workflow.CHEMISTRY_FREE.label, Workflow.TRADITIONAL.label]
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT

    for row_idx, spec in enumerate(FIELDS, 2):
        ws.cell(row=row_idx, column=1, value=display_label(spec))
        ws.cell(row=row_idx, column=2, value=getattr(fl_record, spec.attr))
        ws.cell(row=row_idx, column=3, value=getattr(tr_record, spec.attr))


def export_comparison_xlsx(
    result: ComparisonResult,
    output_path: Union[str, Path],
    rows: Optional[List[ComparisonRow]] = None,
    inputs: Optional[InputPair] = None,
) -> str:
    """Write the comparison workbook to ``output_path`` and return the path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb = build_workbook(result, rows=rows, inputs=inputs)
    wb.save(str(output_path))
    logger.info(f"Comparison workbook saved to {output_path}")
    return str(output_path)


def comparison_xlsx_bytes(
    result: ComparisonResult,
    rows: Optional[List[ComparisonRow]] = None,
    inputs: Optional[InputPair] = None,
) -> bytes:
    """Workbook as bytes, for download buttons."""
    buffer = BytesIO()
    build_workbook(result, rows=rows, inputs=inputs).save(buffer)
    return buffer.getvalue()
