"""Tests for platecost.excel.exporter -- the comparison workbook."""

import io

import openpyxl
import pytest

from platecost.engine.comparator import compare
from platecost.excel.exporter import (
    LOWER_FILL,
    build_workbook,
    comparison_xlsx_bytes,
    export_comparison_xlsx,
)
from platecost.presentation.table import TABLE_COLUMNS


@pytest.fixture
def result(example_record, traditional_record):
    return compare(example_record, traditional_record)


class TestComparisonSheet:
    def test_layout(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        assert ws["A1"].value.startswith("版材成本对比")
        headers = [ws.cell(row=3, column=c).value for c in range(1, 6)]
        assert headers == TABLE_COLUMNS + ["差异 (%)"]
        assert ws.cell(row=4, column=1).value == "材料成本"
        assert ws.cell(row=11, column=1).value == "单位成本 (元/平米)"

    def test_values_unrounded(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        # labor row
        assert ws.cell(row=9, column=1).value == "人工成本"
        assert ws.cell(row=9, column=2).value == pytest.approx(6000 / 22 / 8)
        assert ws.cell(row=9, column=2).number_format == "0.00"

    def test_difference_and_percentage(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        assert ws.cell(row=4, column=4).value == pytest.approx(-60.0)
        assert ws.cell(row=4, column=5).value == pytest.approx(-46.15)

    def test_lower_value_filled(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        assert ws.cell(row=4, column=2).fill.start_color.rgb == LOWER_FILL.start_color.rgb
        assert ws.cell(row=4, column=3).fill.fill_type is None

    def test_tie_not_filled(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        # energy row: identical inputs
        assert ws.cell(row=6, column=2).fill.fill_type is None
        assert ws.cell(row=6, column=3).fill.fill_type is None

    def test_significant_in_red(self, result):
        ws = build_workbook(result)["Cost Comparison"]
        assert ws.cell(row=4, column=4).font.color.rgb == "FF9C0006"
        assert ws.cell(row=6, column=4).font.bold is not True


class TestInputsSheet:
    def test_absent_without_inputs(self, result):
        assert build_workbook(result).sheetnames == ["Cost Comparison"]

    def test_written_with_inputs(self, result, example_record, traditional_record):
        wb = build_workbook(result, inputs=(example_record, traditional_record))
        ws = wb["Inputs"]
        assert ws.cell(row=1, column=2).value == "免冲洗版"
        assert ws.cell(row=2, column=1).value == "显影液单价 (元/L)"
        assert ws.cell(row=2, column=2).value == 10.0
        assert ws.cell(row=2, column=3).value == 20.0
        assert ws.max_row == 16


class TestExport:
    def test_export_to_file(self, result, tmp_path):
        path = export_comparison_xlsx(result, tmp_path / "out" / "cmp.xlsx")
        wb = openpyxl.load_workbook(path)
        assert wb["Cost Comparison"].cell(row=4, column=2).value == pytest.approx(70.0)

    def test_bytes(self, result):
        data = comparison_xlsx_bytes(result)
        wb = openpyxl.load_workbook(io.BytesIO(data))
        assert "Cost Comparison" in wb.sheetnames
