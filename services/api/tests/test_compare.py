"""Comparison endpoint tests."""

from __future__ import annotations

import io

import openpyxl
import pytest


def test_compare_example(client, example_body):
    resp = client.post("/v1/compare", json=example_body)
    assert resp.status_code == 200
    data = resp.json()

    fl = data["chemistry_free"]
    assert fl["material_cost"] == pytest.approx(70.0)
    assert fl["depreciation_cost"] == pytest.approx(100.0)
    assert fl["energy_cost"] == pytest.approx(500.0)
    assert fl["wastewater_treatment_cost"] == pytest.approx(30.0)
    assert fl["water_consumption_cost"] == pytest.approx(40.0)
    assert fl["labor_cost"] == pytest.approx(6000 / 22 / 8)
    assert fl["unit_cost"] == pytest.approx(fl["total_monthly_cost"] / 1000)

    tr = data["traditional"]
    # 20 * 4 + 50
    assert tr["material_cost"] == pytest.approx(130.0)
    assert tr["wastewater_treatment_cost"] == pytest.approx(90.0)


def test_compare_rows(client, example_body):
    data = client.post("/v1/compare", json=example_body).json()
    rows = {r["item"]: r for r in data["rows"]}
    assert len(data["rows"]) == 8

    material = rows["material_cost"]
    assert material["preferred"] == "fl"
    assert material["significant"] is True
    assert material["note"].startswith("差异超过10%")

    # Identical energy inputs: a tie, nothing preferred
    energy = rows["energy_cost"]
    assert energy["preferred"] is None
    assert energy["difference"] == 0
    assert energy["significant"] is False
    assert energy["note"] == ""


def test_compare_charts(client, example_body):
    data = client.post("/v1/compare", json=example_body).json()
    charts = data["charts"]
    assert set(charts) == {"total_cost", "fl_composition", "tr_composition", "unit_cost"}
    assert charts["fl_composition"]["kind"] == "pie"
    assert len(charts["fl_composition"]["values"]) == 6
    assert charts["total_cost"]["kind"] == "bar"


def test_compare_custom_threshold(client, example_body):
    example_body["significance_threshold_pct"] = 50
    data = client.post("/v1/compare", json=example_body).json()
    rows = {r["item"]: r for r in data["rows"]}
    # material differs by about 46%
    assert rows["material_cost"]["significant"] is False
    # wastewater differs by about 67%
    assert rows["wastewater_treatment_cost"]["significant"] is True


def test_compare_empty_body_gives_zeros(client):
    resp = client.post("/v1/compare", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["chemistry_free"]["total_monthly_cost"] == 0
    assert all(r["preferred"] is None for r in data["rows"])
    assert all(r["percentage_diff"] == 0 for r in data["rows"])


def test_compare_negative_value_rejected(client, example_body):
    example_body["traditional"]["plate_price"] = -1
    resp = client.post("/v1/compare", json=example_body)
    assert resp.status_code == 422


def test_compare_non_finite_value_rejected(client):
    # Starlette accepts the non-standard Infinity/NaN JSON literals
    for literal in ("Infinity", "-Infinity", "NaN"):
        resp = client.post(
            "/v1/compare",
            content='{"chemistry_free": {"platePrice": ' + literal + "}}",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422, literal


def test_compare_unknown_field_rejected(client):
    resp = client.post("/v1/compare", json={"chemistry_free": {"platePrize": 1}})
    assert resp.status_code == 422


def test_compare_non_numeric_rejected(client):
    resp = client.post("/v1/compare", json={"traditional": {"platePrice": "abc"}})
    assert resp.status_code == 422


def test_compare_excel(client, example_body):
    resp = client.post("/v1/compare/excel", json=example_body)
    assert resp.status_code == 200
    assert "spreadsheetml" in resp.headers["content-type"]

    wb = openpyxl.load_workbook(io.BytesIO(resp.content))
    assert wb.sheetnames == ["Cost Comparison", "Inputs"]
    ws = wb["Cost Comparison"]
    assert ws.cell(row=4, column=1).value == "材料成本"
    assert ws.cell(row=4, column=2).value == pytest.approx(70.0)
