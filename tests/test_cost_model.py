"""Tests for platecost.engine.cost_model -- the monthly cost formulas."""

import pytest

from platecost.config.models import InputRecord
from platecost.engine.cost_model import (
    NOMINAL_AREA,
    calculate_costs,
    depreciation_cost,
    labor_cost,
    material_cost,
)


class TestWorkedExample:
    def test_components(self, example_record):
        costs = calculate_costs(example_record)
        assert costs.material_cost == 70.0
        assert costs.depreciation_cost == 100.0
        assert costs.energy_cost == 500.0
        assert costs.wastewater_treatment_cost == 30.0
        assert costs.water_consumption_cost == 40.0
        assert costs.labor_cost == pytest.approx(34.0909090909)

    def test_total(self, example_record):
        costs = calculate_costs(example_record)
        assert costs.total_monthly_cost == pytest.approx(774.0909090909)

    def test_unit_cost_is_total_over_nominal_area(self, example_record):
        costs = calculate_costs(example_record)
        assert costs.unit_cost == costs.total_monthly_cost / NOMINAL_AREA
        assert costs.unit_cost == pytest.approx(0.7740909090909)

    def test_total_is_sum_of_components(self, example_record):
        costs = calculate_costs(example_record)
        assert costs.total_monthly_cost == sum(costs.components().values())

    def test_total_exact_with_fractional_inputs(self):
        record = InputRecord(
            developer_price=0.1, developer_consumption=0.3, plate_price=0.2,
            equipment_price=0.7, depreciation_years=0.3,
            power_consumption=0.1, operating_time=0.2, electricity_price=0.3,
            labor_salary=0.1, work_days=0.3, daily_hours=0.7,
            wastewater_volume=0.1, wastewater_price=0.2,
            water_consumption=0.3, water_price=0.1,
        )
        costs = calculate_costs(record)
        c = costs.components()
        assert costs.total_monthly_cost == sum(c.values())
        assert costs.total_monthly_cost == (
            c["material_cost"] + c["depreciation_cost"] + c["energy_cost"]
            + c["wastewater_treatment_cost"] + c["water_consumption_cost"] + c["labor_cost"]
        )
        assert costs.unit_cost == costs.total_monthly_cost / NOMINAL_AREA


class TestZeroInputs:
    def test_all_zero(self, zero_record):
        costs = calculate_costs(zero_record)
        assert costs.total_monthly_cost == 0.0
        assert costs.unit_cost == 0.0
        assert all(v == 0.0 for v in costs.components().values())


class TestZeroDenominators:
    def test_depreciation_zero_years(self):
        assert depreciation_cost(InputRecord(equipment_price=5000)) == 0.0

    def test_depreciation_negative_years(self):
        assert depreciation_cost(InputRecord(equipment_price=5000, depreciation_years=-1)) == 0.0

    def test_labor_zero_days(self):
        assert labor_cost(InputRecord(labor_salary=6000, daily_hours=8)) == 0.0

    def test_labor_zero_hours(self):
        assert labor_cost(InputRecord(labor_salary=6000, work_days=22)) == 0.0

    def test_nothing_raises_with_only_numerators(self):
        record = InputRecord(equipment_price=1000, labor_salary=1000)
        costs = calculate_costs(record)
        assert costs.total_monthly_cost == 0.0


class TestFormulas:
    def test_material_cost(self):
        assert material_cost(InputRecord(developer_price=3, developer_consumption=4, plate_price=5)) == 17.0

    def test_depreciation_is_monthly(self):
        record = InputRecord(equipment_price=120000, depreciation_years=10)
        assert depreciation_cost(record) == 1000.0

    def test_labor_is_hourly_rate(self):
        record = InputRecord(labor_salary=4000, work_days=25, daily_hours=8)
        assert labor_cost(record) == 20.0

    def test_breakdown_is_frozen(self, example_record):
        costs = calculate_costs(example_record)
        with pytest.raises(Exception):
            costs.material_cost = 1.0
