"""Monthly cost model for a single plate production workflow."""
import logging

from ..config.models import CostBreakdown, InputRecord

logger = logging.getLogger(__name__)

# Assumed monthly production area (平米/月).  Not taken from any input, so
# unit costs are only meaningful relative to each other.
NOMINAL_AREA = 1000.0

MONTHS_PER_YEAR = 12


def material_cost(r: InputRecord) -> float:
    """显影液单价 × 用量 + 版材单价."""
    return (r.developer_price * r.developer_consumption) + r.plate_price


def depreciation_cost(r: InputRecord) -> float:
    """设备价格 / (折旧年限 × 12); 0 without a positive depreciation period."""
    if r.depreciation_years <= 0:
        return 0.0
    return r.equipment_price / (r.depreciation_years * MONTHS_PER_YEAR)


def energy_cost(r: InputRecord) -> float:
    return r.power_consumption * r.operating_time * r.electricity_price


def wastewater_cost(r: InputRecord) -> float:
    return r.wastewater_volume * r.wastewater_price


def water_cost(r: InputRecord) -> float:
    return r.water_consumption * r.water_price


def labor_cost(r: InputRecord) -> float:
    """(月工资 / 工作天数) / 日工作时长; 0 when days × hours is not positive."""
    if (r.work_days * r.daily_hours) <= 0:
        return 0.0
    return (r.labor_salary / r.work_days) / r.daily_hours


def calculate_costs(record: InputRecord) -> CostBreakdown:
    """Compute the full monthly breakdown for one workflow.

    Never raises for input values: every zero denominator yields a zero
    cost instead.
    """
    material = material_cost(record)
    depreciation = depreciation_cost(record)
    energy = energy_cost(record)
    wastewater = wastewater_cost(record)
    water = water_cost(record)
    labor = labor_cost(record)

    total = material + depreciation + energy + wastewater + water + labor
    unit = total / NOMINAL_AREA

    return CostBreakdown(
        material_cost=material,
        depreciation_cost=depreciation,
        energy_cost=energy,
        wastewater_treatment_cost=wastewater,
        water_consumption_cost=water,
        labor_cost=labor,
        total_monthly_cost=total,
        unit_cost=unit,
    )
