"""
Plate Cost Comparator - Input Field Table
=========================================

One explicit, bidirectional table of the fifteen numeric input fields.
Each entry ties together the three names a field goes by:

* ``attr``        -- the :class:`~platecost.config.models.InputRecord`
  attribute (snake_case).
* ``storage_key`` -- the key used in the persisted JSON records
  (camelCase, e.g. ``developerPrice``).
* ``field_id``    -- the form field identifier without its workflow
  prefix (kebab-case, e.g. ``developer-price``).

Lookups between the three are plain dictionaries built from
:data:`FIELDS`; nothing is derived by re-casing strings at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one numeric input field."""

    attr: str
    storage_key: str
    field_id: str
    label: str
    unit: str
    section: str


# ====================================================================
# 1.  Sections
# ====================================================================
# Display order of the form groups.  Labels follow the product UI
# (材料 / 设备 / 人工 / 环境).
# ====================================================================

SECTION_LABELS: Dict[str, str] = {
    "material": "材料成本 (Material)",
    "equipment": "设备成本 (Equipment)",
    "labor": "人工成本 (Labor)",
    "environment": "环境成本 (Environment)",
}


# ====================================================================
# 2.  Fields
# ====================================================================

FIELDS: Tuple[FieldSpec, ...] = (
    # 材料成本
    FieldSpec("developer_price", "developerPrice", "developer-price",
              "显影液单价", "元/L", "material"),
    FieldSpec("developer_consumption", "developerConsumption", "developer-consumption",
              "显影液用量", "L/月", "material"),
    FieldSpec("plate_price", "platePrice", "plate-price",
              "版材单价", "元", "material"),
    # 设备成本
    FieldSpec("equipment_price", "equipmentPrice", "equipment-price",
              "设备价格", "元", "equipment"),
    FieldSpec("depreciation_years", "depreciationYears", "depreciation-years",
              "折旧年限", "年", "equipment"),
    FieldSpec("power_consumption", "powerConsumption", "power-consumption",
              "设备功率", "kW", "equipment"),
    FieldSpec("operating_time", "operatingTime", "operating-time",
              "运行时间", "小时/月", "equipment"),
    FieldSpec("electricity_price", "electricityPrice", "electricity-price",
              "电价", "元/kWh", "equipment"),
    # 人工成本
    FieldSpec("labor_salary", "laborSalary", "labor-salary",
              "月工资", "元/月", "labor"),
    FieldSpec("work_days", "workDays", "work-days",
              "月工作天数", "天", "labor"),
    FieldSpec("daily_hours", "dailyHours", "daily-hours",
              "日工作时长", "小时", "labor"),
    # 环境成本
    FieldSpec("wastewater_volume", "wastewaterVolume", "wastewater-volume",
              "废水量", "吨/月", "environment"),
    FieldSpec("wastewater_price", "wastewaterPrice", "wastewater-price",
              "废水处理单价", "元/吨", "environment"),
    FieldSpec("water_consumption", "waterConsumption", "water-consumption",
              "清水消耗量", "吨/月", "environment"),
    FieldSpec("water_price", "waterPrice", "water-price",
              "清水单价", "元/吨", "environment"),
)

FIELD_IDS: List[str] = [f.field_id for f in FIELDS]
FIELD_ATTRS: List[str] = [f.attr for f in FIELDS]

_BY_ATTR: Dict[str, FieldSpec] = {f.attr: f for f in FIELDS}
_BY_STORAGE_KEY: Dict[str, FieldSpec] = {f.storage_key: f for f in FIELDS}
_BY_FIELD_ID: Dict[str, FieldSpec] = {f.field_id: f for f in FIELDS}


# ====================================================================
# 3.  Lookups
# ====================================================================

def by_attr(attr: str) -> FieldSpec:
    """Return the field for a record attribute.  Raises ``KeyError``."""
    return _BY_ATTR[attr]


def by_storage_key(key: str) -> Optional[FieldSpec]:
    return _BY_STORAGE_KEY.get(key)


def by_field_id(field_id: str) -> Optional[FieldSpec]:
    return _BY_FIELD_ID.get(field_id)


def resolve_key(key: str) -> Optional[FieldSpec]:
    """Resolve any of the three naming forms to its :class:`FieldSpec`.

    Used when reading hand-written input files, where authors may use
    the form id (``developer-price``), the storage key (``developerPrice``)
    or the attribute name (``developer_price``).
    """
    key = key.strip()
    return _BY_ATTR.get(key) or _BY_STORAGE_KEY.get(key) or _BY_FIELD_ID.get(key)


def fields_in_section(section: str) -> List[FieldSpec]:
    return [f for f in FIELDS if f.section == section]


def display_label(spec: FieldSpec) -> str:
    """``'显影液单价 (元/L)'``-style label for form widgets."""
    return f"{spec.label} ({spec.unit})" if spec.unit else spec.label
