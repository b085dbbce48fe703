"""
Plate Cost Comparator - Configuration and Data Models
=====================================================

Defines the Pydantic v2 models used across the calculator:

  Workflow   : Workflow (chemistry-free ``fl`` / traditional ``tr``)
  Inputs     : InputRecord
  Results    : CostBreakdown, ComparisonResult
  Present    : ComparisonRow, ChartPayload
  Settings   : AppConfig

Convention
----------
- Input and result models are frozen: a record or breakdown never changes
  after creation, every calculation builds new ones.
- Chinese labels are the product's display names; the English snake_case
  attribute names are what code uses.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import FIELD_IDS, resolve_key


# ============================================================
# 1.  Workflow
# ============================================================


class Workflow(str, Enum):
    """The two plate production workflows being compared."""

    CHEMISTRY_FREE = "fl"
    TRADITIONAL = "tr"

    @property
    def prefix(self) -> str:
        """Form field prefix, e.g. ``'fl-'``."""
        return f"{self.value}-"

    @property
    def label(self) -> str:
        return _WORKFLOW_LABELS[self]

    @property
    def storage_key(self) -> str:
        """Key of this workflow's record in the key-value store."""
        return f"{self.value}Inputs"


_WORKFLOW_LABELS = {
    Workflow.CHEMISTRY_FREE: "免冲洗版",
    Workflow.TRADITIONAL: "传统冲洗版",
}

WORKFLOWS: Tuple[Workflow, Workflow] = (Workflow.CHEMISTRY_FREE, Workflow.TRADITIONAL)


# ============================================================
# 2.  InputRecord
# ============================================================


class InputRecord(BaseModel):
    """All numeric inputs for one workflow.

    Every field defaults to ``0.0``; the form reader resolves missing or
    unparseable values to zero before a record is built.

    Attributes:
        developer_price:       显影液单价.
        developer_consumption: 显影液用量.
        plate_price:           版材单价.
        equipment_price:       设备价格.
        depreciation_years:    折旧年限 (years).
        power_consumption:     设备功率.
        operating_time:        运行时间.
        electricity_price:     电价.
        labor_salary:          月工资.
        work_days:             月工作天数.
        daily_hours:           日工作时长.
        wastewater_volume:     废水量.
        wastewater_price:      废水处理单价.
        water_consumption:     清水消耗量.
        water_price:           清水单价.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    developer_price: float = 0.0
    developer_consumption: float = 0.0
    plate_price: float = 0.0

    equipment_price: float = 0.0
    depreciation_years: float = 0.0
    power_consumption: float = 0.0
    operating_time: float = 0.0
    electricity_price: float = 0.0

    labor_salary: float = 0.0
    work_days: float = 0.0
    daily_hours: float = 0.0

    wastewater_volume: float = 0.0
    wastewater_price: float = 0.0
    water_consumption: float = 0.0
    water_price: float = 0.0


# ============================================================
# 3 / 4.  CostBreakdown  &  ComparisonResult
# ============================================================

# (attribute, display label) -- the six monthly cost components
COST_COMPONENTS: List[Tuple[str, str]] = [
    ("material_cost", "材料成本"),
    ("depreciation_cost", "设备折旧成本"),
    ("energy_cost", "能耗成本"),
    ("wastewater_treatment_cost", "废水处理成本"),
    ("water_consumption_cost", "清水消耗成本"),
    ("labor_cost", "人工成本"),
]

# Rows of the comparison table, in display order.
COMPARISON_ITEMS: List[Tuple[str, str]] = COST_COMPONENTS + [
    ("total_monthly_cost", "总月成本"),
    ("unit_cost", "单位成本 (元/平米)"),
]


class CostBreakdown(BaseModel):
    """Monthly cost breakdown for one workflow (derived, never edited)."""

    model_config = ConfigDict(frozen=True)

    material_cost: float = 0.0
    depreciation_cost: float = 0.0
    energy_cost: float = 0.0
    wastewater_treatment_cost: float = 0.0
    water_consumption_cost: float = 0.0
    labor_cost: float = 0.0
    total_monthly_cost: float = 0.0
    unit_cost: float = 0.0

    def components(self) -> Dict[str, float]:
        """The six cost components in display order."""
        return {attr: getattr(self, attr) for attr, _label in COST_COMPONENTS}

    def value_of(self, item: str) -> float:
        return float(getattr(self, item))


class ComparisonResult(BaseModel):
    """Both workflows' breakdowns under fixed workflow keys."""

    model_config = ConfigDict(frozen=True)

    fl: CostBreakdown
    tr: CostBreakdown

    def get(self, workflow: Workflow) -> CostBreakdown:
        return self.fl if workflow is Workflow.CHEMISTRY_FREE else self.tr

    @property
    def chemistry_free(self) -> CostBreakdown:
        return self.fl

    @property
    def traditional(self) -> CostBreakdown:
        return self.tr


# ============================================================
# 5.  ComparisonRow  (table view)
# ============================================================


class ComparisonRow(BaseModel):
    """A single row of the comparison table.

    Attributes:
        item:            CostBreakdown attribute this row shows.
        label:           Display label.
        value_a:         Chemistry-free value (unrounded).
        value_b:         Traditional value (unrounded).
        difference:      ``value_a - value_b``.
        percentage_diff: ``difference / value_b * 100``; 0 when ``value_b`` is 0.
        preferred:       Workflow with the strictly lower value, ``None`` on a tie.
        significant:     ``|percentage_diff|`` exceeds the threshold.
    """

    model_config = ConfigDict(frozen=True)

    item: str
    label: str
    value_a: float
    value_b: float
    difference: float
    percentage_diff: float
    preferred: Optional[Workflow] = None
    significant: bool = False
    threshold_pct: float = 10.0
    decimals: int = 2

    @property
    def formatted_a(self) -> str:
        return f"{self.value_a:.{self.decimals}f}"

    @property
    def formatted_b(self) -> str:
        return f"{self.value_b:.{self.decimals}f}"

    @property
    def formatted_difference(self) -> str:
        return f"{self.difference:.{self.decimals}f}"

    def significance_note(self) -> str:
        """Tooltip text for a significant difference, empty otherwise."""
        if not self.significant:
            return ""
        return f"差异超过{self.threshold_pct:g}% ({self.percentage_diff:.2f}%)"


# ============================================================
# 6.  ChartPayload
# ============================================================


class ChartPayload(BaseModel):
    """Renderer-agnostic description of one chart.

    ``labels``, ``values`` and ``colors`` are parallel lists.
    """

    slot: str = Field(..., description="Chart slot this payload is drawn into.")
    kind: Literal["bar", "pie"]
    title: str = ""
    series_label: str = ""
    labels: List[str] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    y_axis_title: Optional[str] = None


# ============================================================
# 7.  AppConfig
# ============================================================

DEFAULT_STORE_PATH = str(Path.home() / ".platecost" / "store.json")


def _default_store_path() -> str:
    return os.environ.get("PLATECOST_STORE_PATH", DEFAULT_STORE_PATH)


class AppConfig(BaseModel):
    """Runtime settings shared by the app, the CLI and the API.

    Attributes:
        store_path:                 JSON file backing the key-value store.
        significance_threshold_pct: A difference above this share of the
                                    traditional value is flagged.
        decimals:                   Decimal places in formatted output.
        required_fields:            Form field ids that must be filled in
                                    before a calculation runs.
    """

    store_path: str = Field(
        default_factory=_default_store_path,
        description="Path of the JSON key-value store (env: PLATECOST_STORE_PATH).",
    )
    significance_threshold_pct: float = Field(default=10.0, ge=0.0)
    decimals: int = Field(default=2, ge=0, le=6)
    required_fields: List[str] = Field(default_factory=lambda: list(FIELD_IDS))

    # -- validators ----------------------------------------------------------

    @field_validator("required_fields", mode="before")
    @classmethod
    def _normalise_required(cls, v: object) -> List[str]:
        """Accept any field naming form and store canonical field ids."""
        if isinstance(v, str):
            v = [v]
        out: List[str] = []
        for key in v or []:
            spec = resolve_key(str(key))
            if spec is None:
                raise ValueError(f"Unknown input field: {key!r}")
            if spec.field_id not in out:
                out.append(spec.field_id)
        return out
