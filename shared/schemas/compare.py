"""Comparison schemas for API contracts."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from platecost.config.models import ChartPayload, CostBreakdown, InputRecord


class WorkflowInputs(BaseModel):
    """Numeric inputs for one workflow.

    Keys may be given as attribute names (``developer_price``) or as the
    camelCase storage keys (``developerPrice``).  Omitted fields are 0.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    developer_price: float = Field(default=0.0, ge=0)
    developer_consumption: float = Field(default=0.0, ge=0)
    plate_price: float = Field(default=0.0, ge=0)

    equipment_price: float = Field(default=0.0, ge=0)
    depreciation_years: float = Field(default=0.0, ge=0)
    power_consumption: float = Field(default=0.0, ge=0)
    operating_time: float = Field(default=0.0, ge=0)
    electricity_price: float = Field(default=0.0, ge=0)

    labor_salary: float = Field(default=0.0, ge=0)
    work_days: float = Field(default=0.0, ge=0)
    daily_hours: float = Field(default=0.0, ge=0)

    wastewater_volume: float = Field(default=0.0, ge=0)
    wastewater_price: float = Field(default=0.0, ge=0)
    water_consumption: float = Field(default=0.0, ge=0)
    water_price: float = Field(default=0.0, ge=0)

    def to_record(self) -> InputRecord:
        return InputRecord(**self.model_dump())


class CompareRequest(BaseModel):
    """Request to compare both workflows."""

    chemistry_free: WorkflowInputs = Field(default_factory=WorkflowInputs)
    traditional: WorkflowInputs = Field(default_factory=WorkflowInputs)
    significance_threshold_pct: float = Field(
        default=10.0,
        ge=0,
        description="Rows whose |percentage difference| exceeds this are flagged",
    )


class ComparisonRowOut(BaseModel):
    """One row of the comparison table."""

    item: str
    label: str
    chemistry_free: float
    traditional: float
    difference: float
    percentage_diff: float
    preferred: Optional[str] = Field(
        default=None,
        description="'fl' or 'tr' for the strictly lower workflow, null on a tie",
    )
    significant: bool = False
    note: str = ""


class CompareResponse(BaseModel):
    """Response from a comparison."""

    chemistry_free: CostBreakdown
    traditional: CostBreakdown
    rows: List[ComparisonRowOut] = Field(default_factory=list)
    charts: Dict[str, ChartPayload] = Field(default_factory=dict)
