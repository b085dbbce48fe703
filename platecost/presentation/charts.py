"""Chart payloads, the chart-slot registry, and Altair rendering.

A comparison is drawn as four charts, each living in its own slot:

* ``total_cost``      -- total monthly cost, one bar per workflow
* ``fl_composition``  -- chemistry-free cost composition (six slices)
* ``tr_composition``  -- traditional cost composition (six slices)
* ``unit_cost``       -- unit cost, one bar per workflow

:class:`ChartSlotRegistry` owns whatever is currently drawn in each slot.
Drawing into a slot always releases the previous instance first, so
repeated calculations never stack charts on top of each other.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import altair as alt
import pandas as pd

from ..config.models import COST_COMPONENTS, ChartPayload, ComparisonResult, Workflow

logger = logging.getLogger(__name__)

CHART_SLOTS: List[str] = ["total_cost", "fl_composition", "tr_composition", "unit_cost"]

WORKFLOW_LABELS = [Workflow.CHEMISTRY_FREE.label, Workflow.TRADITIONAL.label]

# Slice colours for the six cost components, in COST_COMPONENTS order.
COMPOSITION_COLORS = [
    "rgba(255, 99, 132, 0.6)",
    "rgba(54, 162, 235, 0.6)",
    "rgba(255, 206, 86, 0.6)",
    "rgba(75, 192, 192, 0.6)",
    "rgba(153, 102, 255, 0.6)",
    "rgba(255, 159, 64, 0.6)",
]


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

def _composition_payload(slot: str, workflow: Workflow, result: ComparisonResult) -> ChartPayload:
    breakdown = result.get(workflow)
    return ChartPayload(
        slot=slot,
        kind="pie",
        title=f"{workflow.label}成本构成",
        labels=[label for _attr, label in COST_COMPONENTS],
        values=[getattr(breakdown, attr) for attr, _label in COST_COMPONENTS],
        colors=list(COMPOSITION_COLORS),
    )


def build_chart_payloads(result: ComparisonResult) -> Dict[str, ChartPayload]:
    """All four chart payloads for a comparison, keyed by slot."""
    return {
        "total_cost": ChartPayload(
            slot="total_cost",
            kind="bar",
            title="总成本对比",
            series_label="总月成本 (元)",
            labels=list(WORKFLOW_LABELS),
            values=[result.fl.total_monthly_cost, result.tr.total_monthly_cost],
            colors=["rgba(75, 192, 192, 0.6)", "rgba(255, 99, 132, 0.6)"],
            y_axis_title="成本 (元)",
        ),
        "fl_composition": _composition_payload("fl_composition", Workflow.CHEMISTRY_FREE, result),
        "tr_composition": _composition_payload("tr_composition", Workflow.TRADITIONAL, result),
        "unit_cost": ChartPayload(
            slot="unit_cost",
            kind="bar",
            title="单位成本对比",
            series_label="单位成本 (元/平米)",
            labels=list(WORKFLOW_LABELS),
            values=[result.fl.unit_cost, result.tr.unit_cost],
            colors=["rgba(75, 192, 192, 0.6)", "rgba(255, 159, 64, 0.6)"],
            y_axis_title="单位成本 (元/平米)",
        ),
    }


# ---------------------------------------------------------------------------
# Altair
# ---------------------------------------------------------------------------

def to_altair(payload: ChartPayload) -> alt.Chart:
    """Build the Altair chart for a payload."""
    data = pd.DataFrame({
        "label": payload.labels,
        "value": payload.values,
        "order": list(range(len(payload.labels))),
    })
    color = alt.Color(
        "label:N",
        scale=alt.Scale(domain=payload.labels, range=payload.colors),
        sort=payload.labels,
        legend=alt.Legend(title=None, orient="right"),
    )

    if payload.kind == "pie":
        chart = (
            alt.Chart(data)
            .mark_arc()
            .encode(
                theta=alt.Theta("value:Q", stack=True),
                color=color,
                order=alt.Order("order:Q"),
                tooltip=[
                    alt.Tooltip("label:N", title="成本项目"),
                    alt.Tooltip("value:Q", format=",.2f"),
                ],
            )
        )
    else:
        chart = (
            alt.Chart(data)
            .mark_bar()
            .encode(
                x=alt.X("label:N", title="", sort=payload.labels, axis=alt.Axis(labelAngle=0)),
                y=alt.Y(
                    "value:Q",
                    title=payload.y_axis_title or payload.series_label,
                    scale=alt.Scale(zero=True),
                ),
                color=color,
                tooltip=[
                    alt.Tooltip("label:N", title=""),
                    alt.Tooltip("value:Q", title=payload.series_label, format=",.2f"),
                ],
            )
        )

    return chart.properties(width="container", height=320, title=payload.title)


# ---------------------------------------------------------------------------
# Slot registry
# ---------------------------------------------------------------------------

def release_instance(instance: Any) -> None:
    """Tear down a drawn chart.

    Instances exposing ``destroy()`` or ``empty()`` (Streamlit placeholders)
    are cleared through it; anything else is simply dropped.
    """
    for name in ("destroy", "empty"):
        method = getattr(instance, name, None)
        if callable(method):
            method()
            return


class ChartSlotRegistry:
    """Owns the chart instance currently drawn in each slot."""

    def __init__(
        self,
        slots: Iterable[str] = CHART_SLOTS,
        release: Callable[[Any], None] = release_instance,
    ):
        self._instances: Dict[str, Optional[Any]] = {s: None for s in slots}
        self._release = release

    @property
    def slots(self) -> List[str]:
        return list(self._instances)

    def _check(self, slot: str) -> None:
        if slot not in self._instances:
            raise KeyError(f"Unknown chart slot: {slot!r}")

    def current(self, slot: str) -> Optional[Any]:
        """The instance drawn in ``slot``; ownership stays with the registry."""
        self._check(slot)
        return self._instances[slot]

    def take(self, slot: str) -> Optional[Any]:
        """Remove and return the instance in ``slot``; the caller now owns it."""
        self._check(slot)
        instance = self._instances[slot]
        self._instances[slot] = None
        return instance

    def render(self, slot: str, payload: ChartPayload, draw: Callable[[ChartPayload], Any]) -> Any:
        """Release the slot's previous instance, then draw and keep the new one."""
        previous = self.take(slot)
        if previous is not None:
            logger.debug("Releasing chart in slot %s", slot)
            self._release(previous)
        instance = draw(payload)
        self._instances[slot] = instance
        return instance

    def render_all(self, payloads: Dict[str, ChartPayload], draw: Callable[[ChartPayload], Any]) -> None:
        for slot in self.slots:
            if slot in payloads:
                self.render(slot, payloads[slot], draw)

    def release_all(self) -> None:
        for slot in self.slots:
            previous = self.take(slot)
            if previous is not None:
                self._release(previous)
