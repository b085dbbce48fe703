"""
Plate Cost Comparator (Streamlit UI)
====================================

Side-by-side monthly cost comparison of the chemistry-free (免冲洗版) and
traditional (传统冲洗版) plate workflows.

* Inputs    -- fifteen numeric fields per workflow, restored from the
  last saved session.
* Calculate -- validates the form, computes both breakdowns, renders the
  comparison table and four charts, and saves the inputs.

Run with::

    streamlit run platecost/app/streamlit_app.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List

# Ensure project root is on sys.path (needed for `streamlit run` from a checkout)
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

import streamlit as st

# ---------------------------------------------------------------------------
# Project imports
# ---------------------------------------------------------------------------

from core.storage import get_store
from platecost.app.version import version_label
from platecost.config.fields import SECTION_LABELS, display_label, fields_in_section
from platecost.config.loader import ConfigError, load_app_config
from platecost.config.models import WORKFLOWS, AppConfig, ComparisonRow, Workflow
from platecost.engine.comparator import compare
from platecost.excel.exporter import comparison_xlsx_bytes
from platecost.ingest.form_reader import read_inputs, record_to_form_values
from platecost.ingest.validation import check_field, describe_errors, validate_form
from platecost.presentation.charts import ChartSlotRegistry, build_chart_payloads, to_altair
from platecost.presentation.table import build_comparison_rows, row_styles, rows_to_dataframe
from platecost.storage.persistence import InputPersistence

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONFIG_PATH_ENV = "PLATECOST_CONFIG"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Chart slot -> position in the 2x2 chart grid
CHART_GRID = {
    "total_cost": (0, 0),
    "fl_composition": (0, 1),
    "tr_composition": (1, 0),
    "unit_cost": (1, 1),
}


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@st.cache_resource
def _get_config() -> AppConfig:
    return load_app_config(os.environ.get(CONFIG_PATH_ENV))


def _get_persistence(config: AppConfig) -> InputPersistence:
    return InputPersistence(get_store(config.store_path))


# ---------------------------------------------------------------------------
# Session-state initialisation
# ---------------------------------------------------------------------------

def _init_session_state(persistence: InputPersistence) -> None:
    """Ensure every required session-state key exists.

    On the first run of a session the saved inputs are copied into the
    widget keys, before any widget is created.
    """
    defaults = {
        "inputs_restored": False,
        "comparison": None,
        "calc_inputs": None,
        "error_message": "",
        "warning_message": "",
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if st.session_state["inputs_restored"]:
        return

    fl_record, tr_record = persistence.load()
    for workflow, record in ((Workflow.CHEMISTRY_FREE, fl_record), (Workflow.TRADITIONAL, tr_record)):
        if record is None:
            continue
        for key, text in record_to_form_values(workflow.prefix, record).items():
            st.session_state.setdefault(key, text)
    st.session_state["inputs_restored"] = True


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def _render_input_column(workflow: Workflow, required: List[str]) -> None:
    """Text inputs for one workflow, flagged as soon as they hold bad text."""
    st.subheader(workflow.label)
    for section, section_label in SECTION_LABELS.items():
        st.markdown(f"**{section_label}**")
        for spec in fields_in_section(section):
            key = workflow.prefix + spec.field_id
            st.text_input(display_label(spec), key=key, placeholder="0")
            raw = st.session_state.get(key, "")
            if raw:
                message = check_field(raw, required=spec.field_id in required)
                if message:
                    st.caption(f":red[{message}]")


def _calculate(config: AppConfig, persistence: InputPersistence) -> None:
    """Validate, compute and save.  On invalid input nothing is computed."""
    prefixes = [wf.prefix for wf in WORKFLOWS]
    errors = validate_form(st.session_state, prefixes, config.required_fields)
    if errors:
        st.session_state["error_message"] = describe_errors(
            errors, {wf.prefix: wf.label for wf in WORKFLOWS}
        )
        return

    fl_record = read_inputs(Workflow.CHEMISTRY_FREE.prefix, st.session_state)
    tr_record = read_inputs(Workflow.TRADITIONAL.prefix, st.session_state)
    result = compare(fl_record, tr_record)
    logger.info(
        "Calculated: fl total=%.2f, tr total=%.2f",
        result.fl.total_monthly_cost,
        result.tr.total_monthly_cost,
    )

    st.session_state["comparison"] = result
    st.session_state["calc_inputs"] = (fl_record, tr_record)
    st.session_state["error_message"] = ""
    st.session_state["warning_message"] = ""

    try:
        persistence.save(fl_record, tr_record)
    except OSError as exc:
        logger.warning(f"Could not save inputs: {exc}")
        st.session_state["warning_message"] = f"输入未能保存: {exc}"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def _render_table(rows: List[ComparisonRow]) -> None:
    df = rows_to_dataframe(rows)
    styled = df.style.apply(lambda _frame: row_styles(rows), axis=None)
    st.dataframe(styled, hide_index=True)

    notes = [f"{r.label}: {r.significance_note()}" for r in rows if r.significant]
    if notes:
        st.caption(" / ".join(notes))


def _drop_stale_chart(_instance) -> None:
    """Charts from an earlier script run are cleared by Streamlit itself."""


def _get_chart_registry() -> ChartSlotRegistry:
    """The session's chart registry; it outlives individual script runs."""
    if "chart_registry" not in st.session_state:
        st.session_state["chart_registry"] = ChartSlotRegistry(
            slots=list(CHART_GRID), release=_drop_stale_chart
        )
    return st.session_state["chart_registry"]


def _render_charts(payloads) -> None:
    """Draw all charts into fresh grid placeholders via the session registry."""
    top = st.columns(2)
    bottom = st.columns(2)
    grid = [top, bottom]
    placeholders = {slot: grid[r][c].empty() for slot, (r, c) in CHART_GRID.items()}

    def _draw(payload):
        return placeholders[payload.slot].altair_chart(to_altair(payload))

    _get_chart_registry().render_all(payloads, _draw)


def _render_results(config: AppConfig) -> None:
    result = st.session_state.get("comparison")
    if result is None:
        st.info("填写两种版材的参数后点击「计算 (Calculate)」。")
        return

    st.header("成本对比 (Comparison)")
    rows = build_comparison_rows(
        result,
        significance_pct=config.significance_threshold_pct,
        decimals=config.decimals,
    )
    _render_table(rows)

    st.header("图表 (Charts)")
    _render_charts(build_chart_payloads(result))

    st.download_button(
        label="下载 Excel (Download .xlsx)",
        data=comparison_xlsx_bytes(result, rows=rows, inputs=st.session_state.get("calc_inputs")),
        file_name="plate_cost_comparison.xlsx",
        mime=XLSX_MIME,
        key="dl_xlsx",
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    st.set_page_config(page_title="版材成本对比", layout="wide")

    try:
        config = _get_config()
    except ConfigError as exc:
        st.error(f"配置错误 (Configuration error): {exc}")
        st.stop()

    persistence = _get_persistence(config)
    _init_session_state(persistence)

    # -- Sidebar -----------------------------------------------------------
    with st.sidebar:
        st.title("版材成本对比")
        st.caption("Plate Cost Comparator")
        st.caption(version_label())

        st.divider()
        st.caption(f"保存位置: {config.store_path}")
        if st.button("清除已保存数据 (Clear saved)", key="btn_clear_saved"):
            persistence.clear()
            st.success("已清除。")

        if st.button("重置 (Reset)", key="btn_reset"):
            for k in list(st.session_state.keys()):
                del st.session_state[k]
            st.session_state["inputs_restored"] = True
            st.rerun()

    # -- Main area ---------------------------------------------------------
    st.title("免冲洗版 vs 传统冲洗版 成本计算")

    left, right = st.columns(2)
    with left:
        _render_input_column(Workflow.CHEMISTRY_FREE, config.required_fields)
    with right:
        _render_input_column(Workflow.TRADITIONAL, config.required_fields)

    if st.button("计算 (Calculate)", type="primary", key="btn_calculate"):
        _calculate(config, persistence)

    if st.session_state["error_message"]:
        st.error(st.session_state["error_message"])
        return
    if st.session_state["warning_message"]:
        st.warning(st.session_state["warning_message"])

    _render_results(config)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
