"""End-to-end tests of the Streamlit app through streamlit's AppTest harness."""
from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from platecost.ingest.form_reader import record_to_form_values

APP_FILE = Path(__file__).resolve().parent.parent / "platecost" / "app" / "streamlit_app.py"


@pytest.fixture
def app_test(tmp_path, monkeypatch):
    monkeypatch.setenv("PLATECOST_STORE_PATH", str(tmp_path / "store.json"))
    monkeypatch.delenv("PLATECOST_CONFIG", raising=False)
    st.cache_resource.clear()
    at = AppTest.from_file(str(APP_FILE), default_timeout=60)
    at.run()
    return at


def _fill(at, example_record, traditional_record):
    values = {}
    values.update(record_to_form_values("fl-", example_record))
    values.update(record_to_form_values("tr-", traditional_record))
    for key, text in values.items():
        at.text_input(key=key).input(text)


class TestStreamlitApp:
    def test_first_load_has_no_results(self, app_test):
        assert not app_test.exception
        assert app_test.session_state["comparison"] is None

    def test_invalid_form_blocks_calculation(self, app_test):
        app_test.button(key="btn_calculate").click().run()
        assert not app_test.exception
        assert len(app_test.error) == 1
        assert app_test.session_state["comparison"] is None

    def test_calculate(self, app_test, example_record, traditional_record):
        _fill(app_test, example_record, traditional_record)
        app_test.button(key="btn_calculate").click().run()
        assert not app_test.exception
        assert not app_test.error
        result = app_test.session_state["comparison"]
        assert result.fl.material_cost == 70.0
        assert result.tr.material_cost == 130.0

    def test_recalculate_replaces_charts_in_same_registry(
        self, app_test, example_record, traditional_record
    ):
        _fill(app_test, example_record, traditional_record)
        app_test.button(key="btn_calculate").click().run()
        registry = app_test.session_state["chart_registry"]
        first = {slot: registry.current(slot) for slot in registry.slots}
        assert all(instance is not None for instance in first.values())

        app_test.button(key="btn_calculate").click().run()
        assert not app_test.exception
        assert app_test.session_state["chart_registry"] is registry
        for slot in registry.slots:
            assert registry.current(slot) is not None
            assert registry.current(slot) is not first[slot]
