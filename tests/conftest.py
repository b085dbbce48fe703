"""Shared fixtures for the plate cost comparator test suite.

Provides the worked-example input record, a second record for the
traditional workflow, form-value mappings and key-value stores.
"""

import pytest

from core.storage import JsonFileStore, MemoryStore
from platecost.config.fields import FIELDS
from platecost.config.models import InputRecord
from platecost.ingest.form_reader import record_to_form_values


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

EXAMPLE_VALUES = {
    "developer_price": 10,
    "developer_consumption": 2,
    "plate_price": 50,
    "equipment_price": 2400,
    "depreciation_years": 2,
    "power_consumption": 5,
    "operating_time": 100,
    "electricity_price": 1,
    "labor_salary": 6000,
    "work_days": 22,
    "daily_hours": 8,
    "wastewater_volume": 10,
    "wastewater_price": 3,
    "water_consumption": 20,
    "water_price": 2,
}


@pytest.fixture
def example_record():
    """The worked example: material 70, depreciation 100, energy 500,
    wastewater 30, water 40, labor 6000/22/8."""
    return InputRecord(**EXAMPLE_VALUES)


@pytest.fixture
def traditional_record():
    """A traditional-workflow record that costs more on chemistry and waste."""
    values = dict(EXAMPLE_VALUES)
    values.update(
        developer_price=20,
        developer_consumption=4,
        wastewater_volume=30,
    )
    return InputRecord(**values)


@pytest.fixture
def zero_record():
    return InputRecord()


# ---------------------------------------------------------------------------
# Form values
# ---------------------------------------------------------------------------

@pytest.fixture
def example_form(example_record, traditional_record):
    """Prefixed form text for both workflows, as a widget layer holds it."""
    values = {}
    values.update(record_to_form_values("fl-", example_record))
    values.update(record_to_form_values("tr-", traditional_record))
    return values


@pytest.fixture
def all_field_ids():
    return [f.field_id for f in FIELDS]


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def store_path(tmp_path):
    """Path to a not-yet-existing JSON store file."""
    return tmp_path / "store" / "platecost.json"


@pytest.fixture
def file_store(store_path):
    return JsonFileStore(store_path)
