"""Shared fixtures for API integration tests.

Uses FastAPI TestClient (in-memory, no network) so tests run
without a live server.
"""

from __future__ import annotations

import os
import sys

import pytest

# Ensure project root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture()
def client():
    """FastAPI TestClient -- no network, no server startup needed."""
    from fastapi.testclient import TestClient

    from services.api.app.main import app

    return TestClient(app)


@pytest.fixture()
def example_body():
    """Request body with the worked example on the chemistry-free side."""
    return {
        "chemistry_free": {
            "developerPrice": 10, "developerConsumption": 2, "platePrice": 50,
            "equipmentPrice": 2400, "depreciationYears": 2,
            "powerConsumption": 5, "operatingTime": 100, "electricityPrice": 1,
            "laborSalary": 6000, "workDays": 22, "dailyHours": 8,
            "wastewaterVolume": 10, "wastewaterPrice": 3,
            "waterConsumption": 20, "waterPrice": 2,
        },
        "traditional": {
            "developer_price": 20, "developer_consumption": 4, "plate_price": 50,
            "equipment_price": 2400, "depreciation_years": 2,
            "power_consumption": 5, "operating_time": 100, "electricity_price": 1,
            "labor_salary": 6000, "work_days": 22, "daily_hours": 8,
            "wastewater_volume": 30, "wastewater_price": 3,
            "water_consumption": 20, "water_price": 2,
        },
    }
