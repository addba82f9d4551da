"""Shared fixtures for the mission scorer tests."""

import json
from pathlib import Path

import pytest

from mission_scorer.config import reset_config


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def earth_observation_mission() -> dict:
    """Reference Earth observation plan (wizard camelCase keys)."""
    return {
        "businessCategory": "EarthObservation",
        "targetRevenue": 25_000_000,
        "productValueDensity": 1000,
        "targetMarket": "Government",
        "constellationSize": 24,
        "targetAltitude": 550,
        "missionLifespan": 5,
        "launchVehicleType": "Medium",
        "inSpacePropulsion": True,
        "deorbitMethod": "Active Propulsion",
        "ssaStrategy": "Commercial",
        "dataLicensing": "Open",
    }


@pytest.fixture
def mission_file(tmp_path: Path, earth_observation_mission: dict) -> Path:
    path = tmp_path / "mission.json"
    path.write_text(json.dumps(earth_observation_mission), encoding="utf-8")
    return path
