"""Tests for the parameter normalizer."""

import pytest

from mission_scorer.normalizer import ParameterNormalizer


@pytest.fixture
def normalizer() -> ParameterNormalizer:
    return ParameterNormalizer()


class TestFieldResolution:

    def test_camel_case_keys(self, normalizer, earth_observation_mission):
        params = normalizer.normalize(earth_observation_mission)
        assert params.business_category == "EarthObservation"
        assert params.target_revenue == 25_000_000
        assert params.constellation_size == 24
        assert params.in_space_propulsion is True
        assert normalizer.warnings == []

    def test_snake_case_keys(self, normalizer):
        params = normalizer.normalize({"target_altitude": 550, "payload_mass": 120})
        assert params.target_altitude == 550
        assert params.payload_mass == 120

    def test_snake_case_preferred_over_camel_case(self, normalizer):
        params = normalizer.normalize({"target_altitude": 500, "targetAltitude": 700})
        assert params.target_altitude == 500

    def test_legacy_keys_fill_gaps(self, normalizer):
        params = normalizer.normalize({
            "targetOrbitalAltitude": 450,
            "targetAnnualRevenue": 3_000_000,
            "requiredMissionLifespan": 4,
            "dataLicensingModel": "open",
        })
        assert params.target_altitude == 450
        assert params.target_revenue == 3_000_000
        assert params.mission_lifespan == 4
        assert params.data_licensing == "Open"

    def test_legacy_keys_do_not_override(self, normalizer):
        params = normalizer.normalize({"targetAltitude": 550, "targetOrbitalAltitude": 450})
        assert params.target_altitude == 550

    def test_empty_record(self, normalizer):
        params = normalizer.normalize({})
        assert params.business_category is None
        assert params.target_altitude is None
        assert params.in_space_propulsion is False
        assert normalizer.warnings == []

    def test_unrelated_keys_ignored(self, normalizer):
        params = normalizer.normalize({"currentStep": 3, "theme": "dark"})
        assert params.model_dump(exclude={"in_space_propulsion"}) == {
            name: None for name in params.model_dump(exclude={"in_space_propulsion"})
        }


class TestCoercion:

    def test_formatted_currency(self, normalizer):
        params = normalizer.normalize({"targetRevenue": "$25,000,000"})
        assert params.target_revenue == 25_000_000

    def test_unparseable_number_warns(self, normalizer):
        params = normalizer.normalize({"targetRevenue": "lots"})
        assert params.target_revenue is None
        assert len(normalizer.warnings) == 1
        assert "target_revenue" in normalizer.warnings[0]

    def test_boolean_number_warns(self, normalizer):
        params = normalizer.normalize({"payloadMass": True})
        assert params.payload_mass is None
        assert normalizer.warnings

    def test_constellation_rounded(self, normalizer):
        assert normalizer.normalize({"constellationSize": "24.6"}).constellation_size == 25

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        ("yes", True),
        ("True", True),
        (1, True),
        ("no", False),
        (0, False),
        ("", False),
    ])
    def test_propulsion_flag(self, normalizer, value, expected):
        assert normalizer.normalize({"inSpacePropulsion": value}).in_space_propulsion is expected

    def test_blank_strings_are_missing(self, normalizer):
        params = normalizer.normalize({"businessCategory": "   ", "selectedLaunchSite": " Kourou "})
        assert params.business_category is None
        assert params.selected_launch_site == "Kourou"

    @pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("nan"), float("inf"), 10 ** 400])
    def test_non_finite_numbers_warn(self, normalizer, value):
        params = normalizer.normalize({
            "constellationSize": value,
            "missionLifespan": value,
            "targetAltitude": value,
        })
        assert params.constellation_size is None
        assert params.mission_lifespan is None
        assert params.target_altitude is None
        assert len(normalizer.warnings) == 3

    def test_warnings_reset_between_calls(self, normalizer):
        normalizer.normalize({"targetRevenue": "lots"})
        normalizer.normalize({"targetRevenue": 1})
        assert normalizer.warnings == []


class TestVocabulary:

    @pytest.mark.parametrize("raw,expected", [
        ("Medium", "Medium"),
        ("heavy", "Heavy"),
        ("Reusable", "Medium"),
        ("Expendable", "Heavy"),
        ("SmallDedicated", "Small"),
        ("small-dedicated", "Small"),
    ])
    def test_launch_vehicle(self, normalizer, raw, expected):
        assert normalizer.normalize({"launchVehicleType": raw}).launch_vehicle_type == expected

    def test_unknown_launch_vehicle_kept_with_warning(self, normalizer):
        params = normalizer.normalize({"launchVehicleType": "Balloon"})
        assert params.launch_vehicle_type == "Balloon"
        assert "launch_vehicle_type" in normalizer.warnings[0]

    @pytest.mark.parametrize("raw,expected", [
        ("Propulsive", "Active Propulsion"),
        ("active propulsion", "Active Propulsion"),
        ("Drag Enhancement", "Drag Enhancement"),
        ("Passive", "Passive"),
    ])
    def test_deorbit_method(self, normalizer, raw, expected):
        assert normalizer.normalize({"deorbitMethod": raw}).deorbit_method == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Commercial Service", "Commercial"),
        ("in-house", "In-house"),
        ("InHouse", "In-house"),
        ("Government", "Government"),
    ])
    def test_ssa_strategy(self, normalizer, raw, expected):
        assert normalizer.normalize({"ssaStrategy": raw}).ssa_strategy == expected

    def test_data_licensing_case(self, normalizer):
        assert normalizer.normalize({"dataLicensing": "RESTRICTED"}).data_licensing == "Restricted"
