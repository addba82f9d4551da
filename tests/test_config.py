"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from mission_scorer.config import (
    ReferenceTablesConfig,
    ScorerConfig,
    ScoringWeightsConfig,
    find_config_file,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)


class TestScoringWeights:

    def test_defaults_sum_to_one(self):
        w = ScoringWeightsConfig()
        assert (w.financial, w.safety, w.regulatory, w.technical) == (0.35, 0.25, 0.25, 0.15)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringWeightsConfig(financial=0.5)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            ScoringWeightsConfig(financial=-0.35, safety=0.95, regulatory=0.25, technical=0.15)


class TestReferenceTables:

    @pytest.mark.parametrize("altitude,expected", [
        (0, 1.0),
        (399, 1.0),
        (400, 1.1),
        (599, 1.1),
        (600, 1.25),
        (1000, 1.5),
        (36_000, 1.5),
    ])
    def test_operational_complexity(self, altitude, expected):
        assert ReferenceTablesConfig().operational_complexity(altitude) == expected

    def test_no_matching_band_is_neutral(self):
        tables = ReferenceTablesConfig(altitude_bands=[{"label": "low", "upper_km": 500}])
        assert tables.operational_complexity(800) == 1.0

    def test_default_tables(self):
        tables = ReferenceTablesConfig()
        assert set(tables.business_categories) == {
            "SatCom", "EarthObservation", "InSpaceManufacturing", "LEOInfrastructure",
        }
        assert [v.vendor for v in tables.vendor_costs] == [
            "SpaceX", "ULA", "RocketLab", "Arianespace", "ISRO", "NASA",
        ]
        assert tables.launch_vehicles["Unknown"].reliability == 85


class TestLoadConfig:

    def test_get_config_defaults(self):
        assert get_config() == ScorerConfig()

    def test_load_overrides(self, tmp_path):
        path = tmp_path / "scorer.yaml"
        path.write_text(yaml.safe_dump({
            "scoring_weights": {"financial": 0.4, "safety": 0.2, "regulatory": 0.25, "technical": 0.15},
            "budget": {"revenue_share": 0.5},
        }), encoding="utf-8")

        config = load_config(path)

        assert config.scoring_weights.financial == 0.4
        assert config.budget.revenue_share == 0.5
        assert config.budget.comfortable_ratio == 1.2
        assert get_config() is config

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ScorerConfig()

    def test_load_invalid_weights(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("scoring_weights:\n  financial: 0.9\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_reset_config(self, tmp_path):
        path = tmp_path / "scorer.yaml"
        path.write_text("budget:\n  revenue_share: 0.9\n", encoding="utf-8")
        load_config(path)
        reset_config()
        assert get_config().budget.revenue_share == 0.4


class TestSaveDefaultConfig:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "mission-scorer.yaml"
        save_default_config(path)

        assert path.read_text(encoding="utf-8").startswith("# Mission Scorer Configuration")
        assert load_config(path) == ScorerConfig()


class TestFindConfigFile:

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MISSION_SCORER_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.chdir(tmp_path)

    def test_nothing_found(self):
        assert find_config_file() is None

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("{}", encoding="utf-8")
        monkeypatch.setenv("MISSION_SCORER_CONFIG", str(path))
        assert find_config_file() == path

    def test_missing_environment_path_is_skipped(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MISSION_SCORER_CONFIG", str(tmp_path / "missing.yaml"))
        (tmp_path / "mission-scorer.yml").write_text("{}", encoding="utf-8")
        assert find_config_file() == Path("mission-scorer.yml")

    def test_current_directory(self, tmp_path):
        (tmp_path / "mission-scorer.yaml").write_text("{}", encoding="utf-8")
        assert find_config_file() == Path("mission-scorer.yaml")

    def test_user_config(self, tmp_path):
        user_config = tmp_path / "home" / ".config" / "mission-scorer" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("{}", encoding="utf-8")
        assert find_config_file() == user_config
