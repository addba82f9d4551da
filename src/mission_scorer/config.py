"""Centralized configuration management for the mission scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from . import reference_data
from .schema import AgencyMetrics, VendorCostProfile


class ScoringWeightsConfig(BaseModel):
    """Weights for the overall score.

    The overall score is a convex combination of the sub-scores, so these
    weights must sum to 1.0.
    """
    financial: float = Field(0.35, ge=0, description="Weight for financial viability")
    safety: float = Field(
        0.25, ge=0,
        description="Weight for debris safety (100 minus debris risk)"
    )
    regulatory: float = Field(0.25, ge=0, description="Weight for regulatory compliance")
    technical: float = Field(
        0.15, ge=0,
        description="Weight for the technical capability proxy"
    )

    @model_validator(mode="after")
    def _check_sum(self) -> "ScoringWeightsConfig":
        total = self.financial + self.safety + self.regulatory + self.technical
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.4f}")
        return self


class TechnicalProxyConfig(BaseModel):
    """Technical capability proxy used in the overall score."""
    with_propulsion: float = Field(80.0, ge=0, le=100, description="Proxy when in-space propulsion is present")
    without_propulsion: float = Field(60.0, ge=0, le=100, description="Proxy without in-space propulsion")


class RecommendationThresholdsConfig(BaseModel):
    """Score thresholds that trigger recommendations (strictly below)."""
    debris_mandatory: int = Field(50, description="Debris score below which mitigation is mandatory")
    regulatory_mandatory: int = Field(60, description="Regulatory score below which compliance is mandatory")
    financial_mandatory: int = Field(40, description="Financial score below which the business model is reassessed")
    technical_recommended: int = Field(70, description="Technical score below which optimization is recommended")
    financial_recommended: int = Field(70, description="Financial score below which cost reduction is recommended")
    debris_recommended: int = Field(80, description="Debris score below which deorbit upgrades are recommended")


class BudgetConfig(BaseModel):
    """Budget-fit classification for the vendor cost model."""
    revenue_share: float = Field(0.4, description="Share of annual revenue available for mission costs")
    comfortable_ratio: float = Field(1.2, description="Budget ratio above which the fit is comfortable")
    tight_ratio: float = Field(0.8, description="Budget ratio above which the fit is tight")
    phased_deployment_ratio: float = Field(
        0.9,
        description="Budget ratio below which phased deployment is suggested"
    )


class BusinessCategoryProfile(BaseModel):
    """Reference metadata for a business category."""
    name: str
    description: str = ""
    market_size: float = Field(0, description="Addressable market size in USD")
    avg_launch_cost: float = 0
    avg_payload_mass: float = 0
    debris_risk_multiplier: float = 1.0
    regulatory_complexity: float = 1.0


class LaunchVehicleProfile(BaseModel):
    """Reference metadata for a launch vehicle class."""
    reliability: float = Field(..., description="Reliability score (0-100)")
    description: str = ""


class AltitudeBand(BaseModel):
    """Operational complexity for an altitude band."""
    label: str
    upper_km: Optional[float] = Field(None, description="Exclusive upper bound; None for the open top band")
    operational_complexity: float = Field(1.0, gt=0)


def _default_business_categories() -> dict[str, BusinessCategoryProfile]:
    return {
        key: BusinessCategoryProfile(**value)
        for key, value in reference_data.BUSINESS_CATEGORIES.items()
    }


def _default_vendor_costs() -> list[VendorCostProfile]:
    return [VendorCostProfile(**v) for v in reference_data.VENDOR_COSTS]


def _default_launch_vehicles() -> dict[str, LaunchVehicleProfile]:
    return {
        key: LaunchVehicleProfile(**value)
        for key, value in reference_data.LAUNCH_VEHICLES.items()
    }


def _default_altitude_bands() -> list[AltitudeBand]:
    return [AltitudeBand(**band) for band in reference_data.ALTITUDE_BANDS]


def _default_agencies() -> list[AgencyMetrics]:
    return [AgencyMetrics(**a) for a in reference_data.AGENCIES]


class ReferenceTablesConfig(BaseModel):
    """Static reference tables consumed by the scorer and cost model."""
    business_categories: dict[str, BusinessCategoryProfile] = Field(
        default_factory=_default_business_categories
    )
    vendor_costs: list[VendorCostProfile] = Field(default_factory=_default_vendor_costs)
    launch_vehicles: dict[str, LaunchVehicleProfile] = Field(default_factory=_default_launch_vehicles)
    altitude_bands: list[AltitudeBand] = Field(default_factory=_default_altitude_bands)
    agencies: list[AgencyMetrics] = Field(default_factory=_default_agencies)

    def operational_complexity(self, altitude_km: float) -> float:
        """Operational complexity factor for an altitude (1.0 if no band matches)."""
        for band in self.altitude_bands:
            if band.upper_km is None or altitude_km < band.upper_km:
                return band.operational_complexity
        return 1.0


class ReportConfig(BaseModel):
    """Remote report generator settings."""
    api_key_env: str = Field(
        "GEMINI_API_KEY",
        description="Environment variable holding the report API key"
    )
    endpoint: str = Field(
        "https://generativelanguage.googleapis.com/v1/models/gemini-pro:generateContent",
        description="Text generation endpoint"
    )
    connect_timeout: float = Field(10.0, description="Connect timeout in seconds")
    read_timeout: float = Field(60.0, description="Read timeout in seconds")


class ScorerConfig(BaseModel):
    """Complete configuration for the mission scorer."""
    scoring_weights: ScoringWeightsConfig = Field(default_factory=ScoringWeightsConfig)
    technical_proxy: TechnicalProxyConfig = Field(default_factory=TechnicalProxyConfig)
    recommendation_thresholds: RecommendationThresholdsConfig = Field(
        default_factory=RecommendationThresholdsConfig
    )
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    reference: ReferenceTablesConfig = Field(default_factory=ReferenceTablesConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. MISSION_SCORER_CONFIG environment variable
    2. ./mission-scorer.yaml
    3. ./mission-scorer.yml
    4. ~/.config/mission-scorer/config.yaml
    """
    env_path = os.environ.get("MISSION_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["mission-scorer.yaml", "mission-scorer.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "mission-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = ScorerConfig()
    data = config.model_dump(mode="json")

    yaml_content = """# Mission Scorer Configuration
# ============================
#
# This file configures score weights, recommendation thresholds,
# budget classification and the reference tables (business categories,
# vendor base costs, launch vehicles, altitude bands, agencies).
#
# Copy this file to one of these locations:
#   - ./mission-scorer.yaml (current directory)
#   - ~/.config/mission-scorer/config.yaml (user config)
#
# Or set the MISSION_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
