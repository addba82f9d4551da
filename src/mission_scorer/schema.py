"""Pydantic models for the Mission Scoring Engine.

Input schema for mission parameters and output schemas for scores,
vendor cost analysis and the narrative mission report.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


# =============================================================================
# Errors
# =============================================================================


class MissionScorerError(Exception):
    """Base class for mission scorer errors."""


class ParameterLoadError(MissionScorerError):
    """Raised when a mission parameter file cannot be read or parsed."""


class ReportGenerationError(MissionScorerError):
    """Raised when the remote report generator returns an unusable answer."""


# =============================================================================
# Parameter Enums
# =============================================================================


class TargetMarket(str, Enum):
    """Primary customer segment."""
    GOVERNMENT = "Government"
    ENTERPRISE = "Enterprise"
    CONSUMER = "Consumer"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "TargetMarket":
        """Parse target market from string (unknown values map to UNKNOWN)."""
        if not value:
            return cls.UNKNOWN
        mapping = {
            "government": cls.GOVERNMENT,
            "enterprise": cls.ENTERPRISE,
            "consumer": cls.CONSUMER,
        }
        return mapping.get(value.strip().lower(), cls.UNKNOWN)


class LaunchVehicleType(str, Enum):
    """Launch vehicle class.

    The alternate form vocabulary (Reusable, Expendable, SmallDedicated)
    is folded onto these classes by ``from_string``.
    """
    SMALL = "Small"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    RIDESHARE = "Rideshare"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "LaunchVehicleType":
        """Parse launch vehicle type, accepting both form vocabularies."""
        if not value:
            return cls.UNKNOWN
        mapping = {
            "small": cls.SMALL,
            "medium": cls.MEDIUM,
            "heavy": cls.HEAVY,
            "rideshare": cls.RIDESHARE,
            # Alternate form schema
            "reusable": cls.MEDIUM,
            "expendable": cls.HEAVY,
            "smalldedicated": cls.SMALL,
        }
        key = value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        return mapping.get(key, cls.UNKNOWN)


class DeorbitMethod(str, Enum):
    """End-of-life disposal methods with a scoring effect."""
    ACTIVE_PROPULSION = "Active Propulsion"
    DRAG_ENHANCEMENT = "Drag Enhancement"


class SsaStrategy(str, Enum):
    """Space situational awareness strategies with a scoring effect."""
    COMMERCIAL = "Commercial"
    IN_HOUSE = "In-house"


class DataLicensing(str, Enum):
    """Data licensing models with a scoring effect."""
    OPEN = "Open"
    RESTRICTED = "Restricted"


class Stage(str, Enum):
    """Mission cost stages, in lifecycle order."""
    MANUFACTURING = "Manufacturing"
    LAUNCH = "Launch"
    GROUND_SEGMENT = "Ground Segment"
    OPERATIONS = "Operations"


STAGES: list[Stage] = [
    Stage.MANUFACTURING,
    Stage.LAUNCH,
    Stage.GROUND_SEGMENT,
    Stage.OPERATIONS,
]


class BudgetFit(str, Enum):
    """How the mission budget compares to average vendor cost."""
    COMFORTABLE = "comfortable"
    TIGHT = "tight"
    CHALLENGING = "challenging"


class ScoreBand(str, Enum):
    """Display band for a 0-100 score."""
    GOOD = "good"  # >= 80
    FAIR = "fair"  # 60-79
    POOR = "poor"  # < 60

    @classmethod
    def from_score(cls, score: float) -> "ScoreBand":
        if score >= 80:
            return cls.GOOD
        if score >= 60:
            return cls.FAIR
        return cls.POOR


# =============================================================================
# Input Model
# =============================================================================


class MissionParameters(BaseModel):
    """Mission parameters collected by the planning wizard.

    Every field is optional: the scorer and cost model resolve missing
    values through their own documented fallbacks. Both snake_case names
    and the wizard's camelCase keys are accepted.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Phase 1: Opportunity definition
    business_category: Optional[str] = None
    target_revenue: Optional[float] = None  # USD per year
    product_value_density: Optional[float] = None  # USD per kg
    target_market: Optional[str] = None

    # Phase 2: Operational and technical parameters
    constellation_size: Optional[int] = None
    target_altitude: Optional[float] = None  # km
    mission_lifespan: Optional[float] = None  # years
    launch_vehicle_type: Optional[str] = None
    in_space_propulsion: bool = False
    payload_mass: Optional[float] = None  # kg
    lead_time_tolerance: Optional[float] = None  # months
    selected_launch_site: Optional[str] = None

    # Phase 3: Risk and sustainability commitments
    deorbit_method: Optional[str] = None
    ssa_strategy: Optional[str] = None
    data_licensing: Optional[str] = None


# =============================================================================
# Score Models
# =============================================================================


class Recommendations(BaseModel):
    """Recommendations partitioned by severity."""
    mandatory: list[str] = Field(default_factory=list)
    recommended: list[str] = Field(default_factory=list)
    baseline: list[str] = Field(default_factory=list)


class ScoreResult(BaseModel):
    """Headline scores for a mission plan.

    ``debris`` is a risk score (higher is riskier); ``safety`` is its
    inverse as shown on the dashboard.
    """
    financial: int = Field(..., ge=0, le=100)
    debris: int = Field(..., ge=0, le=100)
    regulatory: int = Field(..., ge=0, le=100)
    technical: int = Field(..., ge=0, le=100)
    overall: int = Field(..., ge=0, le=100)
    recommendations: Recommendations = Field(default_factory=Recommendations)

    @property
    def safety(self) -> int:
        return 100 - self.debris

    def bands(self) -> dict[str, ScoreBand]:
        """Display band per headline score (debris shown as safety)."""
        return {
            "financial": ScoreBand.from_score(self.financial),
            "safety": ScoreBand.from_score(self.safety),
            "regulatory": ScoreBand.from_score(self.regulatory),
            "technical": ScoreBand.from_score(self.technical),
            "overall": ScoreBand.from_score(self.overall),
        }


# =============================================================================
# Cost Models
# =============================================================================


class VendorCostProfile(BaseModel):
    """Base (unadjusted) cost per stage for one vendor."""
    vendor: str
    stages: dict[str, float]

    def cost_for(self, stage: Stage) -> float:
        return self.stages.get(stage.value, 0.0)


class CostMultipliers(BaseModel):
    """Clamped multipliers derived from mission parameters."""
    mass: float
    urgency: float
    altitude: float
    scale: float


class VendorStageCosts(BaseModel):
    """Mission-adjusted cost per stage for one vendor."""
    vendor: str
    stages: dict[str, int]


class VendorTotal(BaseModel):
    """Weighted total for one vendor."""
    vendor: str
    total: float
    breakdown: dict[str, float] = Field(default_factory=dict)


class StageBest(BaseModel):
    """Cheapest vendor for a single stage."""
    vendor: str
    cost: int


class CostInsights(BaseModel):
    """Budget fit and risk summary for the vendor comparison."""
    budget_fit: BudgetFit
    budget_ratio: float
    total_budget: float
    average_cost: float
    risk_factors: list[str] = Field(default_factory=list)
    best_vendor: Optional[VendorTotal] = None
    worst_vendor: Optional[VendorTotal] = None
    savings: float = 0.0
    deployment_recommendations: list[str] = Field(default_factory=list)


class CostAnalysis(BaseModel):
    """Complete output from the vendor cost model."""
    multipliers: CostMultipliers
    weights: dict[str, float]
    adjusted_costs: list[VendorStageCosts] = Field(default_factory=list)
    totals: list[VendorTotal] = Field(default_factory=list)  # ascending by total
    best_by_stage: dict[str, StageBest] = Field(default_factory=dict)
    insights: CostInsights

    @computed_field
    @property
    def ranking(self) -> list[str]:
        """Vendor names, cheapest weighted total first."""
        return [t.vendor for t in self.totals]


class AgencyMetrics(BaseModel):
    """Approximate public launch metrics for a space agency or provider."""
    agency: str
    launch_cost_per_kg: float
    annual_launches: int
    reliability_pct: float
    typical_lead_time_months: float
    notable_vehicles: list[str] = Field(default_factory=list)


class AgencyLaunchEstimate(BaseModel):
    """Agency metrics applied to a specific payload."""
    agency: str
    estimated_launch_cost: float
    reliability_pct: float
    annual_launches: int
    typical_lead_time_months: float
    fits_lead_time: bool
    notable_vehicles: list[str] = Field(default_factory=list)


# =============================================================================
# Report Models
# =============================================================================


class EnvironmentalImpact(BaseModel):
    debris_risk_assessment: str = ""
    orbital_sustainability: str = ""
    collision_probability: str = ""
    mitigation_strategies: list[str] = Field(default_factory=list)


class RegulatoryNotes(BaseModel):
    licensing_requirements: list[str] = Field(default_factory=list)
    compliance_checklist: list[str] = Field(default_factory=list)
    international_considerations: list[str] = Field(default_factory=list)


class FinancialAnalysis(BaseModel):
    cost_breakdown: str = ""
    risk_factors: list[str] = Field(default_factory=list)
    market_opportunities: list[str] = Field(default_factory=list)
    roi_projection: str = ""


class TechnicalInsights(BaseModel):
    launch_window_optimization: str = ""
    orbital_mechanics: str = ""
    mission_timeline: str = ""
    success_probability: int = Field(..., ge=0, le=100)


class MissionReport(BaseModel):
    """Narrative mission report, from the remote generator or the local template."""
    summary: str
    recommendations: Recommendations = Field(default_factory=Recommendations)
    environmental_impact: EnvironmentalImpact = Field(default_factory=EnvironmentalImpact)
    regulatory_notes: RegulatoryNotes = Field(default_factory=RegulatoryNotes)
    financial_analysis: FinancialAnalysis = Field(default_factory=FinancialAnalysis)
    technical_insights: TechnicalInsights
    source: str = "template"  # template, gemini


class MissionEvaluation(BaseModel):
    """Scores, costs and report for a single mission plan."""
    evaluated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    parameters: MissionParameters
    scores: ScoreResult
    costs: CostAnalysis
    report: MissionReport
    processing_warnings: list[str] = Field(default_factory=list)
