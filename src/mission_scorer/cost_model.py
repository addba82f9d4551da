"""Vendor cost model.

Re-weights the static vendor/stage base-cost table according to mission
parameters and derives a ranking, the cheapest vendor per stage and a
budget-fit summary. Accepts partial input: every cost-relevant field has a
fallback so the comparison can render before the plan is complete.
"""

import logging
from typing import Any, Optional, Union

from .config import ScorerConfig, get_config
from .normalizer import ParameterNormalizer
from .schema import (
    STAGES,
    AgencyLaunchEstimate,
    BudgetFit,
    CostAnalysis,
    CostInsights,
    CostMultipliers,
    MissionParameters,
    Stage,
    StageBest,
    VendorCostProfile,
    VendorStageCosts,
    VendorTotal,
)
from .scorer import clamp, round_half_up

logger = logging.getLogger(__name__)


# Fallbacks for missing cost-relevant parameters
DEFAULT_CONSTELLATION_SIZE = 1
DEFAULT_TARGET_ALTITUDE = 400.0
DEFAULT_MISSION_LIFESPAN = 3.0
DEFAULT_PAYLOAD_MASS = 200.0
DEFAULT_LEAD_TIME_TOLERANCE = 18.0
DEFAULT_TARGET_REVENUE = 5_000_000.0

GOVERNMENT_CLASS_VENDORS = frozenset(["NASA", "ULA"])

RISK_HEAVY_PAYLOAD = "Heavy payload increases launch complexity"
RISK_TIGHT_TIMELINE = "Tight timeline may limit vendor options"
RISK_MASS_PRODUCTION = "Large constellation requires proven mass production"
RISK_HIGH_ALTITUDE = "High altitude increases radiation and debris risk"

PHASED_DEPLOYMENT = ["Consider phased deployment", "Explore rideshare options"]
FULL_DEPLOYMENT = ["Full deployment viable", "Consider premium options for reliability"]


ParamsLike = Union[MissionParameters, dict[str, Any], None]


def _coerce(params: ParamsLike) -> MissionParameters:
    if params is None:
        return MissionParameters()
    if isinstance(params, MissionParameters):
        return params
    return ParameterNormalizer().normalize(params)


def _or_default(value: Optional[float], default: float) -> float:
    return float(value) if value is not None else default


class _CostInputs:
    """Cost-relevant parameters with fallbacks applied."""

    def __init__(self, params: MissionParameters):
        self.constellation_size = _or_default(params.constellation_size, DEFAULT_CONSTELLATION_SIZE)
        self.target_altitude = _or_default(params.target_altitude, DEFAULT_TARGET_ALTITUDE)
        self.mission_lifespan = _or_default(params.mission_lifespan, DEFAULT_MISSION_LIFESPAN)
        self.payload_mass = _or_default(params.payload_mass, DEFAULT_PAYLOAD_MASS)
        self.lead_time_tolerance = _or_default(params.lead_time_tolerance, DEFAULT_LEAD_TIME_TOLERANCE)
        self.target_revenue = _or_default(params.target_revenue, DEFAULT_TARGET_REVENUE)


class CostModel:
    """Computes mission-adjusted vendor costs.

    The model is a pure function of the parameters and the reference
    vendor table; calling it twice with the same input gives the same
    result.
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or get_config()

    def analyze(self, params: ParamsLike = None) -> CostAnalysis:
        """Run the full vendor cost analysis.

        Args:
            params: Mission parameters, a raw dict of them, or None

        Returns:
            Multipliers, stage weights, adjusted costs, ranked totals,
            best vendor per stage and budget insights
        """
        inputs = _CostInputs(_coerce(params))
        vendors = self.config.reference.vendor_costs

        multipliers = self.multipliers(inputs)
        weights = self.stage_weights(inputs, multipliers)
        adjusted = [self.adjust_vendor(v, inputs, multipliers) for v in vendors]
        totals = self.rank_vendors(adjusted, weights)
        best_by_stage = self.best_by_stage(adjusted)
        insights = self.insights(inputs, totals)

        logger.debug(
            "Cost analysis: multipliers=%s ranking=%s budget_fit=%s",
            multipliers.model_dump(), [t.vendor for t in totals], insights.budget_fit.value,
        )

        return CostAnalysis(
            multipliers=multipliers,
            weights={stage.value: weight for stage, weight in weights.items()},
            adjusted_costs=adjusted,
            totals=totals,
            best_by_stage=best_by_stage,
            insights=insights,
        )

    def multipliers(self, inputs: _CostInputs) -> CostMultipliers:
        """Derive the clamped mass, urgency, altitude and scale multipliers."""
        return CostMultipliers(
            mass=clamp(inputs.payload_mass / 500, 0.5, 2.0),
            urgency=clamp((36 - inputs.lead_time_tolerance) / 24, 0.8, 1.5),
            altitude=clamp(inputs.target_altitude / 800, 0.9, 1.3),
            scale=clamp(inputs.constellation_size / 50, 0.7, 1.4),
        )

    def stage_weights(self, inputs: _CostInputs, m: CostMultipliers) -> dict[Stage, float]:
        return {
            Stage.MANUFACTURING: m.mass * m.scale,
            Stage.LAUNCH: m.mass * m.urgency * m.altitude,
            Stage.GROUND_SEGMENT: m.scale,
            Stage.OPERATIONS: (inputs.mission_lifespan / 5) * m.scale,
        }

    def adjust_vendor(
        self,
        vendor: VendorCostProfile,
        inputs: _CostInputs,
        m: CostMultipliers,
    ) -> VendorStageCosts:
        """Apply vendor/stage-specific adjustments to one vendor's base costs."""
        stages = {
            stage.value: round_half_up(self._adjust_stage(vendor, stage, inputs, m))
            for stage in STAGES
        }
        return VendorStageCosts(vendor=vendor.vendor, stages=stages)

    def _adjust_stage(
        self,
        vendor: VendorCostProfile,
        stage: Stage,
        inputs: _CostInputs,
        m: CostMultipliers,
    ) -> float:
        cost = vendor.cost_for(stage)

        if stage == Stage.LAUNCH:
            # Small launchers are undersized for heavy payloads
            if inputs.payload_mass > 1000 and vendor.vendor == "RocketLab":
                cost *= 1.8
            if m.urgency > 1.2 and vendor.vendor in GOVERNMENT_CLASS_VENDORS:
                cost *= 0.9
            if inputs.lead_time_tolerance > 24:
                cost *= 0.85
        elif stage == Stage.MANUFACTURING:
            if inputs.constellation_size > 50:
                cost *= 0.92
            if inputs.payload_mass < 100:
                cost *= 0.8
        elif stage == Stage.OPERATIONS:
            if inputs.target_revenue < 10_000_000 and vendor.vendor == "ISRO":
                cost *= 0.85
            if inputs.mission_lifespan > 7:
                cost *= 1.1

        return cost

    def rank_vendors(
        self,
        adjusted: list[VendorStageCosts],
        weights: dict[Stage, float],
    ) -> list[VendorTotal]:
        """Weighted totals, cheapest first (ties by vendor name)."""
        totals = []
        for vendor in adjusted:
            breakdown = {
                stage.value: vendor.stages.get(stage.value, 0) * weights[stage]
                for stage in STAGES
            }
            totals.append(VendorTotal(
                vendor=vendor.vendor,
                total=sum(breakdown.values()),
                breakdown=breakdown,
            ))

        totals.sort(key=lambda t: (t.total, t.vendor))
        return totals

    def best_by_stage(self, adjusted: list[VendorStageCosts]) -> dict[str, StageBest]:
        """Cheapest unweighted adjusted cost per stage (ties by vendor name)."""
        best: dict[str, StageBest] = {}
        if not adjusted:
            return best

        for stage in STAGES:
            winner = min(adjusted, key=lambda v: (v.stages.get(stage.value, 0), v.vendor))
            best[stage.value] = StageBest(
                vendor=winner.vendor,
                cost=winner.stages.get(stage.value, 0),
            )
        return best

    def insights(self, inputs: _CostInputs, totals: list[VendorTotal]) -> CostInsights:
        """Budget fit, risk factors and best/worst vendor summary."""
        budget_cfg = self.config.budget

        total_budget = inputs.target_revenue * budget_cfg.revenue_share
        average_cost = sum(t.total for t in totals) / len(totals) if totals else 0.0
        budget_ratio = total_budget / average_cost if average_cost > 0 else 0.0

        return CostInsights(
            budget_fit=self.classify_budget(budget_ratio),
            budget_ratio=budget_ratio,
            total_budget=total_budget,
            average_cost=average_cost,
            risk_factors=self.risk_factors(inputs),
            best_vendor=totals[0] if totals else None,
            worst_vendor=totals[-1] if totals else None,
            savings=totals[-1].total - totals[0].total if totals else 0.0,
            deployment_recommendations=list(
                PHASED_DEPLOYMENT
                if budget_ratio < budget_cfg.phased_deployment_ratio
                else FULL_DEPLOYMENT
            ),
        )

    def classify_budget(self, ratio: float) -> BudgetFit:
        """Classify a budget ratio (strict comparisons at both boundaries)."""
        budget_cfg = self.config.budget
        if ratio > budget_cfg.comfortable_ratio:
            return BudgetFit.COMFORTABLE
        if ratio > budget_cfg.tight_ratio:
            return BudgetFit.TIGHT
        return BudgetFit.CHALLENGING

    @staticmethod
    def risk_factors(inputs: _CostInputs) -> list[str]:
        factors = []
        if inputs.payload_mass > 1500:
            factors.append(RISK_HEAVY_PAYLOAD)
        if inputs.lead_time_tolerance < 12:
            factors.append(RISK_TIGHT_TIMELINE)
        if inputs.constellation_size > 100:
            factors.append(RISK_MASS_PRODUCTION)
        if inputs.target_altitude > 1200:
            factors.append(RISK_HIGH_ALTITUDE)
        return factors

    def compare_agencies(self, params: ParamsLike = None) -> list[AgencyLaunchEstimate]:
        """Apply agency launch metrics to the mission payload.

        Sorted by estimated launch cost, then agency name.
        """
        inputs = _CostInputs(_coerce(params))
        estimates = [
            AgencyLaunchEstimate(
                agency=a.agency,
                estimated_launch_cost=a.launch_cost_per_kg * max(0.0, inputs.payload_mass),
                reliability_pct=a.reliability_pct,
                annual_launches=a.annual_launches,
                typical_lead_time_months=a.typical_lead_time_months,
                fits_lead_time=a.typical_lead_time_months <= inputs.lead_time_tolerance,
                notable_vehicles=list(a.notable_vehicles),
            )
            for a in self.config.reference.agencies
        ]
        estimates.sort(key=lambda e: (e.estimated_launch_cost, e.agency))
        return estimates


def compute_cost_analysis(params: ParamsLike = None, config: Optional[ScorerConfig] = None) -> CostAnalysis:
    """Convenience wrapper around ``CostModel(config).analyze(params)``."""
    return CostModel(config).analyze(params)
