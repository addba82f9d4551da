"""Scorer - heuristic scoring of a mission plan.

Produces financial, debris-risk, regulatory and technical sub-scores
(integers, 0-100) and a weighted overall score.
"""

import logging
import math
from typing import Optional

from .config import ScorerConfig, get_config
from .recommender import RecommendationGenerator
from .schema import (
    DataLicensing,
    DeorbitMethod,
    LaunchVehicleType,
    MissionParameters,
    ScoreResult,
    SsaStrategy,
    TargetMarket,
)

logger = logging.getLogger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def _number(value: Optional[float]) -> float:
    return float(value) if value is not None else 0.0


class MissionScorer:
    """Scores mission parameters with the simplified heuristic.

    Scoring principles:
    - Each sub-score starts from a base and adds tiered adjustments
    - Only the highest matching tier of a bracket applies
    - Sub-scores are clamped before aggregation
    - Unknown or missing values fall through to the neutral branch
    """

    # Tier tables are (threshold, bonus), highest first.
    REVENUE_TIERS = [
        (100_000_000, 25),
        (25_000_000, 20),
        (5_000_000, 15),
        (1_000_000, 10),
    ]
    VALUE_DENSITY_TIERS = [
        (10_000, 15),
        (1_000, 10),
        (100, 5),
    ]
    MARKET_FINANCIAL_BONUS = {
        TargetMarket.GOVERNMENT: 15,
        TargetMarket.ENTERPRISE: 10,
        TargetMarket.CONSUMER: 5,
    }
    MARKET_SIZE_TIERS = [
        (50_000_000_000, 10),
        (10_000_000_000, 5),
    ]

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        recommender: Optional[RecommendationGenerator] = None,
    ):
        """Initialize scorer with optional configuration."""
        self.config = config or get_config()
        self.recommender = recommender or RecommendationGenerator(self.config)

    def score(self, params: MissionParameters) -> ScoreResult:
        """Score a mission plan.

        Args:
            params: Mission parameters (missing fields resolve to fallbacks)

        Returns:
            Sub-scores, overall score and tiered recommendations
        """
        financial = self.financial_score(params)
        debris = self.debris_score(params)
        regulatory = self.regulatory_score(params)
        technical = self.technical_score(params)
        overall = self.overall_score(financial, debris, regulatory, params.in_space_propulsion)

        logger.debug(
            "Scored mission: financial=%d debris=%d regulatory=%d technical=%d overall=%d",
            financial, debris, regulatory, technical, overall,
        )

        return ScoreResult(
            financial=financial,
            debris=debris,
            regulatory=regulatory,
            technical=technical,
            overall=overall,
            recommendations=self.recommender.generate(financial, debris, regulatory, technical),
        )

    def financial_score(self, params: MissionParameters) -> int:
        """Financial viability (0-100)."""
        score = 50.0

        score += self._tier_bonus(_number(params.target_revenue), self.REVENUE_TIERS)
        score += self._tier_bonus(_number(params.product_value_density), self.VALUE_DENSITY_TIERS)
        score += self.MARKET_FINANCIAL_BONUS.get(TargetMarket.from_string(params.target_market), 0)

        category = self.config.reference.business_categories.get(params.business_category or "")
        if category is not None:
            for threshold, bonus in self.MARKET_SIZE_TIERS:
                if category.market_size > threshold:
                    score += bonus
                    break

        return round_half_up(clamp(score, 0, 100))

    def debris_score(self, params: MissionParameters) -> int:
        """Debris risk (0-100, higher means more risk)."""
        risk = 20.0

        altitude = _number(params.target_altitude)
        if altitude > 800:
            risk += 40
        elif altitude > 600:
            risk += 30
        elif altitude > 400:
            risk += 20
        else:
            risk += 10

        size = _number(params.constellation_size)
        if size > 50:
            risk += 25
        elif size > 20:
            risk += 15
        elif size > 10:
            risk += 10
        else:
            risk += 5

        lifespan = _number(params.mission_lifespan)
        if lifespan > 10:
            risk += 15
        elif lifespan > 7:
            risk += 10
        elif lifespan > 5:
            risk += 5

        if params.in_space_propulsion:
            risk -= 15

        if params.deorbit_method == DeorbitMethod.ACTIVE_PROPULSION.value:
            risk -= 10
        elif params.deorbit_method == DeorbitMethod.DRAG_ENHANCEMENT.value:
            risk -= 5

        return round_half_up(clamp(risk, 0, 100))

    def regulatory_score(self, params: MissionParameters) -> int:
        """Regulatory compliance (0-100)."""
        score = 40.0

        market = TargetMarket.from_string(params.target_market)
        if market == TargetMarket.GOVERNMENT:
            score += 20
        elif market == TargetMarket.ENTERPRISE:
            score += 15
        else:
            score += 10

        if params.ssa_strategy == SsaStrategy.COMMERCIAL.value:
            score += 20
        elif params.ssa_strategy == SsaStrategy.IN_HOUSE.value:
            score += 15
        else:
            score += 10

        if params.data_licensing == DataLicensing.OPEN.value:
            score += 15
        elif params.data_licensing == DataLicensing.RESTRICTED.value:
            score += 10
        else:
            score += 5

        if params.deorbit_method == DeorbitMethod.ACTIVE_PROPULSION.value:
            score += 15
        elif params.deorbit_method == DeorbitMethod.DRAG_ENHANCEMENT.value:
            score += 10
        else:
            score += 5

        lifespan = _number(params.mission_lifespan)
        if lifespan <= 7:
            score += 10
        elif lifespan <= 10:
            score += 5

        return round_half_up(clamp(score, 0, 100))

    def technical_score(self, params: MissionParameters) -> int:
        """Technical feasibility (0-100).

        Launch vehicle reliability minus a logarithmic constellation
        complexity penalty plus a propulsion bonus, divided by the altitude
        band's operational complexity.
        """
        reference = self.config.reference
        vehicle = LaunchVehicleType.from_string(params.launch_vehicle_type)
        profile = (
            reference.launch_vehicles.get(vehicle.value)
            or reference.launch_vehicles.get(LaunchVehicleType.UNKNOWN.value)
        )
        reliability = profile.reliability if profile else 0.0

        size = max(0.0, _number(params.constellation_size))
        complexity_penalty = math.log10(size + 1) * 10
        propulsion_bonus = 15 if params.in_space_propulsion else 0
        operational = reference.operational_complexity(_number(params.target_altitude))

        raw = (reliability - complexity_penalty + propulsion_bonus) / operational
        return round_half_up(clamp(raw, 0, 100))

    def overall_score(
        self,
        financial: int,
        debris: int,
        regulatory: int,
        in_space_propulsion: bool,
    ) -> int:
        """Weighted overall score.

        Debris risk enters as safety (100 - debris). The technical term is
        the propulsion proxy, not the technical sub-score.
        """
        w = self.config.scoring_weights
        proxy_cfg = self.config.technical_proxy
        technical_proxy = (
            proxy_cfg.with_propulsion if in_space_propulsion else proxy_cfg.without_propulsion
        )

        weighted = (
            financial * w.financial
            + (100 - debris) * w.safety
            + regulatory * w.regulatory
            + technical_proxy * w.technical
        )
        return round_half_up(weighted)

    @staticmethod
    def _tier_bonus(value: float, tiers: list[tuple[float, int]]) -> int:
        """Bonus for the highest tier whose threshold the value reaches."""
        for threshold, bonus in tiers:
            if value >= threshold:
                return bonus
        return 0
