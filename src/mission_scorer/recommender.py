"""Recommendation rules for scored mission plans.

Rules are evaluated against the sub-scores and partitioned into three
fixed-severity buckets. Text is literal; no randomness.
"""

from typing import Optional

from .config import RecommendationThresholdsConfig, ScorerConfig, get_config
from .schema import Recommendations


DEBRIS_MANDATORY = [
    "Implement active debris mitigation strategy",
    "Upgrade space situational awareness capabilities",
]
REGULATORY_MANDATORY = [
    "Ensure full regulatory compliance before launch",
    "Establish clear data licensing framework",
]
FINANCIAL_MANDATORY = [
    "Reassess business model viability",
    "Consider alternative revenue streams",
]

TECHNICAL_RECOMMENDED = [
    "Consider constellation size optimization",
    "Evaluate launch vehicle alternatives",
]
FINANCIAL_RECOMMENDED = [
    "Explore cost reduction opportunities",
    "Consider strategic partnerships",
]
DEBRIS_RECOMMENDED = [
    "Implement enhanced deorbit capabilities",
    "Consider commercial SSA services",
]

BASELINE_PRACTICES = (
    "Maintain regular stakeholder communication",
    "Implement comprehensive testing protocols",
    "Establish emergency response procedures",
    "Monitor industry regulatory developments",
    "Plan for end-of-mission disposal",
)


class RecommendationGenerator:
    """Maps sub-scores to mandatory, recommended and baseline items.

    A rule fires when its score is strictly below the configured threshold.
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        cfg = config or get_config()
        self.thresholds: RecommendationThresholdsConfig = cfg.recommendation_thresholds

    def generate(
        self,
        financial: int,
        debris: int,
        regulatory: int,
        technical: int,
    ) -> Recommendations:
        """Generate recommendations for a set of sub-scores."""
        t = self.thresholds
        mandatory: list[str] = []
        recommended: list[str] = []

        if debris < t.debris_mandatory:
            mandatory.extend(DEBRIS_MANDATORY)
        if regulatory < t.regulatory_mandatory:
            mandatory.extend(REGULATORY_MANDATORY)
        if financial < t.financial_mandatory:
            mandatory.extend(FINANCIAL_MANDATORY)

        if technical < t.technical_recommended:
            recommended.extend(TECHNICAL_RECOMMENDED)
        if financial < t.financial_recommended:
            recommended.extend(FINANCIAL_RECOMMENDED)
        if debris < t.debris_recommended:
            recommended.extend(DEBRIS_RECOMMENDED)

        return Recommendations(
            mandatory=mandatory,
            recommended=recommended,
            baseline=list(BASELINE_PRACTICES),
        )
