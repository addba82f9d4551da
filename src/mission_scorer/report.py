"""Narrative mission report generation.

Two generators satisfy the same ``generate_report(params, scores)``
contract:

- ``TemplateReportGenerator`` builds a deterministic report locally.
- ``GeminiReportGenerator`` asks a remote text-generation endpoint and
  falls back to a local generator on any failure.

``create_report_generator`` picks one based on whether an API key is
available. No module-level service instance is kept; callers own the
generator they construct.
"""

import json
import logging
import math
import os
import re
from typing import Any, Optional, Protocol

import requests

from .config import ScorerConfig, get_config
from .logger import sanitize_token
from .schema import (
    EnvironmentalImpact,
    FinancialAnalysis,
    MissionParameters,
    MissionReport,
    Recommendations,
    RegulatoryNotes,
    ReportGenerationError,
    ScoreResult,
    TechnicalInsights,
)

logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


class ReportGenerator(Protocol):
    """Anything that turns parameters and scores into a MissionReport."""

    def generate_report(self, params: MissionParameters, scores: ScoreResult) -> MissionReport:
        ...


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _num(value: Optional[float]) -> float:
    return float(value) if value is not None else 0.0


def _fixed(value: float, digits: int) -> str:
    """Fixed-point formatting with halves rounded up."""
    if not math.isfinite(value):
        return f"{value:.{digits}f}"
    scale = 10 ** digits
    rounded = math.floor(value * scale + 0.5) / scale
    return f"{rounded:.{digits}f}"


def _whole(value: float, rounding=math.floor) -> str:
    """Integer text for a derived figure; non-finite values print as-is."""
    if not math.isfinite(value):
        return f"{value}"
    return str(rounding(value))


def _success_probability(scores: ScoreResult) -> int:
    bonus = 10 if scores.financial > 60 else 0
    return max(40, min(85, scores.overall - 10 + bonus))


class TemplateReportGenerator:
    """Deterministic local report built from parameters and scores.

    Used when no API key is configured and as the fallback for the remote
    generator. Same input always gives the same report.
    """

    def generate_report(self, params: MissionParameters, scores: ScoreResult) -> MissionReport:
        category = params.business_category or "commercial"
        altitude = _num(params.target_altitude)
        size = _num(params.constellation_size)
        lifespan = _num(params.mission_lifespan)
        revenue = _num(params.target_revenue)
        deorbit = params.deorbit_method or "planned"
        ssa = params.ssa_strategy or "dedicated"
        licensing = params.data_licensing or "defined"
        launch_site = params.selected_launch_site or "selected"

        high_risk = scores.debris > 70
        viable = scores.financial > 60
        if scores.overall > 70:
            viability = "excellent"
        elif scores.overall > 50:
            viability = "good"
        else:
            viability = "challenging"

        summary = (
            f"Your {category} mission targeting {altitude:g}km altitude shows "
            f"{'strong' if viable else 'moderate'} commercial potential with projected annual "
            f"revenue of {_money(revenue)}. The mission design demonstrates {viability} overall "
            f"viability. Key considerations include "
            f"{'significant debris risk management' if high_risk else 'standard orbital safety protocols'} "
            f"and comprehensive regulatory compliance. The {launch_site} launch site provides suitable "
            f"access to your target orbit, though {lifespan:g}-year mission duration requires robust "
            f"satellite design and {deorbit} end-of-life planning."
        )

        recommendations = Recommendations(
            mandatory=[
                "Obtain FCC authorization for spectrum use and orbital debris mitigation plan approval",
                f"Implement {deorbit} system with 95% reliability for end-of-mission disposal",
                "Secure comprehensive space insurance covering launch and on-orbit operations",
                f"Design constellation for {lifespan:g}-year operational life with component redundancy",
                f"Establish {ssa} space situational awareness monitoring system",
            ],
            recommended=[
                "Partner with established satellite manufacturer to reduce development risk",
                "Implement AI-powered predictive maintenance for satellite health monitoring",
                "Establish ground station network partnerships for global coverage",
                "Develop modular satellite design for easy component replacement and upgrades",
                "Create partnership agreements with debris removal services",
            ],
            baseline=[
                "Consider phased deployment to validate business model before full constellation",
                "Evaluate alternative launch providers for cost optimization",
                "Implement blockchain-based data licensing and revenue tracking",
                "Develop automated collision avoidance maneuver capabilities",
                "Plan for next-generation constellation with improved capabilities",
            ],
        )

        collision = 0.001 * (altitude / 500) * (altitude / 500) * size
        environmental = EnvironmentalImpact(
            debris_risk_assessment=(
                f"At {altitude:g}km altitude, your mission faces {'elevated' if high_risk else 'moderate'} "
                f"debris risk with approximately {_whole(altitude / 100 * 500)} tracked objects in "
                f"similar orbits. Critical fragments from previous satellite collisions pose ongoing "
                f"threats, particularly in the 750-850km range. Your {size:g}-satellite constellation will "
                f"contribute to orbital congestion but can be managed through proper spacing and active "
                f"debris monitoring."
            ),
            orbital_sustainability=(
                f"The mission's {lifespan:g}-year operational period with {deorbit} disposal aligns with "
                f"international sustainability guidelines. However, constellation density requires careful "
                f"orbital slot coordination to prevent interference with existing operators. Your business "
                f"model supports sustainable space commerce through {licensing} data sharing practices."
            ),
            collision_probability=(
                f"Annual collision probability estimated at {_fixed(collision, 4)}% per satellite based on "
                f"current debris models. Risk peaks during solar maximum periods when atmospheric drag "
                f"decreases and debris population increases at operational altitudes."
            ),
            mitigation_strategies=[
                "Implement automated conjunction assessment and collision avoidance maneuvers",
                "Design satellites with propulsion systems for active debris avoidance",
                "Use radar-absorbing materials to reduce space surveillance sensitivity",
                "Plan controlled deorbit within 25 years or less as per international guidelines",
                "Participate in Space Data Association for enhanced space situational awareness",
                "Implement satellite hardening against small debris impacts",
            ],
        )

        regulatory = RegulatoryNotes(
            licensing_requirements=[
                "FCC Part 25 satellite license for communications frequencies",
                "NOAA remote sensing license for Earth observation capabilities",
                "ITU coordination for international frequency coordination",
                "FAA launch authorization for each mission",
                "Export control license (ITAR/EAR) for technology transfer",
                "Environmental impact assessment for launch operations",
            ],
            compliance_checklist=[
                "Submit orbital debris mitigation plan to FCC within 6 months of license application",
                "Coordinate with USSTRATCOM for space object cataloging and tracking",
                "Establish 24/7 mission control with collision avoidance procedures",
                "Implement encryption and cybersecurity measures per NIST guidelines",
                "Maintain satellite tracking and control throughout mission life",
                "File annual compliance reports with all relevant agencies",
                "Ensure end-of-mission disposal compliance within regulatory timeframes",
            ],
            international_considerations=[
                "Coordinate with international partners through ITU Radio Regulations",
                "Comply with UN Outer Space Treaty and Liability Convention obligations",
                "Consider European GDPR requirements for Earth observation data",
                "Align with emerging UN Long-term Sustainability Guidelines",
                "Evaluate export control implications for international customers",
            ],
        )

        financial = FinancialAnalysis(
            cost_breakdown=(
                f"Total mission cost estimated at {_money(revenue * 0.8)} over {lifespan:g} years: "
                f"Launch costs ({_money(size * 15_000_000)}), satellite development "
                f"({_money(size * 8_000_000)}), ground systems ({_money(size * 2_000_000)}), "
                f"operations ({_money(lifespan * 5_000_000)}/year), and regulatory compliance "
                f"({_money(lifespan * 1_000_000)}/year). Insurance costs approximately 10-15% of total "
                f"asset value annually."
            ),
            risk_factors=[
                "Launch failure risk affecting constellation deployment timeline and insurance costs",
                "Regulatory delays potentially extending development schedule by 6-18 months",
                "Market competition from established players and new entrants",
                "Technology obsolescence during multi-year satellite operational life",
                "Currency fluctuation affecting international launch and component costs",
                "Space weather events potentially reducing satellite operational life",
            ],
            market_opportunities=[
                f"{category} market growing at 8-12% annually with increasing demand",
                "Government contracts providing stable revenue base and growth opportunities",
                "International expansion potential in underserved markets",
                "Value-added services and data analytics creating additional revenue streams",
                "Partnership opportunities with other space companies for shared infrastructure",
            ],
            roi_projection=(
                f"Break-even expected in year {_whole(lifespan * 0.4, math.ceil)} with positive cash flow "
                f"thereafter. Target internal rate of return of 18-25% based on conservative revenue "
                f"projections. Market expansion and technology improvements could accelerate returns by "
                f"12-18 months."
            ),
        )

        technical = TechnicalInsights(
            launch_window_optimization=(
                f"Optimal launch windows occur every {math.ceil(365 / 12)} days for your target "
                f"{altitude:g}km orbit. Consider sun-synchronous orbit for Earth observation missions or "
                f"specific inclination for communication coverage. Seasonal variations affect atmospheric "
                f"drag and debris density, with spring launches generally preferred for debris avoidance."
            ),
            orbital_mechanics=(
                f"At {altitude:g}km altitude, orbital period is approximately "
                f"{_fixed(90 + altitude / 20, 0)} minutes with orbital velocity of "
                f"{_fixed(7.8 - altitude / 1000, 1)} km/s. Station-keeping requirements include "
                f"atmospheric drag compensation ({'significant' if altitude < 600 else 'moderate'}), "
                f"solar radiation pressure effects, and gravitational perturbations. Annual delta-V "
                f"budget estimated at {_fixed(50 + altitude / 20, 0)} m/s."
            ),
            mission_timeline=(
                f"Development phase: 24-36 months; Launch campaign: 3-6 months; Initial operations: "
                f"6 months; Full operational capability: 12 months; Routine operations: "
                f"{lifespan - 2:g} years; End-of-life disposal: 6 months. Critical milestones include "
                f"regulatory approval (month 18), first satellite delivery (month 30), and constellation "
                f"completion (month {36 + size / 2:g})."
            ),
            success_probability=_success_probability(scores),
        )

        return MissionReport(
            summary=summary,
            recommendations=recommendations,
            environmental_impact=environmental,
            regulatory_notes=regulatory,
            financial_analysis=financial,
            technical_insights=technical,
            source="template",
        )


class GeminiReportGenerator:
    """Remote report generator with a local fallback.

    Any network, HTTP, parsing or validation failure is logged and the
    fallback generator's report is returned instead. This generator never
    raises for a well-typed input.
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[ScorerConfig] = None,
        fallback: Optional[ReportGenerator] = None,
        session: Optional[requests.Session] = None,
    ):
        cfg = (config or get_config()).report
        self.api_key = api_key
        self.endpoint = cfg.endpoint
        self.timeout = (cfg.connect_timeout, cfg.read_timeout)
        self.fallback = fallback or TemplateReportGenerator()
        self.session = session or requests.Session()

    def generate_report(self, params: MissionParameters, scores: ScoreResult) -> MissionReport:
        if not self.api_key:
            logger.info("No report API key configured, using template report")
            return self.fallback.generate_report(params, scores)

        try:
            return self._request_report(params, scores)
        except (requests.RequestException, ReportGenerationError, ValueError) as e:
            logger.warning(
                "Remote report generation failed (key %s): %s; falling back to template report",
                sanitize_token(self.api_key), e,
            )
            return self.fallback.generate_report(params, scores)

    def _request_report(self, params: MissionParameters, scores: ScoreResult) -> MissionReport:
        logger.debug("Requesting report from %s", self.endpoint)
        response = self.session.post(
            self.endpoint,
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": build_prompt(params, scores)}]}]},
            timeout=self.timeout,
        )
        response.raise_for_status()

        text = self._extract_text(response.json())
        match = _JSON_BLOCK.search(text)
        if not match:
            raise ReportGenerationError("Response did not contain a JSON report")

        data = json.loads(match.group(0))
        if not isinstance(data, dict):
            raise ReportGenerationError("Report JSON is not an object")
        data["source"] = "gemini"
        return MissionReport.model_validate(data)

    @staticmethod
    def _extract_text(payload: Any) -> str:
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ReportGenerationError(f"Unexpected response shape: {e}") from e
        if not isinstance(text, str):
            raise ReportGenerationError("Generated text is not a string")
        return text


def build_prompt(params: MissionParameters, scores: ScoreResult) -> str:
    """Prompt asking the remote model for a MissionReport-shaped JSON answer."""
    return f"""You are a senior LEO (Low Earth Orbit) space mission analyst with expertise in commercial space ventures, orbital mechanics, space debris mitigation, and regulatory compliance.

Analyze the following LEO commercial mission parameters and provide a beginner-friendly analysis.

MISSION DETAILS:
- Business Category: {params.business_category}
- Target Annual Revenue: {_money(_num(params.target_revenue))}
- Product Value Density: ${_num(params.product_value_density):,.0f}/kg
- Target Market: {params.target_market}
- Constellation Size: {params.constellation_size}
- Target Orbital Altitude: {params.target_altitude}km
- Mission Lifespan: {params.mission_lifespan} years
- Launch Vehicle: {params.launch_vehicle_type}
- In-Space Propulsion: {'Yes' if params.in_space_propulsion else 'No'}
- De-orbit Method: {params.deorbit_method}
- Space Situational Awareness Strategy: {params.ssa_strategy}
- Data Licensing Model: {params.data_licensing}
- Launch Site: {params.selected_launch_site}

CURRENT ASSESSMENT SCORES:
- Overall Business Health: {scores.overall}/100
- Financial Viability: {scores.financial}/100
- Debris Risk: {scores.debris}/100
- Regulatory Compliance: {scores.regulatory}/100
- Technical Feasibility: {scores.technical}/100

Respond with a single JSON object with these keys:
"summary" (string), "recommendations" (object with "mandatory", "recommended", "baseline" string lists),
"environmental_impact" (object with "debris_risk_assessment", "orbital_sustainability", "collision_probability" strings and "mitigation_strategies" list),
"regulatory_notes" (object with "licensing_requirements", "compliance_checklist", "international_considerations" lists),
"financial_analysis" (object with "cost_breakdown" string, "risk_factors" and "market_opportunities" lists, "roi_projection" string),
"technical_insights" (object with "launch_window_optimization", "orbital_mechanics", "mission_timeline" strings and "success_probability" integer 0-100).
"""


def create_report_generator(
    api_key: Optional[str] = None,
    config: Optional[ScorerConfig] = None,
    session: Optional[requests.Session] = None,
) -> ReportGenerator:
    """Choose a report generator based on credential availability.

    Uses the explicit key if given, otherwise the environment variable
    named in the report config. Without a key the template generator is
    returned.
    """
    cfg = config or get_config()
    key = api_key or os.environ.get(cfg.report.api_key_env, "")
    if not key:
        logger.debug("No %s set, using template report generator", cfg.report.api_key_env)
        return TemplateReportGenerator()
    return GeminiReportGenerator(key, config=cfg, session=session)
