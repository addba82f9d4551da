"""Mission Engine - orchestrates scoring, cost analysis and reporting.

Pipeline:
1. Normalize raw parameters (file or dict) into MissionParameters
2. Score the mission (sub-scores, overall, recommendations)
3. Analyze vendor costs
4. Generate the narrative report (remote or template)

Scoring and cost analysis are independent; both depend only on the
parameters and the configured reference tables.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import ScorerConfig, get_config
from .cost_model import CostModel
from .normalizer import ParameterNormalizer
from .report import ReportGenerator, TemplateReportGenerator
from .schema import (
    AgencyLaunchEstimate,
    CostAnalysis,
    MissionEvaluation,
    MissionParameters,
    MissionReport,
    ParameterLoadError,
    ScoreResult,
)
from .scorer import MissionScorer

logger = logging.getLogger(__name__)

ParameterSource = Union[str, Path, dict[str, Any], MissionParameters]


def _read_parameter_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a parameter JSON file (an object or a one-element array)."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ParameterLoadError(f"Parameter file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ParameterLoadError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, list):
        if len(data) != 1:
            raise ParameterLoadError(
                f"Parameter file must contain one mission, found {len(data)}"
            )
        data = data[0]

    if not isinstance(data, dict):
        raise ParameterLoadError("Parameter file must contain a JSON object")
    return data


class MissionEngine:
    """Evaluates mission plans.

    Usage:
        engine = MissionEngine()
        result = engine.evaluate("mission.json")

    The report generator is injected; without one the deterministic
    template generator is used.
    """

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        report_generator: Optional[ReportGenerator] = None,
    ):
        self.config = config or get_config()
        self.scorer = MissionScorer(self.config)
        self.cost_model = CostModel(self.config)
        self.report_generator = report_generator or TemplateReportGenerator()
        self._last_warnings: list[str] = []

    def load_parameters(self, source: ParameterSource) -> MissionParameters:
        """Load and normalize mission parameters.

        Args:
            source: Path to a JSON file, a raw dict or MissionParameters

        Returns:
            Normalized MissionParameters
        """
        params, warnings = self._load(source)
        self._last_warnings = warnings
        return params

    def _load(self, source: ParameterSource) -> tuple[MissionParameters, list[str]]:
        if isinstance(source, MissionParameters):
            return source, []

        raw = source if isinstance(source, dict) else _read_parameter_file(source)
        # One normalizer per call; its warning list is per-record state
        normalizer = ParameterNormalizer()
        params = normalizer.normalize(raw)
        for warning in normalizer.warnings:
            logger.warning("Parameter warning: %s", warning)
        return params, list(normalizer.warnings)

    @property
    def warnings(self) -> list[str]:
        """Warnings from the most recent parameter load."""
        return list(self._last_warnings)

    def score(self, source: ParameterSource) -> ScoreResult:
        return self.scorer.score(self.load_parameters(source))

    def analyze_costs(self, source: Optional[ParameterSource] = None) -> CostAnalysis:
        params = self.load_parameters(source) if source is not None else MissionParameters()
        return self.cost_model.analyze(params)

    def compare_agencies(self, source: Optional[ParameterSource] = None) -> list[AgencyLaunchEstimate]:
        params = self.load_parameters(source) if source is not None else MissionParameters()
        return self.cost_model.compare_agencies(params)

    def generate_report(
        self,
        source: ParameterSource,
        scores: Optional[ScoreResult] = None,
    ) -> MissionReport:
        """Generate the narrative report, scoring first if no scores are given."""
        params = self.load_parameters(source)
        if scores is None:
            scores = self.scorer.score(params)
        return self.report_generator.generate_report(params, scores)

    def evaluate(self, source: ParameterSource) -> MissionEvaluation:
        """Score, cost and report a mission plan in one pass."""
        params, warnings = self._load(source)

        logger.info("Evaluating mission: category=%s", params.business_category or "unknown")
        scores = self.scorer.score(params)
        costs = self.cost_model.analyze(params)
        report = self.report_generator.generate_report(params, scores)

        return MissionEvaluation(
            parameters=params,
            scores=scores,
            costs=costs,
            report=report,
            processing_warnings=warnings,
        )


def validate_parameters(path: Union[str, Path]) -> tuple[bool, str]:
    """Validate a mission parameter file.

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        raw = _read_parameter_file(path)
    except ParameterLoadError as e:
        return False, str(e)

    normalizer = ParameterNormalizer()
    params = normalizer.normalize(raw)

    missing = [
        name for name, value in params.model_dump(exclude={"in_space_propulsion"}).items()
        if value is None
    ]
    if normalizer.warnings:
        return False, "; ".join(normalizer.warnings)
    if missing:
        return True, f"Valid with fallbacks for: {', '.join(missing)}"
    return True, "Valid mission parameters"
