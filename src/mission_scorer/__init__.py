"""LEO Mission Scoring Engine.

Scores commercial Low-Earth-Orbit mission plans, compares mission-adjusted
launch vendor costs and produces a narrative mission report.
"""

from .config import ScorerConfig, get_config, load_config
from .cost_model import CostModel, compute_cost_analysis
from .engine import MissionEngine, validate_parameters
from .report import (
    GeminiReportGenerator,
    TemplateReportGenerator,
    create_report_generator,
)
from .schema import (
    CostAnalysis,
    MissionEvaluation,
    MissionParameters,
    MissionReport,
    MissionScorerError,
    ScoreResult,
)
from .scorer import MissionScorer

__version__ = "1.0.0"

__all__ = [
    "CostAnalysis",
    "CostModel",
    "GeminiReportGenerator",
    "MissionEngine",
    "MissionEvaluation",
    "MissionParameters",
    "MissionReport",
    "MissionScorer",
    "MissionScorerError",
    "ScoreResult",
    "ScorerConfig",
    "TemplateReportGenerator",
    "compute_cost_analysis",
    "create_report_generator",
    "get_config",
    "load_config",
    "validate_parameters",
]
