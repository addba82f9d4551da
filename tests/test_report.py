"""Tests for narrative report generation and the remote fallback."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from mission_scorer.config import ScorerConfig
from mission_scorer.report import (
    GeminiReportGenerator,
    TemplateReportGenerator,
    build_prompt,
    create_report_generator,
)
from mission_scorer.schema import MissionParameters, MissionReport, ScoreResult


API_KEY = "gm-test-key-0123456789"

REMOTE_REPORT = {
    "summary": "Remote analysis of the mission.",
    "recommendations": {"mandatory": ["File with the FCC"], "recommended": [], "baseline": []},
    "technical_insights": {"success_probability": 77},
}


@pytest.fixture
def params(earth_observation_mission) -> MissionParameters:
    return MissionParameters.model_validate(earth_observation_mission)


@pytest.fixture
def scores() -> ScoreResult:
    return ScoreResult(financial=95, debris=30, regulatory=100, technical=87, overall=88)


def _session_returning(text: str) -> MagicMock:
    response = MagicMock()
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    session = MagicMock()
    session.post.return_value = response
    return session


class TestTemplateReportGenerator:

    def test_deterministic(self, params, scores):
        generator = TemplateReportGenerator()
        assert generator.generate_report(params, scores) == generator.generate_report(params, scores)

    def test_echoes_parameters(self, params, scores):
        report = TemplateReportGenerator().generate_report(params, scores)
        assert report.source == "template"
        assert "EarthObservation" in report.summary
        assert "550km" in report.summary
        assert "$25,000,000" in report.summary
        assert "excellent" in report.summary
        assert "Active Propulsion" in report.recommendations.mandatory[1]

    def test_success_probability_capped(self, params, scores):
        report = TemplateReportGenerator().generate_report(params, scores)
        # 88 - 10 + 10 clamps to 85
        assert report.technical_insights.success_probability == 85

    def test_success_probability_floor(self, params):
        weak = ScoreResult(financial=30, debris=90, regulatory=40, technical=20, overall=30)
        report = TemplateReportGenerator().generate_report(params, weak)
        assert report.technical_insights.success_probability == 40
        assert "challenging" in report.summary
        assert "elevated" in report.environmental_impact.debris_risk_assessment

    def test_orbital_figures(self, params, scores):
        report = TemplateReportGenerator().generate_report(params, scores)
        # 90 + 550/20 = 117.5 rounds half up
        assert "118 minutes" in report.technical_insights.orbital_mechanics
        assert "7.3 km/s" in report.technical_insights.orbital_mechanics
        assert "Break-even expected in year 2" in report.financial_analysis.roi_projection

    def test_empty_parameters(self, scores):
        report = TemplateReportGenerator().generate_report(MissionParameters(), scores)
        assert "commercial mission" in report.summary
        assert report.environmental_impact.collision_probability.startswith(
            "Annual collision probability estimated at 0.0000%"
        )

    def test_non_finite_parameters(self, scores):
        params = MissionParameters(
            target_altitude=float("inf"),
            mission_lifespan=float("nan"),
            constellation_size=10,
        )
        report = TemplateReportGenerator().generate_report(params, scores)
        assert "inf tracked objects" in report.environmental_impact.debris_risk_assessment
        assert "Break-even expected in year nan" in report.financial_analysis.roi_projection


class TestGeminiReportGenerator:

    def test_successful_response(self, params, scores):
        text = "Here is the report:\n```json\n" + json.dumps(REMOTE_REPORT) + "\n```"
        session = _session_returning(text)
        generator = GeminiReportGenerator(API_KEY, session=session)

        report = generator.generate_report(params, scores)

        assert report.source == "gemini"
        assert report.summary == "Remote analysis of the mission."
        assert report.technical_insights.success_probability == 77

        _, kwargs = session.post.call_args
        assert kwargs["params"] == {"key": API_KEY}
        assert kwargs["timeout"] == (10.0, 60.0)
        assert "Financial Viability: 95/100" in kwargs["json"]["contents"][0]["parts"][0]["text"]

    def test_network_error_falls_back(self, params, scores):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("connection refused")
        report = GeminiReportGenerator(API_KEY, session=session).generate_report(params, scores)
        assert report == TemplateReportGenerator().generate_report(params, scores)

    def test_http_error_falls_back(self, params, scores):
        session = _session_returning("{}")
        session.post.return_value.raise_for_status.side_effect = requests.HTTPError("500")
        report = GeminiReportGenerator(API_KEY, session=session).generate_report(params, scores)
        assert report.source == "template"

    @pytest.mark.parametrize("text", [
        "no json in this answer",
        "{not valid json}",
        '{"summary": "missing technical insights"}',
        '{"summary": "x", "technical_insights": {"success_probability": 250}}',
    ])
    def test_unusable_text_falls_back(self, params, scores, text):
        session = _session_returning(text)
        report = GeminiReportGenerator(API_KEY, session=session).generate_report(params, scores)
        assert report.source == "template"

    def test_unexpected_shape_falls_back(self, params, scores):
        session = MagicMock()
        session.post.return_value.json.return_value = {"error": "quota"}
        report = GeminiReportGenerator(API_KEY, session=session).generate_report(params, scores)
        assert report.source == "template"

    def test_missing_key_skips_request(self, params, scores):
        session = MagicMock()
        report = GeminiReportGenerator("", session=session).generate_report(params, scores)
        session.post.assert_not_called()
        assert report.source == "template"

    def test_injected_fallback(self, params, scores):
        fallback = MagicMock()
        fallback.generate_report.return_value = MissionReport(
            summary="offline",
            technical_insights={"success_probability": 50},
        )
        session = MagicMock()
        session.post.side_effect = requests.Timeout("slow")

        report = GeminiReportGenerator(API_KEY, fallback=fallback, session=session).generate_report(
            params, scores
        )

        fallback.generate_report.assert_called_once_with(params, scores)
        assert report.summary == "offline"

    def test_key_not_logged_in_full(self, params, scores):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("down")

        with patch("mission_scorer.report.logger") as mock_logger:
            GeminiReportGenerator(API_KEY, session=session).generate_report(params, scores)

        mock_logger.warning.assert_called_once()
        logged = " ".join(str(arg) for arg in mock_logger.warning.call_args[0])
        assert API_KEY not in logged
        assert "gm-t...6789" in logged

    def test_configured_endpoint_and_timeouts(self, params, scores):
        config = ScorerConfig.model_validate({
            "report": {"endpoint": "https://example.test/generate", "connect_timeout": 2, "read_timeout": 5}
        })
        session = _session_returning(json.dumps(REMOTE_REPORT))
        GeminiReportGenerator(API_KEY, config=config, session=session).generate_report(params, scores)

        args, kwargs = session.post.call_args
        assert args[0] == "https://example.test/generate"
        assert kwargs["timeout"] == (2.0, 5.0)


class TestCreateReportGenerator:

    def test_no_key_gives_template(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert isinstance(create_report_generator(), TemplateReportGenerator)

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", API_KEY)
        generator = create_report_generator()
        assert isinstance(generator, GeminiReportGenerator)
        assert generator.api_key == API_KEY

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-environment")
        generator = create_report_generator(api_key=API_KEY)
        assert generator.api_key == API_KEY

    def test_configured_env_var_name(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("MISSION_REPORT_KEY", API_KEY)
        config = ScorerConfig.model_validate({"report": {"api_key_env": "MISSION_REPORT_KEY"}})
        assert isinstance(create_report_generator(config=config), GeminiReportGenerator)


class TestBuildPrompt:

    def test_contains_parameters_and_scores(self, params, scores):
        prompt = build_prompt(params, scores)
        assert "Business Category: EarthObservation" in prompt
        assert "In-Space Propulsion: Yes" in prompt
        assert "Overall Business Health: 88/100" in prompt
        assert '"technical_insights"' in prompt
