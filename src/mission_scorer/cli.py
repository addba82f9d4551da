"""CLI for the Mission Scoring Engine.

Provides command-line interface for scoring LEO mission plans, comparing
vendor costs and generating the narrative mission report.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import ScorerConfig, find_config_file, get_config, load_config
from .engine import MissionEngine, validate_parameters
from .logger import setup_logging
from .report import create_report_generator
from .schema import (
    AgencyLaunchEstimate,
    CostAnalysis,
    MissionReport,
    ScoreBand,
    ScoreResult,
)

console = Console()

BAND_COLORS = {
    ScoreBand.GOOD: "green",
    ScoreBand.FAIR: "yellow",
    ScoreBand.POOR: "red",
}

BUDGET_COLORS = {
    "comfortable": "green",
    "tight": "yellow",
    "challenging": "red",
}


@click.group()
@click.version_option(version="1.0.0", prog_name="mission-scorer")
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to scorer configuration YAML file"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level"
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], log_level: str):
    """LEO Mission Scoring Engine.

    Scores commercial Low-Earth-Orbit mission plans for financial viability,
    debris risk, regulatory compliance and technical feasibility, and
    compares launch vendor costs.
    """
    setup_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _resolve_config(ctx: click.Context) -> ScorerConfig:
    config_path = ctx.obj.get("config_path") if ctx.obj else None
    if config_path is None:
        config_path = find_config_file()
    if config_path is not None:
        return load_config(config_path)
    return get_config()


@main.command("score")
@click.option(
    "--params", "-x",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to mission parameters JSON file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show baseline practices as well"
)
@click.pass_context
def score_cmd(ctx: click.Context, params: str, out: Optional[str], json_output: bool, verbose: bool):
    """Score a mission plan.

    Examples:
        mission-scorer score -x mission.json
        mission-scorer score -x mission.json -j -o scores.json
    """
    try:
        engine = MissionEngine(_resolve_config(ctx))
        result = engine.score(params)

        if json_output:
            output_json(result, out)
        else:
            console.print(f"\n[bold blue]Mission Scoring Engine[/bold blue]")
            console.print(f"Parameters: {params}\n")
            display_scores(result, verbose)
            display_warnings(engine.warnings)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("costs")
@click.option(
    "--params", "-x",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to mission parameters JSON file (defaults apply when omitted)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.pass_context
def costs_cmd(ctx: click.Context, params: Optional[str], out: Optional[str], json_output: bool):
    """Compare mission-adjusted vendor costs.

    Examples:
        mission-scorer costs
        mission-scorer costs -x mission.json -j
    """
    try:
        engine = MissionEngine(_resolve_config(ctx))
        analysis = engine.analyze_costs(params)

        if json_output:
            output_json(analysis, out)
        else:
            display_costs(analysis)
            display_agencies(engine.compare_agencies(params))
            display_warnings(engine.warnings)
            if out:
                output_json(analysis, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("report")
@click.option(
    "--params", "-x",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to mission parameters JSON file"
)
@click.option(
    "--api-key",
    envvar="GEMINI_API_KEY",
    help="API key for the remote report generator (template report when absent)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.pass_context
def report_cmd(
    ctx: click.Context,
    params: str,
    api_key: Optional[str],
    out: Optional[str],
    json_output: bool,
):
    """Generate the narrative mission report.

    Without an API key the deterministic template report is produced.
    """
    try:
        config = _resolve_config(ctx)
        engine = MissionEngine(config, report_generator=create_report_generator(api_key, config))

        report = engine.generate_report(params)

        if json_output:
            output_json(report, out)
        else:
            display_report(report)
            if out:
                output_json(report, out)
                console.print(f"\n[green]Report saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--params", "-x",
    required=True,
    type=click.Path(),
    help="Path to mission parameters JSON file"
)
def validate_cmd(params: str):
    """Validate a mission parameters file.

    Example:
        mission-scorer validate -x mission.json
    """
    is_valid, message = validate_parameters(params)
    if is_valid:
        console.print(f"[green]✓ Parameters valid: {params}[/green]")
        console.print(f"  {message}")
    else:
        console.print(f"[red]✗ Parameters invalid: {params}[/red]")
        console.print(f"  - {message}")

    sys.exit(0 if is_valid else 1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="mission-scorer.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        mission-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • scoring_weights - How each sub-score contributes to the overall score")
        console.print("  • recommendation_thresholds - When recommendations are triggered")
        console.print("  • budget - Budget-fit classification for vendor costs")
        console.print("  • reference - Business categories, vendor costs, launch vehicles, agencies")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. MISSION_SCORER_CONFIG environment variable")
        console.print("  2. ./mission-scorer.yaml (current directory)")
        console.print("  3. ~/.config/mission-scorer/config.yaml")
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def display_scores(result: ScoreResult, verbose: bool):
    """Display scores and recommendations in formatted text."""
    bands = result.bands()

    table = Table(title="Mission Scores")
    table.add_column("Dimension", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Band")

    rows = [
        ("Financial Viability", result.financial, bands["financial"]),
        ("Debris Safety", result.safety, bands["safety"]),
        ("Regulatory Compliance", result.regulatory, bands["regulatory"]),
        ("Technical Feasibility", result.technical, bands["technical"]),
        ("Overall Health", result.overall, bands["overall"]),
    ]
    for name, value, band in rows:
        color = BAND_COLORS[band]
        table.add_row(name, f"[{color}]{value}[/{color}]", f"[{color}]{band.value}[/{color}]")

    console.print(table)
    console.print(f"[dim]Debris risk: {result.debris}/100 (higher is riskier)[/dim]")

    recs = result.recommendations
    if recs.mandatory:
        console.print("\n[bold red]Mandatory:[/bold red]")
        for item in recs.mandatory:
            console.print(f"  [red]•[/red] {item}")
    if recs.recommended:
        console.print("\n[bold yellow]Recommended:[/bold yellow]")
        for item in recs.recommended:
            console.print(f"  [yellow]•[/yellow] {item}")
    if verbose:
        console.print("\n[bold]Baseline:[/bold]")
        for item in recs.baseline:
            console.print(f"  [dim]•[/dim] {item}")


def display_costs(analysis: CostAnalysis):
    """Display the vendor cost comparison."""
    table = Table(title="Vendor Cost Comparison (weighted)")
    table.add_column("#", justify="right")
    table.add_column("Vendor", style="bold cyan")
    for stage in analysis.weights:
        table.add_column(stage, justify="right")
    table.add_column("Weighted Total", justify="right", style="bold")

    for i, total in enumerate(analysis.totals, 1):
        table.add_row(
            str(i),
            total.vendor,
            *[f"${total.breakdown.get(stage, 0):,.0f}" for stage in analysis.weights],
            f"${total.total:,.0f}",
        )
    console.print(table)

    weights = ", ".join(f"{stage} {w:.2f}" for stage, w in analysis.weights.items())
    console.print(f"[dim]Stage weights: {weights}[/dim]")

    console.print("\n[bold]Best Vendor by Stage:[/bold]")
    for stage, best in analysis.best_by_stage.items():
        console.print(f"  • {stage}: [cyan]{best.vendor}[/cyan] (${best.cost:,})")

    insights = analysis.insights
    color = BUDGET_COLORS.get(insights.budget_fit.value, "white")
    lines = [
        f"Budget fit: [{color}]{insights.budget_fit.value}[/{color}] "
        f"(ratio {insights.budget_ratio:.2f})",
        f"Mission budget: ${insights.total_budget:,.0f} | Average vendor cost: ${insights.average_cost:,.0f}",
    ]
    if insights.best_vendor and insights.worst_vendor:
        lines.append(
            f"Best: [green]{insights.best_vendor.vendor}[/green] | "
            f"Worst: [red]{insights.worst_vendor.vendor}[/red] | "
            f"Potential savings: ${insights.savings:,.0f}"
        )
    console.print(Panel("\n".join(lines), title="Insights"))

    for item in insights.deployment_recommendations:
        console.print(f"  [green]•[/green] {item}")
    if insights.risk_factors:
        console.print("\n[bold]Risk Factors:[/bold]")
        for risk in insights.risk_factors:
            console.print(f"  [yellow]•[/yellow] {risk}")


def display_agencies(estimates: list[AgencyLaunchEstimate]):
    """Display the agency launch comparison."""
    table = Table(title="Agency Comparison (approximate)")
    table.add_column("Agency", style="bold")
    table.add_column("Est. Launch Cost", justify="right")
    table.add_column("Reliability", justify="right")
    table.add_column("Launches/yr", justify="right")
    table.add_column("Lead Time")
    table.add_column("Vehicles")

    for e in estimates:
        lead = f"{e.typical_lead_time_months:g} mo"
        lead = f"[green]{lead}[/green]" if e.fits_lead_time else f"[red]{lead}[/red]"
        table.add_row(
            e.agency,
            f"${e.estimated_launch_cost:,.0f}",
            f"{e.reliability_pct:g}%",
            str(e.annual_launches),
            lead,
            ", ".join(e.notable_vehicles),
        )
    console.print(table)


def display_report(report: MissionReport):
    """Display the narrative report."""
    console.print(Panel(report.summary, title=f"Executive Summary ({report.source})"))

    sections = [
        ("Mandatory", report.recommendations.mandatory, "red"),
        ("Recommended", report.recommendations.recommended, "yellow"),
        ("Baseline", report.recommendations.baseline, "dim"),
        ("Mitigation Strategies", report.environmental_impact.mitigation_strategies, "cyan"),
        ("Licensing Requirements", report.regulatory_notes.licensing_requirements, "cyan"),
        ("Financial Risk Factors", report.financial_analysis.risk_factors, "yellow"),
    ]
    for title, items, color in sections:
        if not items:
            continue
        console.print(f"\n[bold]{title}:[/bold]")
        for item in items:
            console.print(f"  [{color}]•[/{color}] {item}")

    console.print(f"\n[bold]Debris risk:[/bold] {report.environmental_impact.debris_risk_assessment}")
    console.print(f"\n[bold]Cost breakdown:[/bold] {report.financial_analysis.cost_breakdown}")
    console.print(f"\n[bold]ROI:[/bold] {report.financial_analysis.roi_projection}")
    console.print(
        f"\n[bold]Success probability:[/bold] "
        f"[cyan]{report.technical_insights.success_probability}%[/cyan]"
    )


def display_warnings(warnings: list[str]):
    if warnings:
        console.print("\n[dim]Warnings:[/dim]")
        for warning in warnings:
            console.print(f"  [dim]• {warning}[/dim]")


def output_json(result: BaseModel, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
