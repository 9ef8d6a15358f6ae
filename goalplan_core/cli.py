from __future__ import annotations

import datetime as dt
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

from goalplan_core.domain.models import Category, Goal, Insight, Recommendation
from goalplan_core.io import config as config_io
from goalplan_core.io import goals as goals_io
from goalplan_core.services import advisor
from goalplan_core.services import catalog as catalog_service
from goalplan_core.services import curve as curve_service
from goalplan_core.services import tvm
from goalplan_core.services.rates import NavHistoryRateProvider, RateProvider, collect_market_rates

app = typer.Typer(help="Goal planning CLI: projections and category recommendations.")

logger = logging.getLogger(__name__)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    level = "DEBUG" if verbose else os.environ.get("GOALPLAN_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _recommendation_to_json(rec: Recommendation) -> dict:
    return {
        "category_id": rec.category.id,
        "category": rec.category.name,
        "risk": rec.category.risk.name,
        "rate_percent": rec.rate_percent,
        "projected_corpus": rec.projected_corpus,
        "shortfall": rec.shortfall,
        "required_additional_contribution": rec.required_additional_contribution,
        "confidence": rec.confidence,
    }


def _insight_to_json(insight: Insight) -> dict:
    return {
        "goal_id": insight.goal_id,
        "months": insight.months,
        "years": insight.years,
        "inflation_adjusted_target": insight.inflation_adjusted_target,
        "corpus_future_value": insight.corpus_future_value,
        "status": insight.status,
        "achievable": insight.achievable,
        "primary": _recommendation_to_json(insight.primary) if insight.primary else None,
        "ranked": [_recommendation_to_json(r) for r in insight.ranked],
        "alternatives": {s.label: s.recommendation.category.id for s in insight.alternatives},
        "guidance": {
            "asset_class": insight.guidance.asset_class,
            "risk_profile": insight.guidance.risk_profile,
            "suggestion": insight.guidance.suggestion,
        },
        "action": insight.action,
        "warnings": list(insight.warnings),
    }


def format_amount(value: float, symbol: str = "₹") -> str:
    """Lakh/crore notation used for Indian rupee amounts."""
    sign = "-" if value < 0 else ""
    value = abs(value)
    if value >= 1e7:
        return f"{sign}{symbol} {value / 1e7:.2f} Cr"
    if value >= 1e5:
        return f"{sign}{symbol} {value / 1e5:.2f} L"
    return f"{sign}{symbol} {value:,.0f}"


def _load_catalog(catalog_path: Optional[Path]) -> Sequence[Category]:
    if catalog_path:
        return config_io.load_catalog(catalog_path)
    return catalog_service.DEFAULT_CATALOG


def _load_rates(rates: Optional[Path], nav: Optional[Path], nav_years: int, catalog: Sequence[Category]) -> dict:
    if rates:
        return config_io.load_market_rates(rates)
    provider: Optional[RateProvider] = None
    if nav:
        provider = NavHistoryRateProvider(goals_io.load_nav_history(nav), years=nav_years)
    return collect_market_rates(provider, catalog)


def _load_goals(goal: Optional[Path], goals: Optional[Path]) -> List[Goal]:
    if goal:
        return [config_io.load_goal(goal)]
    if goals:
        return goals_io.load_goals(goals)
    raise typer.BadParameter("Provide either --goal or --goals")


@app.command()
def categories(
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Custom catalog JSON"),
):
    """List the investment categories that are evaluated."""
    table = Table(title="Investment categories")
    table.add_column("id")
    table.add_column("name")
    table.add_column("risk")
    table.add_column("return %", justify="right")
    for category in _load_catalog(catalog_path):
        table.add_row(
            category.id,
            category.name,
            category.risk.display,
            f"{category.min_return_percent:g}-{category.max_return_percent:g}",
        )
    Console().print(table)


@app.command()
def evaluate(
    goal: Optional[Path] = typer.Option(None, help="Goal JSON"),
    goals: Optional[Path] = typer.Option(None, help="Goals CSV (batch)"),
    rates: Optional[Path] = typer.Option(None, help="Market rates JSON: category id -> percent"),
    nav: Optional[Path] = typer.Option(None, help="NAV history CSV used when --rates is absent"),
    nav_years: int = typer.Option(3, help="Look-back years for NAV based CAGR"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Custom catalog JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for insights JSON"),
):
    """Evaluate goals across every category and recommend one."""
    goal_list = _load_goals(goal, goals)
    logger.info("Evaluating %d goal(s)", len(goal_list))
    catalog = _load_catalog(catalog_path)
    market_rates = _load_rates(rates, nav, nav_years, catalog)
    insights = advisor.evaluate_goals(goal_list, catalog, market_rates)
    payload = [_insight_to_json(i) for i in insights]
    if out:
        _save_json(out, payload)
        typer.echo(f"Insights written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def curve(
    goal: Path = typer.Option(..., help="Goal JSON"),
    category: str = typer.Option(..., help="Category id to chart"),
    rates: Optional[Path] = typer.Option(None, help="Market rates JSON: category id -> percent"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Custom catalog JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for curve CSV"),
):
    """Year-by-year invested vs. projected value for one category."""
    goal_obj = config_io.load_goal(goal)
    catalog = _load_catalog(catalog_path)
    chosen = catalog_service.find_category(category, catalog)
    if chosen is None:
        raise typer.BadParameter(f"Unknown category: {category}")
    market_rates = config_io.load_market_rates(rates) if rates else {}
    rate = advisor.effective_rate(chosen, market_rates)
    months = tvm.months_between(goal_obj.start_date, goal_obj.target_date)
    points = curve_service.build_growth_curve(
        rate,
        months,
        goal_obj.current_corpus,
        goal_obj.monthly_contribution,
        goal_obj.step_up_rate_percent,
    )
    df = curve_service.curve_to_frame(points)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
        typer.echo(f"Curve written to {out}")
    else:
        typer.echo(df.to_csv(index=False))


def _render_insight(console: Console, goal: Goal, insight: Insight) -> None:
    rec = insight.primary
    colour = "green" if insight.achievable else "red"
    console.print(f"\n[bold]{goal.name}[/bold] | {goal.target_date.isoformat()} | {insight.years:.1f} years away")
    console.print(f"Status: [{colour}]{insight.status.replace('_', ' ')}[/{colour}]")
    console.print(
        f"Target (inflation adjusted): [bold]{format_amount(insight.inflation_adjusted_target)}[/bold] "
        f"(today: {format_amount(goal.amount_needed_today)})"
    )
    if rec is not None:
        console.print(
            f"Suggested category: [bold]{rec.category.name}[/bold] ({rec.category.risk.display}) "
            f"@ {rec.rate_percent:.2f}% | confidence {rec.confidence_display}/100"
        )
        console.print(f"Projected corpus: {format_amount(rec.projected_corpus)}")
        if not rec.is_achievable:
            console.print(
                f"Required extra monthly contribution: [bold]{format_amount(rec.required_additional_contribution)}[/bold]"
            )

    table = Table(title="All categories")
    table.add_column("category")
    table.add_column("rate %", justify="right")
    table.add_column("projected", justify="right")
    table.add_column("shortfall", justify="right")
    table.add_column("confidence", justify="right")
    for r in insight.ranked:
        table.add_row(
            r.category.name,
            f"{r.rate_percent:.2f}",
            format_amount(r.projected_corpus),
            format_amount(r.shortfall),
            str(r.confidence_display),
        )
    console.print(table)

    if insight.alternatives:
        console.print(
            "Scenarios: "
            + ", ".join(f"{s.label}={s.recommendation.category.name}" for s in insight.alternatives)
        )
    console.print(f"[cyan]{insight.guidance.asset_class}[/cyan]: {insight.guidance.suggestion}")
    console.print(f"[green]Action:[/green] {insight.action}")
    for warning in insight.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def interactive():
    """
    Interactive mode: describe one goal and see the recommendation.
    """
    console = Console()
    console.print("[bold cyan]Goal Planner[/bold cyan]\n")

    name = typer.prompt("Goal name")
    today = dt.date.today()
    start_raw = typer.prompt("Start date (YYYY-MM-DD)", default=today.isoformat())
    target_raw = typer.prompt("Target date (YYYY-MM-DD)")
    try:
        start_date = config_io.parse_date(start_raw)
        target_date = config_io.parse_date(target_raw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    goal = Goal(
        id=name,
        name=name,
        start_date=start_date,
        target_date=target_date,
        amount_needed_today=typer.prompt("Amount needed in today's money", type=float),
        inflation_rate_percent=typer.prompt(
            "Inflation % per year", default=config_io.DEFAULT_INFLATION_PERCENT, type=float
        ),
        current_corpus=typer.prompt("Current savings for this goal", default=0.0, type=float),
        monthly_contribution=typer.prompt("Monthly contribution", default=0.0, type=float),
        step_up_rate_percent=typer.prompt("Yearly step-up of the contribution %", default=0.0, type=float),
    )
    insight = advisor.evaluate_goal(goal)
    _render_insight(console, goal, insight)
    console.print("\n[bold cyan]Done.[/bold cyan]\n")


if __name__ == "__main__":
    app()
