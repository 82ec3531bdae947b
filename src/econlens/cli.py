import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path

from rich.console import Console

from econlens.analysis.catalog import get_catalog
from econlens.analysis.risk import ConcentrationRiskScorer
from econlens.analysis.scenario import ScenarioImpactEngine
from econlens.analysis.validator import AllocationValidator
from econlens.config import EngineConfig
from econlens.models.portfolio import Portfolio, PortfolioSubmission
from econlens.models.validation import has_blocking
from econlens.output.renderer import ReportRenderer

logger = logging.getLogger(__name__)
console = Console()


def _add_common(p: argparse.ArgumentParser, with_portfolio: bool = True) -> None:
    if with_portfolio:
        p.add_argument(
            "portfolio",
            type=Path,
            help="Path to a portfolio JSON file",
        )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an engine config JSON file",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="econlens",
        description="Portfolio validation, risk scoring and scenario impact analysis",
    )
    sub = p.add_subparsers(dest="command")

    scenarios = sub.add_parser("scenarios", help="List available scenarios")
    _add_common(scenarios, with_portfolio=False)

    validate = sub.add_parser("validate", help="Validate a portfolio file")
    _add_common(validate)

    risk = sub.add_parser("risk", help="Score portfolio risk")
    _add_common(risk)

    analyze = sub.add_parser("analyze", help="Run a scenario analysis")
    _add_common(analyze)
    analyze.add_argument(
        "-s",
        "--scenario",
        required=True,
        help="Scenario id (see `econlens scenarios`)",
    )
    analyze.add_argument(
        "--json",
        action="store_true",
        help="Print the result as camelCase JSON",
    )
    analyze.add_argument(
        "--markdown",
        type=Path,
        default=None,
        help="Directory to write a markdown report into",
    )
    analyze.add_argument(
        "--charts",
        type=Path,
        default=None,
        help="Directory to write an impact chart into",
    )

    compare = sub.add_parser("compare", help="Run every scenario and compare")
    _add_common(compare)
    compare.add_argument(
        "--charts",
        type=Path,
        default=None,
        help="Directory to write a comparison chart into",
    )

    return p


def load_config(path: Path | None) -> EngineConfig:
    if path is None:
        return EngineConfig()
    return EngineConfig.model_validate_json(path.read_text())


def load_submission(path: Path) -> PortfolioSubmission:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return PortfolioSubmission.model_validate_json(path.read_text())


def accept_portfolio(
    path: Path, config: EngineConfig, renderer: ReportRenderer
) -> Portfolio | None:
    submission = load_submission(path)
    portfolio, findings = AllocationValidator(config).accept(submission)
    if portfolio is None:
        console.print(f"[red]Portfolio {path} was rejected.[/red]")
        renderer.render_findings(findings)
        return None
    if findings:
        renderer.render_findings(findings)
    return portfolio


def _run_scenarios(args: argparse.Namespace) -> int:
    ReportRenderer(console).render_scenarios(get_catalog().scenarios)
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    submission = load_submission(args.portfolio)
    findings = AllocationValidator(config).validate_submission(submission)
    ReportRenderer(console).render_findings(findings)
    return 1 if has_blocking(findings) else 0


def _run_risk(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    renderer = ReportRenderer(console)
    portfolio = accept_portfolio(args.portfolio, config, renderer)
    if portfolio is None or portfolio.risk_profile is None:
        return 1
    scorer = ConcentrationRiskScorer(config.risk_weights)
    renderer.render_portfolio(portfolio)
    renderer.render_risk(portfolio.risk_profile, scorer.diversification(portfolio.assets))
    return 0


def _run_analyze(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    renderer = ReportRenderer(console)
    portfolio = accept_portfolio(args.portfolio, config, renderer)
    if portfolio is None:
        return 1

    engine = ScenarioImpactEngine(config=config)
    result = engine.analyze(
        portfolio.assets,
        args.scenario,
        risk_profile=portfolio.risk_profile,
        portfolio_id=portfolio.id,
    )

    if args.json:
        payload = result.model_dump(mode="json", by_alias=True)
        console.print_json(json.dumps(payload))
    else:
        renderer.render_analysis(result)

    chart_path = None
    if args.charts:
        from econlens.output.charts import generate_impact_chart

        chart_path = generate_impact_chart(result, portfolio.name, args.charts)
        if chart_path:
            console.print(f"[green]Chart saved to {chart_path}[/green]")

    if args.markdown:
        from econlens.output.markdown_renderer import MarkdownRenderer

        rel_dir = os.path.relpath(args.charts, args.markdown) if args.charts else "charts"
        md = MarkdownRenderer().render(
            portfolio, result, chart_path=chart_path, charts_rel_dir=rel_dir
        )
        args.markdown.mkdir(parents=True, exist_ok=True)
        slug = "".join(c if c.isalnum() else "_" for c in portfolio.name).strip("_")
        filepath = (
            args.markdown
            / f"{slug or 'portfolio'}_{result.scenario_id.value}_{date.today().isoformat()}.md"
        )
        filepath.write_text(md)
        console.print(f"[green]Report saved to {filepath}[/green]")
    return 0


def _run_compare(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    renderer = ReportRenderer(console)
    portfolio = accept_portfolio(args.portfolio, config, renderer)
    if portfolio is None:
        return 1

    engine = ScenarioImpactEngine(config=config)
    with console.status("[cyan]Running scenarios..."):
        results = engine.analyze_all(
            portfolio.assets,
            risk_profile=portfolio.risk_profile,
            portfolio_id=portfolio.id,
        )
    renderer.render_comparison(results)

    if args.charts:
        from econlens.output.charts import generate_comparison_chart

        path = generate_comparison_chart(results, portfolio.name, args.charts)
        if path:
            console.print(f"[green]Chart saved to {path}[/green]")
    return 0


HANDLERS = {
    "scenarios": _run_scenarios,
    "validate": _run_validate,
    "risk": _run_risk,
    "analyze": _run_analyze,
    "compare": _run_compare,
}


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        code = HANDLERS[args.command](args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
