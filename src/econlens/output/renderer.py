from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from econlens.models.portfolio import DiversificationAnalysis, Portfolio, RiskProfile
from econlens.models.scenario import ScenarioAnalysisResult, ScenarioDefinition
from econlens.models.validation import ValidationFinding
from econlens.output.formatters import (
    confidence_bar,
    fmt_delta,
    fmt_dollar,
    fmt_pct,
    fmt_score,
    fmt_share,
    impact_color,
    risk_color,
    risk_label,
    severity_color,
)


class ReportRenderer:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_scenarios(self, scenarios: list[ScenarioDefinition]) -> None:
        table = Table(title="Economic Scenarios", show_header=True)
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Duration")
        table.add_column("Frequency")
        table.add_column("Description")
        for s in scenarios:
            table.add_row(s.id.value, s.name, s.duration, s.frequency, s.description)
        self.console.print(table)

    def render_findings(self, findings: list[ValidationFinding]) -> None:
        if not findings:
            self.console.print("[green]No validation findings.[/green]")
            return
        table = Table(title="Validation Findings", show_header=True)
        table.add_column("Severity")
        table.add_column("Kind", style="cyan")
        table.add_column("Field")
        table.add_column("Message")
        table.add_column("Suggested Fix", style="dim")
        for f in findings:
            table.add_row(
                Text(f.severity.value.upper(), style=severity_color(f.severity)),
                f.kind.value,
                f.field or "",
                f.message,
                f.suggested_fix or "",
            )
        self.console.print(table)

    def render_portfolio(self, portfolio: Portfolio) -> None:
        self.console.print()
        self.console.print(
            Panel(
                f"[bold]{portfolio.name}[/bold]  |  "
                f"{fmt_dollar(portfolio.total_value)} {portfolio.currency}  "
                f"({len(portfolio.assets)} assets)",
                title="Portfolio",
                style="cyan",
            )
        )
        table = Table(show_header=True)
        table.add_column("Symbol", style="cyan")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Category")
        table.add_column("Allocation", justify="right")
        table.add_column("Value", justify="right")
        for a in portfolio.assets:
            table.add_row(
                a.symbol,
                a.name,
                a.asset_type.value,
                a.asset_category.label if a.asset_category else "N/A",
                fmt_share(a.allocation_percentage),
                fmt_dollar(a.dollar_amount),
            )
        self.console.print(table)

    def render_risk(
        self,
        profile: RiskProfile,
        diversification: DiversificationAnalysis | None = None,
    ) -> None:
        table = Table(title="Risk Profile", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        overall = profile.overall_risk_score
        rows = [
            ("Concentration (HHI)", fmt_score(profile.concentration_risk)),
            ("Volatility", fmt_score(profile.volatility_score)),
            ("Credit", fmt_score(profile.credit_risk)),
            ("Max Sector", fmt_share(profile.sector_concentration)),
            ("Max Region", fmt_share(profile.geographic_risk)),
        ]
        for r in rows:
            table.add_row(*r)
        table.add_row(
            "Overall",
            Text(
                f"{fmt_score(overall)} ({risk_label(overall)})",
                style=risk_color(overall),
            ),
        )
        self.console.print(table)

        if diversification is None:
            return
        d = diversification
        self.console.print(
            f"Diversification: types {d.asset_type_diversification:.1f}, "
            f"sectors {d.sector_diversification:.1f}, "
            f"regions {d.geographic_diversification:.1f} "
            f"(overall {d.overall_diversification:.1f}/10)"
        )
        for rec in d.recommendations:
            self.console.print(f"  [yellow]•[/yellow] {rec}")

    def render_analysis(self, result: ScenarioAnalysisResult) -> None:
        self.console.print()
        self.console.print(
            Panel(
                f"[bold]{result.scenario_name}[/bold] ({result.scenario_id.value})"
                f"  |  catalog {result.catalog_version}",
                title="Scenario Analysis",
                style="cyan",
            )
        )

        table = Table(title="Asset Impacts", show_header=True)
        table.add_column("Symbol", style="cyan")
        table.add_column("Impact", justify="right")
        table.add_column("Dollar", justify="right")
        table.add_column("Confidence")
        table.add_column("Drivers")
        for r in result.asset_level_impacts:
            table.add_row(
                r.symbol + (" *" if r.category_fallback else ""),
                Text(fmt_pct(r.impact_percentage), style=impact_color(r.impact_percentage)),
                fmt_dollar(r.impact_dollar, signed=True),
                f"{confidence_bar(r.confidence_level)} {r.confidence_level:.0f}",
                ", ".join(r.primary_drivers),
            )
        self.console.print(table)

        changes = result.portfolio_risk_changes
        risk = Table(title="Risk Changes", show_header=True)
        risk.add_column("Metric", style="cyan")
        risk.add_column("Change", justify="right")
        risk.add_row("Overall Risk", fmt_delta(changes.risk_score_change))
        risk.add_row("Concentration", fmt_delta(changes.concentration_risk_change))
        risk.add_row("Volatility", fmt_delta(changes.volatility_change))
        for pair, delta in changes.correlation_changes.items():
            risk.add_row(f"Correlation {pair}", fmt_delta(delta))
        self.console.print(risk)

        if result.findings:
            self.render_findings(result.findings)
        self._render_verdict(result)

    def render_comparison(self, results: list[ScenarioAnalysisResult]) -> None:
        table = Table(title="Scenario Comparison", show_header=True)
        table.add_column("Scenario", style="cyan")
        table.add_column("Impact", justify="right")
        table.add_column("Dollar", justify="right")
        table.add_column("Confidence")
        table.add_column("Risk Change", justify="right")
        for r in sorted(results, key=lambda r: r.total_impact_percentage):
            table.add_row(
                r.scenario_name,
                Text(
                    fmt_pct(r.total_impact_percentage),
                    style=impact_color(r.total_impact_percentage),
                ),
                fmt_dollar(r.total_impact_dollar, signed=True),
                f"{confidence_bar(r.confidence_score)} {r.confidence_score:.0f}",
                fmt_delta(r.portfolio_risk_changes.risk_score_change),
            )
        self.console.print(table)

    def _render_verdict(self, result: ScenarioAnalysisResult) -> None:
        pct = result.total_impact_percentage
        body = Text()
        body.append("Portfolio impact: ", style="bold")
        body.append(fmt_pct(pct), style=impact_color(pct))
        body.append(f"  ({fmt_dollar(result.total_impact_dollar, signed=True)})")
        body.append(
            f"\nConfidence: {confidence_bar(result.confidence_score)} "
            f"{result.confidence_score:.0f}/100"
        )
        self.console.print(Panel(body, title="Summary", style="bold"))
